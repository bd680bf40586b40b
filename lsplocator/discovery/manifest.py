"""Nearest-`package.json` bin entry resolution.

Responsibilities:
- Walk ancestor directories from a resolved package file to its manifest.
- Interpret the manifest `bin` field for one logical binary name.
- Report "no manifest" and "manifest without entry" as distinct outcomes.
"""

from __future__ import annotations

import json
import os
from typing import Any, Iterator, Mapping

from ..errors import BinEntryNotFoundError, ManifestNotFoundError
from ..models.datatypes import (
    BinEntryMissing,
    BinEntryResolved,
    ManifestLookup,
    ManifestNotFound,
)
from ..parsing import normalize_optional_string


MANIFEST_FILE_NAME = "package.json"


def iter_ancestor_dirs(start_dir: str) -> Iterator[str]:
    """Yield `start_dir` and each parent up to and including the filesystem root."""

    current = os.path.abspath(start_dir)
    while True:
        yield current
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


def _load_manifest(manifest_path: str) -> Mapping[str, Any] | None:
    """Read and parse one manifest; unreadable or non-object payloads count as absent."""

    try:
        with open(manifest_path, encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, ValueError):
        return None
    if not isinstance(payload, Mapping):
        return None
    return payload


def find_nearest_manifest(from_file_path: str) -> tuple[str, Mapping[str, Any]] | None:
    """Return the innermost readable manifest above `from_file_path`, if any."""

    for directory in iter_ancestor_dirs(os.path.dirname(os.path.abspath(from_file_path))):
        manifest_path = os.path.join(directory, MANIFEST_FILE_NAME)
        payload = _load_manifest(manifest_path)
        if payload is not None:
            return manifest_path, payload
    return None


def interpret_bin_entry(manifest: Mapping[str, Any], binary_name: str) -> str | None:
    """Return the raw `bin` entry for `binary_name`, or `None` when not declared.

    A string `bin` applies to every binary name of the package. A mapping is
    looked up by exact name; a missing name is never substituted.
    """

    bin_field = manifest.get("bin")
    if isinstance(bin_field, str):
        return normalize_optional_string(bin_field)
    if isinstance(bin_field, Mapping):
        entry = bin_field.get(binary_name)
        if isinstance(entry, str):
            return normalize_optional_string(entry)
    return None


def lookup_bin_from_manifest(from_file_path: str, binary_name: str) -> ManifestLookup:
    """Resolve the bin entry of the nearest manifest as a tagged result."""

    found = find_nearest_manifest(from_file_path)
    if found is None:
        return ManifestNotFound(start_dir=os.path.dirname(os.path.abspath(from_file_path)))

    manifest_path, payload = found
    entry = interpret_bin_entry(payload, binary_name)
    if entry is None:
        return BinEntryMissing(manifest_path=manifest_path, binary_name=binary_name)
    manifest_dir = os.path.dirname(manifest_path)
    return BinEntryResolved(
        path=os.path.normpath(os.path.join(manifest_dir, entry)),
        manifest_path=manifest_path,
    )


def resolve_bin_from_manifest(from_file_path: str, binary_name: str) -> str:
    """Return the absolute bin path for `binary_name` or raise a precise error.

    Raises:
        ManifestNotFoundError: No manifest exists above `from_file_path`.
        BinEntryNotFoundError: The nearest manifest has no entry for `binary_name`.
    """

    lookup = lookup_bin_from_manifest(from_file_path, binary_name)
    if isinstance(lookup, ManifestNotFound):
        raise ManifestNotFoundError(lookup.start_dir, binary_name)
    if isinstance(lookup, BinEntryMissing):
        raise BinEntryNotFoundError(lookup.manifest_path, binary_name)
    return lookup.path
