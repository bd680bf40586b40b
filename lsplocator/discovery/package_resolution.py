"""Minimal Node-style package main-file resolution.

Only the subset needed to go from a package name to a file inside the
installed package is implemented: `node_modules` hierarchy lookup from each
search root, the `exports` root entry (string, conditions, or `"."` subpath),
then `main` with the usual extension and `index.js` fallbacks.
"""

from __future__ import annotations

import json
import os
from typing import Any, Iterable, Iterator, Mapping, Sequence

from ..errors import PackageNotFoundError
from ..parsing import normalize_optional_string


_NODE_MODULES = "node_modules"
_ACTIVE_CONDITIONS = ("require", "node", "default")
_MAIN_SUFFIXES = ("", ".js", ".json", ".node")


def node_modules_lookup_dirs(search_root: str) -> Iterator[str]:
    """Yield `node_modules` directories consulted from one search root, innermost first."""

    current = os.path.abspath(search_root)
    while True:
        if os.path.basename(current) != _NODE_MODULES:
            yield os.path.join(current, _NODE_MODULES)
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


def _read_package_json(package_dir: str) -> Mapping[str, Any]:
    """Load a package's manifest; a missing or malformed one behaves as `{}`."""

    try:
        with open(os.path.join(package_dir, "package.json"), encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, ValueError):
        return {}
    return payload if isinstance(payload, Mapping) else {}


def _conditional_target(value: object) -> str | None:
    """Pick the first export target whose condition applies to a CommonJS consumer."""

    if isinstance(value, str):
        return value
    if isinstance(value, list):
        for item in value:
            target = _conditional_target(item)
            if target is not None:
                return target
        return None
    if isinstance(value, Mapping):
        for key, nested in value.items():
            if key in _ACTIVE_CONDITIONS:
                target = _conditional_target(nested)
                if target is not None:
                    return target
    return None


def _exports_root_target(exports: object) -> str | None:
    """Return the `"."` export target of an `exports` field, if it declares one."""

    if isinstance(exports, Mapping) and any(str(key).startswith(".") for key in exports):
        return _conditional_target(exports.get("."))
    return _conditional_target(exports)


def _first_existing(candidates: Iterable[str]) -> str | None:
    for candidate in candidates:
        if os.path.isfile(candidate):
            return candidate
    return None


def _package_entry_file(package_dir: str) -> str | None:
    """Return the file a bare `require(<package>)` would load from `package_dir`."""

    manifest = _read_package_json(package_dir)
    if "exports" in manifest:
        target = _exports_root_target(manifest["exports"])
        if target is None:
            return None
        return _first_existing([os.path.normpath(os.path.join(package_dir, target))])

    candidates: list[str] = []
    main = manifest.get("main")
    main_entry = normalize_optional_string(main) if isinstance(main, str) else None
    if main_entry is not None:
        main_path = os.path.normpath(os.path.join(package_dir, main_entry))
        candidates.extend(f"{main_path}{suffix}" for suffix in _MAIN_SUFFIXES)
        candidates.append(os.path.join(main_path, "index.js"))
    candidates.append(os.path.join(package_dir, "index.js"))
    return _first_existing(candidates)


def resolve_package_main_file(package_name: str, search_roots: Sequence[str]) -> str:
    """Return the absolute main file of `package_name` reachable from `search_roots`.

    Raises:
        PackageNotFoundError: No search root reaches an installed copy with a loadable entry.
    """

    name = normalize_optional_string(package_name)
    if name is not None and not name.startswith((".", "/", "\\")):
        for search_root in search_roots:
            for lookup_dir in node_modules_lookup_dirs(search_root):
                package_dir = os.path.join(lookup_dir, *name.split("/"))
                if not os.path.isdir(package_dir):
                    continue
                entry = _package_entry_file(package_dir)
                if entry is not None:
                    return os.path.abspath(entry)
    raise PackageNotFoundError(package_name, tuple(search_roots))
