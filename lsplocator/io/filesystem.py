"""Filesystem abstraction consumed by the locators.

Responsibilities:
- Define the async stat/read/write/delete/search surface the locators need.
- Provide a local-disk implementation that runs blocking calls off the event loop.
"""

from __future__ import annotations

import asyncio
from fnmatch import fnmatchcase
import os
from pathlib import Path
import shutil
from typing import Protocol


class FileSystem(Protocol):
    """Protocol for filesystem operations addressed by absolute path strings."""

    async def exists(self, path: str) -> bool:
        """Return whether `path` exists; failures mean "does not exist"."""

    async def read_text(self, path: str) -> str:
        """Read a UTF-8 text file."""

    async def write_bytes(self, path: str, data: bytes) -> None:
        """Write bytes, creating parent directories."""

    async def delete(self, path: str, recursive: bool = False) -> None:
        """Delete a file, or a directory tree when `recursive` is set."""

    async def find_files(self, root: str, include: str, exclude: str | None = None) -> list[str]:
        """Return files under `root` matching `include` and not matching `exclude`."""


def _matches_glob(relative_path: str, pattern: str) -> bool:
    """Match a POSIX relative path against a `**`-style glob.

    A leading `**/` also matches zero directories, so `**/package.json`
    matches a root-level `package.json`.
    """

    if fnmatchcase(relative_path, pattern):
        return True
    return pattern.startswith("**/") and fnmatchcase(relative_path, pattern[3:])


def _walk_matching_files(root: str, include: str, exclude: str | None) -> list[str]:
    """Walk `root` in sorted order, pruning excluded directories."""

    matches: list[str] = []
    root_path = Path(root)
    for current, dirnames, filenames in os.walk(root):
        relative_dir = Path(current).relative_to(root_path).as_posix()
        prefix = "" if relative_dir == "." else f"{relative_dir}/"
        if exclude is not None:
            dirnames[:] = [
                name for name in dirnames if not _matches_glob(f"{prefix}{name}/", exclude)
            ]
        dirnames.sort()
        for name in sorted(filenames):
            relative_file = f"{prefix}{name}"
            if not _matches_glob(relative_file, include):
                continue
            if exclude is not None and _matches_glob(relative_file, exclude):
                continue
            matches.append(os.path.join(current, name))
    return matches


class LocalFileSystem:
    """Local-disk `FileSystem` backed by `os`/`pathlib` calls in worker threads."""

    async def exists(self, path: str) -> bool:
        """Return whether the path exists; `OSError` is reported as missing."""

        try:
            await asyncio.to_thread(os.stat, path)
        except (OSError, ValueError):
            return False
        return True

    async def read_text(self, path: str) -> str:
        """Load text content from disk."""

        return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")

    async def write_bytes(self, path: str, data: bytes) -> None:
        """Save bytes to disk, creating parent directories."""

        def _write() -> None:
            target = Path(path)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        await asyncio.to_thread(_write)

    async def delete(self, path: str, recursive: bool = False) -> None:
        """Delete a file or, with `recursive`, a directory tree."""

        target = Path(path)
        if recursive and target.is_dir():
            await asyncio.to_thread(shutil.rmtree, target)
            return
        await asyncio.to_thread(target.unlink)

    async def find_files(self, root: str, include: str, exclude: str | None = None) -> list[str]:
        """Search `root` recursively; a missing root yields no matches."""

        if not os.path.isdir(root):
            return []
        return await asyncio.to_thread(_walk_matching_files, root, include, exclude)


DEFAULT_FILE_SYSTEM = LocalFileSystem()
