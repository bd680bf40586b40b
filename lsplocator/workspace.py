"""Workspace surface consumed by the project and user-setting locators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .io.filesystem import DEFAULT_FILE_SYSTEM, FileSystem
from .path_safety import is_safe_binary_path


@dataclass(frozen=True, slots=True)
class Workspace:
    """Open workspace folders plus the collaborators that guard access to them.

    Attributes:
        folders: Root folder paths in workspace order.
        trusted: Whether user-configured executables may be used.
        fs: Filesystem used for existence checks and manifest search; the
            stateless local filesystem is shared by default.
        is_safe_path: Opaque safety predicate for user-supplied path strings.
    """

    folders: tuple[str, ...] = ()
    trusted: bool = True
    fs: FileSystem = DEFAULT_FILE_SYSTEM
    is_safe_path: Callable[[str], bool] = is_safe_binary_path

    @property
    def first_folder(self) -> str | None:
        """Return the first workspace root, when any is open."""

        return self.folders[0] if self.folders else None
