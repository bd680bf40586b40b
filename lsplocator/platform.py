"""Platform-family helpers for path suffixes, quoting, and PATH composition."""

from __future__ import annotations

import ntpath
import posixpath
from types import ModuleType


WINDOWS_PLATFORM = "win32"
EXE_SUFFIX = ".exe"


def is_windows(platform: str) -> bool:
    """Return whether `platform` (a `sys.platform` value) is the Windows family."""

    return platform == WINDOWS_PLATFORM


def path_module(platform: str) -> ModuleType:
    """Return the pure path module matching the platform's path syntax."""

    return ntpath if is_windows(platform) else posixpath


def path_delimiter(platform: str) -> str:
    """Return the PATH list separator for the platform."""

    return ";" if is_windows(platform) else ":"
