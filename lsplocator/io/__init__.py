"""I/O boundary for workspace filesystem access."""

from .filesystem import DEFAULT_FILE_SYSTEM, FileSystem, LocalFileSystem

__all__ = ["DEFAULT_FILE_SYSTEM", "FileSystem", "LocalFileSystem"]
