"""Default path-safety gate for user-configured binary paths.

The locators treat the predicate as opaque; hosts embedding lsplocator can
pass their own through `Workspace.is_safe_path`.
"""

from __future__ import annotations


_SHELL_METACHARACTERS = frozenset(";&|`$<>\n\r\0")


def is_safe_binary_path(path: str) -> bool:
    """Reject blank paths and paths carrying shell metacharacters."""

    if not path or not path.strip():
        return False
    return not any(character in _SHELL_METACHARACTERS for character in path)
