"""Structured discovery logging utilities.

Responsibilities:
- Emit concise, deterministic tier-level discovery logs through `loguru`.
- Keep the library silent until an application opts in via `configure_logging`.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


_PACKAGE_NAME = "lsplocator"


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character
        if character.isalnum() or character in {"-", "_", ".", ":", "/", "\\", "@"}
        else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


def configure_logging(sink: TextIO | None = None, level: str = "DEBUG") -> None:
    """Enable lsplocator logs and route them to one plain-format sink."""

    _loguru_logger.remove()
    _loguru_logger.add(sink or sys.stderr, format="{message}", level=level, colorize=False)
    _loguru_logger.enable(_PACKAGE_NAME)


class DiscoveryLogger:
    """Emit deterministic tier events for locator and runtime resolution activity."""

    def __init__(self, component: str) -> None:
        """Bind the logger to one discovery component name."""

        self._component = component

    def _emit(self, level: str, event: str, tier: str, **context: object) -> None:
        """Emit one structured discovery log line."""

        line = (
            f"[discovery] level={level} locator={self._component} "
            f"tier={tier} event={event}{_format_context(context)}"
        )
        _loguru_logger.log(level, line)

    def tier_start(self, tier: str, **context: object) -> None:
        """Emit a tier-start event."""

        self._emit("DEBUG", "start", tier, **context)

    def tier_hit(self, tier: str, path: str) -> None:
        """Emit a tier-hit event carrying the resolved path."""

        self._emit("INFO", "hit", tier, path=path)

    def tier_miss(self, tier: str, reason: str) -> None:
        """Emit a tier-miss event; `reason` is a short token, never a payload."""

        self._emit("DEBUG", "miss", tier, reason=reason)
