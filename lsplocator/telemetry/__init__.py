"""Observability helpers.

This package emits deterministic discovery events for auditing which tier
produced a binary or runtime path.
"""

from .logger import DiscoveryLogger, configure_logging

__all__ = ["DiscoveryLogger", "configure_logging"]
