"""Shared typed data models for lsplocator.

This package holds the records passed between locators, the runtime
resolver, and the launch descriptor builder.
"""

from .datatypes import (
    BinEntryMissing,
    BinEntryResolved,
    LaunchDescriptor,
    LaunchOptions,
    LocatedBinary,
    ManifestLookup,
    ManifestNotFound,
    RuntimeResolution,
)

__all__ = [
    "BinEntryMissing",
    "BinEntryResolved",
    "LaunchDescriptor",
    "LaunchOptions",
    "LocatedBinary",
    "ManifestLookup",
    "ManifestNotFound",
    "RuntimeResolution",
]
