"""Shared tier helpers used by the project and global locators."""

from __future__ import annotations

from typing import Awaitable, Callable, Sequence

from ..errors import PackageNotFoundError
from ..models.datatypes import BinEntryMissing, BinEntryResolved, ManifestNotFound
from ..telemetry.logger import DiscoveryLogger
from .manifest import lookup_bin_from_manifest


PackageMainResolver = Callable[[str, Sequence[str]], str]


def resolve_via_manifest(
    binary_name: str,
    search_roots: Sequence[str],
    resolve_main: PackageMainResolver,
    log: DiscoveryLogger,
) -> str | None:
    """Resolve a package's main file from `search_roots`, then its bin entry."""

    try:
        main_file = resolve_main(binary_name, search_roots)
    except PackageNotFoundError:
        log.tier_miss("manifest", reason="package_not_found")
        return None

    lookup = lookup_bin_from_manifest(main_file, binary_name)
    if isinstance(lookup, BinEntryResolved):
        return lookup.path
    if isinstance(lookup, ManifestNotFound):
        log.tier_miss("manifest", reason="manifest_not_found")
    elif isinstance(lookup, BinEntryMissing):
        log.tier_miss("manifest", reason="bin_entry_missing")
    return None


async def run_tier(
    log: DiscoveryLogger,
    tier: str,
    attempt: Callable[[], Awaitable[str | None]],
) -> str | None:
    """Run one tier; any error it raises means "try the next tier"."""

    log.tier_start(tier)
    try:
        result = await attempt()
    except Exception as exc:
        log.tier_miss(tier, reason=type(exc).__name__)
        return None
    if result is None:
        log.tier_miss(tier, reason="not_found")
        return None
    log.tier_hit(tier, result)
    return result
