"""Global package-manager binary discovery.

Global roots, in priority order: `npm root -g`, `pnpm root -g`, and bun's
global install directory under the user's home.
"""

from __future__ import annotations

import asyncio
from functools import partial
import os
from pathlib import Path
import sys
from typing import Callable

from ..io.filesystem import DEFAULT_FILE_SYSTEM, FileSystem
from ..process import SpawnFunction, run_sync, spawn_output
from ..telemetry.logger import DiscoveryLogger
from .package_resolution import resolve_package_main_file
from .probe import BinCandidateProbe
from .tiers import PackageMainResolver, resolve_via_manifest, run_tier


BUN_GLOBAL_NODE_MODULES = (".bun", "install", "global", "node_modules")

_log = DiscoveryLogger("global")


def _bun_global_root(home: Callable[[], Path]) -> str | None:
    try:
        home_dir = home()
    except (RuntimeError, KeyError, OSError) as exc:
        # no resolvable home directory: bun alone is skipped
        _log.tier_miss("bun_root", reason=type(exc).__name__)
        return None
    return os.path.abspath(os.path.join(home_dir, *BUN_GLOBAL_NODE_MODULES))


def global_node_modules_paths(
    spawn: SpawnFunction = run_sync,
    home: Callable[[], Path] = Path.home,
) -> list[str]:
    """Return global `node_modules` roots in priority order, dropping unavailable ones."""

    npm_root = spawn_output("npm", ("root", "-g"), spawn=spawn)
    pnpm_root = spawn_output("pnpm", ("root", "-g"), spawn=spawn)
    bun_root = _bun_global_root(home)
    return [root for root in (npm_root, pnpm_root, bun_root) if root]


class GlobalBinaryLocator:
    """Locate a tool installed globally by npm, pnpm, or bun."""

    def __init__(
        self,
        fs: FileSystem | None = None,
        spawn: SpawnFunction = run_sync,
        home: Callable[[], Path] = Path.home,
        resolve_main: PackageMainResolver = resolve_package_main_file,
        platform: str | None = None,
    ) -> None:
        self._spawn = spawn
        self._home = home
        self._resolve_main = resolve_main
        self._probe = BinCandidateProbe(fs or DEFAULT_FILE_SYSTEM, platform or sys.platform)
        self._log = _log

    async def _manifest_tier(self, binary_name: str, roots: list[str]) -> str | None:
        return await asyncio.to_thread(
            resolve_via_manifest, binary_name, roots, self._resolve_main, self._log
        )

    async def _global_bin_tier(self, binary_name: str, roots: list[str]) -> str | None:
        return await self._probe.probe(binary_name, roots)

    async def locate(self, binary_name: str) -> str | None:
        """Return the globally installed tool path, or `None`; never raises."""

        try:
            roots = await asyncio.to_thread(global_node_modules_paths, self._spawn, self._home)
        except Exception as exc:
            self._log.tier_miss("roots", reason=type(exc).__name__)
            return None
        self._log.tier_start("roots", count=len(roots))

        for tier, attempt in (
            ("manifest", self._manifest_tier),
            ("global_bin", self._global_bin_tier),
        ):
            found = await run_tier(self._log, tier, partial(attempt, binary_name, roots))
            if found is not None:
                return found
        return None
