"""Project dependency-tree binary discovery.

Resolution order:
1. Package resolution from the workspace roots, then the package's `bin` entry.
2. `<root>/node_modules/.bin/<name>` for each workspace root.
3. `.bin` of every `node_modules` implied by a manifest anywhere in the workspace
   (monorepo packages).
"""

from __future__ import annotations

import asyncio
from functools import partial
import os
import sys

from ..telemetry.logger import DiscoveryLogger
from ..workspace import Workspace
from .index import WorkspaceManifestIndex, shared_manifest_index
from .package_resolution import resolve_package_main_file
from .probe import BinCandidateProbe
from .tiers import PackageMainResolver, resolve_via_manifest, run_tier


class ProjectBinaryLocator:
    """Locate a tool installed in the open workspace's dependency directories."""

    def __init__(
        self,
        workspace: Workspace,
        index: WorkspaceManifestIndex | None = None,
        resolve_main: PackageMainResolver = resolve_package_main_file,
        platform: str | None = None,
    ) -> None:
        self._workspace = workspace
        self._index = index if index is not None else shared_manifest_index(workspace)
        self._resolve_main = resolve_main
        self._probe = BinCandidateProbe(workspace.fs, platform or sys.platform)
        self._log = DiscoveryLogger("project")

    async def _manifest_tier(self, binary_name: str) -> str | None:
        return await asyncio.to_thread(
            resolve_via_manifest,
            binary_name,
            list(self._workspace.folders),
            self._resolve_main,
            self._log,
        )

    async def _workspace_bin_tier(self, binary_name: str) -> str | None:
        node_modules = [os.path.join(folder, "node_modules") for folder in self._workspace.folders]
        return await self._probe.probe(binary_name, node_modules)

    async def _indexed_bin_tier(self, binary_name: str) -> str | None:
        dependency_dirs = await self._index.get_dependency_dirs()
        return await self._probe.probe(binary_name, dependency_dirs)

    async def locate(self, binary_name: str) -> str | None:
        """Return the tool path, or `None` when no tier finds it; never raises."""

        for tier, attempt in (
            ("manifest", self._manifest_tier),
            ("workspace_bin", self._workspace_bin_tier),
            ("indexed_bin", self._indexed_bin_tier),
        ):
            found = await run_tier(self._log, tier, partial(attempt, binary_name))
            if found is not None:
                return found
        return None
