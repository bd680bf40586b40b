"""Process-lifetime index of workspace dependency directories.

Responsibilities:
- Scan every workspace folder once for `package.json` files outside `node_modules`.
- Map each manifest to its sibling `node_modules` directory.
- Share one in-flight scan between concurrent callers; reset only on explicit invalidation.
"""

from __future__ import annotations

import asyncio
import os
from typing import Awaitable, Callable, Generic, Literal, TypeVar

from ..io.filesystem import FileSystem
from ..telemetry.logger import DiscoveryLogger
from ..workspace import Workspace


T = TypeVar("T")
CacheState = Literal["empty", "pending", "ready"]

MANIFEST_INCLUDE_GLOB = "**/package.json"
DEPENDENCY_EXCLUDE_GLOB = "**/node_modules/**"

_log = DiscoveryLogger("manifest_index")


class MemoCache(Generic[T]):
    """Single-value async memo with states `empty -> pending -> ready`.

    Callers arriving while a computation is pending await that same task.
    A failed computation is not kept: the memo returns to `empty`.
    """

    def __init__(self, factory: Callable[[], Awaitable[T]]) -> None:
        self._factory = factory
        self._task: asyncio.Future[T] | None = None

    @property
    def state(self) -> CacheState:
        if self._task is None:
            return "empty"
        if not self._task.done():
            return "pending"
        return "ready"

    async def get(self) -> T:
        """Return the memoized value, starting the computation on first use."""

        if self._task is None:
            self._task = asyncio.ensure_future(self._factory())
        task = self._task
        try:
            return await asyncio.shield(task)
        except Exception:
            if self._task is task:
                self._task = None
            raise

    def invalidate(self) -> None:
        """Drop the memoized value (or pending computation) unconditionally."""

        self._task = None


class WorkspaceManifestIndex:
    """Dependency directories implied by every manifest in a workspace."""

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace
        self._cache: MemoCache[list[str]] = MemoCache(self._scan)

    @property
    def state(self) -> CacheState:
        return self._cache.state

    async def _scan(self) -> list[str]:
        _log.tier_start("scan", folders=len(self._workspace.folders))
        dependency_dirs: list[str] = []
        for folder in self._workspace.folders:
            manifests = await self._workspace.fs.find_files(
                folder, MANIFEST_INCLUDE_GLOB, DEPENDENCY_EXCLUDE_GLOB
            )
            dependency_dirs.extend(
                os.path.join(os.path.dirname(manifest), "node_modules") for manifest in manifests
            )
        return dependency_dirs

    async def get_dependency_dirs(self) -> list[str]:
        """Return memoized dependency directories; a failed scan yields `[]` once."""

        try:
            return list(await self._cache.get())
        except OSError:
            _log.tier_miss("scan", reason="scan_failed")
            return []

    def clear_cache(self) -> None:
        """Forget the scan result so the next call rescans the workspace."""

        self._cache.invalidate()


IndexKey = tuple[tuple[str, ...], FileSystem]

_SHARED_INDEXES: dict[IndexKey, WorkspaceManifestIndex] = {}


def _index_key(workspace: Workspace) -> IndexKey:
    # trust and the path-safety predicate do not affect which manifests exist
    return workspace.folders, workspace.fs


def shared_manifest_index(workspace: Workspace) -> WorkspaceManifestIndex:
    """Return the process-wide index for the folders and filesystem of `workspace`.

    Workspaces built per request for the same folders share one index.
    """

    key = _index_key(workspace)
    index = _SHARED_INDEXES.get(key)
    if index is None:
        index = WorkspaceManifestIndex(workspace)
        _SHARED_INDEXES[key] = index
    return index


async def get_dependency_dirs(workspace: Workspace) -> list[str]:
    """Return dependency directories from the shared index of `workspace`."""

    return await shared_manifest_index(workspace).get_dependency_dirs()


def clear_cache() -> None:
    """Invalidate and forget every process-wide index; call after manifest layout changes.

    Locators still holding an index rescan on their next call.
    """

    for index in _SHARED_INDEXES.values():
        index.clear_cache()
    _SHARED_INDEXES.clear()
