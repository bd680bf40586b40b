"""User-configured binary path resolution."""

from __future__ import annotations

import sys

from ..platform import EXE_SUFFIX, is_windows, path_module
from ..telemetry.logger import DiscoveryLogger
from ..workspace import Workspace


class UserConfiguredBinaryLocator:
    """Validate and resolve a binary path taken from user settings.

    Relative paths are resolved against the first workspace folder. A `.exe`
    suffix is stripped off-Windows and tried as a fallback on Windows.
    """

    def __init__(self, workspace: Workspace, platform: str | None = None) -> None:
        self._workspace = workspace
        self._platform = platform or sys.platform
        self._log = DiscoveryLogger("settings")

    async def _exists(self, path: str) -> bool:
        try:
            return await self._workspace.fs.exists(path)
        except OSError:
            return False

    def _absolute_setting_path(self, raw_path: str) -> str | None:
        paths = path_module(self._platform)
        if paths.isabs(raw_path):
            return raw_path
        cwd = self._workspace.first_folder
        if cwd is None:
            return None
        return paths.normpath(paths.join(cwd, raw_path))

    async def locate(self, raw_path: str) -> str | None:
        """Return the configured binary path when it is allowed and exists."""

        if not self._workspace.trusted:
            self._log.tier_miss("settings", reason="untrusted_workspace")
            return None
        try:
            safe = self._workspace.is_safe_path(raw_path)
        except Exception as exc:
            self._log.tier_miss("settings", reason=type(exc).__name__)
            return None
        if not safe:
            self._log.tier_miss("settings", reason="unsafe_path")
            return None

        binary_path = self._absolute_setting_path(raw_path)
        if binary_path is None:
            self._log.tier_miss("settings", reason="no_workspace_folder")
            return None

        windows = is_windows(self._platform)
        if not windows and binary_path.endswith(EXE_SUFFIX):
            binary_path = binary_path[: -len(EXE_SUFFIX)]

        if await self._exists(binary_path):
            self._log.tier_hit("settings", binary_path)
            return binary_path

        if windows:
            if not binary_path.endswith(EXE_SUFFIX):
                binary_path = f"{binary_path}{EXE_SUFFIX}"
            if await self._exists(binary_path):
                self._log.tier_hit("settings", binary_path)
                return binary_path

        self._log.tier_miss("settings", reason="not_found")
        return None
