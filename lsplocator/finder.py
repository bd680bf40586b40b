"""Top-level binary discovery across all sources.

Resolution order:
1. User-configured path (when set, trusted, and safe).
2. Project dependency tree.
3. Global package-manager installs.
"""

from __future__ import annotations

import sys

from .discovery.global_modules import GlobalBinaryLocator
from .discovery.project import ProjectBinaryLocator
from .discovery.settings import UserConfiguredBinaryLocator
from .models.datatypes import LocatedBinary
from .parsing import normalize_optional_string
from .workspace import Workspace


class BinaryFinder:
    """Run the settings, project, and global locators in precedence order."""

    def __init__(
        self,
        workspace: Workspace,
        settings_locator: UserConfiguredBinaryLocator | None = None,
        project_locator: ProjectBinaryLocator | None = None,
        global_locator: GlobalBinaryLocator | None = None,
        platform: str | None = None,
    ) -> None:
        resolved_platform = platform or sys.platform
        self.settings_locator = settings_locator or UserConfiguredBinaryLocator(
            workspace, platform=resolved_platform
        )
        self.project_locator = project_locator or ProjectBinaryLocator(
            workspace, platform=resolved_platform
        )
        self.global_locator = global_locator or GlobalBinaryLocator(
            workspace.fs, platform=resolved_platform
        )

    async def find(
        self,
        binary_name: str,
        settings_path: str | None = None,
    ) -> LocatedBinary | None:
        """Return the first binary found and the source that produced it."""

        configured = normalize_optional_string(settings_path)
        if configured is not None:
            path = await self.settings_locator.locate(configured)
            if path is not None:
                return LocatedBinary(path=path, source="settings")

        path = await self.project_locator.locate(binary_name)
        if path is not None:
            return LocatedBinary(path=path, source="project")

        path = await self.global_locator.locate(binary_name)
        if path is not None:
            return LocatedBinary(path=path, source="global")
        return None
