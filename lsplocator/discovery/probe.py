"""Direct `node_modules/.bin` probing with deterministic priority."""

from __future__ import annotations

import asyncio
import os
import sys
from typing import Sequence

from ..io.filesystem import FileSystem
from ..platform import EXE_SUFFIX, is_windows


class BinCandidateProbe:
    """Check `<base>/.bin/<name>` across ordered base directories concurrently."""

    def __init__(self, fs: FileSystem, platform: str | None = None) -> None:
        self._fs = fs
        self._platform = platform or sys.platform

    def candidates(self, binary_name: str, base_dirs: Sequence[str]) -> list[str]:
        """Return candidate paths in priority order (base path, then `.exe` on Windows)."""

        paths: list[str] = []
        for base_dir in base_dirs:
            base_path = os.path.join(base_dir, ".bin", binary_name)
            paths.append(base_path)
            if is_windows(self._platform):
                paths.append(f"{base_path}{EXE_SUFFIX}")
        return paths

    async def _exists(self, path: str) -> bool:
        try:
            return await self._fs.exists(path)
        except OSError:
            return False

    async def probe(self, binary_name: str, base_dirs: Sequence[str]) -> str | None:
        """Return the first existing candidate by input order, not by completion order."""

        paths = self.candidates(binary_name, base_dirs)
        if not paths:
            return None
        found = await asyncio.gather(*(self._exists(path) for path in paths))
        for path, exists in zip(paths, found):
            if exists:
                return path
        return None
