"""Deterministic script-runtime executable resolution.

Resolution order:
1. Explicit runtime path supplied by the caller.
2. `node` on the current `PATH` (probed with `node --version`).
3. `node` as seen by the user's interactive login shell (`$SHELL -ilc`), which
   also loads PATH entries from shell profile files.
4. The hosting process's own executable, told to run as a bare interpreter.
   Only a Node-capable host (an Electron editor, for example) can run script
   servers this way; standalone callers must pass `host_executable`, or the
   floor is `sys.executable`, which yields a descriptor that cannot start.
"""

from __future__ import annotations

import os
import sys
from typing import Mapping

from ..models.datatypes import RuntimeResolution
from ..parsing import normalize_optional_string
from ..process import SpawnFunction, run_sync
from ..telemetry.logger import DiscoveryLogger


RUNTIME_COMMAND = "node"
RUNTIME_PROBE_TIMEOUT_MS = 5000
HOST_RUNTIME_ENV_FLAG = "ELECTRON_RUN_AS_NODE"


def last_non_empty_line(text: str) -> str | None:
    """Return the last line of `text` that is not blank after trimming."""

    for line in reversed(text.splitlines()):
        normalized = normalize_optional_string(line)
        if normalized is not None:
            return normalized
    return None


class RuntimeResolver:
    """Resolve which runtime executable interprets script language servers.

    `host_executable` names the Node-capable host used by the last tier. When it
    is omitted the last tier falls back to `sys.executable`, a Python interpreter
    that keeps resolution total but cannot run a `.js` language server.
    """

    def __init__(
        self,
        spawn: SpawnFunction = run_sync,
        environ: Mapping[str, str] | None = None,
        host_executable: str | None = None,
        runtime_command: str = RUNTIME_COMMAND,
        timeout_ms: int = RUNTIME_PROBE_TIMEOUT_MS,
    ) -> None:
        self._spawn = spawn
        self._environ = environ
        self._host_executable = host_executable
        self._runtime_command = runtime_command
        self._timeout_ms = timeout_ms
        self._log = DiscoveryLogger("runtime")

    def _env(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def _on_path(self) -> str | None:
        result = self._spawn(
            self._runtime_command,
            ["--version"],
            timeout_ms=self._timeout_ms,
        )
        if not result.ok:
            self._log.tier_miss("path", reason="probe_failed")
            return None
        self._log.tier_hit("path", self._runtime_command)
        return self._runtime_command

    def _from_login_shell(self) -> str | None:
        shell = normalize_optional_string(self._env().get("SHELL"))
        if shell is None:
            self._log.tier_miss("login_shell", reason="no_shell")
            return None
        result = self._spawn(
            shell,
            ["-ilc", f"command -v {self._runtime_command}"],
            timeout_ms=self._timeout_ms,
        )
        if not result.ok:
            self._log.tier_miss("login_shell", reason="probe_failed")
            return None
        resolved = last_non_empty_line(result.stdout)
        if resolved is None:
            self._log.tier_miss("login_shell", reason="empty_output")
            return None
        self._log.tier_hit("login_shell", resolved)
        return resolved

    def resolve_runtime_path(self, explicit_path: str | None = None) -> RuntimeResolution:
        """Return the runtime to use; this never fails, the host runtime is the floor."""

        explicit = normalize_optional_string(explicit_path)
        if explicit is not None:
            self._log.tier_hit("explicit", explicit)
            return RuntimeResolution(path=explicit, source="explicit")

        on_path = self._on_path()
        if on_path is not None:
            return RuntimeResolution(path=on_path, source="path")

        from_shell = self._from_login_shell()
        if from_shell is not None:
            return RuntimeResolution(path=from_shell, source="login_shell")

        host = self._host_executable or sys.executable
        self._log.tier_hit("host", host)
        return RuntimeResolution(path=host, source="host", run_as_node=True)


def resolve_runtime_path(explicit_path: str | None = None) -> RuntimeResolution:
    """Resolve the runtime with default collaborators for the current process."""

    return RuntimeResolver().resolve_runtime_path(explicit_path)
