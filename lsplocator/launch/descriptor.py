"""Language-server launch descriptor construction.

Responsibilities:
- Decide whether a resolved target is a script run by a runtime or a native binary.
- Apply per-platform quoting and shell requirements.
- Compose environment overrides (runtime directory on `PATH`, bare-interpreter flag)
  without touching the current process environment.
"""

from __future__ import annotations

import os
import sys
from typing import Mapping

from ..models.datatypes import LaunchDescriptor, LaunchOptions, RuntimeResolution
from ..parsing import normalize_optional_string
from ..platform import is_windows, path_delimiter, path_module
from ..telemetry.logger import DiscoveryLogger
from .runtime import HOST_RUNTIME_ENV_FLAG, RuntimeResolver


LSP_FLAG = "--lsp"
SCRIPT_EXTENSIONS = frozenset({".js", ".cjs", ".mjs"})


class LaunchDescriptorBuilder:
    """Build spawn descriptors for resolved language-server executables."""

    def __init__(
        self,
        runtime_resolver: RuntimeResolver | None = None,
        platform: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._runtime_resolver = runtime_resolver or RuntimeResolver(environ=environ)
        self._platform = platform or sys.platform
        self._environ = environ
        self._log = DiscoveryLogger("launch")

    def is_script(self, target_path: str) -> bool:
        """Return whether the target is interpreted by the script runtime."""

        _, extension = path_module(self._platform).splitext(target_path)
        return extension in SCRIPT_EXTENSIONS

    def _path_override(self, runtime_path: str) -> str | None:
        runtime_dir = path_module(self._platform).dirname(runtime_path)
        if not runtime_dir:
            return None
        environ = os.environ if self._environ is None else self._environ
        inherited = normalize_optional_string(environ.get("PATH"))
        if inherited is None:
            return runtime_dir
        return f"{runtime_dir}{path_delimiter(self._platform)}{inherited}"

    def build_launch_descriptor(
        self,
        target_path: str,
        tool_name: str,
        explicit_runtime_path: str | None = None,
    ) -> LaunchDescriptor:
        """Return the command, arguments, and options that start `target_path` as a server."""

        self._log.tier_start("descriptor", tool=tool_name)
        runtime: RuntimeResolution | None = None
        explicit = normalize_optional_string(explicit_runtime_path)
        shell = False

        if self.is_script(target_path):
            runtime = self._runtime_resolver.resolve_runtime_path(explicit)
            command = runtime.path
            args: tuple[str, ...] = (target_path, LSP_FLAG)
        else:
            if explicit is not None:
                runtime = RuntimeResolution(path=explicit, source="explicit")
            args = (LSP_FLAG,)
            if is_windows(self._platform):
                # quoted so paths with spaces survive cmd.exe
                command = f'"{target_path}"'
                shell = True
            else:
                command = target_path

        env: dict[str, str] = {}
        if runtime is not None:
            if runtime.run_as_node:
                env[HOST_RUNTIME_ENV_FLAG] = "1"
            path_value = self._path_override(runtime.path)
            if path_value is not None:
                env["PATH"] = path_value

        self._log.tier_hit("descriptor", command)
        return LaunchDescriptor(
            command=command,
            args=args,
            options=LaunchOptions(shell=shell, env=env),
        )


def build_launch_descriptor(
    target_path: str,
    tool_name: str,
    explicit_runtime_path: str | None = None,
) -> LaunchDescriptor:
    """Build a descriptor with the default runtime resolver for the current platform."""

    return LaunchDescriptorBuilder().build_launch_descriptor(
        target_path, tool_name, explicit_runtime_path
    )
