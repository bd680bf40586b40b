"""Command-line interface for lsplocator.

Responsibilities:
- Expose `locate`, `describe`, and `runtime` commands.
- Convert CLI arguments, environment, and YAML defaults into `ResolvedSettings`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
import os
from pathlib import Path
import sys
from typing import Annotated

import typer
import yaml

from .cli_rendering import (
    echo_launch_descriptor,
    echo_located_binary,
    echo_runtime_resolution,
    exit_with_command_error,
)
from .config import ConfigLoader, LocatorConfig, ResolvedSettings, RuntimeConfigSources
from .errors import CommandStageError
from .finder import BinaryFinder
from .launch.descriptor import LaunchDescriptorBuilder
from .launch.runtime import RuntimeResolver
from .models.datatypes import LocatedBinary
from .telemetry.logger import configure_logging

app = typer.Typer(
    name="lsplocator",
    no_args_is_help=True,
    help="Locate language-server binaries and build their launch commands.",
)


WorkspaceOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--workspace",
        "-w",
        help="Workspace root folder; repeat for multi-root workspaces. Defaults to cwd.",
    ),
]
BinaryPathOption = Annotated[
    str | None,
    typer.Option("--binary-path", help="User-configured binary path (absolute or relative)."),
]
RuntimePathOption = Annotated[
    str | None,
    typer.Option("--runtime-path", help="Explicit runtime executable for script servers."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML config file with command defaults."),
]
UntrustedOption = Annotated[
    bool,
    typer.Option("--untrusted", help="Treat the workspace as untrusted (ignores --binary-path)."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log every discovery tier to stderr."),
]


def _config_error(detail: str, hint: str) -> CommandStageError:
    return CommandStageError(stage="config", detail=detail, hint=hint)


def _load_yaml_config(config_path: Path | None) -> LocatorConfig | None:
    """Load `--config` when given; every failure becomes a `config` stage error."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise _config_error(
            f"Config file `{config_path}` does not exist.",
            "Pass an existing YAML file to `--config`.",
        ) from exc
    except yaml.YAMLError as exc:
        raise _config_error(
            f"Config file `{config_path}` is not valid YAML: {exc}",
            "Fix the YAML syntax and rerun.",
        ) from exc
    except ValueError as exc:
        raise _config_error(
            f"Invalid config file `{config_path}`: {exc}",
            "Supported keys: tool_name, workspace_folders, binary_path, runtime_path, "
            "trusted, host_runtime_path.",
        ) from exc
    except OSError as exc:
        raise _config_error(
            f"Cannot read config file `{config_path}`: {exc}",
            "Check the file permissions.",
        ) from exc


def _resolve_command_settings(
    tool_name: str | None,
    workspace: list[Path] | None,
    binary_path: str | None,
    runtime_path: str | None,
    config_file: Path | None,
    untrusted: bool,
) -> ResolvedSettings:
    """Resolve effective settings from YAML defaults, environment, and CLI overrides."""

    loaded_config = _load_yaml_config(config_file) or LocatorConfig()

    cli_values: dict[str, str] = {}
    if tool_name is not None:
        cli_values["tool_name"] = tool_name
    if workspace:
        cli_values["workspace_folders"] = os.pathsep.join(str(folder) for folder in workspace)
    if binary_path is not None:
        cli_values["binary_path"] = binary_path
    if runtime_path is not None:
        cli_values["runtime_path"] = runtime_path
    if untrusted:
        cli_values["trusted"] = "false"

    try:
        settings = loaded_config.resolved_settings(
            RuntimeConfigSources(cli=cli_values, env=os.environ)
        )
    except ValueError as exc:
        raise CommandStageError(
            stage="config",
            detail=str(exc),
            hint="Check `LSPLOCATOR_*` environment variables and CLI flags.",
        ) from exc

    if not settings.workspace_folders:
        settings = replace(settings, workspace_folders=(str(Path.cwd()),))
    return settings


def _locate(settings: ResolvedSettings) -> LocatedBinary:
    """Run every locator for the configured tool or raise a stage error."""

    if settings.tool_name is None:
        raise CommandStageError(
            stage="config",
            detail="Tool name is required.",
            hint="Pass `<name>` or set `tool_name` in the config file.",
        )

    finder = BinaryFinder(settings.to_workspace())
    located = asyncio.run(finder.find(settings.tool_name, settings.binary_path))
    if located is None:
        raise CommandStageError(
            stage="locate",
            detail=(
                f"`{settings.tool_name}` was not found in user settings, "
                "project dependencies, or global installs."
            ),
            hint=(
                f"Install it with `npm install -D {settings.tool_name}` "
                "or point `--binary-path` at the executable."
            ),
        )
    return located


@app.command("locate")
def locate_command(
    tool_name: Annotated[
        str | None,
        typer.Argument(help="Binary name to locate. Required unless set by `--config`."),
    ] = None,
    workspace: WorkspaceOption = None,
    binary_path: BinaryPathOption = None,
    config_file: ConfigOption = None,
    untrusted: UntrustedOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Locate a language-server binary and print its path."""

    if verbose:
        configure_logging(sys.stderr)
    try:
        settings = _resolve_command_settings(
            tool_name, workspace, binary_path, None, config_file, untrusted
        )
        located = _locate(settings)
    except Exception as exc:
        exit_with_command_error("locate", exc)

    echo_located_binary(located)


@app.command("describe")
def describe_command(
    tool_name: Annotated[
        str | None,
        typer.Argument(help="Binary name to launch. Required unless set by `--config`."),
    ] = None,
    workspace: WorkspaceOption = None,
    binary_path: BinaryPathOption = None,
    runtime_path: RuntimePathOption = None,
    config_file: ConfigOption = None,
    untrusted: UntrustedOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Locate a binary and print the launch descriptor for its language server.

    Script servers need Node. Without `node` on PATH or in the login shell, set
    `LSPLOCATOR_HOST_RUNTIME` (or `host_runtime_path` in the config) to a
    Node-capable host executable; otherwise the descriptor is not runnable.
    """

    if verbose:
        configure_logging(sys.stderr)
    try:
        settings = _resolve_command_settings(
            tool_name, workspace, binary_path, runtime_path, config_file, untrusted
        )
        located = _locate(settings)
        builder = LaunchDescriptorBuilder(
            RuntimeResolver(host_executable=settings.host_runtime_path)
        )
        descriptor = builder.build_launch_descriptor(
            located.path, settings.tool_name or located.path, settings.runtime_path
        )
    except Exception as exc:
        exit_with_command_error("describe", exc)

    echo_launch_descriptor(descriptor)


@app.command("runtime")
def runtime_command(
    runtime_path: RuntimePathOption = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Resolve and print the runtime used for script language servers.

    When neither `--runtime-path`, `node` on PATH, nor the login shell yields a
    runtime, the host runtime from `LSPLOCATOR_HOST_RUNTIME` (or
    `host_runtime_path` in the config) is used. If that is unset the fallback is
    the current Python interpreter, which cannot run script servers.
    """

    if verbose:
        configure_logging(sys.stderr)
    try:
        settings = _resolve_command_settings(None, None, None, runtime_path, config_file, False)
        resolution = RuntimeResolver(
            host_executable=settings.host_runtime_path
        ).resolve_runtime_path(settings.runtime_path)
    except Exception as exc:
        exit_with_command_error("runtime", exc)

    echo_runtime_resolution(resolution)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
