"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
located binaries, runtime resolutions, and launch descriptors.
"""

from __future__ import annotations

import json
from typing import NoReturn

import typer

from .errors import CommandStageError
from .models.datatypes import LaunchDescriptor, LocatedBinary, RuntimeResolution


def _diagnostic_lines(command_name: str, exc: Exception) -> list[tuple[str, str]]:
    """Return `(text, color)` pairs describing a command failure."""

    if not isinstance(exc, CommandStageError):
        return [(f"{command_name} failed: {exc}", typer.colors.RED)]
    lines = [(f"{command_name} failed at stage `{exc.stage}`: {exc.detail}", typer.colors.RED)]
    if exc.hint:
        lines.append((f"Hint: {exc.hint}", typer.colors.YELLOW))
    return lines


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics on stderr and exit with code 1."""

    for text, color in _diagnostic_lines(command_name, exc):
        typer.secho(text, fg=color, err=True)
    raise typer.Exit(code=1) from exc


def echo_located_binary(located: LocatedBinary) -> None:
    """Print the located binary path and the source that produced it."""

    typer.echo(f"Binary: {located.path}")
    typer.echo(f"Source: {located.source}")


def echo_runtime_resolution(resolution: RuntimeResolution) -> None:
    """Print the resolved runtime and the tier it came from."""

    typer.echo(f"Runtime: {resolution.path}")
    typer.echo(f"Source: {resolution.source}")
    typer.echo(f"Run as bare interpreter: {'yes' if resolution.run_as_node else 'no'}")


def echo_launch_descriptor(descriptor: LaunchDescriptor) -> None:
    """Print the launch descriptor as deterministic JSON."""

    typer.echo(json.dumps(descriptor.as_dict(), indent=2, sort_keys=True))
