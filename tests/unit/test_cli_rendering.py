"""Unit tests for CLI output and error rendering helpers."""

from __future__ import annotations

import json

import pytest
import typer

from lsplocator.cli_rendering import (
    echo_launch_descriptor,
    echo_located_binary,
    echo_runtime_resolution,
    exit_with_command_error,
)
from lsplocator.errors import CommandStageError
from lsplocator.models.datatypes import (
    LaunchDescriptor,
    LaunchOptions,
    LocatedBinary,
    RuntimeResolution,
)


def test_exit_with_command_error_renders_stage_error_with_hint(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print stage diagnostics and hint before exiting with code 1."""

    error = CommandStageError(
        stage="locate",
        detail="`oxlint` was not found in user settings, project dependencies, or global installs.",
        hint="Install it with `npm install -D oxlint`.",
    )

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("locate", error)

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "locate failed at stage `locate`" in captured.err
    assert "Hint: Install it with `npm install -D oxlint`." in captured.err


def test_exit_with_command_error_omits_missing_hint(capsys: pytest.CaptureFixture[str]) -> None:
    """Stage errors without a hint should print a single diagnostic line."""

    with pytest.raises(typer.Exit):
        exit_with_command_error("runtime", CommandStageError(stage="config", detail="bad"))

    captured = capsys.readouterr()
    assert captured.err.strip() == "runtime failed at stage `config`: bad"


def test_exit_with_command_error_renders_non_stage_fallback(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print fallback exception text for non-stage failures."""

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("describe", RuntimeError("unexpected discovery error"))

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "describe failed: unexpected discovery error" in captured.err


def test_echo_helpers_print_labelled_lines(capsys: pytest.CaptureFixture[str]) -> None:
    """Binary and runtime results should print stable `Label: value` lines."""

    echo_located_binary(LocatedBinary(path="/w/node_modules/.bin/oxlint", source="project"))
    echo_runtime_resolution(RuntimeResolution(path="/host/electron", source="host", run_as_node=True))

    assert capsys.readouterr().out.splitlines() == [
        "Binary: /w/node_modules/.bin/oxlint",
        "Source: project",
        "Runtime: /host/electron",
        "Source: host",
        "Run as bare interpreter: yes",
    ]


def test_echo_launch_descriptor_prints_sorted_json(capsys: pytest.CaptureFixture[str]) -> None:
    """Descriptors should print as deterministic JSON."""

    descriptor = LaunchDescriptor(
        command="node",
        args=("/w/server.js", "--lsp"),
        options=LaunchOptions(env={"PATH": "/n", "ELECTRON_RUN_AS_NODE": "1"}),
    )

    echo_launch_descriptor(descriptor)

    output = capsys.readouterr().out
    assert json.loads(output) == {
        "command": "node",
        "args": ["/w/server.js", "--lsp"],
        "options": {"shell": False, "env": {"ELECTRON_RUN_AS_NODE": "1", "PATH": "/n"}},
    }
    assert output.index("ELECTRON_RUN_AS_NODE") < output.index('"PATH"')
