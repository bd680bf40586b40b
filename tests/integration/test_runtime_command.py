"""Integration tests for the `runtime` CLI command."""

from __future__ import annotations

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from lsplocator.cli import app


def test_runtime_command_reports_explicit_runtime() -> None:
    """An explicit runtime should be echoed without probing."""

    result = CliRunner().invoke(app, ["runtime", "--runtime-path", "/custom/node/bin/node"])

    assert result.exit_code == 0, result.output
    assert "Runtime: /custom/node/bin/node" in result.output
    assert "Source: explicit" in result.output
    assert "Run as bare interpreter: no" in result.output


def test_runtime_command_reads_runtime_from_environment(monkeypatch: MonkeyPatch) -> None:
    """`LSPLOCATOR_RUNTIME_PATH` should act as the explicit runtime."""

    monkeypatch.setenv("LSPLOCATOR_RUNTIME_PATH", "/env/node")

    result = CliRunner().invoke(app, ["runtime"])

    assert result.exit_code == 0, result.output
    assert "Runtime: /env/node" in result.output


def test_runtime_command_falls_back_to_host_runtime(
    tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    """With nothing discoverable, the host runtime should be flagged as bare interpreter."""

    empty_bin = tmp_path / "empty-bin"
    empty_bin.mkdir()
    monkeypatch.setenv("PATH", str(empty_bin))
    monkeypatch.delenv("SHELL", raising=False)
    monkeypatch.setenv("LSPLOCATOR_HOST_RUNTIME", "/host/bin/electron")

    result = CliRunner().invoke(app, ["runtime"])

    assert result.exit_code == 0, result.output
    assert "Runtime: /host/bin/electron" in result.output
    assert "Source: host" in result.output
    assert "Run as bare interpreter: yes" in result.output


def test_runtime_and_describe_help_name_the_host_runtime_variable() -> None:
    """Help text should tell standalone users how to supply a Node-capable host."""

    runner = CliRunner()

    for command in ("runtime", "describe"):
        result = runner.invoke(app, [command, "--help"])

        assert result.exit_code == 0, result.output
        assert "LSPLOCATOR_HOST_RUNTIME" in result.output
