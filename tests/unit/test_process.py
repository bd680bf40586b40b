"""Unit tests for no-throw subprocess helpers."""

from __future__ import annotations

import sys
from typing import Sequence

from lsplocator.process import SpawnResult, run_sync, spawn_output


def test_run_sync_captures_stdout_and_status() -> None:
    """A successful run should report status 0 and decoded output."""

    result = run_sync(sys.executable, ["-c", "print('v22.0.0')"])

    assert result.ok is True
    assert result.status == 0
    assert result.stdout.strip() == "v22.0.0"
    assert result.error is None


def test_run_sync_reports_non_zero_exit_as_not_ok() -> None:
    """Non-zero exits are data, not exceptions."""

    result = run_sync(sys.executable, ["-c", "import sys; sys.exit(3)"])

    assert result.ok is False
    assert result.status == 3


def test_run_sync_reports_missing_command_as_error() -> None:
    """A command that cannot be started should be captured as an error."""

    result = run_sync("lsplocator-command-that-does-not-exist-12345", ["--version"])

    assert result.ok is False
    assert result.status is None
    assert isinstance(result.error, OSError)


def test_run_sync_reports_timeout_as_error() -> None:
    """A command running past its timeout should be reported as unavailable."""

    result = run_sync(sys.executable, ["-c", "import time; time.sleep(5)"], timeout_ms=200)

    assert result.ok is False
    assert result.status is None
    assert result.error is not None


def test_spawn_output_trims_stdout_and_uses_shell() -> None:
    """Helper output should be trimmed and the command run through a shell."""

    calls: list[tuple[str, tuple[str, ...], bool]] = []

    def _spawn(
        command: str,
        args: Sequence[str],
        *,
        shell: bool = False,
        timeout_ms: int | None = None,
        encoding: str = "utf-8",
    ) -> SpawnResult:
        calls.append((command, tuple(args), shell))
        return SpawnResult(status=0, stdout="  /usr/lib/node_modules \n")

    assert spawn_output("npm", ["root", "-g"], spawn=_spawn) == "/usr/lib/node_modules"
    assert calls == [("npm", ("root", "-g"), True)]


def test_spawn_output_returns_none_for_failures_and_blank_output() -> None:
    """Failed runs and whitespace-only output should both mean absent."""

    def _failing(command: str, args: Sequence[str], **kwargs: object) -> SpawnResult:
        return SpawnResult(status=1, stdout="/ignored")

    def _blank(command: str, args: Sequence[str], **kwargs: object) -> SpawnResult:
        return SpawnResult(status=0, stdout=" \n ")

    assert spawn_output("npm", ["root", "-g"], spawn=_failing) is None
    assert spawn_output("npm", ["root", "-g"], spawn=_blank) is None
