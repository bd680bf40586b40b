"""Unit tests for tiered script-runtime resolution."""

from __future__ import annotations

import sys
from typing import Sequence

import pytest

from lsplocator.launch.runtime import RuntimeResolver, last_non_empty_line
from lsplocator.process import SpawnResult


class _FakeSpawn:
    """Record spawn calls and answer them from a command-to-result map."""

    def __init__(self, results: dict[str, SpawnResult] | None = None) -> None:
        self.results = results or {}
        self.calls: list[tuple[str, tuple[str, ...], int | None]] = []

    def __call__(
        self,
        command: str,
        args: Sequence[str],
        *,
        shell: bool = False,
        timeout_ms: int | None = None,
        encoding: str = "utf-8",
    ) -> SpawnResult:
        self.calls.append((command, tuple(args), timeout_ms))
        return self.results.get(command, SpawnResult(status=1))


def test_explicit_runtime_path_wins_without_spawning() -> None:
    """A caller-supplied runtime should be used verbatim."""

    spawn = _FakeSpawn()
    resolver = RuntimeResolver(spawn=spawn, environ={"SHELL": "/bin/zsh"})

    resolution = resolver.resolve_runtime_path("/custom/node/bin/node")

    assert resolution.path == "/custom/node/bin/node"
    assert resolution.source == "explicit"
    assert spawn.calls == []


def test_runtime_on_path_skips_login_shell() -> None:
    """A working `node --version` should resolve to the bare command name."""

    spawn = _FakeSpawn({"node": SpawnResult(status=0, stdout="v22.0.0\n")})
    resolver = RuntimeResolver(spawn=spawn, environ={"SHELL": "/bin/zsh"})

    resolution = resolver.resolve_runtime_path()

    assert resolution.path == "node"
    assert resolution.source == "path"
    assert spawn.calls == [("node", ("--version",), 5000)]


def test_login_shell_output_uses_last_non_empty_line() -> None:
    """Profile noise before the path should be ignored."""

    spawn = _FakeSpawn(
        {"/bin/zsh": SpawnResult(status=0, stdout="noise\n/opt/homebrew/bin/node\n\n")}
    )
    resolver = RuntimeResolver(spawn=spawn, environ={"SHELL": "/bin/zsh"})

    resolution = resolver.resolve_runtime_path()

    assert resolution.path == "/opt/homebrew/bin/node"
    assert resolution.source == "login_shell"
    assert resolution.run_as_node is False
    shell_call = spawn.calls[1]
    assert shell_call[0] == "/bin/zsh"
    assert shell_call[1][0] == "-ilc"
    assert shell_call[2] == 5000


def test_host_runtime_is_last_resort_and_flags_bare_interpreter() -> None:
    """When every probe fails the hosting executable should be used as a bare interpreter."""

    spawn = _FakeSpawn()
    resolver = RuntimeResolver(
        spawn=spawn,
        environ={"SHELL": "/bin/zsh"},
        host_executable="/Applications/Code.app/Contents/MacOS/Electron",
    )

    resolution = resolver.resolve_runtime_path()

    assert resolution.path == "/Applications/Code.app/Contents/MacOS/Electron"
    assert resolution.source == "host"
    assert resolution.run_as_node is True
    assert [call[0] for call in spawn.calls] == ["node", "/bin/zsh"]


def test_missing_shell_variable_skips_login_shell_tier() -> None:
    """Without `SHELL` only the PATH probe should run before the host fallback."""

    spawn = _FakeSpawn()
    resolver = RuntimeResolver(spawn=spawn, environ={}, host_executable="/host/runtime")

    resolution = resolver.resolve_runtime_path()

    assert resolution.source == "host"
    assert [call[0] for call in spawn.calls] == ["node"]


def test_login_shell_with_blank_output_falls_through_to_host() -> None:
    """A successful shell that prints nothing useful should not be trusted."""

    spawn = _FakeSpawn({"/bin/bash": SpawnResult(status=0, stdout="\n   \n")})
    resolver = RuntimeResolver(
        spawn=spawn, environ={"SHELL": "/bin/bash"}, host_executable="/host/runtime"
    )

    assert resolver.resolve_runtime_path().path == "/host/runtime"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a\nb\n", "b"),
        ("a\nb\n  \n\n", "b"),
        ("  only  ", "only"),
        ("", None),
        ("\n\n", None),
    ],
)
def test_last_non_empty_line(text: str, expected: str | None) -> None:
    """The helper should trim and skip trailing blank lines."""

    assert last_non_empty_line(text) == expected


def test_host_tier_defaults_to_current_interpreter() -> None:
    """Without a configured host the floor is the current interpreter, still flagged bare."""

    resolver = RuntimeResolver(spawn=_FakeSpawn(), environ={})

    resolution = resolver.resolve_runtime_path()

    assert resolution.path == sys.executable
    assert resolution.source == "host"
    assert resolution.run_as_node is True
