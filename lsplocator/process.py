"""No-throw synchronous subprocess helpers.

Responsibilities:
- Run short helper commands (`npm root -g`, `node --version`, login shells)
  and report failure as data instead of exceptions.
- Collapse spawn errors, timeouts, and non-zero exits into one "unavailable" shape.
"""

from __future__ import annotations

from dataclasses import dataclass
import subprocess
from typing import Protocol, Sequence


@dataclass(frozen=True, slots=True)
class SpawnResult:
    """Outcome of one synchronous subprocess run.

    Attributes:
        status: Exit status, or `None` when the process did not complete.
        stdout: Captured standard output (decoded).
        stderr: Captured standard error (decoded).
        error: Spawn or timeout error, when one occurred.
    """

    status: int | None
    stdout: str = ""
    stderr: str = ""
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        """Return whether the process ran and exited with status 0."""

        return self.error is None and self.status == 0


class SpawnFunction(Protocol):
    """Callable signature of `run_sync`, injectable for tests."""

    def __call__(
        self,
        command: str,
        args: Sequence[str],
        *,
        shell: bool = False,
        timeout_ms: int | None = None,
        encoding: str = "utf-8",
    ) -> SpawnResult: ...


def run_sync(
    command: str,
    args: Sequence[str],
    *,
    shell: bool = False,
    timeout_ms: int | None = None,
    encoding: str = "utf-8",
) -> SpawnResult:
    """Run `command args...` to completion and never raise.

    With `shell=True` the command and arguments are joined into one command
    line; only call it that way with internal, non user-controlled values.
    """

    argv: str | list[str]
    if shell:
        argv = " ".join([command, *args])
    else:
        argv = [command, *args]
    timeout = None if timeout_ms is None else timeout_ms / 1000.0

    try:
        completed = subprocess.run(
            argv,
            shell=shell,
            capture_output=True,
            text=True,
            encoding=encoding,
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.SubprocessError, ValueError) as exc:
        return SpawnResult(status=None, error=exc)

    return SpawnResult(
        status=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


def spawn_output(
    command: str,
    args: Sequence[str] = (),
    spawn: SpawnFunction = run_sync,
) -> str | None:
    """Return trimmed stdout of a shell-run helper command, or `None` on any failure."""

    result = spawn(command, args, shell=True)
    if not result.ok:
        return None
    trimmed = result.stdout.strip()
    return trimmed or None
