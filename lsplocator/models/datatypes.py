"""Core datatypes shared across lsplocator modules.

Responsibilities:
- Represent immutable records exchanged between discovery and launch stages.
- Provide explicit tagged results for tiers that can fail in distinct ways.

Key types:
- `BinEntryResolved`, `ManifestNotFound`, `BinEntryMissing` (`ManifestLookup`),
  `LocatedBinary`, `RuntimeResolution`, `LaunchOptions`, `LaunchDescriptor`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping, Union


BinarySource = Literal["settings", "project", "global"]
RuntimeSource = Literal["explicit", "path", "login_shell", "host"]


@dataclass(frozen=True, slots=True)
class BinEntryResolved:
    """Nearest manifest declared a bin entry for the queried name.

    Attributes:
        path: Absolute path of the bin entry, resolved against the manifest directory.
        manifest_path: Path of the authoritative `package.json`.
    """

    path: str
    manifest_path: str


@dataclass(frozen=True, slots=True)
class ManifestNotFound:
    """No readable `package.json` exists between the start directory and the root."""

    start_dir: str


@dataclass(frozen=True, slots=True)
class BinEntryMissing:
    """Nearest manifest exists but declares no entry for the queried name."""

    manifest_path: str
    binary_name: str


ManifestLookup = Union[BinEntryResolved, ManifestNotFound, BinEntryMissing]


@dataclass(frozen=True, slots=True)
class LocatedBinary:
    """A discovered executable together with the locator that produced it."""

    path: str
    source: BinarySource


@dataclass(frozen=True, slots=True)
class RuntimeResolution:
    """Runtime executable chosen to interpret script targets.

    Attributes:
        path: Executable path, or the canonical command name when found on PATH.
        source: Tier that produced the value.
        run_as_node: Whether the child must be told to behave as a bare interpreter.
    """

    path: str
    source: RuntimeSource
    run_as_node: bool = False


@dataclass(frozen=True, slots=True)
class LaunchOptions:
    """Spawn options for a language-server child process.

    Attributes:
        shell: Whether the command must be interpreted through a shell.
        env: Environment overrides merged over the inherited environment.
    """

    shell: bool = False
    env: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LaunchDescriptor:
    """Command, arguments, and options used to start a language server."""

    command: str
    args: tuple[str, ...]
    options: LaunchOptions = field(default_factory=LaunchOptions)

    def spawn_env(self, base: Mapping[str, str]) -> dict[str, str]:
        """Return the child environment: `base` with this descriptor's overrides applied."""

        merged = dict(base)
        merged.update(self.options.env)
        return merged

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable view of the descriptor."""

        return {
            "command": self.command,
            "args": list(self.args),
            "options": {
                "shell": self.options.shell,
                "env": dict(sorted(self.options.env.items())),
            },
        }
