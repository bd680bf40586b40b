"""Configuration model and loaders for lsplocator.

Responsibilities:
- Define locator settings as a typed dataclass.
- Provide deterministic precedence resolution (`cli` > `env` > config value).
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `LocatorConfig`: settings for one discovery/launch run.
- `ResolvedSettings`: effective values after precedence resolution.
- `RuntimeConfigSources`: optional value sources for precedence resolution.
- `ConfigLoader`: static construction helpers for `LocatorConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import (
    normalize_optional_string,
    normalize_string_sequence,
    parse_permissive_boolean,
    parse_required_boolean,
    split_path_list,
)
from .workspace import Workspace


_ENV_TOOL_NAME = "LSPLOCATOR_TOOL_NAME"
_ENV_WORKSPACE = "LSPLOCATOR_WORKSPACE"
_ENV_BINARY_PATH = "LSPLOCATOR_BINARY_PATH"
_ENV_RUNTIME_PATH = "LSPLOCATOR_RUNTIME_PATH"
_ENV_TRUSTED = "LSPLOCATOR_TRUSTED"
_ENV_HOST_RUNTIME = "LSPLOCATOR_HOST_RUNTIME"


@dataclass(frozen=True, slots=True)
class RuntimeConfigSources:
    """Source mappings used for deterministic setting precedence.

    Attributes:
        cli: Values explicitly provided by CLI arguments. `workspace_folders`
            is an `os.pathsep`-joined list.
        env: Values loaded from environment variables.
    """

    cli: Mapping[str, str] = field(default_factory=dict)
    env: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ResolvedSettings:
    """Effective settings for one run after precedence resolution."""

    tool_name: str | None
    workspace_folders: tuple[str, ...]
    binary_path: str | None
    runtime_path: str | None
    trusted: bool
    host_runtime_path: str | None

    def to_workspace(self) -> Workspace:
        """Build the workspace surface used by the locators."""

        return Workspace(
            folders=tuple(os.path.abspath(folder) for folder in self.workspace_folders),
            trusted=self.trusted,
        )


@dataclass(slots=True)
class LocatorConfig:
    """Settings for locating and launching one language-server tool.

    Attributes:
        tool_name: Logical binary name (npm package / bin name).
        workspace_folders: Workspace root folders in priority order.
        binary_path: User-configured binary path (absolute or workspace-relative).
        runtime_path: Explicit script runtime executable.
        trusted: Whether user-configured paths may be executed.
        host_runtime_path: Last-resort runtime executable run as a bare interpreter.
    """

    tool_name: str | None = None
    workspace_folders: tuple[str, ...] = ()
    binary_path: str | None = None
    runtime_path: str | None = None
    trusted: bool = True
    host_runtime_path: str | None = None

    def validate(self) -> None:
        """Validate setting values before discovery."""

        if self.tool_name is not None and not self.tool_name.strip():
            raise ValueError("`tool_name` must be a non-empty string.")
        for folder in self.workspace_folders:
            if not isinstance(folder, str) or not folder.strip():
                raise ValueError("`workspace_folders` entries must be non-empty strings.")

    def resolved_settings(self, sources: RuntimeConfigSources | None = None) -> ResolvedSettings:
        """Resolve settings with precedence `cli` > `env` > config value."""

        resolved_sources = sources if sources is not None else RuntimeConfigSources()

        workspace_text = self._lookup(resolved_sources, "workspace_folders", _ENV_WORKSPACE)
        workspace_folders = (
            split_path_list(workspace_text, os.pathsep)
            if workspace_text is not None
            else normalize_string_sequence(self.workspace_folders)
        )

        trusted_text = self._lookup(resolved_sources, "trusted", _ENV_TRUSTED)
        trusted = (
            parse_required_boolean(trusted_text, "trusted")
            if trusted_text is not None
            else bool(self.trusted)
        )

        return ResolvedSettings(
            tool_name=self._resolve(resolved_sources, "tool_name", _ENV_TOOL_NAME, self.tool_name),
            workspace_folders=workspace_folders,
            binary_path=self._resolve(
                resolved_sources, "binary_path", _ENV_BINARY_PATH, self.binary_path
            ),
            runtime_path=self._resolve(
                resolved_sources, "runtime_path", _ENV_RUNTIME_PATH, self.runtime_path
            ),
            trusted=trusted,
            host_runtime_path=self._resolve(
                resolved_sources, "host_runtime_path", _ENV_HOST_RUNTIME, self.host_runtime_path
            ),
        )

    @staticmethod
    def _lookup(sources: RuntimeConfigSources, key: str, env_key: str) -> str | None:
        """Return the first non-blank source value for a key, CLI before env."""

        if key in sources.cli:
            cli_value = normalize_optional_string(sources.cli.get(key))
            if cli_value is not None:
                return cli_value
        if env_key in sources.env:
            return normalize_optional_string(sources.env.get(env_key))
        return None

    @classmethod
    def _resolve(
        cls,
        sources: RuntimeConfigSources,
        key: str,
        env_key: str,
        default_value: str | None,
    ) -> str | None:
        """Resolve an optional string setting from sources, then the config value."""

        source_value = cls._lookup(sources, key, env_key)
        if source_value is not None:
            return source_value
        return normalize_optional_string(default_value)


class ConfigLoader:
    """Factory methods for creating `LocatorConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "tool_name",
            "workspace_folders",
            "binary_path",
            "runtime_path",
            "trusted",
            "host_runtime_path",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> LocatorConfig:
        """Create a validated config from a YAML file.

        Relative workspace folders are resolved against the config file's directory.
        """

        payload = ConfigLoader._parse_yaml_payload(path.read_text(encoding="utf-8"), path)
        source_label = f"YAML `{path}`"

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        base_dir = path.parent
        folders = tuple(
            folder if os.path.isabs(folder) else str((base_dir / folder).resolve())
            for folder in ConfigLoader._optional_string_list(
                payload, "workspace_folders", source_label
            )
        )
        config = LocatorConfig(
            tool_name=ConfigLoader._optional_non_empty_string(payload, "tool_name"),
            workspace_folders=folders,
            binary_path=ConfigLoader._optional_non_empty_string(payload, "binary_path"),
            runtime_path=ConfigLoader._optional_non_empty_string(payload, "runtime_path"),
            trusted=ConfigLoader._optional_boolean(payload, "trusted", source_label, True),
            host_runtime_path=ConfigLoader._optional_non_empty_string(
                payload, "host_runtime_path"
            ),
        )
        config.validate()
        return config

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> LocatorConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        trusted_text = normalize_optional_string(env_map.get(_ENV_TRUSTED))
        trusted = True
        if trusted_text is not None:
            parsed = parse_permissive_boolean(trusted_text)
            if parsed is None:
                raise ValueError(
                    f"Environment variable `{_ENV_TRUSTED}` must be a boolean value "
                    "(`true`/`false`, `1`/`0`, `yes`/`no`)."
                )
            trusted = parsed

        config = LocatorConfig(
            tool_name=normalize_optional_string(env_map.get(_ENV_TOOL_NAME)),
            workspace_folders=split_path_list(env_map.get(_ENV_WORKSPACE), os.pathsep),
            binary_path=normalize_optional_string(env_map.get(_ENV_BINARY_PATH)),
            runtime_path=normalize_optional_string(env_map.get(_ENV_RUNTIME_PATH)),
            trusted=trusted,
            host_runtime_path=normalize_optional_string(env_map.get(_ENV_HOST_RUNTIME)),
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        payload = yaml.safe_load(raw_text)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _optional_non_empty_string(payload: Mapping[str, Any], key: str) -> str | None:
        """Read an optional string field and normalize blank values to `None`."""

        if key not in payload:
            return None
        return normalize_optional_string(payload[key])

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed

    @staticmethod
    def _optional_string_list(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> tuple[str, ...]:
        """Read a string or list of strings; a single string is one entry."""

        if key not in payload or payload[key] is None:
            return ()
        raw = payload[key]
        if isinstance(raw, str):
            return normalize_string_sequence([raw])
        if not isinstance(raw, list):
            raise ValueError(f"{source_label} field `{key}` must be a string or a list.")
        if any(isinstance(item, (Mapping, list)) for item in raw):
            raise ValueError(f"{source_label} field `{key}` must contain only strings.")
        return normalize_string_sequence(raw)
