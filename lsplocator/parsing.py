"""Shared parsing helpers for settings, environment, and path-list values."""

from __future__ import annotations

from typing import Iterable


_BOOLEAN_TOKENS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}
_BOOLEAN_HELP = "(`true`/`false`, `1`/`0`, `yes`/`no`)"


def normalize_optional_string(value: object) -> str | None:
    """Return `value` as a stripped string, or `None` when nothing is left.

    Settings, environment variables, and manifest fields all treat a blank
    value the same as an unset one.
    """

    if value is None:
        return None
    return str(value).strip() or None


def parse_permissive_boolean(value: object) -> bool | None:
    """Map a native bool or a case-insensitive token to a bool; `None` if unknown."""

    if isinstance(value, bool):
        return value
    token = normalize_optional_string(value)
    if token is None:
        return None
    return _BOOLEAN_TOKENS.get(token.lower())


def parse_required_boolean(value: object, field_name: str) -> bool:
    """Parse a boolean setting or raise `ValueError` naming `field_name`."""

    parsed = parse_permissive_boolean(value)
    if parsed is None:
        raise ValueError(f"`{field_name}` must be a boolean value {_BOOLEAN_HELP}.")
    return parsed


def split_path_list(value: object, separator: str) -> tuple[str, ...]:
    """Split a separator-joined path list, dropping blank entries but keeping order."""

    normalized = normalize_optional_string(value)
    if normalized is None:
        return ()
    return normalize_string_sequence(normalized.split(separator))


def normalize_string_sequence(values: Iterable[object]) -> tuple[str, ...]:
    """Normalize a sequence of values, dropping blanks and keeping first-seen order."""

    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        normalized = normalize_optional_string(value)
        if normalized is None or normalized in seen:
            continue
        seen.add(normalized)
        result.append(normalized)
    return tuple(result)
