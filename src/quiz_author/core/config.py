"""TOML primitives behind ``quiz_author.toml``.

Reading, merging onto a defaults table, typed value checks and writing the
template all raise :class:`TomlConfigError`; the application config layer
turns that into its own error type.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Sequence

__all__ = [
    "TomlConfigError",
    "load_toml",
    "merge_defaults",
    "require_array",
    "require_bool",
    "require_positive_int",
    "require_string",
    "write_toml_template",
]


class TomlConfigError(RuntimeError):
    """Raised when a TOML document cannot be read, merged or validated."""


def load_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise TomlConfigError(f"Config file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise TomlConfigError(f"Invalid TOML in {path}: {exc}") from exc


def merge_defaults(
    base: MutableMapping[str, Any],
    override: Mapping[str, Any],
    *,
    path: str = "",
) -> None:
    """Merge ``override`` into ``base`` in place.

    ``base`` defines the schema: keys it does not have are rejected, and a
    table in ``base`` must be overridden by a table. Every unknown key is
    reported at once, and ``base`` is left untouched on error.
    """

    unknown: list[str] = []
    _check(base, override, path, unknown)
    if len(unknown) == 1:
        raise TomlConfigError(f"Unknown configuration key '{unknown[0]}'.")
    if unknown:
        listed = ", ".join(f"'{key}'" for key in unknown)
        raise TomlConfigError(f"Unknown configuration keys {listed}.")
    _apply(base, override)


def _check(
    base: Mapping[str, Any],
    override: Mapping[str, Any],
    path: str,
    unknown: list[str],
) -> None:
    for key, value in override.items():
        dotted = f"{path}{key}"
        if key not in base:
            unknown.append(dotted)
            continue
        if isinstance(base[key], Mapping):
            if not isinstance(value, Mapping):
                raise TomlConfigError(
                    f"Expected table for '{dotted}', found "
                    f"{type(value).__name__}."
                )
            _check(base[key], value, f"{dotted}.", unknown)


def _apply(base: MutableMapping[str, Any], override: Mapping[str, Any]) -> None:
    for key, value in override.items():
        if isinstance(base[key], MutableMapping):
            _apply(base[key], value)
        else:
            base[key] = value


def require_string(value: object, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise TomlConfigError(f"{name} must be a non-empty string.")
    return value.strip()


def require_bool(value: object, name: str) -> bool:
    if not isinstance(value, bool):
        raise TomlConfigError(f"{name} must be true or false.")
    return value


def require_positive_int(value: object, name: str) -> int:
    """Accept ints and numeric strings (env values); reject bools and <= 0."""

    if isinstance(value, bool):
        raise TomlConfigError(f"{name} must be a positive integer.")
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise TomlConfigError(f"{name} must be a positive integer.") from exc
    if number <= 0:
        raise TomlConfigError(f"{name} must be a positive integer.")
    return number


def require_array(value: object, name: str) -> Sequence[Any]:
    if not isinstance(value, list) or not value:
        raise TomlConfigError(f"{name} must be a non-empty array.")
    return value


def write_toml_template(
    path: Path,
    *,
    template: str,
    overwrite: bool = False,
    mode: int = 0o600,
) -> Path:
    """Write ``template`` to ``path``; refuse to clobber unless ``overwrite``."""

    if path.exists() and not overwrite:
        raise TomlConfigError(f"Config already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(template, encoding="utf-8")
    try:
        path.chmod(mode)
    except PermissionError:  # pragma: no cover - depends on filesystem
        pass
    return path
