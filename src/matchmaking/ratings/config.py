"""Load rating system definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from matchmaking.config_base import (
    BaseSystemConfig,
    load_system_configs,
    parse_system_header,
    read_toml,
)
from matchmaking.exceptions import ConfigurationError
from matchmaking.ratings.calculator import RatingConfig

_FIELD_TYPES = {field.name: field.type for field in fields(RatingConfig)}


@dataclass(frozen=True)
class RatingSystemConfig(BaseSystemConfig):
    """One named set of rating constants."""

    parameters: RatingConfig

    def as_config_json(self) -> dict[str, Any]:
        return self.parameters.as_dict()


def load_rating_system_configs(config_dir: Path) -> list[RatingSystemConfig]:
    """Load and validate all rating TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_rating_system_config,
        duplicate_name_label="rating",
    )


def load_rating_system_config(file_path: Path) -> RatingSystemConfig:
    """Load and validate a single rating TOML config file."""
    if not file_path.is_file():
        raise FileNotFoundError(f"Config file not found: {file_path}")
    return _parse_rating_system_config(read_toml(file_path), file_path)


def _parse_rating_system_config(raw: dict[str, Any], file_path: Path) -> RatingSystemConfig:
    name, description = parse_system_header(raw, file_path)
    rating_raw = raw.get("rating", {})

    unknown = sorted(set(rating_raw) - set(_FIELD_TYPES))
    if unknown:
        raise ConfigurationError(
            f"{file_path}: unknown [rating] keys: {', '.join(unknown)}",
            details={"keys": unknown},
        )

    values: dict[str, int | float] = {}
    for key, value in rating_raw.items():
        values[key] = _cast_rating_value(key, value, file_path)

    try:
        parameters = RatingConfig(**values)
    except ConfigurationError as exc:
        raise ConfigurationError(f"{file_path}: {exc.message}", details=exc.details) from exc

    return RatingSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _cast_rating_value(key: str, value: Any, file_path: Path) -> int | float:
    expected = _FIELD_TYPES[key]
    # TOML booleans are ints in Python; a tuning value is never a flag.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(
            f"{file_path}: [rating].{key} must be {expected}, got {value!r}",
            details={"key": key},
        )
    if expected == "int":
        if isinstance(value, float) and not value.is_integer():
            raise ConfigurationError(
                f"{file_path}: [rating].{key} must be int, got {value!r}",
                details={"key": key},
            )
        return int(value)
    return float(value)


__all__ = ["RatingSystemConfig", "load_rating_system_config", "load_rating_system_configs"]
