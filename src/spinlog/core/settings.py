"""
Configuration models for spinlog using Pydantic v2.

The raw configuration arrives as an already-parsed nested mapping::

    {
        "level": "debug",
        "driver": "ecs",
        "drivers": {
            "ecs": {"output": "stdout", "tags": ["svcA"], "service": {...}},
        },
    }

`resolve_settings()` turns it into fully-defaulted, frozen models before any
pipeline decision is made. Missing keys (and keys set to ``None``) take their
defaults; values of the wrong type are reported as `ConfigurationError`.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import diagnostics
from .errors import ConfigurationError
from .levels import get_level_name, get_level_priority, is_known_level

DEFAULT_LEVEL = "error"
DEFAULT_DRIVER = "php"
DEFAULT_FILE_PATH = "storage/log"
DEFAULT_FILE_FORMAT = "Y-m-d"
DEFAULT_LINE_FORMAT = "[%channel%] [%level_name%] %message% %context% %extra%"
DEFAULT_LINE_DATETIME = "Y-m-d H:i:s"
DEFAULT_ECS_OUTPUT = "stdout"

ECS_DRIVER = "ecs"
FILE_DRIVER = "file"
PHP_DRIVER = "php"


class DriverSettings(BaseModel):
    """Options shared by every driver."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    max_buffered_lines: int = Field(
        default=0,
        ge=0,
        description="Buffer capacity; 0 buffers without an upper bound",
    )
    flush_overflow_to_disk: bool = Field(
        default=False,
        description="Flush the buffer when full instead of discarding the oldest line",
    )
    file_path: str = Field(
        default=DEFAULT_FILE_PATH,
        description="Log directory, relative to the base path",
    )
    file_format: str = Field(
        default=DEFAULT_FILE_FORMAT,
        description="PHP date pattern used as the log file base name",
    )
    line_format: str = Field(
        default=DEFAULT_LINE_FORMAT,
        description="Line template for non-ECS drivers",
    )
    line_datetime: str = Field(
        default=DEFAULT_LINE_DATETIME,
        description="PHP date pattern rendered for %datetime%",
    )


class EcsDriverSettings(DriverSettings):
    """Options for the structured Elastic Common Schema driver."""

    output: str = Field(
        default=DEFAULT_ECS_OUTPUT,
        description="One of file, stdout, stderr, php; anything else means stdout",
    )
    tags: tuple[str, ...] = Field(
        default=(),
        description="Static tags attached to every document",
    )
    service: dict[str, Any] = Field(
        default_factory=dict,
        description="Service identity: name, version, environment, type",
    )

    @field_validator("output", mode="before")
    @classmethod
    def _output_as_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _unique_tags(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple, set, frozenset)):
            seen: dict[str, None] = {}
            for tag in value:
                seen.setdefault(str(tag), None)
            return tuple(seen)
        return value


class LoggerSettings(BaseModel):
    """Fully resolved logger configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default=DEFAULT_LEVEL, description="Minimum level handled")
    driver: str = Field(default=DEFAULT_DRIVER, description="Selected driver name")
    driver_settings: DriverSettings = Field(default_factory=DriverSettings)

    @property
    def level_priority(self) -> int:
        return get_level_priority(self.level)

    @property
    def is_ecs(self) -> bool:
        return self.driver.casefold() == ECS_DRIVER


def _drop_none(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in raw.items() if v is not None}


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(
            f"{what} must be a mapping, got {type(value).__name__}",
        )
    return value


def _resolve_level(raw_level: Any) -> str:
    if isinstance(raw_level, int) and is_known_level(raw_level):
        return get_level_name(raw_level).lower()
    if isinstance(raw_level, str) and is_known_level(raw_level):
        return raw_level.strip()
    diagnostics.warn(
        "settings",
        "unknown log level, using default",
        level=raw_level,
        default=DEFAULT_LEVEL,
    )
    return DEFAULT_LEVEL


def _lookup_driver_options(
    drivers: Mapping[str, Any], driver: str
) -> Mapping[str, Any]:
    """Find the driver's sub-config, exact key first, then case-insensitive."""
    if driver in drivers:
        found = drivers[driver]
    else:
        folded = driver.casefold()
        found = next(
            (v for k, v in drivers.items() if str(k).casefold() == folded),
            None,
        )
    if found is None:
        return {}
    return _require_mapping(found, f"drivers.{driver}")


def resolve_settings(
    options: Mapping[str, Any] | LoggerSettings | None = None,
) -> LoggerSettings:
    """Apply defaults to a raw configuration mapping.

    Args:
        options: Raw nested configuration, already-resolved settings, or None
            for all defaults.

    Returns:
        Frozen `LoggerSettings`.

    Raises:
        ConfigurationError: If a supplied value has the wrong shape or type.
    """
    if isinstance(options, LoggerSettings):
        return options
    raw = _drop_none(_require_mapping(options or {}, "logger options"))

    level = _resolve_level(raw.get("level", DEFAULT_LEVEL))
    driver = str(raw.get("driver", DEFAULT_DRIVER)).strip()
    drivers = _require_mapping(raw.get("drivers", {}), "drivers")
    driver_raw = _drop_none(_lookup_driver_options(drivers, driver))

    model_cls = (
        EcsDriverSettings if driver.casefold() == ECS_DRIVER else DriverSettings
    )
    try:
        driver_settings = model_cls.model_validate(driver_raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid options for driver '{driver}': {e}",
            cause=e,
            driver=driver,
        ) from e

    return LoggerSettings(level=level, driver=driver, driver_settings=driver_settings)


__all__ = [
    "DEFAULT_DRIVER",
    "DEFAULT_ECS_OUTPUT",
    "DEFAULT_FILE_FORMAT",
    "DEFAULT_FILE_PATH",
    "DEFAULT_LEVEL",
    "DEFAULT_LINE_DATETIME",
    "DEFAULT_LINE_FORMAT",
    "DriverSettings",
    "EcsDriverSettings",
    "LoggerSettings",
    "resolve_settings",
]
