"""Core building blocks: records, levels, settings and errors."""

from .errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    SinkIOError,
    SpinlogError,
)
from .events import LogRecord
from .levels import get_level_name, get_level_priority
from .settings import (
    DriverSettings,
    EcsDriverSettings,
    LoggerSettings,
    resolve_settings,
)

__all__ = [
    "ConfigurationError",
    "DriverSettings",
    "EcsDriverSettings",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "LogRecord",
    "LoggerSettings",
    "SinkIOError",
    "SpinlogError",
    "get_level_name",
    "get_level_priority",
    "resolve_settings",
]
