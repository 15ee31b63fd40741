"""
Error hierarchy for spinlog.

Two error kinds exist: configuration errors raised once, at logger
construction, and sink I/O errors raised from the logging call whose write or
flush failed. Both carry an `ErrorContext` so they can be serialized for
audit or diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4


class ErrorCategory(str, Enum):
    """Broad classification of spinlog errors."""

    CONFIGURATION = "configuration"
    IO = "io"
    SYSTEM = "system"


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Metadata captured when an error is created."""

    category: ErrorCategory = ErrorCategory.SYSTEM
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    error_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    component_name: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_id": self.error_id,
            "timestamp": self.timestamp.isoformat(),
            "category": self.category.value,
            "severity": self.severity.value,
            "component_name": self.component_name,
            "details": dict(self.details),
        }


def create_error_context(
    category: ErrorCategory,
    severity: ErrorSeverity = ErrorSeverity.MEDIUM,
    *,
    component_name: str | None = None,
    **details: Any,
) -> ErrorContext:
    """Build an `ErrorContext` with the given classification."""
    return ErrorContext(
        category=category,
        severity=severity,
        component_name=component_name,
        details=details,
    )


class SpinlogError(Exception):
    """Base class for all errors raised by spinlog."""

    default_category: ErrorCategory = ErrorCategory.SYSTEM
    default_severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        error_context: ErrorContext | None = None,
        cause: BaseException | None = None,
        component_name: str | None = None,
        **details: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_context is None:
            error_context = create_error_context(
                category or self.default_category,
                severity or self.default_severity,
                component_name=component_name,
                **details,
            )
        self.context = error_context
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for structured output."""
        data: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "context": self.context.to_dict(),
        }
        if self.__cause__ is not None:
            data["cause"] = f"{type(self.__cause__).__name__}: {self.__cause__}"
        return data


class ConfigurationError(SpinlogError):
    """Raised at build time when the configuration cannot form a pipeline."""

    default_category = ErrorCategory.CONFIGURATION
    default_severity = ErrorSeverity.HIGH


class SinkIOError(SpinlogError):
    """Raised when a sink cannot open or write its destination."""

    default_category = ErrorCategory.IO
    default_severity = ErrorSeverity.HIGH

    def __init__(self, message: str, *, sink_name: str | None = None, **kwargs: Any):
        super().__init__(message, component_name=sink_name, **kwargs)
        self.sink_name = sink_name


__all__ = [
    "ConfigurationError",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "SinkIOError",
    "SpinlogError",
    "create_error_context",
]
