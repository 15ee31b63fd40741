from __future__ import annotations

from spinlog.core.errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorSeverity,
    SinkIOError,
    SpinlogError,
)


def test_base_error_defaults() -> None:
    error = SpinlogError("Something failed")

    assert error.message == "Something failed"
    assert str(error) == "Something failed"
    assert error.context.category == ErrorCategory.SYSTEM
    assert error.context.severity == ErrorSeverity.MEDIUM
    assert error.context.error_id
    assert error.context.timestamp is not None


def test_configuration_error_category_and_details() -> None:
    error = ConfigurationError("bad path", file_path="")

    assert isinstance(error, SpinlogError)
    assert error.context.category == ErrorCategory.CONFIGURATION
    assert error.context.severity == ErrorSeverity.HIGH
    assert error.context.details == {"file_path": ""}


def test_sink_io_error_keeps_cause_and_sink() -> None:
    cause = PermissionError("denied")
    error = SinkIOError("cannot open", sink_name="file", cause=cause)

    assert error.__cause__ is cause
    assert error.sink_name == "file"
    assert error.context.component_name == "file"
    assert error.context.category == ErrorCategory.IO


def test_to_dict() -> None:
    error = SinkIOError(
        "cannot write",
        sink_name="stdout",
        cause=OSError("closed"),
        severity=ErrorSeverity.CRITICAL,
    )

    data = error.to_dict()

    assert data["error_type"] == "SinkIOError"
    assert data["message"] == "cannot write"
    assert data["context"]["category"] == "io"
    assert data["context"]["severity"] == "critical"
    assert data["context"]["component_name"] == "stdout"
    assert data["cause"] == "OSError: closed"
