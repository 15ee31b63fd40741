"""
Internal diagnostics for spinlog itself.

Fallback decisions (unknown driver, unknown output, unknown level) and
buffer overflow discards are reported here as one JSON line on stderr.
Diagnostics are off unless ``SPINLOG_INTERNAL_LOGGING_ENABLED`` is truthy;
the flag is read once and cached in ``_internal_logging_enabled``.
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Any

import orjson
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Cached toggle; None means "not read yet"
_internal_logging_enabled: bool | None = None


class DiagnosticsSettings(BaseSettings):
    internal_logging_enabled: bool = Field(
        default=False,
        description="Emit WARN/DEBUG diagnostics for spinlog's own decisions",
    )

    model_config = SettingsConfigDict(
        env_prefix="SPINLOG_",
        extra="ignore",
        case_sensitive=False,
    )


def is_enabled() -> bool:
    global _internal_logging_enabled
    if _internal_logging_enabled is None:
        try:
            _internal_logging_enabled = DiagnosticsSettings().internal_logging_enabled
        except Exception:
            # Malformed env value; stay quiet rather than break logger creation
            _internal_logging_enabled = False
    return _internal_logging_enabled


def set_enabled(enabled: bool) -> None:
    """Override the cached toggle (mainly for tests and embedding apps)."""
    global _internal_logging_enabled
    _internal_logging_enabled = bool(enabled)


def _emit(level: str, component: str, message: str, **fields: Any) -> None:
    if not is_enabled():
        return
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "component": component,
        "message": message,
    }
    payload.update(fields)
    try:
        line = orjson.dumps(payload, default=str).decode("utf-8")
        sys.stderr.write(line + "\n")
    except Exception:
        # Diagnostics must never break the logging call
        return None


def warn(component: str, message: str, **fields: Any) -> None:
    _emit("WARN", component, message, **fields)


def debug(component: str, message: str, **fields: Any) -> None:
    _emit("DEBUG", component, message, **fields)


__all__ = ["DiagnosticsSettings", "debug", "is_enabled", "set_enabled", "warn"]
