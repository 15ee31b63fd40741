"""
Log record value type.

Records are frozen: processors derive a modified copy with `with_()` and the
original stays untouched for anyone else still holding it.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from .levels import get_level_name, get_level_priority


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LogRecord:
    """A single log record as seen by processors, formatters and sinks."""

    channel: str
    level: int
    message: str
    context: Mapping[str, Any] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)
    datetime: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        # Freeze the mappings so in-place edits fail loudly
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def level_name(self) -> str:
        return get_level_name(self.level)

    def with_(self, **changes: Any) -> LogRecord:
        """Return a copy of this record with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "channel": self.channel,
            "level": self.level,
            "level_name": self.level_name,
            "message": self.message,
            "context": dict(self.context),
            "extra": dict(self.extra),
            "datetime": self.datetime.isoformat(),
        }

    @classmethod
    def create(
        cls,
        channel: str,
        level: str | int,
        message: str,
        context: Mapping[str, Any] | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> LogRecord:
        """Build a record from a level name or priority."""
        return cls(
            channel=channel,
            level=get_level_priority(level),
            message=str(message),
            context=context or {},
            extra=extra or {},
        )


__all__ = ["LogRecord"]
