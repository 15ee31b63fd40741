from __future__ import annotations

from typing import Protocol, runtime_checkable

from ...core.events import LogRecord
from .ecs import EcsFormatter
from .line import LineFormatter


@runtime_checkable
class BaseFormatter(Protocol):
    """Turns a record into one line of text (without trailing newline)."""

    name: str

    def format(self, record: LogRecord) -> str:  # noqa: D401
        ...


__all__ = ["BaseFormatter", "EcsFormatter", "LineFormatter"]
