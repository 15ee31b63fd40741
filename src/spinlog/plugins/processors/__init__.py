from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from ...core.events import LogRecord
from .message_guard import MessageCollisionGuard
from .service_info import ServiceInfoInjector


@runtime_checkable
class BaseProcessor(Protocol):
    """A pure record transform: returns a new record, never mutates its input."""

    def __call__(self, record: LogRecord) -> LogRecord:
        ...


def apply_processors(
    record: LogRecord, processors: Iterable[BaseProcessor]
) -> LogRecord:
    """Run processors left to right, each seeing the previous output."""
    for processor in processors:
        record = processor(record)
    return record


__all__ = [
    "BaseProcessor",
    "MessageCollisionGuard",
    "ServiceInfoInjector",
    "apply_processors",
]
