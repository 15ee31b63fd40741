from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from ...core.events import LogRecord
from .base import AbstractSink
from .buffer import BufferSink
from .stream import StandardStreamSink, StreamSink
from .syslog import SyslogSink


@runtime_checkable
class BaseSink(Protocol):
    """Sink interface used by the logger core.

    Sinks emit records to a destination (file, standard stream, system log)
    or wrap another sink. I/O failures surface as `SinkIOError` from
    `handle()`/`close()`; they are not contained here.
    """

    name: str
    level: int

    def is_handling(self, record: LogRecord) -> bool:
        ...

    def handle(self, record: LogRecord) -> bool:  # noqa: D401
        """Process a record; return True if it was accepted."""
        ...

    def handle_batch(self, records: Iterable[LogRecord]) -> None:
        ...

    def close(self) -> None:
        ...


__all__ = [
    "AbstractSink",
    "BaseSink",
    "BufferSink",
    "StandardStreamSink",
    "StreamSink",
    "SyslogSink",
]
