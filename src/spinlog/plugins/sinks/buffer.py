"""Buffering decorator for sinks.

Records are held in memory and forwarded to the wrapped sink in order on
`flush()` or `close()`. A write that fails leaves the unwritten records
buffered, so a later flush retries them.

With ``buffer_limit > 0`` a full buffer either flushes
(``flush_on_overflow=True``) or drops its oldest record to make room.
``buffer_limit == 0`` never overflows.

The buffer is not locked; callers serialize writes to a logger instance.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Iterable

from ...core import diagnostics
from ...core.events import LogRecord
from ...core.levels import DEBUG, get_level_priority
from .base import AbstractSink


class BufferSink:
    name = "buffer"

    def __init__(
        self,
        sink: AbstractSink,
        *,
        buffer_limit: int = 0,
        level: str | int = DEBUG,
        flush_on_overflow: bool = False,
    ) -> None:
        if buffer_limit < 0:
            raise ValueError("buffer_limit must be >= 0")
        self.sink = sink
        self.buffer_limit = buffer_limit
        self.level = get_level_priority(level)
        self.flush_on_overflow = flush_on_overflow
        self.discarded = 0
        self._buffer: deque[LogRecord] = deque()

    @property
    def formatter(self) -> Any:
        return self.sink.formatter

    @property
    def buffered(self) -> list[LogRecord]:
        return list(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)

    def is_handling(self, record: LogRecord) -> bool:
        return record.level >= self.level

    def handle(self, record: LogRecord) -> bool:
        if not self.is_handling(record):
            return False
        if self.buffer_limit > 0 and len(self._buffer) >= self.buffer_limit:
            if self.flush_on_overflow:
                self.flush()
            else:
                self._buffer.popleft()
                self.discarded += 1
                diagnostics.warn(
                    "sink",
                    "buffer full, discarding oldest record",
                    sink=self.sink.name,
                    buffer_limit=self.buffer_limit,
                    discarded=self.discarded,
                )
        self._buffer.append(record)
        return True

    def handle_batch(self, records: Iterable[LogRecord]) -> None:
        for record in records:
            self.handle(record)

    def flush(self) -> None:
        # A record leaves the buffer only once the wrapped sink has taken it
        while self._buffer:
            self.sink.handle(self._buffer[0])
            self._buffer.popleft()

    def clear(self) -> None:
        """Drop buffered records without writing them."""
        self._buffer.clear()

    def close(self) -> None:
        try:
            self.flush()
        finally:
            self.sink.close()


__all__ = ["BufferSink"]
