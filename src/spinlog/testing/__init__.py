"""
Testing utilities for spinlog.

Example:
    from spinlog import Logger
    from spinlog.testing import MockSink

    def test_my_code():
        sink = MockSink()
        logger = Logger("test", handlers=[sink])
        logger.info("hello")
        assert sink.messages == ["hello"]
"""

from __future__ import annotations

from typing import Any

from ..core.events import LogRecord
from ..plugins.sinks.base import AbstractSink


class MockSink(AbstractSink):
    """Sink that keeps handled records and their formatted lines in memory."""

    name = "mock"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.records: list[LogRecord] = []
        self.lines: list[str] = []
        self.closed = False

    @property
    def messages(self) -> list[str]:
        return [r.message for r in self.records]

    def _write_line(self, line: str, record: LogRecord) -> None:
        self.records.append(record)
        self.lines.append(line)

    def close(self) -> None:
        self.closed = True


__all__ = ["MockSink"]
