from __future__ import annotations

from typing import Iterable

from ...core.events import LogRecord
from ...core.levels import DEBUG, get_level_priority
from ..formatters import BaseFormatter, LineFormatter


class AbstractSink:
    """Level-filtered sink that formats records and writes one line each.

    Subclasses implement `_write_line()`. `handle()` returns True when the
    record was accepted by this sink's level.
    """

    name = "sink"

    def __init__(
        self,
        *,
        level: str | int = DEBUG,
        formatter: BaseFormatter | None = None,
    ) -> None:
        self.level = get_level_priority(level)
        self.formatter: BaseFormatter = formatter or LineFormatter()

    def set_formatter(self, formatter: BaseFormatter) -> None:
        self.formatter = formatter

    def is_handling(self, record: LogRecord) -> bool:
        return record.level >= self.level

    def handle(self, record: LogRecord) -> bool:
        if not self.is_handling(record):
            return False
        self._write_line(self.formatter.format(record), record)
        return True

    def handle_batch(self, records: Iterable[LogRecord]) -> None:
        for record in records:
            self.handle(record)

    def close(self) -> None:
        return None

    def _write_line(self, line: str, record: LogRecord) -> None:  # pragma: no cover
        raise NotImplementedError


__all__ = ["AbstractSink"]
