"""Operating-system log sink backed by the stdlib ``syslog`` module."""

from __future__ import annotations

from types import ModuleType
from typing import Any

from ...core import levels
from ...core.errors import SinkIOError
from ...core.events import LogRecord
from .base import AbstractSink

# RFC 5424 severities; identical to the syslog module's LOG_* constants
_SEVERITIES: dict[int, int] = {
    levels.EMERGENCY: 0,
    levels.ALERT: 1,
    levels.CRITICAL: 2,
    levels.ERROR: 3,
    levels.WARNING: 4,
    levels.NOTICE: 5,
    levels.INFO: 6,
    levels.DEBUG: 7,
}


class SyslogSink(AbstractSink):
    name = "php"

    def __init__(self, ident: str = "spinlog", *, facility: int | None = None, **kwargs: Any):
        super().__init__(**kwargs)
        self.ident = ident
        self.facility = facility
        self._syslog: ModuleType | None = None

    def _open(self) -> ModuleType:
        try:
            import syslog
        except ImportError as e:
            raise SinkIOError(
                "System log is not available on this platform",
                sink_name=self.name,
                cause=e,
            ) from e
        if self.facility is None:
            syslog.openlog(self.ident, syslog.LOG_PID)
        else:
            syslog.openlog(self.ident, syslog.LOG_PID, self.facility)
        return syslog

    def _write_line(self, line: str, record: LogRecord) -> None:
        if self._syslog is None:
            self._syslog = self._open()
        try:
            self._syslog.syslog(_SEVERITIES.get(record.level, 6), line.rstrip("\n"))
        except (OSError, ValueError) as e:
            raise SinkIOError(
                f"Unable to write to system log: {e}",
                sink_name=self.name,
                cause=e,
            ) from e

    def close(self) -> None:
        module, self._syslog = self._syslog, None
        if module is not None:
            module.closelog()


__all__ = ["SyslogSink"]
