"""File and standard-stream sinks.

`StreamSink` opens its file on the first write that reaches it and keeps the
handle for the sink's lifetime. `StandardStreamSink` looks up ``sys.stdout``
or ``sys.stderr`` on every write so redirected streams are honoured.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, TextIO

from ...core.errors import SinkIOError
from ...core.events import LogRecord
from .base import AbstractSink


def _terminated(line: str) -> str:
    return line if line.endswith("\n") else line + "\n"


class StreamSink(AbstractSink):
    """Append formatted lines to a file path."""

    name = "file"

    def __init__(self, path: str | Path, *, encoding: str = "utf-8", **kwargs: Any):
        super().__init__(**kwargs)
        self.path = str(path)
        self.encoding = encoding
        self._stream: TextIO | None = None

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    def _open(self) -> TextIO:
        try:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            return open(self.path, "a", encoding=self.encoding)
        except OSError as e:
            raise SinkIOError(
                f"Unable to open log file {self.path}: {e}",
                sink_name=self.name,
                cause=e,
                path=self.path,
            ) from e

    def _write_line(self, line: str, record: LogRecord) -> None:
        if self._stream is None:
            self._stream = self._open()
        try:
            self._stream.write(_terminated(line))
            self._stream.flush()
        except (OSError, ValueError) as e:
            raise SinkIOError(
                f"Unable to write log file {self.path}: {e}",
                sink_name=self.name,
                cause=e,
                path=self.path,
            ) from e

    def close(self) -> None:
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.close()


class StandardStreamSink(AbstractSink):
    """Write formatted lines to ``sys.stdout`` or ``sys.stderr``."""

    def __init__(self, stream_name: str = "stdout", **kwargs: Any) -> None:
        if stream_name not in ("stdout", "stderr"):
            raise ValueError(f"Unknown standard stream '{stream_name}'")
        super().__init__(**kwargs)
        self.stream_name = stream_name

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.stream_name

    def _write_line(self, line: str, record: LogRecord) -> None:
        stream: TextIO = getattr(sys, self.stream_name)
        try:
            stream.write(_terminated(line))
            stream.flush()
        except (OSError, ValueError) as e:
            raise SinkIOError(
                f"Unable to write to {self.stream_name}: {e}",
                sink_name=self.stream_name,
                cause=e,
            ) from e


__all__ = ["StandardStreamSink", "StreamSink"]
