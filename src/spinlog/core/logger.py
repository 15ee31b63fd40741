"""
Synchronous leveled logger.

A `Logger` owns an ordered list of enrichment processors and its handler
chain. Every logging call runs inline: level check, record creation,
processors left to right, then the handlers. Sink I/O errors propagate to
the caller.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from ..plugins.processors import BaseProcessor, apply_processors
from ..plugins.sinks import BaseSink
from . import shutdown
from .events import LogRecord
from .levels import (
    ALERT,
    CRITICAL,
    DEBUG,
    EMERGENCY,
    ERROR,
    INFO,
    NOTICE,
    WARNING,
    get_level_priority,
)

if TYPE_CHECKING:
    from .pipeline import ResolvedPipeline


class Logger:
    """Leveled logging facade over a handler chain."""

    def __init__(
        self,
        name: str,
        handlers: Iterable[BaseSink] = (),
        processors: Iterable[BaseProcessor] = (),
        *,
        pipeline: ResolvedPipeline | None = None,
    ) -> None:
        self.name = name
        self.pipeline = pipeline
        self._handlers: list[BaseSink] = list(handlers)
        self._processors: list[BaseProcessor] = list(processors)
        self._closed = False

    @classmethod
    def from_pipeline(cls, pipeline: ResolvedPipeline) -> Logger:
        return cls(
            pipeline.logger_name,
            handlers=[pipeline.handler],
            processors=pipeline.processors,
            pipeline=pipeline,
        )

    @property
    def handlers(self) -> tuple[BaseSink, ...]:
        return tuple(self._handlers)

    @property
    def processors(self) -> tuple[BaseProcessor, ...]:
        return tuple(self._processors)

    def push_handler(self, handler: BaseSink) -> Logger:
        self._handlers.append(handler)
        return self

    def push_processor(self, processor: BaseProcessor) -> Logger:
        """Register a processor; processors run in registration order."""
        self._processors.append(processor)
        return self

    def is_handling(self, level: str | int) -> bool:
        priority = get_level_priority(level)
        return any(priority >= h.level for h in self._handlers)

    def log(
        self,
        level: str | int,
        message: str,
        /,
        context: Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> bool:
        """Emit a record; return True if at least one handler accepted it."""
        priority = get_level_priority(level)
        if not any(priority >= h.level for h in self._handlers):
            return False

        merged: dict[str, Any] = dict(context or {})
        merged.update(fields)
        record = LogRecord(
            channel=self.name,
            level=priority,
            message=str(message),
            context=merged,
        )
        record = apply_processors(record, self._processors)

        handled = False
        for handler in self._handlers:
            if handler.handle(record):
                handled = True
        return handled

    def debug(self, message: str, /, context: Mapping[str, Any] | None = None, **fields: Any) -> bool:
        return self.log(DEBUG, message, context, **fields)

    def info(self, message: str, /, context: Mapping[str, Any] | None = None, **fields: Any) -> bool:
        return self.log(INFO, message, context, **fields)

    def notice(self, message: str, /, context: Mapping[str, Any] | None = None, **fields: Any) -> bool:
        return self.log(NOTICE, message, context, **fields)

    def warning(self, message: str, /, context: Mapping[str, Any] | None = None, **fields: Any) -> bool:
        return self.log(WARNING, message, context, **fields)

    warn = warning

    def error(self, message: str, /, context: Mapping[str, Any] | None = None, **fields: Any) -> bool:
        return self.log(ERROR, message, context, **fields)

    def critical(self, message: str, /, context: Mapping[str, Any] | None = None, **fields: Any) -> bool:
        return self.log(CRITICAL, message, context, **fields)

    def alert(self, message: str, /, context: Mapping[str, Any] | None = None, **fields: Any) -> bool:
        return self.log(ALERT, message, context, **fields)

    def emergency(self, message: str, /, context: Mapping[str, Any] | None = None, **fields: Any) -> bool:
        return self.log(EMERGENCY, message, context, **fields)

    def exception(self, message: str, /, context: Mapping[str, Any] | None = None, **fields: Any) -> bool:
        """Log at error level with the exception being handled under ``exception``."""
        merged: dict[str, Any] = dict(context or {})
        merged.update(fields)
        if "exception" not in merged:
            exc = sys.exc_info()[1]
            if exc is not None:
                merged["exception"] = exc
        return self.log(ERROR, message, merged)

    def flush(self) -> None:
        for handler in self._handlers:
            flush = getattr(handler, "flush", None)
            if callable(flush):
                flush()

    def close(self) -> None:
        """Flush buffered records and release sink resources.

        If a handler fails to flush, the error propagates and the logger stays
        open and registered; unwritten records are kept for the next attempt.
        """
        if self._closed:
            return
        for handler in self._handlers:
            handler.close()
        self._closed = True
        shutdown.unregister_logger(self)

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["Logger"]
