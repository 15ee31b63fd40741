"""
Pipeline assembly: configuration in, handler chain out.

`build_pipeline()` decides which sink, formatter, enrichment processors and
buffering policy a logger uses. It performs no I/O besides resolving the log
file path; sinks open their destinations on first write.

Two branches exist:

- ``ecs``: structured documents, collision guard plus optional service
  injector, buffering only when ``max_buffered_lines > 0``.
- anything else (``file``, ``php`` and unknown names): line format, no
  processors, always buffered (capacity 0 meaning unbounded).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from ..plugins.formatters import BaseFormatter, EcsFormatter, LineFormatter
from ..plugins.processors import (
    BaseProcessor,
    MessageCollisionGuard,
    ServiceInfoInjector,
)
from ..plugins.sinks import (
    AbstractSink,
    BaseSink,
    BufferSink,
    StandardStreamSink,
    StreamSink,
    SyslogSink,
)
from . import diagnostics
from .dates import format_date
from .errors import ConfigurationError
from .settings import (
    FILE_DRIVER,
    PHP_DRIVER,
    DriverSettings,
    EcsDriverSettings,
    LoggerSettings,
    resolve_settings,
)

OUTPUT_FILE = "file"
OUTPUT_STDOUT = "stdout"
OUTPUT_STDERR = "stderr"
OUTPUT_PHP = "php"
ECS_OUTPUTS: frozenset[str] = frozenset(
    {OUTPUT_FILE, OUTPUT_STDOUT, OUTPUT_STDERR, OUTPUT_PHP}
)

ECS_INIT_MESSAGE = "ECS Logger initialized"
LINE_INIT_MESSAGE = "Logger created successfully"


@dataclass(frozen=True)
class ResolvedPipeline:
    """The assembled handler chain for one logger."""

    logger_name: str
    level: str
    driver: str
    output: str
    sink: AbstractSink
    formatter: BaseFormatter
    handler: BaseSink
    processors: tuple[BaseProcessor, ...] = ()
    buffered: bool = False
    buffer_limit: int = 0
    flush_overflow_to_disk: bool = False
    file_path: str | None = None
    init_message: str = LINE_INIT_MESSAGE
    init_context: Mapping[str, Any] = field(default_factory=dict)


def resolve_log_file_path(
    base_path: str,
    file_path: str,
    file_format: str,
    *,
    now: datetime | None = None,
) -> str:
    """Build ``<base_path>/<file_path>/<date>.log`` with the host separator.

    Raises:
        ConfigurationError: If the directory or the file name is empty, or
            the path contains a NUL byte.
    """
    if not file_path.strip():
        raise ConfigurationError(
            "Log file_path must not be empty",
            base_path=base_path,
            file_path=file_path,
        )
    file_name = format_date(file_format, now or datetime.now())
    if not file_name.strip():
        raise ConfigurationError(
            f"Log file_format '{file_format}' produces an empty file name",
            file_format=file_format,
        )
    path = os.sep.join((str(base_path), file_path, file_name)) + ".log"
    if "\x00" in path:
        raise ConfigurationError(
            "Log file path contains a NUL byte",
            base_path=base_path,
            file_path=file_path,
        )
    return path


def _wrap_in_buffer(
    sink: AbstractSink, driver_settings: DriverSettings, level: str
) -> BufferSink:
    return BufferSink(
        sink,
        buffer_limit=driver_settings.max_buffered_lines,
        level=level,
        flush_on_overflow=driver_settings.flush_overflow_to_disk,
    )


def _build_ecs(
    logger_name: str,
    settings: LoggerSettings,
    base_path: str,
    now: datetime | None,
) -> ResolvedPipeline:
    opts = settings.driver_settings
    if not isinstance(opts, EcsDriverSettings):
        opts = EcsDriverSettings.model_validate(opts.model_dump())
    level = settings.level
    formatter = EcsFormatter(opts.tags)

    output = opts.output.casefold()
    file_path: str | None = None
    sink: AbstractSink
    if output == OUTPUT_FILE:
        file_path = resolve_log_file_path(
            base_path, opts.file_path, opts.file_format, now=now
        )
        sink = StreamSink(file_path, level=level)
    elif output in (OUTPUT_STDOUT, OUTPUT_STDERR):
        sink = StandardStreamSink(output, level=level)
    elif output == OUTPUT_PHP:
        sink = SyslogSink(logger_name, level=level)
    else:
        diagnostics.warn(
            "pipeline",
            "unknown ECS output, falling back to stdout",
            logger=logger_name,
            output=opts.output,
        )
        output = OUTPUT_STDOUT
        sink = StandardStreamSink(OUTPUT_STDOUT, level=level)
    sink.set_formatter(formatter)

    processors: list[BaseProcessor] = [MessageCollisionGuard()]
    if opts.service:
        processors.append(ServiceInfoInjector(opts.service))

    handler: BaseSink = sink
    buffered = opts.max_buffered_lines > 0
    if buffered:
        handler = _wrap_in_buffer(sink, opts, level)

    return ResolvedPipeline(
        logger_name=logger_name,
        level=level,
        driver=settings.driver,
        output=output,
        sink=sink,
        formatter=formatter,
        handler=handler,
        processors=tuple(processors),
        buffered=buffered,
        buffer_limit=opts.max_buffered_lines if buffered else 0,
        flush_overflow_to_disk=opts.flush_overflow_to_disk,
        file_path=file_path,
        init_message=ECS_INIT_MESSAGE,
        init_context={
            "logger.name": logger_name,
            "logger.level": level,
            "logger.output": opts.output,
        },
    )


def _build_line(
    logger_name: str,
    settings: LoggerSettings,
    base_path: str,
    now: datetime | None,
) -> ResolvedPipeline:
    opts = settings.driver_settings
    level = settings.level
    formatter = LineFormatter(opts.line_format, opts.line_datetime)

    driver = settings.driver.casefold()
    file_path: str | None = None
    sink: AbstractSink
    if driver == FILE_DRIVER:
        file_path = resolve_log_file_path(
            base_path, opts.file_path, opts.file_format, now=now
        )
        sink = StreamSink(file_path, level=level)
        output = OUTPUT_FILE
    else:
        if driver != PHP_DRIVER:
            diagnostics.warn(
                "pipeline",
                "unknown driver, falling back to system log",
                logger=logger_name,
                driver=settings.driver,
            )
        sink = SyslogSink(logger_name, level=level)
        output = OUTPUT_PHP
    sink.set_formatter(formatter)

    # Line drivers are always buffered; capacity 0 buffers without a bound
    handler = _wrap_in_buffer(sink, opts, level)

    return ResolvedPipeline(
        logger_name=logger_name,
        level=level,
        driver=settings.driver,
        output=output,
        sink=sink,
        formatter=formatter,
        handler=handler,
        processors=(),
        buffered=True,
        buffer_limit=opts.max_buffered_lines,
        flush_overflow_to_disk=opts.flush_overflow_to_disk,
        file_path=file_path,
        init_message=LINE_INIT_MESSAGE,
        init_context={},
    )


def build_pipeline(
    logger_name: str,
    options: Mapping[str, Any] | LoggerSettings | None = None,
    base_path: str = "",
    *,
    now: datetime | None = None,
) -> ResolvedPipeline:
    """Assemble the handler chain for a logger.

    Args:
        logger_name: Channel name stamped on every record
        options: Raw configuration mapping (or resolved settings); None means
            all defaults
        base_path: Directory the configured ``file_path`` is relative to
        now: Moment used for the date-based file name (defaults to now)

    Returns:
        The resolved pipeline; nothing has been opened or written yet.

    Raises:
        ConfigurationError: If the configuration cannot form a usable pipeline
    """
    settings = resolve_settings(options)
    if settings.is_ecs:
        pipeline = _build_ecs(logger_name, settings, base_path, now)
    else:
        pipeline = _build_line(logger_name, settings, base_path, now)
    diagnostics.debug(
        "pipeline",
        "pipeline resolved",
        logger=logger_name,
        driver=pipeline.driver,
        output=pipeline.output,
        buffered=pipeline.buffered,
        processors=[getattr(p, "name", type(p).__name__) for p in pipeline.processors],
    )
    return pipeline


__all__ = [
    "ECS_OUTPUTS",
    "ResolvedPipeline",
    "build_pipeline",
    "resolve_log_file_path",
]
