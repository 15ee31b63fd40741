"""
Public entrypoints for spinlog.

`get_logger()` turns a logger name, a configuration mapping and a base path
into a ready `Logger`.
"""

from __future__ import annotations

from typing import Any, Mapping

from ._version import __version__
from .builder import LoggerBuilder
from .core import shutdown as _shutdown
from .core.errors import ConfigurationError, SinkIOError, SpinlogError
from .core.events import LogRecord
from .core.levels import DEBUG as _DEBUG
from .core.logger import Logger
from .core.pipeline import ResolvedPipeline, build_pipeline
from .core.settings import LoggerSettings, resolve_settings

__all__ = [
    "ConfigurationError",
    "LogRecord",
    "Logger",
    "LoggerBuilder",
    "LoggerSettings",
    "ResolvedPipeline",
    "SinkIOError",
    "SpinlogError",
    "VERSION",
    "__version__",
    "build_pipeline",
    "get_logger",
    "resolve_settings",
]

VERSION = __version__


def get_logger(
    name: str,
    options: Mapping[str, Any] | LoggerSettings | None = None,
    base_path: str = "",
) -> Logger:
    """Return a logger wired to the pipeline described by `options`.

    @docs:examples
    ```python
    from spinlog import get_logger

    # Defaults: system log, level "error", unbounded buffer
    logger = get_logger("app")

    # Structured ECS documents on stdout
    logger = get_logger(
        "orders",
        {
            "level": "debug",
            "driver": "ecs",
            "drivers": {
                "ecs": {
                    "output": "stdout",
                    "tags": ["svcA"],
                    "service": {"name": "orders"},
                }
            },
        },
    )
    logger.info("order placed", order_id=42)

    # Daily files under <base_path>/storage/log
    logger = get_logger("app", {"driver": "file"}, base_path="/srv/app")
    logger.close()
    ```

    @docs:notes
    - Configuration is read once; there is no reconfiguration
    - One debug record announcing the logger goes through the new chain
    - Buffered records are flushed by close() or at interpreter exit
    """
    pipeline = build_pipeline(name, options, base_path)
    logger = Logger.from_pipeline(pipeline)
    _shutdown.register_logger(logger)
    logger.log(_DEBUG, pipeline.init_message, dict(pipeline.init_context))
    return logger
