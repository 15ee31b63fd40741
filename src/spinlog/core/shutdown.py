"""Flush buffered records at interpreter exit.

Loggers register themselves here when created through `get_logger()` and
stay registered until they are closed. The registry holds them strongly: a
logger the caller no longer references still owns buffered records, and those
must reach their sink. The atexit hook closes every registered logger. It is
best-effort: a failing sink must not turn a normal exit into a crash, so
errors are reported as diagnostics and skipped.
"""

from __future__ import annotations

import atexit
from typing import TYPE_CHECKING

from . import diagnostics

if TYPE_CHECKING:
    from .logger import Logger


_shutdown_in_progress: bool = False
_registered_loggers: dict[int, Logger] = {}


def register_logger(logger: Logger) -> None:
    """Register a logger for close-on-exit; held until unregistered."""
    _registered_loggers[id(logger)] = logger


def unregister_logger(logger: Logger) -> None:
    """Stop tracking a logger, typically after an explicit close()."""
    _registered_loggers.pop(id(logger), None)


def registered_loggers() -> list[Logger]:
    return list(_registered_loggers.values())


def close_all() -> None:
    """Close every registered logger, containing per-logger failures."""
    for logger in registered_loggers():
        try:
            logger.close()
        except Exception as e:
            diagnostics.warn(
                "shutdown",
                "failed to close logger at exit",
                logger=getattr(logger, "name", None),
                reason=type(e).__name__,
                detail=str(e),
            )


def _atexit_handler() -> None:
    global _shutdown_in_progress

    if _shutdown_in_progress:
        return
    _shutdown_in_progress = True
    close_all()


atexit.register(_atexit_handler)
