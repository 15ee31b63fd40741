"""
Root pytest configuration.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers",
        "critical: Tests that must never fail - core functionality",
    )
    config.addinivalue_line(
        "markers",
        "standard: Default risk category for typical unit tests",
    )
    config.addinivalue_line(
        "markers",
        "integration: End-to-end tests through get_logger()",
    )
    config.addinivalue_line(
        "markers",
        "property: Property-based tests (may be slow)",
    )


@pytest.fixture(autouse=True)
def reset_diagnostics_cache() -> Generator[None, None, None]:
    """Reset the diagnostics toggle before and after each test.

    The diagnostics module caches `internal_logging_enabled` at first
    access; tests must not inherit it from each other.
    """
    import spinlog.core.diagnostics as diag

    diag._internal_logging_enabled = None
    yield
    diag._internal_logging_enabled = None


@pytest.fixture(autouse=True)
def _close_registered_loggers() -> Generator[None, None, None]:
    """Close loggers created during a test so nothing flushes at exit."""
    yield
    from spinlog.core import shutdown

    for logger in shutdown.registered_loggers():
        try:
            logger.close()
        except Exception:
            shutdown.unregister_logger(logger)


class SyslogRecorder:
    def __init__(self) -> None:
        self.opened: list[tuple[Any, ...]] = []
        self.messages: list[tuple[int, str]] = []
        self.closed = 0

    def openlog(self, *args: Any) -> None:
        self.opened.append(args)

    def syslog(self, priority: int, message: str) -> None:
        self.messages.append((priority, message))

    def closelog(self) -> None:
        self.closed += 1


@pytest.fixture(autouse=True)
def fake_syslog(monkeypatch: pytest.MonkeyPatch) -> SyslogRecorder:
    """Keep tests out of the real system log and record what was sent."""
    recorder = SyslogRecorder()
    syslog = pytest.importorskip("syslog")
    monkeypatch.setattr(syslog, "openlog", recorder.openlog)
    monkeypatch.setattr(syslog, "syslog", recorder.syslog)
    monkeypatch.setattr(syslog, "closelog", recorder.closelog)
    return recorder
