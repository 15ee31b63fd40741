"""Fluent builder for logger configuration mappings."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Iterable, Mapping

if TYPE_CHECKING:
    from .core.logger import Logger


class LoggerBuilder:
    """Fluent builder producing the options mapping `get_logger()` consumes.

    The builder only writes keys the caller asked for; everything else keeps
    its documented default when the logger is built. Select the driver
    (``use_*``) before setting driver options such as buffering.
    """

    def __init__(self, name: str = "app") -> None:
        self._name = name
        self._base_path = ""
        self._config: dict[str, Any] = {}

    def _driver_options(self) -> dict[str, Any]:
        driver = self._config.get("driver", "php")
        drivers: dict[str, Any] = self._config.setdefault("drivers", {})
        return drivers.setdefault(driver, {})

    def with_name(self, name: str) -> LoggerBuilder:
        """Set logger (channel) name."""
        self._name = name
        return self

    def with_level(self, level: str) -> LoggerBuilder:
        """Set minimum level (debug, info, notice, warning, error, ...)."""
        self._config["level"] = level
        return self

    def with_base_path(self, base_path: str) -> LoggerBuilder:
        """Set the directory file paths are resolved against."""
        self._base_path = base_path
        return self

    def use_php(self) -> LoggerBuilder:
        """Write lines to the operating system log."""
        self._config["driver"] = "php"
        return self

    def use_file(
        self,
        file_path: str | None = None,
        *,
        file_format: str | None = None,
    ) -> LoggerBuilder:
        """Write lines to ``<base_path>/<file_path>/<date>.log``.

        Raises:
            ValueError: If file_path is given but empty
        """
        if file_path is not None and not file_path.strip():
            raise ValueError("File driver requires a non-empty file_path")
        self._config["driver"] = "file"
        opts = self._driver_options()
        if file_path is not None:
            opts["file_path"] = file_path
        if file_format is not None:
            opts["file_format"] = file_format
        return self

    def use_ecs(
        self,
        output: str = "stdout",
        *,
        tags: Iterable[str] | None = None,
        service: Mapping[str, Any] | None = None,
    ) -> LoggerBuilder:
        """Emit Elastic Common Schema documents.

        Args:
            output: file, stdout, stderr or php
            tags: Static tags attached to every document
            service: Service identity (name, version, environment, type)
        """
        self._config["driver"] = "ecs"
        opts = self._driver_options()
        opts["output"] = output
        if tags is not None:
            opts["tags"] = list(tags)
        if service:
            opts["service"] = dict(service)
        return self

    def with_line_format(
        self, line_format: str, *, line_datetime: str | None = None
    ) -> LoggerBuilder:
        """Set the line template (file and php drivers)."""
        opts = self._driver_options()
        opts["line_format"] = line_format
        if line_datetime is not None:
            opts["line_datetime"] = line_datetime
        return self

    def with_buffer(
        self, max_buffered_lines: int, *, flush_overflow_to_disk: bool = False
    ) -> LoggerBuilder:
        """Configure buffering for the current driver.

        Raises:
            ValueError: If max_buffered_lines is negative
        """
        if max_buffered_lines < 0:
            raise ValueError("max_buffered_lines must be >= 0")
        opts = self._driver_options()
        opts["max_buffered_lines"] = max_buffered_lines
        opts["flush_overflow_to_disk"] = flush_overflow_to_disk
        return self

    def to_options(self) -> dict[str, Any]:
        """Return a copy of the accumulated options mapping."""
        return copy.deepcopy(self._config)

    def build(self) -> Logger:
        """Build and return the logger.

        Raises:
            ConfigurationError: If the configuration cannot form a pipeline
        """
        from . import get_logger

        return get_logger(self._name, self.to_options(), self._base_path)


__all__ = ["LoggerBuilder"]
