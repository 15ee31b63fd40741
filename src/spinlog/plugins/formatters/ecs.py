"""Elastic Common Schema formatter.

Each record becomes one JSON document. Context keys are placed at the
document root next to the ECS fields; the ECS fields themselves always win
and a colliding context key is dropped with a diagnostic, which is why a
context ``message`` must be renamed before it gets here.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timezone
from typing import Any, Iterable

from ...core import diagnostics
from ...core.events import LogRecord
from ...core.serialization import describe_exception, serialize_mapping_to_json_bytes

ECS_VERSION = "1.2.0"

_ERROR_KEYS = ("error", "exception")


class EcsFormatter:
    name = "ecs"

    def __init__(self, tags: Iterable[str] = ()) -> None:
        self.tags: tuple[str, ...] = tuple(tags)

    def to_document(self, record: LogRecord) -> dict[str, Any]:
        timestamp = record.datetime.astimezone(timezone.utc)
        doc: dict[str, Any] = {
            "@timestamp": timestamp.isoformat(timespec="microseconds").replace(
                "+00:00", "Z"
            ),
            "log.level": record.level_name,
            "message": record.message,
            "ecs.version": ECS_VERSION,
            "log": {"logger": record.channel},
        }
        if self.tags:
            doc["tags"] = list(self.tags)

        for key, value in record.context.items():
            if key in _ERROR_KEYS and isinstance(value, BaseException):
                doc["error"] = describe_exception(value)
                continue
            if key in doc:
                diagnostics.warn(
                    "formatter",
                    "context key collides with an ECS field, dropped",
                    logger=record.channel,
                    key=key,
                )
                continue
            doc[key] = value

        if record.extra:
            labels = doc.get("labels")
            merged = dict(labels) if isinstance(labels, Mapping) else {}
            merged.update(record.extra)
            doc["labels"] = merged
        return doc

    def format(self, record: LogRecord) -> str:
        return serialize_mapping_to_json_bytes(self.to_document(record)).decode(
            "utf-8"
        )


__all__ = ["ECS_VERSION", "EcsFormatter"]
