"""Service identity enrichment for structured records.

Copies the configured service fields into ``context["service"]``. Only fields
that are present and non-empty in the configuration are written; anything
else already in the record's ``service`` mapping is kept as is.
"""

from __future__ import annotations

from collections.abc import Mapping, Sized
from types import MappingProxyType
from typing import Any

from ...core.events import LogRecord

SERVICE_KEY = "service"
SERVICE_FIELDS: tuple[str, ...] = ("name", "version", "environment", "type")


def is_empty(value: Any) -> bool:
    """Emptiness as PHP's ``empty()`` understands it."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


class ServiceInfoInjector:
    name = "service_info"

    def __init__(self, service: Mapping[str, Any]) -> None:
        # Captured by value: later edits to the caller's mapping do not leak in
        self._service: Mapping[str, Any] = MappingProxyType(
            {
                key: service[key]
                for key in SERVICE_FIELDS
                if key in service and not is_empty(service[key])
            }
        )

    @property
    def service(self) -> Mapping[str, Any]:
        return self._service

    def __call__(self, record: LogRecord) -> LogRecord:
        context = dict(record.context)
        current = context.get(SERVICE_KEY)
        service = dict(current) if isinstance(current, Mapping) else {}
        service.update(self._service)
        context[SERVICE_KEY] = service
        return record.with_(context=context)


__all__ = ["SERVICE_FIELDS", "ServiceInfoInjector", "is_empty"]
