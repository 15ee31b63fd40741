from __future__ import annotations

import pytest

from spinlog.core.events import LogRecord
from spinlog.plugins.processors import (
    MessageCollisionGuard,
    ServiceInfoInjector,
    apply_processors,
)
from spinlog.plugins.processors.service_info import is_empty


def _record(**context: object) -> LogRecord:
    return LogRecord.create("app", "info", "hello", context)


class TestMessageCollisionGuard:
    def test_renames_message_to_custom_message(self) -> None:
        out = MessageCollisionGuard()(_record(message="x"))

        assert dict(out.context) == {"custom_message": "x"}
        assert "message" not in out.context
        assert out.message == "hello"

    def test_overwrites_existing_custom_message(self) -> None:
        out = MessageCollisionGuard()(_record(message="new", custom_message="old"))

        assert dict(out.context) == {"custom_message": "new"}

    def test_record_without_message_is_returned_unchanged(self) -> None:
        record = _record(user="bob")
        out = MessageCollisionGuard()(record)

        assert out is record
        assert dict(out.context) == {"user": "bob"}

    def test_original_record_is_not_mutated(self) -> None:
        record = _record(message="x")
        MessageCollisionGuard()(record)

        assert dict(record.context) == {"message": "x"}


class TestServiceInfoInjector:
    def test_sets_only_configured_fields(self) -> None:
        out = ServiceInfoInjector({"name": "svc"})(_record())

        assert out.context["service"]["name"] == "svc"
        assert "version" not in out.context["service"]

    def test_sets_all_four_fields(self) -> None:
        service = {
            "name": "orders",
            "version": "1.2.3",
            "environment": "prod",
            "type": "api",
        }
        out = ServiceInfoInjector(service)(_record())

        assert out.context["service"] == service

    def test_ignores_unknown_service_keys(self) -> None:
        out = ServiceInfoInjector({"name": "svc", "owner": "team"})(_record())

        assert out.context["service"] == {"name": "svc"}

    def test_empty_fields_leave_context_untouched(self) -> None:
        injector = ServiceInfoInjector({"name": "svc", "version": "", "type": None})
        out = injector(_record(service={"version": "9", "type": "worker"}))

        assert out.context["service"] == {
            "name": "svc",
            "version": "9",
            "type": "worker",
        }

    def test_overwrites_existing_values(self) -> None:
        out = ServiceInfoInjector({"name": "svc"})(_record(service={"name": "old"}))

        assert out.context["service"]["name"] == "svc"

    def test_non_mapping_service_value_is_replaced(self) -> None:
        out = ServiceInfoInjector({"name": "svc"})(_record(service="legacy"))

        assert out.context["service"] == {"name": "svc"}

    def test_creates_service_mapping_even_without_usable_fields(self) -> None:
        out = ServiceInfoInjector({"name": ""})(_record())

        assert out.context["service"] == {}

    def test_does_not_mutate_nested_service_mapping(self) -> None:
        existing = {"version": "1"}
        record = _record(service=existing)
        ServiceInfoInjector({"name": "svc"})(record)

        assert existing == {"version": "1"}
        assert record.context["service"] == {"version": "1"}


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, True),
        ("", True),
        ("0", True),
        (0, True),
        (0.0, True),
        (False, True),
        ([], True),
        ({}, True),
        ("svc", False),
        (1, False),
        ("false", False),
        (["x"], False),
    ],
)
def test_is_empty(value: object, expected: bool) -> None:
    assert is_empty(value) is expected


def test_processors_run_in_registration_order() -> None:
    seen: list[str] = []

    def first(record: LogRecord) -> LogRecord:
        seen.append("first")
        return record.with_(context={**record.context, "step": 1})

    def second(record: LogRecord) -> LogRecord:
        seen.append("second")
        assert record.context["step"] == 1
        return record.with_(context={**record.context, "step": 2})

    out = apply_processors(_record(), [first, second])

    assert seen == ["first", "second"]
    assert out.context["step"] == 2


def test_guard_and_injector_compose() -> None:
    out = apply_processors(
        _record(message="user text"),
        [MessageCollisionGuard(), ServiceInfoInjector({"name": "orders"})],
    )

    assert dict(out.context) == {
        "custom_message": "user text",
        "service": {"name": "orders"},
    }


def test_record_context_is_read_only() -> None:
    record = _record(a=1)
    with pytest.raises(TypeError):
        record.context["b"] = 2  # type: ignore[index]
