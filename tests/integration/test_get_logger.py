"""End-to-end tests through get_logger()."""

from __future__ import annotations

import gc
import json
from pathlib import Path

import pytest

from spinlog import SinkIOError, get_logger
from spinlog.core import shutdown

pytestmark = pytest.mark.integration


def _ecs_options(**ecs: object) -> dict[str, object]:
    return {"level": "debug", "driver": "ecs", "drivers": {"ecs": ecs}}


def test_ecs_stdout_announces_itself(capsys: pytest.CaptureFixture[str]) -> None:
    logger = get_logger(
        "orders",
        _ecs_options(output="stdout", tags=["svcA"], service={"name": "orders"}),
    )

    doc = json.loads(capsys.readouterr().out.strip())
    assert doc["message"] == "ECS Logger initialized"
    assert doc["log.level"] == "DEBUG"
    assert doc["log"] == {"logger": "orders"}
    assert doc["logger.name"] == "orders"
    assert doc["logger.level"] == "debug"
    assert doc["logger.output"] == "stdout"
    assert doc["tags"] == ["svcA"]
    assert doc["service"] == {"name": "orders"}
    logger.close()


def test_ecs_context_message_is_renamed(capsys: pytest.CaptureFixture[str]) -> None:
    logger = get_logger("orders", _ecs_options(output="stdout"))
    capsys.readouterr()

    logger.info("order placed", {"message": "from context"}, order_id=42)

    doc = json.loads(capsys.readouterr().out.strip())
    assert doc["message"] == "order placed"
    assert doc["custom_message"] == "from context"
    assert doc["order_id"] == 42
    assert "tags" not in doc


def test_ecs_stderr_output(capsys: pytest.CaptureFixture[str]) -> None:
    logger = get_logger("orders", {"driver": "ecs", "drivers": {"ecs": {"output": "stderr"}}})

    logger.error("failed")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert json.loads(captured.err.strip())["message"] == "failed"


def test_ecs_buffered_output_waits_for_close(capsys: pytest.CaptureFixture[str]) -> None:
    logger = get_logger("orders", _ecs_options(output="stdout", max_buffered_lines=10))
    logger.info("queued")
    assert capsys.readouterr().out == ""

    logger.close()

    messages = [json.loads(line)["message"] for line in capsys.readouterr().out.splitlines()]
    assert messages == ["ECS Logger initialized", "queued"]


def test_file_driver_writes_on_close(tmp_path: Path) -> None:
    logger = get_logger("app", {"level": "debug", "driver": "file"}, str(tmp_path))
    logger.warning("disk almost full", {"free": 3})

    log_dir = tmp_path / "storage" / "log"
    assert not log_dir.exists() or not list(log_dir.glob("*.log"))

    logger.close()

    files = list(log_dir.glob("*.log"))
    assert len(files) == 1
    lines = files[0].read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("[app] [DEBUG] Logger created successfully")
    assert lines[1] == '[app] [WARNING] disk almost full {"free":3} []'


def test_default_driver_uses_system_log(fake_syslog) -> None:
    logger = get_logger("app", {"level": "info"})
    logger.info("hello")
    assert fake_syslog.messages == []

    logger.close()

    assert fake_syslog.messages == [(6, "[app] [INFO] hello [] []")]
    assert fake_syslog.opened[0][0] == "app"
    assert fake_syslog.closed == 1


def test_default_level_filters_below_error(fake_syslog) -> None:
    logger = get_logger("app")

    assert logger.warning("ignored") is False
    assert logger.error("kept") is True
    logger.close()

    assert [message for _, message in fake_syslog.messages] == ["[app] [ERROR] kept [] []"]


def test_shutdown_flushes_registered_loggers(fake_syslog) -> None:
    logger = get_logger("app")
    assert logger in shutdown.registered_loggers()

    logger.critical("going down")
    shutdown.close_all()

    assert fake_syslog.messages == [(2, "[app] [CRITICAL] going down [] []")]
    assert logger not in shutdown.registered_loggers()


def test_unbuffered_file_error_reaches_caller(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    logger = get_logger(
        "orders",
        {"driver": "ecs", "drivers": {"ecs": {"output": "file"}}},
        str(blocker),
    )

    with pytest.raises(SinkIOError) as exc_info:
        logger.error("cannot land")

    assert exc_info.value.sink_name == "file"


def _log_and_forget(base_path: str) -> None:
    get_logger("app", {"driver": "file"}, base_path).error("boom")


def test_unreferenced_logger_is_flushed_at_shutdown(tmp_path: Path) -> None:
    _log_and_forget(str(tmp_path))
    gc.collect()

    shutdown.close_all()

    files = list((tmp_path / "storage" / "log").glob("*.log"))
    assert len(files) == 1
    assert files[0].read_text(encoding="utf-8") == "[app] [ERROR] boom [] []\n"


def test_close_can_be_retried_after_write_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "storage"
    blocker.write_text("not a directory", encoding="utf-8")
    logger = get_logger("app", {"driver": "file"}, str(tmp_path))
    logger.error("kept")

    with pytest.raises(SinkIOError):
        logger.close()
    assert logger in shutdown.registered_loggers()

    blocker.unlink()
    logger.close()

    files = list((tmp_path / "storage" / "log").glob("*.log"))
    assert files[0].read_text(encoding="utf-8") == "[app] [ERROR] kept [] []\n"
    assert logger not in shutdown.registered_loggers()
