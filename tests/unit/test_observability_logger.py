# pylint: disable=missing-module-docstring,missing-function-docstring

import json
from typing import Any

import pytest

from observability import logger


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    lines: list[str] = []
    monkeypatch.setattr(logger, "_print", lines.append)
    return lines


def test_log_event_emits_valid_jsonl(captured: list[str]) -> None:
    payload: dict[str, Any] = {
        "event_type": "TEST",
        "value": 123,
    }

    logger.log_event(payload)

    assert len(captured) == 1
    assert json.loads(captured[0]) == payload


def test_log_event_never_raises_on_unserializable(captured: list[str]) -> None:
    logger.log_event({"ts_ms": 5, "bad": object()})

    decoded = json.loads(captured[0])
    assert decoded["event_type"] == "LOGGER_SERIALIZATION_ERROR"
    assert decoded["ts_ms"] == 5


def test_log_warning_carries_message_and_fields(captured: list[str]) -> None:
    logger.log_warning("careful", decision="connect_ignored_unavailable")

    decoded = json.loads(captured[0])
    assert decoded["event_type"] == "WARNING"
    assert decoded["message"] == "careful"
    assert decoded["decision"] == "connect_ignored_unavailable"
    assert isinstance(decoded["ts_ms"], int)


def test_level_threshold_drops_lower_records(
    captured: list[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(logger, "_threshold", logger.LEVELS["INFO"])
    logger.set_log_level("warning")

    logger.log_event({"event_type": "TEST"})
    logger.log_warning("still shown")
    logger.log_event({"event_type": "FAILURE"}, level="ERROR")

    assert [json.loads(line)["event_type"] for line in captured] == [
        "WARNING",
        "FAILURE",
    ]


def test_unknown_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logger, "_threshold", logger.LEVELS["INFO"])

    with pytest.raises(ValueError):
        logger.set_log_level("LOUD")

    assert logger._threshold == logger.LEVELS["INFO"]  # pylint: disable=protected-access
