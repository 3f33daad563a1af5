"""
JSONL event logger.

- Write one JSON object per line
- Output to stdout
- No buffering, no batching
- Records below the configured level are dropped
- Never raises: logging must not break dispatch
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any, Callable, Mapping


LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}

_threshold: int = LEVELS["INFO"]


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stdout_print(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()

_print: Callable[[str], None] = _stdout_print


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def set_log_level(level: str) -> None:
    """Set the minimum level written. Raises ValueError for unknown names."""
    global _threshold
    try:
        _threshold = LEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"unknown log level: {level!r}") from None


def log_event(event: Mapping[str, Any], *, level: str = "INFO") -> None:
    """
    Write a single JSONL event to stdout.

    The caller supplies a fully-formed event dict (ts_ms, decision,
    session_id, ...). Unserializable payloads are replaced by a
    LOGGER_SERIALIZATION_ERROR record.
    """
    if LEVELS.get(level, LEVELS["INFO"]) < _threshold:
        return

    try:
        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        fallback: dict[str, Any] = {
            "ts_ms": event.get("ts_ms"),
            "event_type": "LOGGER_SERIALIZATION_ERROR",
            "error": str(e),
            "original_event_repr": repr(event),
        }
        line = json.dumps(fallback, ensure_ascii=False, separators=(",", ":"))

    _print(line)


def log_warning(message: str, **fields: Any) -> None:
    """Emit a WARNING record carrying a human-readable message."""
    log_event(
        {
            "ts_ms": _now_ms(),
            "event_type": "WARNING",
            "message": message,
            **fields,
        },
        level="WARNING",
    )
