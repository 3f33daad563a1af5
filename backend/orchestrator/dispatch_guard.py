"""
Dispatch guard (scope-liveness protocol).

Responsibilities:
- Track whether the owning scope is still alive
- Wrap a dispatch function so calls after teardown are dropped

Non-responsibilities:
- NO buffering or replay of dropped events
- NO cancellation of in-flight provider calls
- NO state machine decisions

This is the system's only cancellation mechanism: results of provider
calls that resolve after the scope ended are discarded here.
"""

from __future__ import annotations

import time
from typing import Callable

from orchestrator.events import Event

from observability.logger import log_event


# ---------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------

Dispatch = Callable[[Event], None]


# ---------------------------------------------------------------------
# Scope lifetime
# ---------------------------------------------------------------------

class ScopeLifetime:
    """
    Liveness token for one owning scope.

    Starts alive. end() is idempotent and irreversible.
    """

    def __init__(self) -> None:
        self._ended = False

    @property
    def ended(self) -> bool:
        return self._ended

    def end(self) -> None:
        self._ended = True


# ---------------------------------------------------------------------
# Guard
# ---------------------------------------------------------------------

def guard_dispatch(dispatch: Dispatch, lifetime: ScopeLifetime) -> Dispatch:
    """
    Wrap dispatch so it becomes a no-op once lifetime has ended.

    Guarantees:
    - Before end: forwards synchronously, exactly once per call
    - After end: never calls dispatch, never raises
    """

    def safe_dispatch(event: Event) -> None:
        if lifetime.ended:
            event_type = getattr(event, "event_type", None)
            log_event({
                "ts_ms": time.time_ns() // 1_000_000,
                "event_type": (
                    event_type.value if event_type is not None
                    else type(event).__name__
                ),
                "decision": "dispatch_suppressed",
            })
            return
        dispatch(event)

    return safe_dispatch
