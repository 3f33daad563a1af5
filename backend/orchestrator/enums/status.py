"""
Authoritative connection status enumeration.

Rules:
- This enum defines ONLY the connection states.
- No behavior, no helper methods, no side effects.
- Transitions are defined exclusively in the reducer.
- Derived flags live in orchestrator.selectors.
"""

from __future__ import annotations

from enum import Enum


class Status(str, Enum):
    """
    Connection status between the application and the wallet provider.

    NOT_CONNECTED is split by lock state; both sub-states mean
    "provider present, no accounts authorized".
    """

    INITIALIZING = "INITIALIZING"
    UNAVAILABLE = "UNAVAILABLE"
    NOT_CONNECTED_LOCKED = "NOT_CONNECTED_LOCKED"
    NOT_CONNECTED_UNLOCKED = "NOT_CONNECTED_UNLOCKED"
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"
