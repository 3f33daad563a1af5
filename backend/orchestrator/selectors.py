"""
Derived flags over ConnectionState.

Status is the sole dispatch point for every flag here; nothing else in
the codebase may re-derive them from raw fields.
"""

from __future__ import annotations

from orchestrator.enums.status import Status
from orchestrator.state_dataclass import ConnectionState

NOT_CONNECTED_STATUSES = frozenset({
    Status.NOT_CONNECTED_LOCKED,
    Status.NOT_CONNECTED_UNLOCKED,
})

_UNAVAILABLE_STATUSES = frozenset({
    Status.INITIALIZING,
    Status.UNAVAILABLE,
})


def is_available(state: ConnectionState) -> bool:
    """Provider detected and synchronised."""
    return state.status not in _UNAVAILABLE_STATUSES


def is_connected(state: ConnectionState) -> bool:
    return state.status is Status.CONNECTED


def is_not_connected(state: ConnectionState) -> bool:
    return state.status in NOT_CONNECTED_STATUSES


def primary_account(state: ConnectionState) -> str | None:
    """First authorized account, the one wallets treat as selected."""
    if state.status is not Status.CONNECTED:
        return None
    return state.accounts[0]
