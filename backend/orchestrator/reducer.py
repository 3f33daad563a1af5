"""
Pure connection reducer.

(state, event) -> (new_state, commands)

Rules:
- Pure: no side effects, no IO, no clocks.
- Deterministic: output depends only on inputs.
- Total: every (status, event) pair is handled or explicitly ignored (logged).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from orchestrator.commands import Command, LogEvent
from orchestrator.enums.status import Status
from orchestrator.events import (
    AccountsChanged,
    ChainChanged,
    Connected,
    Connecting,
    Event,
    PermissionRejected,
    ProviderLocked,
    ProviderUnavailable,
    ProviderUnlocked,
)
from orchestrator.selectors import NOT_CONNECTED_STATUSES
from orchestrator.state_dataclass import ConnectionState


# =============================================================================
# Errors
# =============================================================================

class UnknownEventError(TypeError):
    """The reducer was handed an object it has no transition for."""


# =============================================================================
# Invariants
# =============================================================================
# - accounts is non-empty iff status is CONNECTED
# - chain_id is None only while INITIALIZING or UNAVAILABLE
# - pre_connect_status is set only by Connecting, consumed by
#   PermissionRejected / Connected

Result = tuple[ConnectionState, tuple[Command, ...]]


# =============================================================================
# Small helpers
# =============================================================================

def _log(
    state: ConnectionState,
    event: Any,
    decision: str,
    details: dict[str, Any] | None = None,
) -> LogEvent:
    event_type = getattr(event, "event_type", None)
    return LogEvent(
        event={
            "ts_ms": getattr(event, "ts_ms", None),
            "status": state.status.value,
            "event_type": (
                event_type.value if event_type is not None
                else type(event).__name__
            ),
            "decision": decision,
            "accounts_count": len(state.accounts),
            "chain_id": state.chain_id,
            "details": details or {},
        }
    )


def _ignore(state: ConnectionState, event: Any, reason: str) -> Result:
    return state, (_log(state, event, "ignore", {"reason": reason}),)


def _transition(
    state: ConnectionState,
    new_state: ConnectionState,
    event: Event,
    decision: str,
    details: dict[str, Any] | None = None,
) -> Result:
    """Emit the decision log, plus a state_changed log if status moved."""
    cmds: list[Command] = [_log(new_state, event, decision, details)]
    if new_state.status is not state.status:
        cmds.append(
            _log(
                new_state,
                event,
                "state_changed",
                {
                    "from_status": state.status.value,
                    "to_status": new_state.status.value,
                    "source": decision,
                },
            )
        )
    return new_state, tuple(cmds)


def _not_connected(
    state: ConnectionState,
    status: Status,
    chain_id: str | None,
) -> ConnectionState:
    return replace(
        state,
        status=status,
        accounts=(),
        chain_id=chain_id,
        pre_connect_status=None,
    )


# =============================================================================
# Reducer entrypoint
# =============================================================================

def reduce(
    state: ConnectionState,
    event: Event,
    *,
    strict: bool = False,
) -> Result:
    """
    Pure reducer for the wallet connection state machine.

    Given the current state and a single event, returns:
    - the next state
    - a tuple of commands describing required side effects (logs)

    Events that would leave chain_id unknown outside INITIALIZING /
    UNAVAILABLE are ignored. Unknown events raise UnknownEventError
    when strict, and are ignored (logged) otherwise.
    """
    # ------------------------------------------------------------------
    # Probe outcomes (valid from any status)
    # ------------------------------------------------------------------
    if isinstance(event, ProviderUnavailable):
        new_state = _not_connected(state, Status.UNAVAILABLE, state.chain_id)
        return _transition(state, new_state, event, "provider_unavailable")

    if isinstance(event, ProviderLocked):
        new_state = _not_connected(
            state, Status.NOT_CONNECTED_LOCKED, event.chain_id
        )
        return _transition(state, new_state, event, "provider_locked")

    if isinstance(event, ProviderUnlocked):
        new_state = _not_connected(
            state, Status.NOT_CONNECTED_UNLOCKED, event.chain_id
        )
        return _transition(state, new_state, event, "provider_unlocked")

    # ------------------------------------------------------------------
    # Connect flow
    # ------------------------------------------------------------------
    if isinstance(event, Connecting):
        if state.chain_id is None:
            return _ignore(state, event, "connecting_without_chain")

        if state.status in NOT_CONNECTED_STATUSES:
            pre_connect = state.status
        elif state.status is Status.CONNECTING:
            pre_connect = state.pre_connect_status
        else:
            pre_connect = None

        # Leaving CONNECTED drops the accounts (non-empty iff CONNECTED).
        new_state = replace(
            state,
            status=Status.CONNECTING,
            accounts=(),
            pre_connect_status=pre_connect,
        )
        return _transition(state, new_state, event, "connecting")

    if isinstance(event, Connected):
        chain_id = event.chain_id if event.chain_id is not None else state.chain_id
        if chain_id is None:
            return _ignore(state, event, "connected_without_chain")

        if not event.accounts:
            new_state = _not_connected(
                state, Status.NOT_CONNECTED_UNLOCKED, chain_id
            )
            return _transition(state, new_state, event, "connected_no_accounts")

        new_state = replace(
            state,
            status=Status.CONNECTED,
            accounts=tuple(event.accounts),
            chain_id=chain_id,
            pre_connect_status=None,
        )
        return _transition(
            state,
            new_state,
            event,
            "connected",
            {"chain_id_supplied": event.chain_id is not None},
        )

    if isinstance(event, PermissionRejected):
        if state.chain_id is None:
            return _ignore(state, event, "permission_rejected_without_chain")

        target = state.pre_connect_status or Status.NOT_CONNECTED_UNLOCKED
        new_state = _not_connected(state, target, state.chain_id)
        return _transition(
            state,
            new_state,
            event,
            "permission_rejected",
            {"reason": event.reason},
        )

    # ------------------------------------------------------------------
    # Provider notifications
    # ------------------------------------------------------------------
    if isinstance(event, AccountsChanged):
        if state.status is not Status.CONNECTED:
            return _ignore(state, event, "accounts_changed_not_connected")

        if not event.accounts:
            new_state = _not_connected(
                state, Status.NOT_CONNECTED_UNLOCKED, state.chain_id
            )
            return _transition(state, new_state, event, "accounts_disconnected")

        new_state = replace(state, accounts=tuple(event.accounts))
        return _transition(
            state,
            new_state,
            event,
            "accounts_changed",
            {"accounts_count": len(new_state.accounts)},
        )

    if isinstance(event, ChainChanged):
        new_state = replace(state, chain_id=event.chain_id)
        return _transition(
            state,
            new_state,
            event,
            "chain_changed",
            {"from_chain_id": state.chain_id},
        )

    if strict:
        raise UnknownEventError(f"unknown event: {event!r}")
    return _ignore(state, event, "unknown_event")
