"""
Connect flow (user-initiated account request).

Responsibilities:
- Refuse to touch a provider that is not available yet
- Dispatch Connecting / Connected / PermissionRejected around
  request_accounts()
- Absorb the provider's "request already pending" error

Non-responsibilities:
- NO de-duplication of its own; the provider's pending-request guard
  is the single source of de-duplication
- NO retries
"""

from __future__ import annotations

import time

from orchestrator.dispatch_guard import Dispatch
from orchestrator.events import (
    Connected,
    Connecting,
    EventType,
    PermissionRejected,
)
from orchestrator.selectors import is_available
from orchestrator.state_dataclass import ConnectionState
from provider.base import WalletProvider
from provider.errors import ProviderRpcError

from observability.logger import log_event, log_warning
from observability.metrics import timed

from spec import CONNECT_UNAVAILABLE_WARNING


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


async def request_accounts(
    provider: WalletProvider,
    dispatch: Dispatch,
    *,
    session_id: str | None = None,
) -> list[str]:
    """
    Ask the provider for account access (may prompt the user).

    Returns:
        the granted accounts, or [] when an identical request is
        already pending

    Raises:
        whatever the provider raised, after dispatching PermissionRejected
    """
    dispatch(Connecting(event_type=EventType.CONNECTING, ts_ms=_now_ms()))

    try:
        with timed("connect_request_duration", session_id=session_id):
            accounts = await provider.request_accounts()
    except ProviderRpcError as exc:
        if exc.is_request_pending:
            log_event({
                "ts_ms": _now_ms(),
                "event_type": EventType.CONNECTING.value,
                "decision": "request_already_pending",
                "session_id": session_id,
            })
            return []
        dispatch(_rejected(exc))
        raise
    except Exception as exc:
        dispatch(_rejected(exc))
        raise

    dispatch(
        Connected(
            event_type=EventType.CONNECTED,
            ts_ms=_now_ms(),
            accounts=tuple(accounts),
        )
    )
    return list(accounts)


def _rejected(exc: Exception) -> PermissionRejected:
    return PermissionRejected(
        event_type=EventType.PERMISSION_REJECTED,
        ts_ms=_now_ms(),
        reason=str(exc) or type(exc).__name__,
    )


async def connect(
    state: ConnectionState,
    provider: WalletProvider | None,
    dispatch: Dispatch,
    *,
    session_id: str | None = None,
) -> list[str]:
    """
    Guarded entry point: no-op (with a warning) unless available.
    """
    if provider is None or not is_available(state):
        log_warning(
            CONNECT_UNAVAILABLE_WARNING,
            decision="connect_ignored_unavailable",
            status=state.status.value,
            session_id=session_id,
        )
        return []
    return await request_accounts(provider, dispatch, session_id=session_id)
