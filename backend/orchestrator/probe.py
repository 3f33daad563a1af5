"""
Provider probe (initial synchronization).

Sequence: availability -> chain id -> lock state -> accessible accounts.

Guarantees:
- Exactly one event is dispatched per successful run
- Never retries
- Never prompts the user (get_accounts is non-prompting)

Failure policy:
- Default: provider failures propagate to the caller; nothing is
  dispatched and the state stays INITIALIZING.
- harden=True: a ProviderError is logged and reported as ProviderUnavailable.
  Any other exception still propagates.
"""

from __future__ import annotations

import time

from orchestrator.dispatch_guard import Dispatch
from orchestrator.events import (
    Connected,
    Event,
    EventType,
    ProviderLocked,
    ProviderUnavailable,
    ProviderUnlocked,
)
from provider.base import WalletProvider
from provider.errors import ProviderError

from observability.logger import log_event
from observability.metrics import timed


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _unavailable() -> ProviderUnavailable:
    return ProviderUnavailable(
        event_type=EventType.PROVIDER_UNAVAILABLE,
        ts_ms=_now_ms(),
    )


async def _probe_event(provider: WalletProvider) -> Event:
    chain_id = await provider.get_chain_id()

    if not await provider.is_unlocked():
        return ProviderLocked(
            event_type=EventType.PROVIDER_LOCKED,
            ts_ms=_now_ms(),
            chain_id=chain_id,
        )

    accounts = await provider.get_accounts()
    if not accounts:
        return ProviderUnlocked(
            event_type=EventType.PROVIDER_UNLOCKED,
            ts_ms=_now_ms(),
            chain_id=chain_id,
        )

    return Connected(
        event_type=EventType.CONNECTED,
        ts_ms=_now_ms(),
        accounts=tuple(accounts),
        chain_id=chain_id,
    )


async def synchronize(
    provider: WalletProvider | None,
    dispatch: Dispatch,
    *,
    harden: bool = False,
    session_id: str | None = None,
) -> None:
    """
    Establish the initial connection state from the provider.

    Args:
        provider: detected provider, or None when nothing is injected
        dispatch: guarded dispatch of the owning session
        harden: convert ProviderError failures into ProviderUnavailable
        session_id: log correlation only
    """
    with timed("probe_duration", session_id=session_id):
        if provider is None or not provider.is_expected_provider():
            dispatch(_unavailable())
            return

        try:
            event = await _probe_event(provider)
        except ProviderError as exc:
            if not harden:
                raise
            log_event({
                "ts_ms": _now_ms(),
                "event_type": EventType.PROVIDER_UNAVAILABLE.value,
                "decision": "probe_failed_hardened",
                "session_id": session_id,
                "details": {"error": repr(exc)},
            })
            event = _unavailable()

        dispatch(event)
