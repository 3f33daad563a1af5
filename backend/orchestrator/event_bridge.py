"""
Event bridge (provider notifications -> events).

Responsibilities:
- Own the listeners registered on the provider
- Reconcile active listeners against a desired set (orchestrator.effects)
- Translate raw notifications into AccountsChanged / ChainChanged

Non-responsibilities:
- NO decision about WHEN a subscription is wanted (effects decides)
- NO filtering of payloads; the reducer interprets them

Ordering:
- reconcile() tears down before it registers, synchronously, so no
  notification can be delivered to a stale listener after the
  transition that retired it.
"""

from __future__ import annotations

import time
from typing import Any

from orchestrator.dispatch_guard import Dispatch
from orchestrator.effects import Subscription
from orchestrator.events import AccountsChanged, ChainChanged, EventType
from provider.base import Listener, WalletProvider

from observability.logger import log_event

from spec import NOTIFICATION_ACCOUNTS_CHANGED, NOTIFICATION_CHAIN_CHANGED


_NOTIFICATION_NAMES: dict[Subscription, str] = {
    Subscription.ACCOUNTS_CHANGED: NOTIFICATION_ACCOUNTS_CHANGED,
    Subscription.CHAIN_CHANGED: NOTIFICATION_CHAIN_CHANGED,
}


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class EventBridge:
    """
    Subscription owner for a single provider.

    Each registration uses a fresh listener object so the provider's
    listener set never holds two entries for the same subscription.
    """

    def __init__(
        self,
        *,
        provider: WalletProvider,
        dispatch: Dispatch,
        session_id: str | None = None,
    ) -> None:
        self._provider = provider
        self._dispatch = dispatch
        self._session_id = session_id
        self._active: dict[Subscription, Listener] = {}

    @property
    def active(self) -> frozenset[Subscription]:
        return frozenset(self._active)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def reconcile(self, desired: frozenset[Subscription]) -> None:
        """Make the active subscription set equal to desired."""
        for subscription in [s for s in self._active if s not in desired]:
            self._unsubscribe(subscription)

        for subscription in sorted(desired - self.active):
            self._subscribe(subscription)

    def close(self) -> None:
        """Unregister every listener. Used on session teardown."""
        self.reconcile(frozenset())

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _subscribe(self, subscription: Subscription) -> None:
        listener = self._make_listener(subscription)
        self._provider.on(_NOTIFICATION_NAMES[subscription], listener)
        self._active[subscription] = listener
        self._log("subscribe", subscription)

    def _unsubscribe(self, subscription: Subscription) -> None:
        listener = self._active.pop(subscription)
        self._provider.remove_listener(_NOTIFICATION_NAMES[subscription], listener)
        self._log("unsubscribe", subscription)

    def _make_listener(self, subscription: Subscription) -> Listener:
        if subscription is Subscription.ACCOUNTS_CHANGED:
            def on_accounts_changed(accounts: Any) -> None:
                self._dispatch(
                    AccountsChanged(
                        event_type=EventType.ACCOUNTS_CHANGED,
                        ts_ms=_now_ms(),
                        accounts=tuple(accounts or ()),
                    )
                )
            return on_accounts_changed

        def on_chain_changed(chain_id: Any) -> None:
            self._dispatch(
                ChainChanged(
                    event_type=EventType.CHAIN_CHANGED,
                    ts_ms=_now_ms(),
                    chain_id=str(chain_id),
                )
            )
        return on_chain_changed

    def _log(self, decision: str, subscription: Subscription) -> None:
        log_event({
            "ts_ms": _now_ms(),
            "event_type": subscription.value,
            "decision": decision,
            "session_id": self._session_id,
        })
