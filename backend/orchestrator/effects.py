"""
Effect descriptors derived from connection state.

Rules:
- Pure: the desired set depends only on the state snapshot.
- No subscribe/unsubscribe calls here; the runtime reconciles the
  desired set against the active one after every event.
"""

from __future__ import annotations

from enum import Enum

from orchestrator.selectors import is_available, is_connected
from orchestrator.state_dataclass import ConnectionState


class Subscription(str, Enum):
    """Provider notification streams the runtime may listen to."""

    ACCOUNTS_CHANGED = "ACCOUNTS_CHANGED"
    CHAIN_CHANGED = "CHAIN_CHANGED"


def desired_subscriptions(state: ConnectionState) -> frozenset[Subscription]:
    """
    Subscriptions that must be active for this state.

    - ACCOUNTS_CHANGED while CONNECTED
    - CHAIN_CHANGED while the provider is available
    """
    desired: set[Subscription] = set()
    if is_connected(state):
        desired.add(Subscription.ACCOUNTS_CHANGED)
    if is_available(state):
        desired.add(Subscription.CHAIN_CHANGED)
    return frozenset(desired)
