"""
Unified event definitions for the connection reducer.

Rules:
- Events describe facts that have occurred.
- Events carry data only (no behavior).
- All reducer decisions are based on these events.
- No clocks, no async, no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# =============================================================================
# Event Type Enumeration
# =============================================================================

class EventType(str, Enum):
    """
    Canonical event types understood by the reducer.

    Every (status, event_type) pair must be explicitly handled
    or explicitly ignored by the reducer.
    """

    # ------------------------------------------------------------------
    # Probe outcomes
    # ------------------------------------------------------------------
    PROVIDER_UNAVAILABLE = "PROVIDER_UNAVAILABLE"
    PROVIDER_LOCKED = "PROVIDER_LOCKED"
    PROVIDER_UNLOCKED = "PROVIDER_UNLOCKED"

    # ------------------------------------------------------------------
    # Connect flow
    # ------------------------------------------------------------------
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"
    PERMISSION_REJECTED = "PERMISSION_REJECTED"

    # ------------------------------------------------------------------
    # Provider notifications
    # ------------------------------------------------------------------
    ACCOUNTS_CHANGED = "ACCOUNTS_CHANGED"
    CHAIN_CHANGED = "CHAIN_CHANGED"


# =============================================================================
# Base Event
# =============================================================================

@dataclass(frozen=True)
class Event:
    """
    Base event type.

    All events must specify:
    - event_type: discriminant
    - ts_ms: timestamp provided by the source (or fake in tests)
    """

    event_type: EventType
    ts_ms: int


# =============================================================================
# Probe Events
# =============================================================================

@dataclass(frozen=True)
class ProviderUnavailable(Event):
    """No provider injected, or the injected object is not the expected one."""


@dataclass(frozen=True)
class ProviderLocked(Event):
    """Provider present but locked."""
    chain_id: str


@dataclass(frozen=True)
class ProviderUnlocked(Event):
    """Provider present and unlocked, no accounts authorized for this origin."""
    chain_id: str


# =============================================================================
# Connect Events
# =============================================================================

@dataclass(frozen=True)
class Connecting(Event):
    """An account request has been issued to the provider."""


@dataclass(frozen=True)
class Connected(Event):
    """
    Accounts are authorized.

    Emitted by the probe (with chain_id) and by the connect flow
    (without chain_id; the reducer keeps the known one).
    """
    accounts: tuple[str, ...]
    chain_id: str | None = None


@dataclass(frozen=True)
class PermissionRejected(Event):
    """The account request failed for a reason other than a pending duplicate."""
    reason: str | None = None


# =============================================================================
# Provider Notification Events
# =============================================================================

@dataclass(frozen=True)
class AccountsChanged(Event):
    """
    Provider reported a new account list.

    Forwarded verbatim; an empty list means the origin was disconnected.
    """
    accounts: tuple[str, ...]


@dataclass(frozen=True)
class ChainChanged(Event):
    """Provider switched networks."""
    chain_id: str
