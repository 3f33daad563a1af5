"""
Authoritative connection state container.

Rules:
- This dataclass is a pure data model.
- It contains ALL state the reducer may ever need.
- No behavior, no helpers, no derived logic (see orchestrator.selectors).
"""
from __future__ import annotations

from dataclasses import dataclass

from orchestrator.enums.status import Status


@dataclass(frozen=True)
class ConnectionState:
    """Immutable snapshot of the wallet connection."""

    # ------------------------------------------------------------------
    # Control state
    # ------------------------------------------------------------------
    status: Status = Status.INITIALIZING

    # ------------------------------------------------------------------
    # Provider-reported data
    # ------------------------------------------------------------------

    # Non-empty iff status is CONNECTED. Order is the provider's order.
    accounts: tuple[str, ...] = ()

    # None only while INITIALIZING or UNAVAILABLE.
    # Survives account changes; replaced only by chain-carrying events.
    chain_id: str | None = None

    # ------------------------------------------------------------------
    # Connect bookkeeping
    # ------------------------------------------------------------------

    # Not-connected sub-state held when Connecting was applied.
    # Read only by PermissionRejected.
    pre_connect_status: Status | None = None
