"""
Lifecycle status of a WalletSession (the owning scope).

Tracked separately from the connection Status enum: a CLOSED scope
keeps its last connection snapshot but accepts no further events.
"""
from enum import Enum

class ScopeStatus(Enum):
    """
    Owning-scope lifecycle.

    Independent of connection Status.
    """
    CREATED = "CREATED"   # Constructed, probe not started
    RUNNING = "RUNNING"   # start() called; events are applied
    CLOSED = "CLOSED"     # close() called; events are dropped
