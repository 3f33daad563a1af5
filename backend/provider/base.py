"""
Wallet provider capability protocol.

The narrow set of calls the connection core depends on. Anything else
the injected object offers is reachable only through the raw handle
exposed by WalletSession.provider.

This module contains:
- A Protocol (capabilities, not implementations)
- Zero state machine logic
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

Listener = Callable[[Any], None]


@runtime_checkable
class WalletProvider(Protocol):
    """
    Contract:
    - get_accounts() never prompts the user
    - request_accounts() may prompt and may raise ProviderRpcError;
      code -32002 means an identical request is already pending
    - on()/remove_listener() are synchronous and accept the
      notification names in spec.py
    """

    def is_expected_provider(self) -> bool: ...

    async def get_chain_id(self) -> str: ...

    async def is_unlocked(self) -> bool: ...

    async def get_accounts(self) -> list[str]: ...

    async def request_accounts(self) -> list[str]: ...

    def on(self, event_name: str, listener: Listener) -> None: ...

    def remove_listener(self, event_name: str, listener: Listener) -> None: ...

    @property
    def raw(self) -> Any:
        """The underlying injected object."""
