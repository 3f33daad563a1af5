"""
EIP-1193 provider adapter.

Role in the system:
- Wraps an injected provider object (browser bridge, JS proxy, test
  double) that speaks EIP-1193: request({"method": ...}), on(),
  removeListener().
- Maps the narrow WalletProvider capability set onto JSON-RPC methods.
- Converts errors carrying a numeric `code` into ProviderRpcError.

Architectural constraints:
- No retries, no state, no event translation.
- Works with sync or async request() implementations.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any

from provider.base import Listener
from provider.errors import ProviderError, ProviderRpcError

from spec import (
    METHOD_ACCOUNTS,
    METHOD_CHAIN_ID,
    METHOD_REQUEST_ACCOUNTS,
    PROVIDER_IDENTITY_FLAGS,
    PROVIDER_PRIVATE_NAMESPACE,
)


def lookup_member(obj: Any, name: str) -> Any:
    """Attribute or mapping-key lookup; None when absent."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _error_code(exc: BaseException) -> int | None:
    code = getattr(exc, "code", None)
    if code is None and exc.args and isinstance(exc.args[0], Mapping):
        code = exc.args[0].get("code")
    # bool is an int subclass; never a JSON-RPC code
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return None


class Eip1193Provider:
    """WalletProvider over an EIP-1193 injected object."""

    def __init__(self, injected: Any) -> None:
        self._injected = injected

    @property
    def raw(self) -> Any:
        return self._injected

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def is_expected_provider(self) -> bool:
        return any(
            bool(lookup_member(self._injected, flag))
            for flag in PROVIDER_IDENTITY_FLAGS
        )

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def _request(self, method: str) -> Any:
        request = lookup_member(self._injected, "request")
        if request is None:
            raise ProviderError("injected provider has no request()")
        try:
            return await _resolve(request({"method": method}))
        except ProviderError:
            raise
        except Exception as exc:
            code = _error_code(exc)
            if code is None:
                raise
            raise ProviderRpcError(code, str(exc)) from exc

    async def get_chain_id(self) -> str:
        return str(await self._request(METHOD_CHAIN_ID))

    async def get_accounts(self) -> list[str]:
        return list(await self._request(METHOD_ACCOUNTS) or [])

    async def request_accounts(self) -> list[str]:
        return list(await self._request(METHOD_REQUEST_ACCOUNTS) or [])

    async def is_unlocked(self) -> bool:
        namespace = lookup_member(self._injected, PROVIDER_PRIVATE_NAMESPACE)
        check = lookup_member(namespace, "isUnlocked") or lookup_member(
            namespace, "is_unlocked"
        )
        if check is None:
            raise ProviderError("injected provider has no unlock check")
        return bool(await _resolve(check()))

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def on(self, event_name: str, listener: Listener) -> None:
        subscribe = lookup_member(self._injected, "on")
        if subscribe is None:
            raise ProviderError("injected provider has no on()")
        subscribe(event_name, listener)

    def remove_listener(self, event_name: str, listener: Listener) -> None:
        remove = lookup_member(self._injected, "removeListener") or lookup_member(
            self._injected, "remove_listener"
        )
        if remove is None:
            raise ProviderError("injected provider has no removeListener()")
        remove(event_name, listener)
