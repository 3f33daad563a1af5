"""
Provider error types.

Rules:
- Adapters convert vendor/JS-bridge errors into these types.
- Only ProviderRpcError carries a code; flows branch on the code,
  never on message text.
"""

from __future__ import annotations

from typing import Any

from spec import ERROR_CODE_REQUEST_PENDING


class ProviderError(Exception):
    """Base class for failures reported by the wallet provider."""


class ProviderRpcError(ProviderError):
    """
    JSON-RPC style error returned by the provider.

    Attributes:
        code: numeric error code (EIP-1193 / JSON-RPC)
        message: provider-supplied message
        data: optional provider-supplied payload
    """

    def __init__(self, code: int, message: str = "", data: Any = None) -> None:
        super().__init__(f"[{code}] {message}" if message else f"[{code}]")
        self.code = code
        self.message = message
        self.data = data

    @property
    def is_request_pending(self) -> bool:
        """A request of this kind is already pending for this origin."""
        return self.code == ERROR_CODE_REQUEST_PENDING
