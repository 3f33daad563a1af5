"""
SPEC-AS-CONSTANTS
-----------------
Single source of truth for the provider-facing constants of the system.

Rules:
- If changing a value changes runtime behavior, it belongs here.
- No magic strings or numbers elsewhere in the codebase.
- Other modules MUST import from this file.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Provider detection
# =============================================================================

# Attribute (or mapping key) under which the extension injects its object.
PROVIDER_GLOBAL_NAME: Final[str] = "ethereum"

# Identity flags, checked in order. The camelCase form is what the browser
# object carries; the snake_case form is what Python-side bridges expose.
PROVIDER_IDENTITY_FLAGS: Final[tuple[str, ...]] = ("isMetaMask", "is_metamask")

# Private namespace holding the unlock check.
PROVIDER_PRIVATE_NAMESPACE: Final[str] = "_metamask"

# =============================================================================
# JSON-RPC methods (EIP-1193)
# =============================================================================

METHOD_CHAIN_ID: Final[str] = "eth_chainId"
METHOD_ACCOUNTS: Final[str] = "eth_accounts"
METHOD_REQUEST_ACCOUNTS: Final[str] = "eth_requestAccounts"

# =============================================================================
# Provider notifications
# =============================================================================

NOTIFICATION_ACCOUNTS_CHANGED: Final[str] = "accountsChanged"
NOTIFICATION_CHAIN_CHANGED: Final[str] = "chainChanged"

# =============================================================================
# Error codes
# =============================================================================

# "Request of type 'wallet_requestPermissions' already pending for origin
# [origin]. Please wait."
ERROR_CODE_REQUEST_PENDING: Final[int] = -32002

# =============================================================================
# Messages
# =============================================================================

CONNECT_UNAVAILABLE_WARNING: Final[str] = (
    "`connect` has been called while the wallet provider is not available "
    "or synchronising. Nothing will be done in this case."
)
