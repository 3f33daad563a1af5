"""
Provider detection.

The injected object is read from an explicitly supplied host namespace
(a window-like object or a mapping), never from module globals.
"""

from __future__ import annotations

from typing import Any

from provider.eip1193 import Eip1193Provider, lookup_member

from spec import PROVIDER_GLOBAL_NAME


def detect_provider(host: Any) -> Eip1193Provider | None:
    """
    Return an adapter over host.ethereum, or None if nothing is injected.

    Presence only: whether the object identifies as the expected
    provider is checked by the probe via is_expected_provider().
    """
    injected = lookup_member(host, PROVIDER_GLOBAL_NAME)
    if injected is None:
        return None
    return Eip1193Provider(injected)
