"""
Application configuration.

Responsibilities:
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No state machine logic
- No provider constants (see spec.py)
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_DEV_ENVS = frozenset({"dev", "test"})


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default) == "1"


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once by the embedding application.
    Passed downward to WalletSession.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str
    log_level: str

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    # Unknown events raise instead of being ignored.
    strict_reducer: bool

    # Probe failures become ProviderUnavailable instead of propagating.
    harden_probe: bool

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """Load configuration from environment variables."""
        env = os.environ.get("WALLET_ENV", "dev")
        strict_default = "1" if env in _DEV_ENVS else "0"
        return AppConfig(
            env=env,
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            enable_json_logs=_flag("ENABLE_JSON_LOGS", "1"),
            strict_reducer=_flag("WALLET_STRICT_REDUCER", strict_default),
            harden_probe=_flag("WALLET_HARDEN_PROBE", "0"),
        )

    @staticmethod
    def defaults() -> AppConfig:
        """Environment-independent configuration (tests, embedding)."""
        return AppConfig(
            env="dev",
            log_level="INFO",
            enable_json_logs=True,
            strict_reducer=True,
            harden_probe=False,
        )
