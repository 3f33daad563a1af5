"""
Wallet session: the owning scope of one connection state machine.

Responsibilities:
- Wire provider, runtime, dispatch guard and event bridge
- Trigger the probe exactly once
- Expose the read-only surface to the embedding application:
  state snapshot, connect(), conditional provider handle, observers
- End the scope on close(); later results are dropped by the guard

Contains no state machine logic.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import Any, Callable
from uuid import uuid4

from orchestrator import connect_flow
from orchestrator.dispatch_guard import ScopeLifetime, guard_dispatch
from orchestrator.enums.status import Status
from orchestrator.event_bridge import EventBridge
from orchestrator.probe import synchronize
from orchestrator.runtime import Runtime, StateListener
from orchestrator.selectors import is_available, primary_account
from orchestrator.state_dataclass import ConnectionState
from provider.base import WalletProvider
from provider.detection import detect_provider

from session.scope_status import ScopeStatus

from observability.logger import log_event, log_warning, set_log_level

from config import AppConfig


def _new_session_id() -> str:
    return f"wallet_{uuid4().hex[:12]}"


class WalletSession:
    """
    One session == one owning scope == one provider.

    Usage:
        async with WalletSession.from_host(window, config=config) as wallet:
            await wallet.synchronized()
            if wallet.is_available:
                accounts = await wallet.connect()
    """

    def __init__(
        self,
        *,
        provider: WalletProvider | None,
        config: AppConfig | None = None,
        session_id: str | None = None,
    ) -> None:
        self._config = config or AppConfig.load_from_env()
        set_log_level(self._config.log_level)
        self._provider = provider
        self.session_id = session_id or _new_session_id()
        self.scope_status = ScopeStatus.CREATED

        self._lifetime = ScopeLifetime()
        self._runtime = Runtime(
            initial_state=ConnectionState(),
            strict=self._config.strict_reducer,
            emit_logs=self._config.enable_json_logs,
            log_context=self.log_context,
        )
        self._dispatch = guard_dispatch(self._runtime.dispatch, self._lifetime)

        self._bridge: EventBridge | None = None
        if provider is not None:
            self._bridge = EventBridge(
                provider=provider,
                dispatch=self._dispatch,
                session_id=self.session_id,
            )
            self._runtime.attach_bridge(self._bridge)

        self._probe_task: asyncio.Task[None] | None = None
        self.probe_error: BaseException | None = None

    @classmethod
    def from_host(
        cls,
        host: Any,
        *,
        config: AppConfig | None = None,
        session_id: str | None = None,
    ) -> WalletSession:
        """Build a session around whatever provider host injected."""
        return cls(
            provider=detect_provider(host),
            config=config,
            session_id=session_id,
        )

    # ------------------------------------------------------------------
    # Read-only surface
    # ------------------------------------------------------------------

    @property
    def state(self) -> ConnectionState:
        return self._runtime.state

    @property
    def status(self) -> Status:
        return self.state.status

    @property
    def accounts(self) -> tuple[str, ...]:
        return self.state.accounts

    @property
    def account(self) -> str | None:
        return primary_account(self.state)

    @property
    def chain_id(self) -> str | None:
        return self.state.chain_id

    @property
    def is_available(self) -> bool:
        return is_available(self.state)

    @property
    def provider(self) -> Any:
        """
        The injected provider object, only while available.

        For calls outside the supported capability set.
        """
        if self._provider is None or not self.is_available:
            return None
        return self._provider.raw

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Observe state changes. Returns an unsubscribe function."""
        return self._runtime.add_listener(listener)

    def log_context(self) -> dict[str, Any]:
        """Standard logging context for this session."""
        return {
            "session_id": self.session_id,
            "scope_status": self.scope_status.value,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> asyncio.Task[None] | None:
        """
        Start the scope and schedule the probe.

        The probe runs once, and only while the state is INITIALIZING.
        Must be called from a running event loop.

        Returns:
            the probe task, or None if no probe was needed
        """
        if self.scope_status is ScopeStatus.CLOSED:
            raise RuntimeError("session already closed")

        self.scope_status = ScopeStatus.RUNNING
        if self._probe_task is None and self.status is Status.INITIALIZING:
            self._probe_task = asyncio.create_task(self._run_probe())
        return self._probe_task

    async def synchronized(self) -> None:
        """
        Wait for the probe to finish.

        Re-raises the probe failure, if any.
        """
        if self._probe_task is not None:
            await asyncio.shield(self._probe_task)

    def close(self) -> None:
        """
        End the scope.

        In-flight provider calls are not cancelled; their results are
        dropped by the dispatch guard. Idempotent.
        """
        if self.scope_status is ScopeStatus.CLOSED:
            return
        self._lifetime.end()
        if self._bridge is not None:
            self._bridge.close()
        self.scope_status = ScopeStatus.CLOSED
        log_event({
            **self.log_context(),
            "event_type": "SESSION_CLOSED",
            "decision": "scope_ended",
            "status": self.status.value,
        })

    async def aclose(self, *, wait_for_probe: bool = False) -> None:
        """
        End the scope, optionally draining the probe task.

        The probe is awaited, never cancelled. Its result is dropped by
        the guard and its failure stays on probe_error.
        """
        self.close()
        if wait_for_probe and self._probe_task is not None:
            with contextlib.suppress(Exception):
                await asyncio.shield(self._probe_task)

    async def __aenter__(self) -> WalletSession:
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose(wait_for_probe=True)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def connect(self) -> list[str]:
        """
        Request account access.

        Returns [] without touching the provider when it is not
        available, when the scope is closed, or when an identical
        request is already pending. Rejections are re-raised.
        """
        if self._lifetime.ended:
            log_warning(
                "`connect` has been called on a closed wallet session.",
                decision="connect_ignored_closed",
                session_id=self.session_id,
            )
            return []
        return await connect_flow.connect(
            self.state,
            self._provider,
            self._dispatch,
            session_id=self.session_id,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _run_probe(self) -> None:
        try:
            await synchronize(
                self._provider,
                self._dispatch,
                harden=self._config.harden_probe,
                session_id=self.session_id,
            )
        except Exception as exc:
            self.probe_error = exc
            log_event({
                **self.log_context(),
                "event_type": "PROBE",
                "decision": "probe_failed",
                "status": self.status.value,
                "details": {"error": repr(exc)},
            }, level="ERROR")
            raise
