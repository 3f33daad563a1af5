"""
Runtime execution shell for a single wallet session.

Responsibilities:
- Own the authoritative connection state
- Call the pure reducer
- Execute emitted commands (logging)
- Reconcile provider subscriptions with the new state
- Notify state observers

Non-responsibilities:
- Provider calls (probe / connect flow live in their own modules)
- Scope liveness (dispatch_guard sits in front of dispatch())
"""

from __future__ import annotations

from typing import Any, Callable

from orchestrator.commands import Command, LogEvent
from orchestrator.effects import desired_subscriptions
from orchestrator.event_bridge import EventBridge
from orchestrator.events import Event
from orchestrator.reducer import reduce
from orchestrator.state_dataclass import ConnectionState

from observability.logger import log_event


StateListener = Callable[[ConnectionState], None]
LogContextFn = Callable[[], dict[str, Any]]


class Runtime:
    """
    Runtime execution boundary for a single wallet session.

    Guarantees:
    - Reducer is called exactly once per dispatched event
    - dispatch() is synchronous: state swap, command execution and
      subscription reconciliation complete before it returns
    - Side effects run only after the new state is in place
    - Runtime never performs state machine logic itself
    """

    def __init__(
        self,
        *,
        initial_state: ConnectionState,
        strict: bool = False,
        emit_logs: bool = True,
        log_context: LogContextFn | None = None,
    ) -> None:
        self._state = initial_state
        self._strict = strict
        self._emit_logs = emit_logs
        self._log_context = log_context or dict
        self._bridge: EventBridge | None = None
        self._listeners: list[StateListener] = []

    def attach_bridge(self, bridge: EventBridge) -> None:
        """
        Attach the event bridge and bring it in line with current state.

        Called by WalletSession during bootstrap.
        """
        self._bridge = bridge
        bridge.reconcile(desired_subscriptions(self._state))

    @property
    def state(self) -> ConnectionState:
        """
        Current immutable connection state.

        Only Runtime swaps it, and only via the reducer.
        """
        return self._state

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a callback invoked with each new state.

        Returns:
            a function removing the listener (idempotent)
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    # ------------------------------------------------------------------
    # Event entry point
    # ------------------------------------------------------------------

    def dispatch(self, event: Event) -> None:
        """
        Process a single event.

        1. reduce(state, event)
        2. swap in the new state
        3. execute commands in emitted order
        4. reconcile provider subscriptions
        5. notify observers if the state changed
        """
        prev_state = self._state
        new_state, commands = reduce(prev_state, event, strict=self._strict)
        self._state = new_state

        for cmd in commands:
            self._execute_command(cmd)

        if self._bridge is not None:
            self._bridge.reconcile(desired_subscriptions(new_state))

        if new_state != prev_state:
            self._notify(new_state)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _execute_command(self, cmd: Command) -> None:
        if isinstance(cmd, LogEvent):
            if self._emit_logs:
                log_event({**cmd.event, **self._log_context()})
            return
        raise TypeError(f"unsupported command: {cmd!r}")

    def _notify(self, state: ConnectionState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as exc:  # logged, never propagated
                log_event({
                    **self._log_context(),
                    "event_type": "STATE_LISTENER",
                    "decision": "listener_error",
                    "status": state.status.value,
                    "details": {"error": repr(exc)},
                }, level="ERROR")
