# pylint: disable=missing-module-docstring,missing-function-docstring

from orchestrator.commands import LogEvent
from orchestrator.enums.status import Status
from orchestrator.events import EventType, ProviderLocked
from orchestrator.reducer import reduce
from orchestrator.state_dataclass import ConnectionState


def test_reducer_emits_logevent_with_required_fields():
    event = ProviderLocked(
        event_type=EventType.PROVIDER_LOCKED,
        ts_ms=123,
        chain_id="0x1",
    )

    _, commands = reduce(ConnectionState(), event)

    log_events = [c for c in commands if isinstance(c, LogEvent)]
    assert log_events, "Reducer must emit at least one LogEvent"

    payload = log_events[0].event

    assert payload["ts_ms"] == 123
    assert payload["status"] == Status.NOT_CONNECTED_LOCKED.value
    assert payload["event_type"] == "PROVIDER_LOCKED"
    assert payload["decision"] == "provider_locked"
    assert payload["accounts_count"] == 0
    assert payload["chain_id"] == "0x1"
    assert payload["details"] == {}


def test_status_change_is_logged_last():
    event = ProviderLocked(
        event_type=EventType.PROVIDER_LOCKED,
        ts_ms=0,
        chain_id="0x1",
    )

    _, commands = reduce(ConnectionState(), event)

    last = commands[-1].event
    assert last["decision"] == "state_changed"
    assert last["details"] == {
        "from_status": "INITIALIZING",
        "to_status": "NOT_CONNECTED_LOCKED",
        "source": "provider_locked",
    }
