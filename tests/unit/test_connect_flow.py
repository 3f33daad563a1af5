# pylint: disable=missing-module-docstring,missing-function-docstring
import asyncio

import pytest

from fakes import FakeProvider, pending_error, rejected_error
from orchestrator.connect_flow import connect
from orchestrator.enums.status import Status
from orchestrator.events import Connected, Connecting, Event, PermissionRejected
from orchestrator.reducer import reduce
from orchestrator.state_dataclass import ConnectionState
from provider.errors import ProviderRpcError

UNLOCKED = ConnectionState(status=Status.NOT_CONNECTED_UNLOCKED, chain_id="0x1")


class Recorder:
    """Dispatch sink that also applies events, like the runtime."""

    def __init__(self, state: ConnectionState) -> None:
        self.state = state
        self.events: list[Event] = []

    def __call__(self, event: Event) -> None:
        self.events.append(event)
        self.state, _ = reduce(self.state, event, strict=True)


@pytest.mark.parametrize(
    "status", [Status.INITIALIZING, Status.UNAVAILABLE]
)
def test_connect_while_not_available_is_noop(status):
    state = ConnectionState(status=status)
    provider = FakeProvider()
    recorder = Recorder(state)

    result = asyncio.run(connect(state, provider, recorder))

    assert result == []
    assert recorder.events == []
    assert recorder.state == state
    assert provider.calls == []


def test_connect_success_preserves_chain():
    provider = FakeProvider(grant=["0xB"])
    recorder = Recorder(UNLOCKED)

    result = asyncio.run(connect(UNLOCKED, provider, recorder))

    assert result == ["0xB"]
    assert [type(e) for e in recorder.events] == [Connecting, Connected]
    assert recorder.events[1].chain_id is None
    assert recorder.state.status is Status.CONNECTED
    assert recorder.state.accounts == ("0xB",)
    assert recorder.state.chain_id == "0x1"


def test_pending_request_is_absorbed():
    provider = FakeProvider()
    provider.request_error = pending_error()
    recorder = Recorder(UNLOCKED)

    result = asyncio.run(connect(UNLOCKED, provider, recorder))

    assert result == []
    assert [type(e) for e in recorder.events] == [Connecting]
    assert not any(isinstance(e, PermissionRejected) for e in recorder.events)
    assert recorder.state.status is Status.CONNECTING


def test_rejection_dispatches_and_reraises():
    provider = FakeProvider()
    provider.request_error = rejected_error()
    recorder = Recorder(UNLOCKED)

    with pytest.raises(ProviderRpcError) as excinfo:
        asyncio.run(connect(UNLOCKED, provider, recorder))

    assert excinfo.value.code == 4001
    assert [type(e) for e in recorder.events] == [Connecting, PermissionRejected]
    assert recorder.state.status is Status.NOT_CONNECTED_UNLOCKED
    assert recorder.state.accounts == ()


def test_non_rpc_failure_is_rejection():
    provider = FakeProvider()
    provider.request_error = RuntimeError("bridge down")
    recorder = Recorder(UNLOCKED)

    with pytest.raises(RuntimeError):
        asyncio.run(connect(UNLOCKED, provider, recorder))

    assert isinstance(recorder.events[-1], PermissionRejected)
    assert recorder.events[-1].reason == "bridge down"


def test_overlapping_connects_first_wins_second_absorbed():
    provider = FakeProvider(grant=["0xB"])
    recorder = Recorder(UNLOCKED)

    async def scenario() -> tuple[list[str], list[str]]:
        gate = provider.hold("request_accounts")
        first = asyncio.create_task(connect(recorder.state, provider, recorder))
        await asyncio.sleep(0)

        # The provider refuses the duplicate while the first prompt is open.
        provider.request_error = pending_error()
        provider.hold("request_accounts").set()
        second = await connect(recorder.state, provider, recorder)

        provider.request_error = None
        gate.set()
        return await first, second

    first, second = asyncio.run(scenario())

    assert first == ["0xB"]
    assert second == []
    assert recorder.state.status is Status.CONNECTED
    assert recorder.state.chain_id == "0x1"
