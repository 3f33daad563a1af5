# pylint: disable=missing-module-docstring,missing-function-docstring
import asyncio

import pytest

from fakes import FakeProvider
from orchestrator.enums.status import Status
from orchestrator.events import Connected, Event, ProviderLocked, ProviderUnavailable, ProviderUnlocked
from orchestrator.probe import synchronize
from orchestrator.reducer import reduce
from orchestrator.state_dataclass import ConnectionState
from provider.errors import ProviderError


def run_probe(provider, *, harden: bool = False) -> tuple[list[Event], ConnectionState]:
    events: list[Event] = []
    asyncio.run(synchronize(provider, events.append, harden=harden))

    state = ConnectionState()
    for event in events:
        state, _ = reduce(state, event, strict=True)
    return events, state


def test_absent_provider_is_unavailable():
    events, state = run_probe(None)

    assert len(events) == 1
    assert isinstance(events[0], ProviderUnavailable)
    assert state == ConnectionState(status=Status.UNAVAILABLE, accounts=(), chain_id=None)


def test_misidentified_provider_is_unavailable_without_calls():
    provider = FakeProvider(expected=False)

    events, state = run_probe(provider)

    assert isinstance(events[0], ProviderUnavailable)
    assert state.status is Status.UNAVAILABLE
    assert provider.calls == []


def test_locked_provider():
    provider = FakeProvider(unlocked=False, chain_id="0x1")

    events, state = run_probe(provider)

    assert [type(e) for e in events] == [ProviderLocked]
    assert state == ConnectionState(
        status=Status.NOT_CONNECTED_LOCKED, accounts=(), chain_id="0x1"
    )
    assert provider.calls == ["get_chain_id", "is_unlocked"]


def test_unlocked_provider_without_accounts():
    provider = FakeProvider(unlocked=True, accounts=[], chain_id="0x1")

    events, state = run_probe(provider)

    assert [type(e) for e in events] == [ProviderUnlocked]
    assert state.status is Status.NOT_CONNECTED_UNLOCKED
    assert state.chain_id == "0x1"


def test_unlocked_provider_with_accounts_is_connected():
    provider = FakeProvider(unlocked=True, accounts=["0xA"], chain_id="0x1")

    events, state = run_probe(provider)

    assert [type(e) for e in events] == [Connected]
    assert state == ConnectionState(
        status=Status.CONNECTED, accounts=("0xA",), chain_id="0x1"
    )
    assert provider.calls == ["get_chain_id", "is_unlocked", "get_accounts"]


def test_chain_id_failure_propagates_and_dispatches_nothing():
    provider = FakeProvider()
    provider.chain_id_error = ProviderError("boom")
    events: list[Event] = []

    with pytest.raises(ProviderError):
        asyncio.run(synchronize(provider, events.append))

    assert events == []


def test_chain_id_failure_hardened_to_unavailable():
    provider = FakeProvider()
    provider.chain_id_error = ProviderError("boom")

    events, state = run_probe(provider, harden=True)

    assert [type(e) for e in events] == [ProviderUnavailable]
    assert state.status is Status.UNAVAILABLE


def test_hardening_does_not_mask_programming_errors():
    provider = FakeProvider()
    provider.chain_id_error = RuntimeError("bug in bridge")
    events: list[Event] = []

    with pytest.raises(RuntimeError):
        asyncio.run(synchronize(provider, events.append, harden=True))

    assert events == []
