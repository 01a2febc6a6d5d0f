"""Tests for capability command dispatch."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from conftest import FakeTransport

from pymiair.commands import CommandDispatcher
from pymiair.device import Device
from pymiair.exceptions import MiAirCommandError, MiAirTransportError
from pymiair.models.capabilities import Capability, CapabilityCommand, CapabilityEvent
from pymiair.sync import StatusSynchronizer


def _dispatcher(transport: FakeTransport) -> tuple[CommandDispatcher, StatusSynchronizer]:
    synchronizer = StatusSynchronizer(transport)
    return CommandDispatcher(transport, synchronizer), synchronizer


@pytest.mark.asyncio
@pytest.mark.parametrize("value", ["on", "off"])
async def test_switch_emits_then_pushes_cached_value(
    make_device: Callable[..., Device], events: list[CapabilityEvent], value: str
) -> None:
    transport = FakeTransport()
    dispatcher, _ = _dispatcher(transport)
    device = make_device()

    await dispatcher.dispatch(device, CapabilityCommand(capability="switch", command=value))

    assert [(event.attribute, event.value) for event in events] == [("switch", value)]
    assert transport.requests == [("POST", "192.168.1.20:5001", "/status", value)]


@pytest.mark.asyncio
async def test_fan_speed_emits_then_pushes_string(
    make_device: Callable[..., Device], events: list[CapabilityEvent]
) -> None:
    transport = FakeTransport()
    dispatcher, _ = _dispatcher(transport)
    device = make_device()

    await dispatcher.dispatch(
        device, CapabilityCommand(capability="fanSpeed", command="setFanSpeed", args={"speed": 3})
    )

    assert device.get_latest_state(Capability.FAN_SPEED, "fanSpeed") == 3
    assert transport.pushed == ["3"]
    assert len(events) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("speed", [None, -1, 5, "fast", "3", 2.5, True])
async def test_fan_speed_rejects_invalid(make_device: Callable[..., Device], speed: object) -> None:
    transport = FakeTransport()
    dispatcher, _ = _dispatcher(transport)
    device = make_device()

    with pytest.raises(MiAirCommandError):
        await dispatcher.dispatch(
            device, CapabilityCommand(capability="fanSpeed", command="setFanSpeed", args={"speed": speed})
        )
    assert transport.requests == []


@pytest.mark.asyncio
async def test_refresh_runs_a_poll(make_device: Callable[..., Device], events: list[CapabilityEvent]) -> None:
    transport = FakeTransport("12 45 23 100 80 on auto")
    dispatcher, _ = _dispatcher(transport)
    device = make_device()

    await dispatcher.dispatch(device, CapabilityCommand(capability="refresh", command="refresh"))

    assert device.is_online
    assert len(events) == 7


@pytest.mark.asyncio
async def test_unknown_command_raises(make_device: Callable[..., Device]) -> None:
    dispatcher, _ = _dispatcher(FakeTransport())

    with pytest.raises(MiAirCommandError) as excinfo:
        await dispatcher.dispatch(make_device(), CapabilityCommand(capability="switchLevel", command="setLevel"))
    assert excinfo.value.capability == "switchLevel"


@pytest.mark.asyncio
async def test_failed_push_keeps_optimistic_state(make_device: Callable[..., Device]) -> None:
    transport = FakeTransport()
    transport.push_error = MiAirTransportError("unreachable", path="/status")
    dispatcher, _ = _dispatcher(transport)
    device = make_device()

    await dispatcher.dispatch(device, CapabilityCommand(capability="switch", command="on"))

    assert device.get_latest_state("switch", "switch") == "on"


@pytest.mark.asyncio
async def test_remote_state_wins_after_optimistic_switch(make_device: Callable[..., Device]) -> None:
    transport = FakeTransport("1 2 3 4 5 off auto", "1 2 3 4 5 off auto")
    dispatcher, synchronizer = _dispatcher(transport)
    device = make_device()

    await synchronizer.sync(device)
    await dispatcher.dispatch(device, CapabilityCommand(capability="switch", command="on"))
    assert device.get_latest_state("switch", "switch") == "on"

    await synchronizer.sync(device)
    assert device.get_latest_state("switch", "switch") == "off"


@pytest.mark.asyncio
async def test_remote_fan_mode_wins_after_optimistic_speed(make_device: Callable[..., Device]) -> None:
    transport = FakeTransport("1 2 3 4 5 on silent", "1 2 3 4 5 on silent")
    dispatcher, synchronizer = _dispatcher(transport)
    device = make_device()

    await synchronizer.sync(device)
    await dispatcher.dispatch(
        device, CapabilityCommand(capability="fanSpeed", command="setFanSpeed", args={"speed": 4})
    )
    await synchronizer.sync(device)

    assert device.get_latest_state("fanSpeed", "fanSpeed") == 1


def test_supported_commands() -> None:
    dispatcher, _ = _dispatcher(FakeTransport())
    assert dispatcher.supported_commands == [
        ("fanSpeed", "setFanSpeed"),
        ("refresh", "refresh"),
        ("switch", "off"),
        ("switch", "on"),
    ]


@pytest.mark.asyncio
async def test_fan_speed_accepts_integral_float(make_device: Callable[..., Device]) -> None:
    transport = FakeTransport()
    dispatcher, _ = _dispatcher(transport)

    await dispatcher.dispatch(
        make_device(), CapabilityCommand(capability="fanSpeed", command="setFanSpeed", args={"speed": 2.0})
    )

    assert transport.pushed == ["2"]
