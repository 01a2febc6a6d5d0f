from __future__ import annotations

from collections.abc import Callable

import pytest

from pymiair.config import DevicePreferences
from pymiair.device import Device
from pymiair.exceptions import MiAirTransportError
from pymiair.models.capabilities import CapabilityEvent


class FakeTransport:
    """Transport double that replays queued status lines and records requests."""

    def __init__(self, *responses: str | Exception) -> None:
        self.responses: list[str | Exception] = list(responses)
        self.requests: list[tuple[str, str, str, str | None]] = []
        self.push_error: Exception | None = None

    async def issue_request(self, method: str, address: str, path: str, body: str | None = None) -> str:
        self.requests.append((method, address, path, body))
        if body is not None:
            if self.push_error is not None:
                raise self.push_error
            return ""
        if not self.responses:
            raise MiAirTransportError("no response queued", path=path)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def pushed(self) -> list[str | None]:
        return [body for _, _, _, body in self.requests if body is not None]


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def events() -> list[CapabilityEvent]:
    return []


@pytest.fixture
def make_device(events: list[CapabilityEvent]) -> Callable[..., Device]:
    def _make(pcaddr: str = "192.168.1.20:5001", rfrate: int = 30) -> Device:
        return Device(
            "MiAir_test",
            label="Mi Air Vdevice",
            profile="miair.v1",
            manufacturer="SmartThings Community",
            model="MiAirVdevice",
            preferences=DevicePreferences(pcaddr=pcaddr, rfrate=rfrate),
            on_event=lambda _device, event: events.append(event),
        )

    return _make
