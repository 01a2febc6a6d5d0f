"""Status synchronizer.

Translates decoded status snapshots into capability events.  Sensor
readings are emitted on every poll; switch and fan mode are only
emitted when they differ from the last observed value, which is kept
per device in an explicit :class:`ObservedState`.
"""

from __future__ import annotations

import logging

from pydantic import Field

from pymiair._constants import STATUS_PATH, favorite_level_to_speed
from pymiair._transport import Transport
from pymiair.device import Device
from pymiair.exceptions import MiAirDecodeError, MiAirTransportError
from pymiair.models import capabilities as caps
from pymiair.models._base import MiAirBaseModel
from pymiair.models.capabilities import CapabilityEvent
from pymiair.models.status import FanMode, PowerState, StatusSnapshot, decode_status

_logger = logging.getLogger(__name__)

_MODE_TO_SPEED: dict[FanMode, int] = {FanMode.AUTO: 0, FanMode.SILENT: 1}


class ObservedState(MiAirBaseModel):
    """Last power state and fan mode seen from the agent."""

    power_state: PowerState | None = None
    fan_mode: FanMode | None = None


class SyncOutcome(MiAirBaseModel):
    online: bool
    events: list[CapabilityEvent] = Field(default_factory=list)
    observed: ObservedState


def translate_status(snapshot: StatusSnapshot, observed: ObservedState) -> SyncOutcome:
    """Compute the events for *snapshot* given the previous *observed* state.

    Pure function: the caller applies the events and keeps the returned
    ``observed`` for the next poll.
    """
    if snapshot.is_offline:
        return SyncOutcome(online=False, observed=observed)

    events: list[CapabilityEvent] = [
        caps.fine_dust_level(snapshot.dust_level),  # type: ignore[arg-type]
        caps.humidity(snapshot.humidity),  # type: ignore[arg-type]
        caps.temperature(snapshot.temperature_c, "C"),  # type: ignore[arg-type]
        caps.illuminance(snapshot.illuminance),  # type: ignore[arg-type]
        caps.filter_life_remaining(snapshot.filter_life_remaining),  # type: ignore[arg-type]
    ]

    if snapshot.power_state != observed.power_state:
        events.append(caps.switch(snapshot.power_state.value))

    if snapshot.fan_mode != observed.fan_mode:
        speed = _MODE_TO_SPEED.get(snapshot.fan_mode) if snapshot.fan_mode is not None else None
        if speed is not None:
            events.append(caps.fan_speed(speed))

    # Favorite level is re-emitted on every poll, even when the mode is unchanged.
    if snapshot.fan_mode is FanMode.FAVORITE:
        speed = favorite_level_to_speed(snapshot.favorite_level)
        if speed is not None:
            events.append(caps.fan_speed(speed))
        else:
            _logger.debug("Ignoring unknown favorite level %r", snapshot.favorite_level)

    return SyncOutcome(
        online=True,
        events=events,
        observed=ObservedState(power_state=snapshot.power_state, fan_mode=snapshot.fan_mode),
    )


class StatusSynchronizer:
    """Polls the PC agent and applies the result to a device.

    Owns the per-device :class:`ObservedState`, keyed by device network id.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._observed: dict[str, ObservedState] = {}

    def observed(self, device: Device) -> ObservedState:
        return self._observed.get(device.device_network_id, ObservedState())

    def invalidate(self, device: Device, *, power_state: bool = False, fan_mode: bool = False) -> None:
        """Forget observed values so the next poll re-emits them.

        Called after an optimistic command update, which may diverge
        from what the agent reports next.
        """
        current = self.observed(device)
        updates: dict[str, None] = {}
        if power_state:
            updates["power_state"] = None
        if fan_mode:
            updates["fan_mode"] = None
        if updates:
            self._observed[device.device_network_id] = current.model_copy(update=updates)

    def forget(self, device: Device) -> None:
        self._observed.pop(device.device_network_id, None)

    async def fetch(self, device: Device) -> StatusSnapshot:
        """Query and decode the agent status for *device*."""
        text = await self._transport.issue_request("POST", device.preferences.pcaddr, STATUS_PATH, None)
        return decode_status(text)

    async def sync(self, device: Device) -> SyncOutcome | None:
        """Run one poll for *device*.

        Transport failures mark the device offline; malformed responses
        are logged and ignored.  Returns ``None`` in both cases.
        """
        try:
            snapshot = await self.fetch(device)
        except MiAirTransportError as exc:
            _logger.warning("Status request for %s failed: %s", device.device_network_id, exc)
            device.offline()
            return None
        except MiAirDecodeError as exc:
            _logger.warning("Malformed status from %s: %s (raw=%r)", device.device_network_id, exc, exc.raw)
            return None

        outcome = translate_status(snapshot, self.observed(device))
        self.apply(device, outcome)
        return outcome

    def apply(self, device: Device, outcome: SyncOutcome) -> None:
        if not outcome.online:
            device.offline()
            return
        device.online()
        for event in outcome.events:
            device.emit_event(event)
        self._observed[device.device_network_id] = outcome.observed
