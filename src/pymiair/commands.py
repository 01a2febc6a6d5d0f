"""Capability command dispatch.

Commands update local capability state optimistically and then push the
new value to the PC agent.  A failed push is logged and left for the
next poll to reconcile; nothing is rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from pymiair._constants import STATUS_PATH, validate_fan_speed
from pymiair._transport import Transport
from pymiair.device import Device
from pymiair.exceptions import MiAirCommandError, MiAirTransportError
from pymiair.models import capabilities as caps
from pymiair.models.capabilities import Capability, CapabilityCommand
from pymiair.sync import StatusSynchronizer

_logger = logging.getLogger(__name__)

CommandHandler = Callable[[Device, CapabilityCommand], Awaitable[None]]


class CommandDispatcher:
    """Maps ``(capability, command)`` pairs to handlers."""

    def __init__(self, transport: Transport, synchronizer: StatusSynchronizer) -> None:
        self._transport = transport
        self._synchronizer = synchronizer
        self._handlers: dict[tuple[str, str], CommandHandler] = {
            (Capability.SWITCH, "on"): self.handle_switch,
            (Capability.SWITCH, "off"): self.handle_switch,
            (Capability.FAN_SPEED, "setFanSpeed"): self.handle_fan_speed,
            (Capability.REFRESH, "refresh"): self.handle_refresh,
        }

    @property
    def supported_commands(self) -> list[tuple[str, str]]:
        return sorted((str(cap), cmd) for cap, cmd in self._handlers)

    async def dispatch(self, device: Device, command: CapabilityCommand) -> None:
        handler = self._handlers.get((command.capability, command.command))
        if handler is None:
            raise MiAirCommandError(
                f"Unsupported command {command.capability}.{command.command}",
                capability=command.capability,
                command=command.command,
            )
        await handler(device, command)

    async def push_to_device(self, device: Device, value: str) -> bool:
        """Send *value* to the agent. Returns ``False`` if the push failed."""
        try:
            await self._transport.issue_request("POST", device.preferences.pcaddr, STATUS_PATH, value)
        except MiAirTransportError as exc:
            _logger.warning("Push of %r to %s failed: %s", value, device.device_network_id, exc)
            return False
        return True

    async def handle_switch(self, device: Device, command: CapabilityCommand) -> None:
        device.emit_event(caps.switch(command.command))
        self._synchronizer.invalidate(device, power_state=True)
        value = device.get_latest_state(Capability.SWITCH, "switch")
        await self.push_to_device(device, str(value))

    async def handle_fan_speed(self, device: Device, command: CapabilityCommand) -> None:
        try:
            speed = validate_fan_speed(command.args.get("speed"))
        except ValueError as exc:
            raise MiAirCommandError(str(exc), capability=command.capability, command=command.command) from exc
        device.emit_event(caps.fan_speed(speed))
        self._synchronizer.invalidate(device, fan_mode=True)
        await self.push_to_device(device, str(speed))

    async def handle_refresh(self, device: Device, command: CapabilityCommand) -> None:
        _logger.info("Manual refresh requested")
        await self._synchronizer.sync(device)
