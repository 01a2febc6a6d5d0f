"""High-level async driver for the Mi Air PC agent."""

from __future__ import annotations

import logging
import time
from typing import Any

import aiohttp

from pymiair._constants import (
    DEVICE_ID_PREFIX,
    MFG_NAME,
    MODEL,
    MONITOR_TIMER_FIELD,
    PROFILE,
    VEND_LABEL,
)
from pymiair._transport import HttpTransport, Transport
from pymiair.commands import CommandDispatcher
from pymiair.config import DevicePreferences, MiAirConfig
from pymiair.device import Device, EventListener
from pymiair.exceptions import MiAirCommandError, MiAirError
from pymiair.models import capabilities as caps
from pymiair.models.capabilities import CapabilityCommand
from pymiair.scheduler import PollScheduler, TimerHandle
from pymiair.sync import StatusSynchronizer, SyncOutcome

_logger = logging.getLogger(__name__)


class MiAirDriver:
    """Driver owning the single Mi Air device.

    Usage::

        async with MiAirDriver(config) as driver:
            device = await driver.discover()
            await driver.handle_command(device, CapabilityCommand(capability="switch", command="on"))
    """

    def __init__(
        self,
        config: MiAirConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        scheduler: PollScheduler | None = None,
        on_event: EventListener | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._scheduler = scheduler or PollScheduler()
        self._on_event = on_event
        self._devices: dict[str, Device] = {}
        self._synchronizer: StatusSynchronizer | None = None
        self._dispatcher: CommandDispatcher | None = None
        if transport is not None:
            self._build_services(transport)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> MiAirDriver:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._http_session, timeout=self._config.request_timeout)
            self._build_services(self._transport)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.shutdown()

    def _build_services(self, transport: Transport) -> None:
        self._synchronizer = StatusSynchronizer(transport)
        self._dispatcher = CommandDispatcher(transport, self._synchronizer)

    @property
    def scheduler(self) -> PollScheduler:
        return self._scheduler

    @property
    def devices(self) -> list[Device]:
        return list(self._devices.values())

    @property
    def synchronizer(self) -> StatusSynchronizer:
        if self._synchronizer is None:
            raise MiAirError("Driver not initialized. Use 'async with MiAirDriver(...) as driver:'")
        return self._synchronizer

    @property
    def dispatcher(self) -> CommandDispatcher:
        if self._dispatcher is None:
            raise MiAirError("Driver not initialized. Use 'async with MiAirDriver(...) as driver:'")
        return self._dispatcher

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    async def discover(self) -> Device:
        """Create the LAN device unless one already exists."""
        if self._devices:
            return next(iter(self._devices.values()))

        device_id = f"{DEVICE_ID_PREFIX}{time.time()}"
        _logger.info("Creating new device: label=<%s>, id=<%s>", VEND_LABEL, device_id)
        device = Device(
            device_id,
            label=VEND_LABEL,
            profile=PROFILE,
            manufacturer=MFG_NAME,
            model=MODEL,
            preferences=self._config.preferences,
            on_event=self._on_event,
        )
        self._devices[device_id] = device
        await self.device_added(device)
        await self.device_init(device)
        return device

    # ------------------------------------------------------------------
    # Device lifecycle
    # ------------------------------------------------------------------

    async def device_init(self, device: Device) -> None:
        self.setup_monitor(device)

    async def device_added(self, device: Device) -> None:
        device.emit_event(caps.switch("off"))
        device.emit_event(caps.fan_speed(0))
        device.emit_event(caps.temperature(20, "C"))
        device.emit_event(caps.humidity(50))
        device.emit_event(caps.fine_dust_level(10))
        device.emit_event(caps.illuminance(10))
        device.emit_event(caps.filter_life_remaining(10))

    async def device_do_configure(self, device: Device) -> None:
        _logger.info("Device doConfigure lifecycle invoked")

    async def driver_switched(self, device: Device) -> None:
        _logger.debug("Driver switched for %s", device.device_network_id)

    async def device_info_changed(self, device: Device, old_preferences: DevicePreferences) -> None:
        """React to preferences the host has already updated on *device*.

        A new PC address triggers an immediate poll; a new poll interval
        replaces the monitor timer.
        """
        preferences = device.preferences
        if old_preferences.pcaddr != preferences.pcaddr:
            _logger.info("PC Address changed to %s", preferences.pcaddr)
            await self.sync_status(device)
        elif old_preferences.rfrate != preferences.rfrate:
            _logger.info("Refresh rate changed to %ss", preferences.rfrate)
            self.setup_monitor(device)

    async def device_removed(self, device: Device) -> None:
        self._cancel_monitor(device)
        self.synchronizer.forget(device)
        self._devices.pop(device.device_network_id, None)
        _logger.info("Removed device %s", device.device_network_id)

    async def shutdown(self) -> None:
        _logger.debug("Driver shutting down")
        for device in list(self._devices.values()):
            self._cancel_monitor(device)
        self._scheduler.cancel_all()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def setup_monitor(self, device: Device) -> TimerHandle:
        """Install the poll timer for *device*, replacing any existing one."""
        self._cancel_monitor(device)

        async def _tick() -> None:
            await self.sync_status(device)

        handle = self._scheduler.call_on_schedule(
            device.preferences.rfrate,
            _tick,
            name=f"monitor-{device.device_network_id}",
        )
        device.set_field(MONITOR_TIMER_FIELD, handle)
        return handle

    def _cancel_monitor(self, device: Device) -> None:
        handle = device.clear_field(MONITOR_TIMER_FIELD)
        if handle is not None:
            self._scheduler.cancel_timer(handle)

    async def sync_status(self, device: Device) -> SyncOutcome | None:
        return await self.synchronizer.sync(device)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def handle_command(self, device: Device, command: CapabilityCommand) -> None:
        """Route a capability command; failures are logged, never raised."""
        try:
            await self.dispatcher.dispatch(device, command)
        except MiAirCommandError as exc:
            _logger.warning("Rejected command for %s: %s", device.device_network_id, exc)
