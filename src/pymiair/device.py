"""In-process device record.

The record mirrors what a hub keeps for a LAN device: identity,
preferences, the latest value of each capability attribute, an
online flag and a small field store for driver-private values such as
the monitor timer handle.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pymiair.config import DevicePreferences
from pymiair.models.capabilities import Capability, CapabilityEvent

_logger = logging.getLogger(__name__)

EventListener = Callable[["Device", CapabilityEvent], None]


class Device:
    """A single device owned by the driver."""

    def __init__(
        self,
        device_network_id: str,
        *,
        label: str,
        profile: str,
        manufacturer: str,
        model: str,
        preferences: DevicePreferences,
        device_type: str = "LAN",
        on_event: EventListener | None = None,
    ) -> None:
        self.device_network_id = device_network_id
        self.label = label
        self.profile = profile
        self.manufacturer = manufacturer
        self.model = model
        self.device_type = device_type
        self.preferences = preferences
        self.is_online = False
        self._state_cache: dict[str, dict[str, Any]] = {}
        self._fields: dict[str, Any] = {}
        self._listeners: list[EventListener] = []
        if on_event is not None:
            self._listeners.append(on_event)

    def __repr__(self) -> str:
        return f"Device(id={self.device_network_id!r}, label={self.label!r}, online={self.is_online})"

    # ------------------------------------------------------------------
    # Events and state cache
    # ------------------------------------------------------------------

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def emit_event(self, event: CapabilityEvent) -> None:
        """Record *event* in the state cache and notify listeners."""
        self._state_cache.setdefault(event.capability, {})[event.attribute] = event.value
        _logger.debug("%s emit %s.%s=%r", self.device_network_id, event.capability, event.attribute, event.value)
        for listener in list(self._listeners):
            try:
                listener(self, event)
            except Exception:
                _logger.warning("Event listener failed for %s", event.attribute, exc_info=True)

    def get_latest_state(self, capability: Capability | str, attribute: str) -> Any:
        """Return the cached value of *capability.attribute*, or ``None``."""
        return self._state_cache.get(capability, {}).get(attribute)

    @property
    def state_cache(self) -> dict[str, dict[str, Any]]:
        return {cap: dict(attrs) for cap, attrs in self._state_cache.items()}

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def online(self) -> None:
        if not self.is_online:
            _logger.info("%s is online", self.device_network_id)
        self.is_online = True

    def offline(self) -> None:
        if self.is_online:
            _logger.info("%s is offline", self.device_network_id)
        self.is_online = False

    # ------------------------------------------------------------------
    # Driver-private fields
    # ------------------------------------------------------------------

    def set_field(self, name: str, value: Any) -> None:
        self._fields[name] = value

    def get_field(self, name: str) -> Any:
        return self._fields.get(name)

    def clear_field(self, name: str) -> Any:
        return self._fields.pop(name, None)
