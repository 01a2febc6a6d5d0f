"""Capability events and commands exchanged with the host.

Capability and attribute names follow the SmartThings capability
catalogue (``switch.switch``, ``fanSpeed.fanSpeed`` ...).  Builders
below are the only place events are constructed so that attribute
names and units stay consistent.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import Field

from pymiair.models._base import MiAirBaseModel

__all__ = [
    "Capability",
    "CapabilityCommand",
    "CapabilityEvent",
    "fan_speed",
    "filter_life_remaining",
    "fine_dust_level",
    "humidity",
    "illuminance",
    "switch",
    "temperature",
]


class Capability(StrEnum):
    FINE_DUST_SENSOR = "fineDustSensor"
    RELATIVE_HUMIDITY = "relativeHumidityMeasurement"
    TEMPERATURE = "temperatureMeasurement"
    ILLUMINANCE = "illuminanceMeasurement"
    FILTER_STATE = "filterState"
    SWITCH = "switch"
    FAN_SPEED = "fanSpeed"
    REFRESH = "refresh"


class CapabilityEvent(MiAirBaseModel):
    """A state notification for one capability attribute."""

    capability: Capability
    attribute: str
    value: Any
    unit: str | None = None


class CapabilityCommand(MiAirBaseModel):
    """An inbound instruction from the host (e.g. ``switch.on``)."""

    capability: str
    command: str
    args: dict[str, Any] = Field(default_factory=dict)


def fine_dust_level(value: int | float) -> CapabilityEvent:
    return CapabilityEvent(capability=Capability.FINE_DUST_SENSOR, attribute="fineDustLevel", value=value)


def humidity(value: int | float) -> CapabilityEvent:
    return CapabilityEvent(capability=Capability.RELATIVE_HUMIDITY, attribute="humidity", value=value)


def temperature(value: int | float, unit: str = "C") -> CapabilityEvent:
    return CapabilityEvent(capability=Capability.TEMPERATURE, attribute="temperature", value=value, unit=unit)


def illuminance(value: int | float) -> CapabilityEvent:
    return CapabilityEvent(capability=Capability.ILLUMINANCE, attribute="illuminance", value=value)


def filter_life_remaining(value: int | float) -> CapabilityEvent:
    return CapabilityEvent(capability=Capability.FILTER_STATE, attribute="filterLifeRemaining", value=value)


def switch(value: str) -> CapabilityEvent:
    return CapabilityEvent(capability=Capability.SWITCH, attribute="switch", value=value)


def fan_speed(value: int) -> CapabilityEvent:
    return CapabilityEvent(capability=Capability.FAN_SPEED, attribute="fanSpeed", value=value)
