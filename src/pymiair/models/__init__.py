"""Data models for the PC agent status line and capability traffic."""

from pymiair.models._base import MiAirBaseModel
from pymiair.models.capabilities import Capability, CapabilityCommand, CapabilityEvent
from pymiair.models.status import FanMode, PowerState, StatusSnapshot, decode_status

__all__ = [
    "Capability",
    "CapabilityCommand",
    "CapabilityEvent",
    "FanMode",
    "MiAirBaseModel",
    "PowerState",
    "StatusSnapshot",
    "decode_status",
]
