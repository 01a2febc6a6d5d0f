"""pymiair - Async driver bridging a PC-hosted Mi air purifier agent into capability events."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pymiair")
except PackageNotFoundError:
    __version__ = "0+local"
from pymiair.commands import CommandDispatcher
from pymiair.config import DevicePreferences, MiAirConfig
from pymiair.device import Device
from pymiair.driver import MiAirDriver
from pymiair.exceptions import (
    MiAirCommandError,
    MiAirConfigError,
    MiAirDecodeError,
    MiAirError,
    MiAirTransportError,
)
from pymiair.models import (
    Capability,
    CapabilityCommand,
    CapabilityEvent,
    FanMode,
    PowerState,
    StatusSnapshot,
    decode_status,
)
from pymiair.scheduler import PollScheduler, TimerHandle
from pymiair.sync import ObservedState, StatusSynchronizer, SyncOutcome, translate_status

__all__ = [
    "__version__",
    "Capability",
    "CapabilityCommand",
    "CapabilityEvent",
    "CommandDispatcher",
    "Device",
    "DevicePreferences",
    "FanMode",
    "MiAirCommandError",
    "MiAirConfig",
    "MiAirConfigError",
    "MiAirDecodeError",
    "MiAirDriver",
    "MiAirError",
    "MiAirTransportError",
    "ObservedState",
    "PollScheduler",
    "PowerState",
    "StatusSnapshot",
    "StatusSynchronizer",
    "SyncOutcome",
    "TimerHandle",
    "decode_status",
    "translate_status",
]
