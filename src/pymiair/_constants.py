"""Internal constants shared across the library."""

USER_AGENT = "pymiair/0.1"
STATUS_PATH = "/status"

DEFAULT_RFRATE: int = 30
DEFAULT_REQUEST_TIMEOUT: float = 10.0

# Field name holding the monitor timer handle on a device record.
MONITOR_TIMER_FIELD = "montimer"

# ------------------------------------------------------------------
# Device identity used when the driver creates its single LAN device
# ------------------------------------------------------------------

MFG_NAME = "SmartThings Community"
MODEL = "MiAirVdevice"
VEND_LABEL = "Mi Air Vdevice"
PROFILE = "miair.v1"
DEVICE_ID_PREFIX = "MiAir_"

# ------------------------------------------------------------------
# Fan speed mapping  (PC agent mode / favorite level → fanSpeed 0-4)
# ------------------------------------------------------------------

FAN_SPEED_MIN = 0
FAN_SPEED_MAX = 4

_FAVORITE_LEVEL_TO_SPEED: dict[str, int] = {"8": 2, "12": 3, "16": 4}
VALID_FAVORITE_LEVELS: tuple[str, ...] = tuple(_FAVORITE_LEVEL_TO_SPEED)


def favorite_level_to_speed(level: str | None) -> int | None:
    """Map a favorite level token (``"8"``, ``"12"``, ``"16"``) to a fan speed.

    Returns ``None`` for any other level so the caller emits nothing.
    """
    if level is None:
        return None
    return _FAVORITE_LEVEL_TO_SPEED.get(level.strip())


def validate_fan_speed(speed: object) -> int:
    """Check a requested fan speed is an integer in 0-4.

    Integral floats (``3.0``) are accepted; strings, bools and anything
    else raise :class:`ValueError`.
    """
    if isinstance(speed, bool) or not isinstance(speed, (int, float)):
        raise ValueError(f"fan speed must be an integer, got {speed!r}")
    if isinstance(speed, float) and not speed.is_integer():
        raise ValueError(f"fan speed must be an integer, got {speed!r}")
    value = int(speed)
    if not FAN_SPEED_MIN <= value <= FAN_SPEED_MAX:
        raise ValueError(f"fan speed must be between {FAN_SPEED_MIN} and {FAN_SPEED_MAX}, got {value}")
    return value
