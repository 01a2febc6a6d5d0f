"""Status line reported by the PC agent.

The agent answers ``POST /status`` with one line of whitespace-separated
tokens::

    <dust> <humidity> <temperature_c> <illuminance> <filter_life> <power> <fan_mode> [<favorite_level>]

``power`` is ``on``, ``off`` or ``offline``.  When it is ``offline`` the
purifier is unreachable from the PC and the other tokens carry no
meaning.  ``favorite_level`` is only sent when ``fan_mode`` is
``favorite``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from pymiair.exceptions import MiAirDecodeError
from pymiair.models._base import MiAirBaseModel

__all__ = [
    "FanMode",
    "PowerState",
    "StatusSnapshot",
    "decode_status",
]

_SENSOR_FIELDS: tuple[str, ...] = (
    "dust_level",
    "humidity",
    "temperature_c",
    "illuminance",
    "filter_life_remaining",
)
_POWER_INDEX = 5
_MIN_TOKENS = 7
_MAX_TOKENS = 8


class PowerState(StrEnum):
    """Purifier power state as reported by the agent."""

    ON = "on"
    OFF = "off"
    OFFLINE = "offline"


class FanMode(StrEnum):
    """Purifier fan mode as reported by the agent."""

    AUTO = "auto"
    SILENT = "silent"
    FAVORITE = "favorite"


class StatusSnapshot(MiAirBaseModel):
    """One decoded status line.

    Sensor fields are ``None`` only for an offline snapshot.
    """

    dust_level: int | float | None = None
    humidity: int | float | None = None
    temperature_c: int | float | None = None
    illuminance: int | float | None = None
    filter_life_remaining: int | float | None = None
    power_state: PowerState
    fan_mode: FanMode | None = None
    favorite_level: str | None = None
    raw: str = Field(default="", repr=False)
    """Original response text."""

    @property
    def is_offline(self) -> bool:
        return self.power_state is PowerState.OFFLINE


def _parse_number(token: str, field_name: str, raw: str) -> int | float:
    """Parse a numeric token, keeping integral values as ``int``."""
    try:
        value = float(token)
    except ValueError as exc:
        raise MiAirDecodeError(f"{field_name} is not a number: {token!r}", raw=raw) from exc
    if value != value or value in (float("inf"), float("-inf")):
        raise MiAirDecodeError(f"{field_name} is not a finite number: {token!r}", raw=raw)
    if value.is_integer():
        return int(value)
    return value


def decode_status(text: str | None) -> StatusSnapshot:
    """Decode a status line into a :class:`StatusSnapshot`.

    Raises :class:`MiAirDecodeError` when the line is empty, has the
    wrong number of tokens, or carries an unknown token.
    """
    raw = text or ""
    tokens = raw.split()
    if not tokens:
        raise MiAirDecodeError("empty status response", raw=raw)

    if len(tokens) > _POWER_INDEX and tokens[_POWER_INDEX] == PowerState.OFFLINE:
        return StatusSnapshot(power_state=PowerState.OFFLINE, raw=raw)

    if not _MIN_TOKENS <= len(tokens) <= _MAX_TOKENS:
        raise MiAirDecodeError(
            f"expected {_MIN_TOKENS}-{_MAX_TOKENS} tokens, got {len(tokens)}",
            raw=raw,
        )

    sensors = {name: _parse_number(tokens[idx], name, raw) for idx, name in enumerate(_SENSOR_FIELDS)}

    power_token = tokens[_POWER_INDEX]
    if power_token not in (PowerState.ON, PowerState.OFF):
        raise MiAirDecodeError(f"unknown power state: {power_token!r}", raw=raw)

    mode_token = tokens[_POWER_INDEX + 1]
    try:
        fan_mode = FanMode(mode_token)
    except ValueError as exc:
        raise MiAirDecodeError(f"unknown fan mode: {mode_token!r}", raw=raw) from exc

    favorite_level: str | None = None
    if len(tokens) == _MAX_TOKENS:
        favorite_level = tokens[_MAX_TOKENS - 1]
    if fan_mode is FanMode.FAVORITE and favorite_level is None:
        raise MiAirDecodeError("favorite mode without a favorite level", raw=raw)

    return StatusSnapshot(
        **sensors,
        power_state=PowerState(power_token),
        fan_mode=fan_mode,
        favorite_level=favorite_level,
        raw=raw,
    )
