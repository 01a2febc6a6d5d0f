"""Driver configuration for pymiair."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pymiair._constants import DEFAULT_REQUEST_TIMEOUT, DEFAULT_RFRATE
from pymiair.exceptions import MiAirConfigError


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise MiAirConfigError(f"{env_key} must be a number, got {value!r}") from exc


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise MiAirConfigError(f"{env_key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class DevicePreferences:
    """User-editable device preferences.

    Parameters
    ----------
    pcaddr : str
        Network address of the PC agent, e.g. ``"192.168.1.20:5001"``
        or ``"http://192.168.1.20:5001"``.
    rfrate : int
        Poll interval in seconds.
    """

    pcaddr: str = ""
    rfrate: int = DEFAULT_RFRATE

    def __post_init__(self) -> None:
        if self.rfrate <= 0:
            raise MiAirConfigError(f"rfrate must be a positive number of seconds, got {self.rfrate}")


@dataclasses.dataclass(frozen=True)
class MiAirConfig:
    """Driver configuration.

    Parameters
    ----------
    preferences : DevicePreferences
        Initial preferences for the device created on discovery.
    request_timeout : float
        Total timeout in seconds for one HTTP request to the PC agent.
    log_level : str
        Log level used by the runner script.
    """

    preferences: DevicePreferences = dataclasses.field(default_factory=DevicePreferences)
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, **overrides: Any) -> MiAirConfig:
        """Create configuration from environment variables.

        Reads ``MIAIR_PCADDR``, ``MIAIR_RFRATE``, ``MIAIR_REQUEST_TIMEOUT``
        and ``MIAIR_LOG_LEVEL``.  Explicit keyword arguments override
        environment values; ``pcaddr`` and ``rfrate`` may be passed
        directly or via a ``preferences`` dict/instance.
        """
        env = os.environ

        pref_kwargs: dict[str, Any] = {}
        pcaddr_env = env.get("MIAIR_PCADDR")
        if pcaddr_env is not None:
            pref_kwargs["pcaddr"] = pcaddr_env.strip()
        rfrate_env = env.get("MIAIR_RFRATE")
        if rfrate_env is not None:
            pref_kwargs["rfrate"] = _env_int("MIAIR_RFRATE", rfrate_env)

        pref_overrides = overrides.pop("preferences", None)
        if isinstance(pref_overrides, dict):
            pref_kwargs.update(pref_overrides)
        elif isinstance(pref_overrides, DevicePreferences):
            pref_kwargs = dataclasses.asdict(pref_overrides)
        for field_name in ("pcaddr", "rfrate"):
            if field_name in overrides:
                pref_kwargs[field_name] = overrides.pop(field_name)

        config_kwargs: dict[str, Any] = {"preferences": DevicePreferences(**pref_kwargs)}

        timeout_env = env.get("MIAIR_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_float("MIAIR_REQUEST_TIMEOUT", timeout_env)

        level_env = env.get("MIAIR_LOG_LEVEL")
        if level_env is not None and "log_level" not in overrides:
            config_kwargs["log_level"] = level_env.strip().upper()

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
