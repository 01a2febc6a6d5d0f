"""Custom exception hierarchy for pymiair."""

from __future__ import annotations


class MiAirError(Exception):
    """Base exception for all pymiair errors."""


class MiAirConfigError(MiAirError):
    """Invalid or missing configuration."""


class MiAirTransportError(MiAirError):
    """HTTP-level failure (network, timeout, non-200)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        path: str = "",
    ) -> None:
        self.status_code = status_code
        self.path = path
        super().__init__(message)


class MiAirDecodeError(MiAirError):
    """The PC agent returned a status line that could not be decoded.

    Covers short or overlong lines, non-numeric sensor tokens and
    unknown power/fan mode tokens.  ``raw`` holds the offending text.
    """

    def __init__(self, message: str, *, raw: str = "") -> None:
        self.raw = raw
        super().__init__(message)


class MiAirCommandError(MiAirError):
    """A capability command could not be dispatched (unknown or invalid)."""

    def __init__(self, message: str, *, capability: str = "", command: str = "") -> None:
        self.capability = capability
        self.command = command
        super().__init__(message)
