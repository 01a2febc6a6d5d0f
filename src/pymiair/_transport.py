"""Plain-text HTTP transport to the PC agent."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import aiohttp

from pymiair._constants import USER_AGENT
from pymiair.exceptions import MiAirTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the synchronizer and dispatcher.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def issue_request(self, method: str, address: str, path: str, body: str | None = None) -> str:
        ...


def build_url(address: str, path: str) -> str:
    """Join a PC address preference and a request path.

    ``address`` may omit the scheme (``"192.168.1.20:5001"``), in which
    case ``http://`` is assumed.
    """
    base = address.strip().rstrip("/")
    if not base:
        raise MiAirTransportError("PC address is not configured", path=path)
    if "://" not in base:
        base = f"http://{base}"
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base}{path}"


class HttpTransport:
    """HTTP transport that exchanges plain-text bodies with the PC agent."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float | None = None) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None

    async def issue_request(self, method: str, address: str, path: str, body: str | None = None) -> str:
        """Send one request and return the response text.

        Raises :class:`MiAirTransportError` on network failure, timeout
        or a non-200 status.
        """
        url = build_url(address, path)
        headers: dict[str, str] = {"user-agent": USER_AGENT}
        if body is not None:
            headers["content-type"] = "text/plain; charset=utf-8"

        _logger.debug("%s %s body=%r", method, url, body)

        kwargs: dict[str, Any] = {"headers": headers}
        if body is not None:
            kwargs["data"] = body.encode("utf-8")
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        try:
            async with self._http.request(method, url, **kwargs) as resp:
                text = await resp.text(errors="replace")
                if resp.status != 200:
                    raise MiAirTransportError(
                        f"HTTP {resp.status} from {path}: {text[:200]}",
                        status_code=resp.status,
                        path=path,
                    )
        except MiAirTransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise MiAirTransportError(f"Request to {url} timed out", path=path) from exc
        except aiohttp.ClientError as exc:
            raise MiAirTransportError(f"Request to {url} failed: {exc}", path=path) from exc

        return text
