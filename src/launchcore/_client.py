"""Shared HTTP session lifecycle for the public clients."""

from __future__ import annotations

from typing import Any, Self

import aiohttp

from launchcore._transport import HttpTransport, Transport
from launchcore.exceptions import LauncherError


class HttpClientBase:
    """Own (or borrow) an :class:`aiohttp.ClientSession` for a client.

    Usage::

        async with YggdrasilClient() as client:
            ...

    A caller-supplied ``session`` is never closed by the client. A
    caller-supplied ``transport`` (for example a test double) is used as is
    and makes the context manager optional.
    """

    def __init__(
        self,
        *,
        transport: Transport | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._external_session = session is not None
        self._http_session = session

    async def __aenter__(self) -> Self:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._external_transport:
            return
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise LauncherError(f"Client not initialized. Use 'async with {type(self).__name__}(...) as client:'")
        return self._transport
