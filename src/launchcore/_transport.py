"""HTTP transport turning aiohttp outcomes into launchcore results or errors."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from launchcore._constants import USER_AGENT
from launchcore.exceptions import (
    LauncherTransportError,
    MalformedResponseError,
    ProtocolError,
    TransportTimeoutError,
    TransportUnreachableError,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HttpResult:
    """A 2xx response. ``body`` is the decoded JSON, or ``None`` when empty."""

    status: int
    body: Any


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Implementations return an :class:`HttpResult` for any 2xx answer and
    raise a :class:`~launchcore.exceptions.LauncherTransportError` subclass
    for everything else.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        json_body: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResult:
        ...


def _decode_body(raw: bytes) -> Any:
    text = raw.decode("utf-8")
    if not text.strip():
        return None
    return json.loads(text)


class HttpTransport:
    """JSON-over-HTTP transport backed by an :class:`aiohttp.ClientSession`."""

    def __init__(self, http_session: aiohttp.ClientSession) -> None:
        self._http = http_session

    async def request(
        self,
        method: str,
        url: str,
        *,
        json_body: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResult:
        request_headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if headers:
            request_headers.update(headers)

        extra: dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = aiohttp.ClientTimeout(total=timeout)

        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(
                method,
                url,
                json=json_body,
                headers=request_headers,
                **extra,
            ) as resp:
                status = resp.status
                raw = await resp.read()
        except (aiohttp.ClientConnectorCertificateError, aiohttp.ClientConnectorSSLError) as exc:
            # TLS failures reached the host; they are not reachability problems.
            raise LauncherTransportError(
                f"{method} {url} TLS handshake failed: {exc}",
                endpoint=url,
            ) from exc
        except aiohttp.ClientConnectorError as exc:
            raise TransportUnreachableError(
                f"{method} {url} could not connect: {exc}",
                endpoint=url,
            ) from exc
        except TimeoutError as exc:
            raise TransportTimeoutError(
                f"{method} {url} timed out after {timeout}s",
                endpoint=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise LauncherTransportError(
                f"{method} {url} failed: {exc}",
                endpoint=url,
            ) from exc

        ok = 200 <= status < 300
        text = raw.decode("utf-8", errors="replace")
        try:
            body = _decode_body(raw)
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            if ok:
                raise MalformedResponseError(
                    f"Invalid JSON from {url}: {text[:200]}",
                    status_code=status,
                    endpoint=url,
                ) from exc
            body = text

        if not ok:
            raise ProtocolError(
                f"HTTP {status} from {url}: {text[:200]}",
                status_code=status,
                endpoint=url,
                body=body,
            )

        return HttpResult(status=status, body=body)
