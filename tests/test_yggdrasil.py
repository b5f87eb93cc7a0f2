from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from launchcore._transport import HttpResult
from launchcore.exceptions import ProtocolError, TransportTimeoutError, TransportUnreachableError
from launchcore.models import (
    ResponseStatus,
    StatusColor,
    YggdrasilErrorCode,
    default_statuses,
    status_to_hex,
)
from launchcore.yggdrasil import YggdrasilClient

AUTH = "https://auth.test/"
STATUS = "https://status.test/summary.json"

Handler = Callable[[Mapping[str, Any] | None, Mapping[str, str]], HttpResult]


@dataclass
class FakeAuthServer:
    """Routes requests to per-URL handlers, mimicking ``HttpTransport``."""

    handlers: dict[str, Handler] = field(default_factory=dict)
    calls: dict[str, int] = field(default_factory=dict)
    requests: list[tuple[str, str, Any, dict[str, str]]] = field(default_factory=list)

    def reply(self, url: str, status: int, body: Any = None) -> None:
        def _handler(_json: Mapping[str, Any] | None, _headers: Mapping[str, str]) -> HttpResult:
            return _respond(url, status, body)

        self.handlers[url] = _handler

    async def request(
        self,
        method: str,
        url: str,
        *,
        json_body: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResult:
        self.calls[url] = self.calls.get(url, 0) + 1
        self.requests.append((method, url, json_body, dict(headers or {})))
        handler = self.handlers.get(url)
        if handler is None:
            raise AssertionError(f"Unexpected URL in fake server: {url}")
        return handler(json_body, headers or {})


def _respond(url: str, status: int, body: Any = None) -> HttpResult:
    if not 200 <= status < 300:
        raise ProtocolError(f"HTTP {status} from {url}", status_code=status, endpoint=url, body=body)
    return HttpResult(status=status, body=body)


def _session_body(client_token: str, *, with_user: bool) -> dict[str, Any]:
    body: dict[str, Any] = {
        "accessToken": "abc",
        "clientToken": client_token,
        "selectedProfile": {"id": "def", "name": "username"},
    }
    if with_user:
        body["user"] = {"id": "def", "properties": []}
    return body


@pytest.fixture
def server() -> FakeAuthServer:
    return FakeAuthServer()


@pytest.fixture
def client(server: FakeAuthServer) -> YggdrasilClient:
    return YggdrasilClient(auth_endpoint=AUTH, status_endpoint=STATUS, transport=server)


# ----------------------------------------------------------------------
# authenticate
# ----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_authenticate_returns_session(server: FakeAuthServer, client: YggdrasilClient) -> None:
    def handler(body: Mapping[str, Any] | None, _headers: Mapping[str, str]) -> HttpResult:
        assert body is not None
        return HttpResult(status=200, body=_session_body(body["clientToken"], with_user=body["requestUser"]))

    server.handlers[f"{AUTH}authenticate"] = handler

    res = await client.authenticate("user", "pass", "xxx", True)

    assert res.response_status is ResponseStatus.SUCCESS
    assert res.data is not None
    assert res.data.client_token == "xxx"
    assert res.data.user is not None
    assert res.data.selected_profile.name == "username"


@pytest.mark.asyncio
async def test_authenticate_request_shape(server: FakeAuthServer, client: YggdrasilClient) -> None:
    server.reply(f"{AUTH}authenticate", 200, _session_body("generated", with_user=False))

    await client.authenticate("user", "pass")

    method, _url, body, headers = server.requests[0]
    assert method == "POST"
    assert body == {
        "agent": {"name": "VI Software Launcher Core", "version": 1},
        "username": "user",
        "password": "pass",
        "requestUser": True,
    }
    device_info = json.loads(headers["Device-Info"])
    assert set(device_info) == {"name", "platform", "type", "release", "cpu", "ram", "uuid", "arch"}


@pytest.mark.asyncio
async def test_authenticate_invalid_credentials(server: FakeAuthServer, client: YggdrasilClient) -> None:
    server.reply(
        f"{AUTH}authenticate",
        403,
        {"error": "ForbiddenOperationException", "errorMessage": "Invalid credentials. Invalid username or password."},
    )

    res = await client.authenticate("user", "pass", "xxx", True)

    assert res.response_status is ResponseStatus.ERROR
    assert res.data is None
    assert res.error is not None
    assert res.classified is not None
    assert res.classified.code is YggdrasilErrorCode.ERROR_INVALID_CREDENTIALS
    assert res.classified.is_internal_error is False


@pytest.mark.asyncio
async def test_authenticate_unreachable(server: FakeAuthServer, client: YggdrasilClient) -> None:
    def handler(_body: Any, _headers: Any) -> HttpResult:
        raise TransportUnreachableError("getaddrinfo failed", endpoint=f"{AUTH}authenticate")

    server.handlers[f"{AUTH}authenticate"] = handler

    res = await client.authenticate("user", "pass")

    assert res.ok is False
    assert res.classified is not None
    assert res.classified.code is YggdrasilErrorCode.ERROR_UNREACHABLE


@pytest.mark.asyncio
async def test_authenticate_malformed_session_body(server: FakeAuthServer, client: YggdrasilClient) -> None:
    server.reply(f"{AUTH}authenticate", 200, {"unexpected": True})

    res = await client.authenticate("user", "pass")

    assert res.ok is False
    assert res.data is None
    assert res.classified is not None
    assert res.classified.code is YggdrasilErrorCode.UNKNOWN


@pytest.mark.asyncio
async def test_unexpected_success_code_warns_but_succeeds(
    server: FakeAuthServer,
    client: YggdrasilClient,
    caplog: pytest.LogCaptureFixture,
) -> None:
    server.reply(f"{AUTH}authenticate", 201, _session_body("xxx", with_user=False))

    with caplog.at_level(logging.WARNING, logger="launchcore._api._common"):
        res = await client.authenticate("user", "pass", "xxx")

    assert res.ok is True
    assert "Authenticate expected 200 response, received 201." in caplog.text


# ----------------------------------------------------------------------
# validate / invalidate / refresh
# ----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_validate_true_and_false(server: FakeAuthServer, client: YggdrasilClient) -> None:
    def handler(body: Mapping[str, Any] | None, _headers: Mapping[str, str]) -> HttpResult:
        assert body is not None
        status = 204 if body["accessToken"] == "abc" else 403
        return _respond(f"{AUTH}validate", status)

    server.handlers[f"{AUTH}validate"] = handler

    res = await client.validate("abc", "def")
    assert res.response_status is ResponseStatus.SUCCESS
    assert res.data is True

    res2 = await client.validate("def", "def")
    assert res2.response_status is ResponseStatus.SUCCESS
    assert res2.data is False
    assert res2.error is None

    assert server.calls[f"{AUTH}validate"] == 2


@pytest.mark.asyncio
async def test_validate_server_error_is_an_error(server: FakeAuthServer, client: YggdrasilClient) -> None:
    server.reply(f"{AUTH}validate", 500, "Internal Server Error")

    res = await client.validate("abc", "def")

    assert res.ok is False
    assert res.data is False
    assert res.classified is not None
    assert res.classified.code is YggdrasilErrorCode.UNKNOWN


@pytest.mark.asyncio
async def test_invalidate(server: FakeAuthServer, client: YggdrasilClient) -> None:
    server.reply(f"{AUTH}invalidate", 204)

    res = await client.invalidate("adc", "def")

    assert res.ok is True
    assert res.data is None
    assert server.requests[0][2] == {"accessToken": "adc", "clientToken": "def"}


@pytest.mark.asyncio
async def test_invalidate_invalid_token(server: FakeAuthServer, client: YggdrasilClient) -> None:
    server.reply(f"{AUTH}invalidate", 403, {"error": "ForbiddenOperationException", "errorMessage": "Invalid token."})

    res = await client.invalidate("adc", "def")

    assert res.ok is False
    assert res.classified is not None
    assert res.classified.code is YggdrasilErrorCode.ERROR_INVALID_TOKEN


@pytest.mark.asyncio
async def test_refresh(server: FakeAuthServer, client: YggdrasilClient) -> None:
    def handler(body: Mapping[str, Any] | None, _headers: Mapping[str, str]) -> HttpResult:
        assert body is not None
        assert body["accessToken"] == "gfd"
        return HttpResult(status=200, body=_session_body(body["clientToken"], with_user=body["requestUser"]))

    server.handlers[f"{AUTH}refresh"] = handler

    res = await client.refresh("gfd", "xxx", True)

    assert res.ok is True
    assert res.data is not None
    assert res.data.client_token == "xxx"
    assert res.data.user is not None


# ----------------------------------------------------------------------
# status
# ----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_status_marks_known_slugs(server: FakeAuthServer, client: YggdrasilClient) -> None:
    server.reply(
        STATUS,
        200,
        [
            {"name": "VI Software API", "slug": "vi-software-api", "status": "up", "uptime": "99.9%"},
            {"slug": "vi-software-cdn", "status": "down"},
            {"slug": "not-a-monitored-service", "status": "down"},
        ],
    )

    res = await client.status()

    assert res.ok is True
    by_slug = {s.service: s.status for s in res.data}
    assert by_slug["vi-software-api"] is StatusColor.GREEN
    assert by_slug["vi-software-cdn"] is StatusColor.RED
    assert status_to_hex(by_slug["vi-software-cdn"]) == "#c32625"
    # Services absent from the summary keep their default colour.
    assert by_slug["vi-software-docs"] is StatusColor.GREY
    assert len(res.data) == len(default_statuses())


@pytest.mark.asyncio
async def test_status_failure_resets_everything_to_grey(server: FakeAuthServer, client: YggdrasilClient) -> None:
    server.reply(STATUS, 200, [{"slug": "vi-software-api", "status": "up"}])
    await client.status()
    assert client.statuses[0].status is StatusColor.GREEN

    def handler(_body: Any, _headers: Any) -> HttpResult:
        raise TransportTimeoutError("timed out", endpoint=STATUS)

    server.handlers[STATUS] = handler

    res = await client.status()

    assert res.response_status is ResponseStatus.ERROR
    assert all(s.status is StatusColor.GREY for s in res.data)
    assert res.data == default_statuses()


@pytest.mark.asyncio
async def test_status_offline_server(server: FakeAuthServer, client: YggdrasilClient) -> None:
    server.reply(STATUS, 500, "Service temporarily offline.")

    res = await client.status()

    assert res.ok is False
    assert res.data == default_statuses()


@pytest.mark.asyncio
async def test_status_tables_are_per_instance(server: FakeAuthServer) -> None:
    server.reply(STATUS, 200, [{"slug": "vi-software-api", "status": "down"}])
    first = YggdrasilClient(status_endpoint=STATUS, transport=server)
    second = YggdrasilClient(status_endpoint=STATUS, transport=server)

    await first.status()

    assert first.statuses[0].status is StatusColor.RED
    assert second.statuses[0].status is StatusColor.GREY


def test_status_to_hex() -> None:
    assert status_to_hex("green") == "#a5c325"
    assert status_to_hex("YELLOW") == "#eac918"
    assert status_to_hex("red") == "#c32625"
    assert status_to_hex("grey") == "#848484"
    assert status_to_hex("purple") == "#848484"
