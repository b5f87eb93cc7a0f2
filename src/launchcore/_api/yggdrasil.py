"""Legacy token authentication endpoints.

Endpoints (relative to the auth server base URL):
  - authenticate  (200, returns a session)
  - validate      (204; 403 means "token not valid")
  - invalidate    (204)
  - refresh       (200, returns a session)

Plus the service status summary (GET, 200).
"""

from __future__ import annotations

import logging

from pydantic import TypeAdapter, ValidationError

from launchcore._api._common import expect_specific_success, parse_model
from launchcore._redact import redact_for_log
from launchcore._transport import Transport
from launchcore.exceptions import MalformedResponseError, ProtocolError
from launchcore.models.session import AuthPayload, Session
from launchcore.models.status import ServiceStatus, StatusColor, UptimeSummary

_logger = logging.getLogger(__name__)

_SUMMARY_ADAPTER: TypeAdapter[list[UptimeSummary]] = TypeAdapter(list[UptimeSummary])


async def post_authenticate(
    transport: Transport,
    base_url: str,
    payload: AuthPayload,
    *,
    device_info: str,
    timeout: float | None = None,
) -> Session:
    endpoint = f"{base_url}authenticate"
    body = payload.to_wire()
    headers = {"Device-Info": device_info}
    _logger.debug("Authenticate request body=%s headers=%s", redact_for_log(body), redact_for_log(headers))
    result = await transport.request(
        "POST",
        endpoint,
        json_body=body,
        headers=headers,
        timeout=timeout,
    )
    expect_specific_success("Authenticate", 200, result.status)
    return parse_model(Session, result, endpoint=endpoint)


async def post_validate(
    transport: Transport,
    base_url: str,
    access_token: str,
    client_token: str,
    *,
    timeout: float | None = None,
) -> bool:
    """Return whether the access token is still valid.

    A 403 answer is the server's normal way of saying "no" and is not an
    error.
    """
    endpoint = f"{base_url}validate"
    try:
        result = await transport.request(
            "POST",
            endpoint,
            json_body={"accessToken": access_token, "clientToken": client_token},
            timeout=timeout,
        )
    except ProtocolError as exc:
        if exc.status_code == 403:
            return False
        raise
    expect_specific_success("Validate", 204, result.status)
    return result.status == 204


async def post_invalidate(
    transport: Transport,
    base_url: str,
    access_token: str,
    client_token: str,
    *,
    timeout: float | None = None,
) -> None:
    result = await transport.request(
        "POST",
        f"{base_url}invalidate",
        json_body={"accessToken": access_token, "clientToken": client_token},
        timeout=timeout,
    )
    expect_specific_success("Invalidate", 204, result.status)


async def post_refresh(
    transport: Transport,
    base_url: str,
    access_token: str,
    client_token: str,
    *,
    request_user: bool = True,
    timeout: float | None = None,
) -> Session:
    endpoint = f"{base_url}refresh"
    result = await transport.request(
        "POST",
        endpoint,
        json_body={
            "accessToken": access_token,
            "clientToken": client_token,
            "requestUser": request_user,
        },
        timeout=timeout,
    )
    expect_specific_success("Refresh", 200, result.status)
    return parse_model(Session, result, endpoint=endpoint)


async def fetch_status_summary(
    transport: Transport,
    url: str,
    *,
    timeout: float | None = None,
) -> list[UptimeSummary]:
    result = await transport.request("GET", url, timeout=timeout)
    expect_specific_success("Status", 200, result.status)
    try:
        return _SUMMARY_ADAPTER.validate_python(result.body)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Unexpected status summary from {url}",
            status_code=result.status,
            endpoint=url,
        ) from exc


def apply_status_summary(statuses: list[ServiceStatus], summary: list[UptimeSummary]) -> None:
    """Update *statuses* in place from the upstream summary.

    Slugs not in the table are ignored; services missing from the summary
    keep their current colour.
    """
    by_slug = {status.service: status for status in statuses}
    for entry in summary:
        target = by_slug.get(entry.slug)
        if target is None:
            continue
        target.status = StatusColor.GREEN if entry.status == "up" else StatusColor.RED
