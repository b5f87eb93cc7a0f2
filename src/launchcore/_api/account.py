"""Account-linking login endpoint."""

from __future__ import annotations

import logging

from launchcore._api._common import parse_model
from launchcore._redact import redact_for_log
from launchcore._transport import Transport
from launchcore.models.account import AccountAuthPayload, AccountAuthResponse, LinkedAccount

_logger = logging.getLogger(__name__)


async def post_login(
    transport: Transport,
    url: str,
    payload: AccountAuthPayload,
    *,
    timeout: float | None = None,
) -> LinkedAccount:
    """POST credentials plus device telemetry and normalize the account."""
    body = payload.to_wire()
    _logger.debug("Account login request body=%s", redact_for_log(body))
    result = await transport.request("POST", url, json_body=body, timeout=timeout)
    response = parse_model(AccountAuthResponse, result, endpoint=url)
    return LinkedAccount.from_auth_response(response)
