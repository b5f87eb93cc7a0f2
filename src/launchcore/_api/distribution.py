"""Remote distribution manifest endpoint."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from launchcore._api._common import expect_specific_success
from launchcore._transport import Transport
from launchcore.exceptions import MalformedResponseError

_logger = logging.getLogger(__name__)


async def fetch_distribution(
    transport: Transport,
    url: str,
    *,
    headers: Mapping[str, str],
    timeout: float | None = None,
) -> dict[str, Any]:
    """GET the manifest and return its JSON object unchanged."""
    result = await transport.request("GET", url, headers=headers, timeout=timeout)
    expect_specific_success("Pull Remote", 200, result.status)
    if not isinstance(result.body, dict):
        raise MalformedResponseError(
            f"Distribution from {url} is not a JSON object",
            status_code=result.status,
            endpoint=url,
        )
    _logger.debug("Pulled distribution from %s (%d top-level keys)", url, len(result.body))
    return result.body
