"""Shared helpers for endpoint modules.

This module centralizes the most repeated patterns:
- warning when a success status differs from the documented one
- validating a JSON body into a model
- turning a captured transport error into a logged error envelope

It is internal to launchcore and may change at any time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from launchcore._redact import redact_for_log
from launchcore._transport import HttpResult
from launchcore.exceptions import (
    LauncherTransportError,
    MalformedResponseError,
    ProtocolError,
    TransportTimeoutError,
    TransportUnreachableError,
)
from launchcore.models.response import ClassifiedError, RestResponse

_logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


def expect_specific_success(operation: str, expected: int, actual: int) -> None:
    """Warn when a 2xx status is not the documented one.

    An unexpected code may indicate an API change; the response is still
    treated as a success.
    """
    if actual != expected:
        _logger.warning("%s expected %d response, received %d.", operation, expected, actual)


def parse_model(model: type[M], result: HttpResult, *, endpoint: str) -> M:
    """Validate a 2xx body into *model*, raising :class:`MalformedResponseError`."""
    try:
        return model.model_validate(result.body)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Unexpected body from {endpoint}: {exc.error_count()} validation error(s)",
            status_code=result.status,
            endpoint=endpoint,
        ) from exc


def handle_request_error(
    operation: str,
    error: LauncherTransportError,
    logger: logging.Logger,
    data_provider: Callable[[], T],
    classify: Callable[[LauncherTransportError], ClassifiedError[Any]] | None = None,
) -> RestResponse[T]:
    """Log *error* and wrap it in an error envelope.

    Parameters
    ----------
    operation : str
        Operation name, for logging.
    error : LauncherTransportError
        The captured failure.
    logger : logging.Logger
        Logger of the calling module.
    data_provider : callable
        Supplies ``data`` for the envelope.
    classify : callable or None
        Provider classifier; its result is attached as ``classified``.
    """
    if isinstance(error, ProtocolError):
        logger.error("Error during %s request (HTTP Response %s)", operation, error.status_code)
        logger.debug("Response Details: URL=%s body=%s", error.endpoint, redact_for_log(error.body))
    elif isinstance(error, (TransportUnreachableError, TransportTimeoutError)):
        logger.error("%s request received no response (%s).", operation, error)
    elif isinstance(error, MalformedResponseError):
        logger.error("%s request received unexpected body (%s).", operation, error)
    else:
        logger.error("Error during %s request: %s", operation, error)

    classified = classify(error) if classify is not None else None
    return RestResponse.failure(error, data_provider, classified)
