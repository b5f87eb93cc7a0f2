"""Custom exception hierarchy for launchcore."""

from __future__ import annotations

from typing import Any


class LauncherError(Exception):
    """Base exception for all launchcore errors."""


class LauncherConfigError(LauncherError):
    """Invalid or missing configuration."""


class LauncherTransportError(LauncherError):
    """HTTP-level failure (network, unexpected status, invalid body).

    Instances of this class and its subclasses are captured into
    :attr:`launchcore.models.RestResponse.error` rather than raised to
    callers of the public clients.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class TransportUnreachableError(LauncherTransportError):
    """The host could not be resolved or the connection was refused."""


class TransportTimeoutError(LauncherTransportError):
    """The request did not complete within the configured timeout."""


class ProtocolError(LauncherTransportError):
    """The server answered with a status code other than the expected one.

    ``body`` holds the decoded JSON body when there was one, otherwise the
    raw text (or ``None`` for an empty body).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
        body: Any = None,
    ) -> None:
        self.body = body
        super().__init__(message, status_code=status_code, endpoint=endpoint)


class MalformedResponseError(LauncherTransportError):
    """A successful response (or a local file) did not contain the expected JSON."""


class DistributionUnavailableError(LauncherError):
    """No distribution could be loaded from the remote server or local disk."""
