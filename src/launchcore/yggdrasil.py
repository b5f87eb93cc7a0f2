"""Async client for the legacy token authentication server."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from launchcore._api import yggdrasil as _api
from launchcore._api._common import handle_request_error
from launchcore._classify import classify_yggdrasil_error
from launchcore._client import HttpClientBase
from launchcore._constants import AUTH_ENDPOINT, REQUEST_TIMEOUT, STATUS_ENDPOINT, STATUS_TIMEOUT
from launchcore._transport import Transport
from launchcore.config import LauncherConfig
from launchcore.device import device_info_header
from launchcore.exceptions import LauncherTransportError
from launchcore.models.response import RestResponse
from launchcore.models.session import DEFAULT_AGENT, Agent, AuthPayload, Session
from launchcore.models.status import ServiceStatus, StatusColor, default_statuses

_logger = logging.getLogger(__name__)


class YggdrasilClient(HttpClientBase):
    """Authenticate, validate, invalidate and refresh legacy sessions.

    No method raises for network or server failures: each returns a
    :class:`~launchcore.models.RestResponse` whose ``classified`` field
    carries a :class:`~launchcore.models.YggdrasilErrorCode` on error.

    Usage::

        async with YggdrasilClient() as client:
            res = await client.authenticate("user", "pass", client_token)
            if res.ok:
                session = res.data
    """

    def __init__(
        self,
        *,
        auth_endpoint: str = AUTH_ENDPOINT,
        status_endpoint: str = STATUS_ENDPOINT,
        request_timeout: float | None = REQUEST_TIMEOUT,
        status_timeout: float = STATUS_TIMEOUT,
        transport: Transport | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__(transport=transport, session=session)
        self._auth_endpoint = auth_endpoint
        self._status_endpoint = status_endpoint
        self._request_timeout = request_timeout
        self._status_timeout = status_timeout
        self._statuses: list[ServiceStatus] = default_statuses()

    @classmethod
    def from_config(cls, config: LauncherConfig, **kwargs: Any) -> YggdrasilClient:
        return cls(
            auth_endpoint=config.auth_endpoint,
            status_endpoint=config.status_endpoint,
            request_timeout=config.request_timeout,
            status_timeout=config.status_timeout,
            **kwargs,
        )

    @property
    def statuses(self) -> list[ServiceStatus]:
        """Current service table, as last updated by :meth:`status`."""
        return self._statuses

    def _handle_error(self, operation: str, error: LauncherTransportError, data_provider: Any) -> RestResponse[Any]:
        return handle_request_error(operation, error, _logger, data_provider, classify_yggdrasil_error)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    async def status(self) -> RestResponse[list[ServiceStatus]]:
        """Refresh the service table from the upstream status summary.

        On failure every service is reset to ``GREY`` (unknown) and the
        table is still returned as ``data``.
        """
        transport = self._require_transport()
        try:
            summary = await _api.fetch_status_summary(
                transport,
                self._status_endpoint,
                timeout=self._status_timeout,
            )
        except LauncherTransportError as exc:

            def _all_grey() -> list[ServiceStatus]:
                for service in self._statuses:
                    service.status = StatusColor.GREY
                return self._statuses

            return self._handle_error("Status", exc, _all_grey)

        _api.apply_status_summary(self._statuses, summary)
        return RestResponse.success(self._statuses)

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def authenticate(
        self,
        username: str,
        password: str,
        client_token: str | None = None,
        request_user: bool = True,
        agent: Agent = DEFAULT_AGENT,
    ) -> RestResponse[Session | None]:
        """Authenticate a user with their credentials.

        Parameters
        ----------
        username : str
            Account name, often an email address.
        password : str
            Account password.
        client_token : str or None
            The launcher's client token. Omitted from the request when ``None``
            so the server generates one.
        request_user : bool
            Ask for the ``user`` object in the response.
        agent : Agent
            Agent identification sent with the request.
        """
        transport = self._require_transport()
        payload = AuthPayload(
            agent=agent,
            username=username,
            password=password,
            client_token=client_token,
            request_user=request_user,
        )
        try:
            session = await _api.post_authenticate(
                transport,
                self._auth_endpoint,
                payload,
                device_info=device_info_header(),
                timeout=self._request_timeout,
            )
        except LauncherTransportError as exc:
            return self._handle_error("Authenticate", exc, lambda: None)
        return RestResponse.success(session)

    async def validate(self, access_token: str, client_token: str) -> RestResponse[bool]:
        """Check that *access_token* is still usable.

        ``data`` is ``False`` (with a SUCCESS status) when the server
        rejects the token; it is also ``False`` on error envelopes.
        """
        transport = self._require_transport()
        try:
            valid = await _api.post_validate(
                transport,
                self._auth_endpoint,
                access_token,
                client_token,
                timeout=self._request_timeout,
            )
        except LauncherTransportError as exc:
            return self._handle_error("Validate", exc, lambda: False)
        return RestResponse.success(valid)

    async def invalidate(self, access_token: str, client_token: str) -> RestResponse[None]:
        transport = self._require_transport()
        try:
            await _api.post_invalidate(
                transport,
                self._auth_endpoint,
                access_token,
                client_token,
                timeout=self._request_timeout,
            )
        except LauncherTransportError as exc:
            return self._handle_error("Invalidate", exc, lambda: None)
        return RestResponse.success(None)

    async def refresh(
        self,
        access_token: str,
        client_token: str,
        request_user: bool = True,
    ) -> RestResponse[Session | None]:
        """Exchange a recent access token for a new one."""
        transport = self._require_transport()
        try:
            session = await _api.post_refresh(
                transport,
                self._auth_endpoint,
                access_token,
                client_token,
                request_user=request_user,
                timeout=self._request_timeout,
            )
        except LauncherTransportError as exc:
            return self._handle_error("Refresh", exc, lambda: None)
        return RestResponse.success(session)
