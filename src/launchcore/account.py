"""Async client for the account-linking login service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from launchcore._api._common import handle_request_error
from launchcore._api.account import post_login
from launchcore._classify import classify_account_error
from launchcore._client import HttpClientBase
from launchcore._constants import ACCOUNT_LOGIN_URL, REQUEST_TIMEOUT
from launchcore._transport import Transport
from launchcore.config import LauncherConfig
from launchcore.device import collect_device_info
from launchcore.exceptions import LauncherTransportError
from launchcore.models.account import AccountAuthPayload, DeviceInfo, LinkedAccount
from launchcore.models.response import RestResponse

_logger = logging.getLogger(__name__)


class AccountClient(HttpClientBase):
    """Log in to the account-linking service.

    Error envelopes carry a :class:`~launchcore.models.AccountErrorCode`
    in ``classified``.
    """

    def __init__(
        self,
        *,
        login_url: str = ACCOUNT_LOGIN_URL,
        request_timeout: float | None = REQUEST_TIMEOUT,
        device_info_provider: Callable[[], DeviceInfo] = collect_device_info,
        transport: Transport | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__(transport=transport, session=session)
        self._login_url = login_url
        self._request_timeout = request_timeout
        self._device_info_provider = device_info_provider

    @classmethod
    def from_config(cls, config: LauncherConfig, **kwargs: Any) -> AccountClient:
        return cls(
            login_url=config.account_login_url,
            request_timeout=config.request_timeout,
            **kwargs,
        )

    def _collect_device_info(self) -> DeviceInfo:
        try:
            return self._device_info_provider()
        except (OSError, RuntimeError, ValueError) as exc:
            raise LauncherTransportError(
                f"Could not collect device telemetry: {exc}",
                endpoint=self._login_url,
            ) from exc

    async def authenticate(self, username: str, password: str) -> RestResponse[LinkedAccount | None]:
        """Log in and return the normalized account.

        Device telemetry is collected afresh for every call; a failure to
        collect it is reported as an error envelope like any transport error.
        """
        transport = self._require_transport()
        try:
            payload = AccountAuthPayload(
                username=username,
                password=password,
                device=self._collect_device_info(),
            )
            account = await post_login(
                transport,
                self._login_url,
                payload,
                timeout=self._request_timeout,
            )
        except LauncherTransportError as exc:
            return handle_request_error("Account Authenticate", exc, _logger, lambda: None, classify_account_error)
        return RestResponse.success(account)
