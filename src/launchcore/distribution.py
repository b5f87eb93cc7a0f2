"""Distribution manifest acquisition with local fallback.

The manifest is fetched from the remote server and mirrored to
``distribution.json``. When the server cannot be reached the mirrored copy
is used instead. In dev mode the network is never touched and the
operator-provided ``distribution_dev.json`` is read.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import aiohttp

from launchcore._api.distribution import fetch_distribution
from launchcore._api._common import handle_request_error
from launchcore._client import HttpClientBase
from launchcore._constants import DISTRO_FILE, DISTRO_FILE_DEV, REQUEST_TIMEOUT
from launchcore._store import StrPath, async_read_json_file, async_write_json_file
from launchcore._transport import Transport
from launchcore.config import LauncherConfig
from launchcore.device import resolve_device_id
from launchcore.exceptions import DistributionUnavailableError, LauncherTransportError
from launchcore.models.response import RestResponse

_logger = logging.getLogger(__name__)

Distribution = dict[str, Any]


class DistributionAPI(HttpClientBase):
    """Load and cache the distribution manifest.

    One instance owns one cached document. Construct it once at startup and
    share it; separate instances (e.g. in tests) never share state.

    Usage::

        async with DistributionAPI(launcher_dir, url) as api:
            distro = await api.get_distribution()
    """

    def __init__(
        self,
        launcher_directory: StrPath,
        remote_url: str,
        *,
        dev_mode: bool = False,
        auth_headers: dict[str, str] | None = None,
        request_timeout: float | None = REQUEST_TIMEOUT,
        device_id: str | None = None,
        transport: Transport | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__(transport=transport, session=session)
        directory = Path(launcher_directory).resolve()
        self._distro_path = directory / DISTRO_FILE
        self._distro_dev_path = directory / DISTRO_FILE_DEV
        self._remote_url = remote_url
        self._dev_mode = dev_mode
        self._auth_headers = dict(auth_headers or {})
        self._request_timeout = request_timeout
        self._device_id = device_id if device_id is not None else resolve_device_id()
        self._distribution: Distribution | None = None
        self._load_lock = asyncio.Lock()

    @classmethod
    def from_config(cls, config: LauncherConfig, **kwargs: Any) -> DistributionAPI:
        return cls(
            config.launcher_directory,
            config.distribution_url,
            dev_mode=config.dev_mode,
            auth_headers=config.auth_headers,
            request_timeout=config.request_timeout,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def distribution_path(self) -> Path:
        return self._distro_path

    @property
    def distribution_dev_path(self) -> Path:
        return self._distro_dev_path

    @property
    def device_id(self) -> str:
        return self._device_id

    def get_auth_headers(self) -> dict[str, str]:
        return dict(self._auth_headers)

    def toggle_dev_mode(self, dev: bool) -> None:
        """Switch modes. Does not reload; only future acquisitions are affected."""
        self._dev_mode = dev

    def is_dev_mode(self) -> bool:
        return self._dev_mode

    # ------------------------------------------------------------------
    # Public loading operations
    # ------------------------------------------------------------------

    async def get_distribution(self) -> Distribution:
        """Return the cached manifest, acquiring it on first use.

        Concurrent first calls share a single acquisition.

        Raises
        ------
        DistributionUnavailableError
            If neither the remote server nor the local file yields a manifest.
        """
        if self._distribution is not None:
            return self._distribution
        async with self._load_lock:
            if self._distribution is None:
                distro = await self._load_distribution_nullable()
                if distro is None:
                    raise DistributionUnavailableError(
                        "Unable to load distribution from remote server or local disk."
                    )
                self._distribution = distro
        return self._distribution

    async def get_distribution_local_only(self) -> Distribution:
        """Like :meth:`get_distribution` but never contacts the remote server.

        Raises
        ------
        DistributionUnavailableError
            If no manifest exists on local disk.
        """
        if self._distribution is not None:
            return self._distribution
        distro = await self._pull_local()
        if distro is None:
            raise DistributionUnavailableError("Unable to load distribution from local disk.")
        self._distribution = distro
        return distro

    async def refresh_distribution_or_fallback(self) -> Distribution | None:
        """Re-acquire the manifest, keeping the previous one on failure.

        Returns the fresh manifest, or the previously cached one (``None``
        if there never was one) when acquisition fails.
        """
        try:
            distro = await self._load_distribution_nullable()
        except OSError:
            _logger.error("Reading the local distribution failed during refresh", exc_info=True)
            distro = None

        if distro is None:
            _logger.warning("Failed to refresh distribution, falling back to current load (if exists).")
            return self._distribution

        self._distribution = distro
        return distro

    # ------------------------------------------------------------------
    # Acquisition
    # ------------------------------------------------------------------

    async def pull_remote(self) -> RestResponse[Distribution | None]:
        """Fetch the manifest from the remote server."""
        transport = self._require_transport()
        headers = {**self._auth_headers, "device": self._device_id}
        try:
            distro = await fetch_distribution(
                transport,
                self._remote_url,
                headers=headers,
                timeout=self._request_timeout,
            )
        except LauncherTransportError as exc:
            return handle_request_error("Pull Remote", exc, _logger, lambda: None)
        return RestResponse.success(distro)

    async def _load_distribution_nullable(self) -> Distribution | None:
        if self._dev_mode:
            return await self._pull_local()

        distro = (await self.pull_remote()).data
        if distro is None:
            return await self._pull_local()

        await self._write_distribution_to_disk(distro)
        return distro

    async def _write_distribution_to_disk(self, distro: Distribution) -> None:
        try:
            await async_write_json_file(self._distro_path, distro)
        except OSError:
            # The in-memory copy is still good; only the offline fallback is stale.
            _logger.error("Failed to write distribution to %s", self._distro_path, exc_info=True)

    async def _pull_local(self) -> Distribution | None:
        path = self._distro_dev_path if self._dev_mode else self._distro_path
        distro = await async_read_json_file(path)
        if distro is not None and not isinstance(distro, dict):
            _logger.error("Distribution file at %s is not a JSON object", path)
            return None
        return distro
