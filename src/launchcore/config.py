"""Client configuration for launchcore."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from launchcore._constants import (
    ACCOUNT_LOGIN_URL,
    AUTH_ENDPOINT,
    REQUEST_TIMEOUT,
    STATUS_ENDPOINT,
    STATUS_TIMEOUT,
)
from launchcore.exceptions import LauncherConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class LauncherConfig:
    """Launcher configuration.

    Parameters
    ----------
    launcher_directory : str
        Directory holding ``distribution.json`` and ``distribution_dev.json``.
    distribution_url : str
        Remote URL the distribution manifest is fetched from.
    dev_mode : bool
        Start in dev mode (read ``distribution_dev.json``, never hit the
        network for the manifest).
    auth_headers : dict
        Extra headers sent with the manifest request.
    auth_endpoint : str
        Base URL of the legacy token authentication server. Must end with
        a ``/``; operation names are appended to it.
    account_login_url : str
        Login URL of the account-linking service.
    status_endpoint : str
        URL of the service status summary.
    request_timeout : float
        Total timeout in seconds for manifest and auth requests.
    status_timeout : float
        Total timeout in seconds for the status check.
    """

    launcher_directory: str
    distribution_url: str
    dev_mode: bool = False
    auth_headers: dict[str, str] = dataclasses.field(default_factory=dict)
    auth_endpoint: str = AUTH_ENDPOINT
    account_login_url: str = ACCOUNT_LOGIN_URL
    status_endpoint: str = STATUS_ENDPOINT
    request_timeout: float = REQUEST_TIMEOUT
    status_timeout: float = STATUS_TIMEOUT

    def __post_init__(self) -> None:
        if not self.launcher_directory:
            raise LauncherConfigError("launcher_directory must not be empty")
        if not self.distribution_url:
            raise LauncherConfigError("distribution_url must not be empty")
        if not self.auth_endpoint.endswith("/"):
            raise LauncherConfigError(f"auth_endpoint must end with '/', got {self.auth_endpoint!r}")
        if self.request_timeout <= 0 or self.status_timeout <= 0:
            raise LauncherConfigError("timeouts must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> LauncherConfig:
        """Create configuration from environment variables.

        Reads ``LAUNCHCORE_DIRECTORY`` and ``LAUNCHCORE_DISTRIBUTION_URL``
        plus optional ``LAUNCHCORE_*`` variables. Explicit keyword
        arguments override environment values.

        Raises
        ------
        LauncherConfigError
            If a required value is missing or a numeric variable is invalid.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "LAUNCHCORE_DIRECTORY": "launcher_directory",
            "LAUNCHCORE_DISTRIBUTION_URL": "distribution_url",
            "LAUNCHCORE_AUTH_ENDPOINT": "auth_endpoint",
            "LAUNCHCORE_ACCOUNT_LOGIN_URL": "account_login_url",
            "LAUNCHCORE_STATUS_ENDPOINT": "status_endpoint",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "dev_mode" not in overrides:
            config_kwargs["dev_mode"] = _env_bool(env.get("LAUNCHCORE_DEV_MODE"), False)

        # timeouts are numeric, handle separately
        for env_key, field_name in (
            ("LAUNCHCORE_REQUEST_TIMEOUT", "request_timeout"),
            ("LAUNCHCORE_STATUS_TIMEOUT", "status_timeout"),
        ):
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise LauncherConfigError(f"{env_key} must be a number, got {val!r}") from exc

        config_kwargs.update(overrides)

        for required in ("launcher_directory", "distribution_url"):
            if not config_kwargs.get(required):
                raise LauncherConfigError(f"missing required setting: {required}")

        return cls(**config_kwargs)
