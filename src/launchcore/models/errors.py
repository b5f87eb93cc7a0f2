"""Closed error-code sets, one per identity provider."""

from __future__ import annotations

from pydantic import Field

from launchcore.models._base import LauncherBaseModel, LauncherEnum


class YggdrasilErrorCode(LauncherEnum):
    """Error codes of the legacy token authentication server."""

    ERROR_METHOD_NOT_ALLOWED = "ERROR_METHOD_NOT_ALLOWED"
    ERROR_NOT_FOUND = "ERROR_NOT_FOUND"
    ERROR_USER_MIGRATED = "ERROR_USER_MIGRATED"
    ERROR_INVALID_CREDENTIALS = "ERROR_INVALID_CREDENTIALS"
    ERROR_RATELIMIT = "ERROR_RATELIMIT"
    ERROR_INVALID_TOKEN = "ERROR_INVALID_TOKEN"
    ERROR_ACCESS_TOKEN_HAS_PROFILE = "ERROR_ACCESS_TOKEN_HAS_PROFILE"
    ERROR_CREDENTIALS_MISSING = "ERROR_CREDENTIALS_MISSING"
    ERROR_INVALID_SALT_VERSION = "ERROR_INVALID_SALT_VERSION"
    ERROR_UNSUPPORTED_MEDIA_TYPE = "ERROR_UNSUPPORTED_MEDIA_TYPE"
    ERROR_GONE = "ERROR_GONE"
    ERROR_UNREACHABLE = "ERROR_UNREACHABLE"
    UNKNOWN = "UNKNOWN"


class AccountErrorCode(LauncherEnum):
    """Error codes of the account-linking service."""

    ERROR_INVALID_REQUEST = "ERROR_INVALID_REQUEST"
    ERROR_INVALID_DEVICE = "ERROR_INVALID_DEVICE"
    ERROR_INVALID_CREDENTIALS = "ERROR_INVALID_CREDENTIALS"
    ERROR_RATELIMIT = "ERROR_RATELIMIT"
    ERROR_ACCOUNT_BANNED = "ERROR_ACCOUNT_BANNED"
    ERROR_INVALID_TOKEN = "ERROR_INVALID_TOKEN"
    ERROR_NO_MINECRAFT_ACCOUNT = "ERROR_NO_MINECRAFT_ACCOUNT"
    ERROR_UNREACHABLE = "ERROR_UNREACHABLE"
    UNKNOWN = "UNKNOWN"


class YggdrasilErrorBody(LauncherBaseModel):
    """Error body of the legacy server: ``{error, errorMessage, cause?}``."""

    error: str = ""
    error_message: str = ""
    cause: str | None = None


class AccountErrorBody(LauncherBaseModel):
    """Error body of the account-linking service: ``{error, message, details?}``."""

    error: str = ""
    message: str = ""
    details: list[str] = Field(default_factory=list)
