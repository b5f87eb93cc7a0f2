"""Data models for launcher API payloads and results."""

from launchcore.models._base import LauncherBaseModel, LauncherEnum
from launchcore.models.account import (
    AccountAuthPayload,
    AccountAuthResponse,
    AccountUser,
    DeviceInfo,
    DeviceRecord,
    LinkedAccount,
    MinecraftAccount,
    RootToken,
)
from launchcore.models.errors import (
    AccountErrorBody,
    AccountErrorCode,
    YggdrasilErrorBody,
    YggdrasilErrorCode,
)
from launchcore.models.response import ClassifiedError, ResponseStatus, RestResponse
from launchcore.models.session import (
    DEFAULT_AGENT,
    Agent,
    AuthPayload,
    GameProfile,
    Session,
    SessionUser,
    UserProperty,
)
from launchcore.models.status import (
    ServiceStatus,
    StatusColor,
    UptimeSummary,
    default_statuses,
    status_to_hex,
)

__all__ = [
    "DEFAULT_AGENT",
    "AccountAuthPayload",
    "AccountAuthResponse",
    "AccountErrorBody",
    "AccountErrorCode",
    "AccountUser",
    "Agent",
    "AuthPayload",
    "ClassifiedError",
    "DeviceInfo",
    "DeviceRecord",
    "GameProfile",
    "LauncherBaseModel",
    "LauncherEnum",
    "LinkedAccount",
    "MinecraftAccount",
    "ResponseStatus",
    "RestResponse",
    "RootToken",
    "ServiceStatus",
    "Session",
    "SessionUser",
    "StatusColor",
    "UptimeSummary",
    "UserProperty",
    "YggdrasilErrorBody",
    "YggdrasilErrorCode",
    "default_statuses",
    "status_to_hex",
]
