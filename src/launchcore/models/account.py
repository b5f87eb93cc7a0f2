"""Account-linking service models.

The service answers with a nested body (``rootToken``, ``user``,
``device``, ``minecraftAccounts``). :class:`LinkedAccount` is the flat
record handed to the application; :meth:`LinkedAccount.from_auth_response`
only renames fields.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from launchcore.models._base import LauncherBaseModel

ACCOUNT_TYPE = "visr"


class DeviceInfo(LauncherBaseModel):
    """Host telemetry attached to the account-linking login request."""

    uuid: str
    id: str
    hostname: str
    platform: str
    type: str
    release: str
    cpu: str
    ram: int
    arch: str


class AccountAuthPayload(LauncherBaseModel):
    username: str
    password: str
    device: DeviceInfo


class RootToken(LauncherBaseModel):
    token: str
    expires: str = ""
    refreshed: bool = False


class AccountUser(LauncherBaseModel):
    id: int | None = None
    username: str = ""
    email: str = ""
    # The service sends these two in snake_case.
    setup_stage: str = Field(default="", alias="setup_stage")
    is_admin: bool = False
    support_pin: str = Field(default="", alias="support_pin")
    legitowner: bool = False


class DeviceRecord(LauncherBaseModel):
    uuid: str = ""
    verified: bool = False
    last_session: str = ""


class MinecraftAccount(LauncherBaseModel):
    id: str
    name: str
    access_token: str = ""
    is_main: bool = False


class AccountAuthResponse(LauncherBaseModel):
    """Success body of the login endpoint."""

    root_token: RootToken
    user: AccountUser = Field(default_factory=AccountUser)
    device: DeviceRecord = Field(default_factory=DeviceRecord)
    minecraft_accounts: list[MinecraftAccount] = Field(default_factory=list)


class LinkedAccount(LauncherBaseModel):
    """Normalized account record."""

    type: Literal["visr"] = ACCOUNT_TYPE
    username: str
    user_id: int | None
    email: str
    setup_stage: str
    is_admin: bool
    support_pin: str
    legitowner: bool
    root_token: RootToken
    device: DeviceRecord
    minecraft_accounts: list[MinecraftAccount]

    @classmethod
    def from_auth_response(cls, response: AccountAuthResponse) -> LinkedAccount:
        user = response.user
        return cls(
            username=user.username,
            user_id=user.id,
            email=user.email,
            setup_stage=user.setup_stage,
            is_admin=user.is_admin,
            support_pin=user.support_pin,
            legitowner=user.legitowner,
            root_token=response.root_token,
            device=response.device,
            minecraft_accounts=list(response.minecraft_accounts),
        )
