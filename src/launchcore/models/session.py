"""Legacy token authentication models."""

from __future__ import annotations

from pydantic import Field

from launchcore.models._base import LauncherBaseModel


class Agent(LauncherBaseModel):
    name: str = "VI Software Launcher Core"
    version: int = 1


DEFAULT_AGENT = Agent()


class AuthPayload(LauncherBaseModel):
    """Body of the ``authenticate`` request."""

    agent: Agent = DEFAULT_AGENT
    username: str
    password: str
    client_token: str | None = None
    request_user: bool = True


class GameProfile(LauncherBaseModel):
    id: str
    name: str


class UserProperty(LauncherBaseModel):
    name: str
    value: str


class SessionUser(LauncherBaseModel):
    id: str
    properties: list[UserProperty] = Field(default_factory=list)


class Session(LauncherBaseModel):
    """Session returned by ``authenticate`` and ``refresh``.

    Parameters
    ----------
    access_token : str
        Token presented to game servers; validate before launching.
    client_token : str
        Launcher client token the access token is bound to.
    selected_profile : GameProfile
        Profile the session was issued for.
    user : SessionUser or None
        Present when the request asked for ``requestUser``.
    """

    access_token: str
    client_token: str
    selected_profile: GameProfile
    user: SessionUser | None = None
