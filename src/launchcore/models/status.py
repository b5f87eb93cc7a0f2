"""Service status models and the fixed table of monitored services."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from launchcore._constants import (
    STATUS_HEX_GREEN,
    STATUS_HEX_GREY,
    STATUS_HEX_RED,
    STATUS_HEX_YELLOW,
)
from launchcore.models._base import LauncherBaseModel


class StatusColor(enum.StrEnum):
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    # Not an upstream colour: marks a service whose status is unknown.
    GREY = "grey"


@dataclass(slots=True)
class ServiceStatus:
    """Status of one monitored service. ``status`` is updated in place."""

    service: str
    name: str
    essential: bool
    status: StatusColor = StatusColor.GREY


class UptimeSummary(LauncherBaseModel):
    """One entry of the upstream status summary. Other keys are ignored."""

    slug: str
    status: str


_SERVICES: tuple[tuple[str, str, bool], ...] = (
    ("vi-software-api", "VI Software API", True),
    ("vi-software-yggdrasil-auth-server", "VI Software Yggdrasil Auth Server", True),
    ("vi-software-cdn", "VI Software CDN", True),
    ("vi-software-portal", "VI Software Portal", True),
    ("user-content-server-otto", "User Content Server (Otto)", False),
    ("vi-software-skin-rendering-service", "VI Software Skin Rendering Service", False),
    ("vi-software-docs", "VI Software Docs", False),
)


def default_statuses() -> list[ServiceStatus]:
    """Return a fresh table of monitored services, all ``GREY``."""
    return [ServiceStatus(service=slug, name=name, essential=essential) for slug, name, essential in _SERVICES]


_HEX_BY_COLOR: dict[str, str] = {
    StatusColor.GREEN: STATUS_HEX_GREEN,
    StatusColor.YELLOW: STATUS_HEX_YELLOW,
    StatusColor.RED: STATUS_HEX_RED,
    StatusColor.GREY: STATUS_HEX_GREY,
}


def status_to_hex(status: str) -> str:
    """Convert a status colour name to its hex value.

    Unrecognised names are treated as ``grey`` (unknown).
    """
    return _HEX_BY_COLOR.get(status.lower(), STATUS_HEX_GREY)
