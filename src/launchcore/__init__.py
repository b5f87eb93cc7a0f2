"""launchcore - Async launcher client for distribution manifests and account auth."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("launchcore")
except PackageNotFoundError:
    __version__ = "0+local"
from launchcore.account import AccountClient
from launchcore.config import LauncherConfig
from launchcore.distribution import DistributionAPI
from launchcore.exceptions import (
    DistributionUnavailableError,
    LauncherConfigError,
    LauncherError,
    LauncherTransportError,
    MalformedResponseError,
    ProtocolError,
    TransportTimeoutError,
    TransportUnreachableError,
)
from launchcore.models import (
    AccountErrorCode,
    ClassifiedError,
    LinkedAccount,
    ResponseStatus,
    RestResponse,
    ServiceStatus,
    Session,
    StatusColor,
    YggdrasilErrorCode,
    status_to_hex,
)
from launchcore.yggdrasil import YggdrasilClient

__all__ = [
    "__version__",
    "AccountClient",
    "AccountErrorCode",
    "ClassifiedError",
    "DistributionAPI",
    "DistributionUnavailableError",
    "LauncherConfig",
    "LauncherConfigError",
    "LauncherError",
    "LauncherTransportError",
    "LinkedAccount",
    "MalformedResponseError",
    "ProtocolError",
    "ResponseStatus",
    "RestResponse",
    "ServiceStatus",
    "Session",
    "StatusColor",
    "TransportTimeoutError",
    "TransportUnreachableError",
    "YggdrasilClient",
    "YggdrasilErrorCode",
    "status_to_hex",
]
