"""Internal constants shared across the library."""

USER_AGENT = "launchcore/1.0"

AUTH_ENDPOINT = "https://authserver.visoftware.dev/"
API_ENDPOINT = "https://api.visoftware.dev/"
ACCOUNT_LOGIN_URL = f"{API_ENDPOINT}services/visr/login"
STATUS_ENDPOINT = "https://raw.githubusercontent.com/VI-Software/status/master/history/summary.json"

DISTRO_FILE = "distribution.json"
DISTRO_FILE_DEV = "distribution_dev.json"

#: Sentinel used when the machine identifier cannot be resolved.
UNKNOWN_DEVICE_ID = "unknown-device"

#: Status checks must fail fast; the summary is only informational.
STATUS_TIMEOUT: float = 2.5
REQUEST_TIMEOUT: float = 30.0

# ------------------------------------------------------------------
# Status colours (hex) used by launcher UIs
# ------------------------------------------------------------------

STATUS_HEX_GREEN = "#a5c325"
STATUS_HEX_YELLOW = "#eac918"
STATUS_HEX_RED = "#c32625"
STATUS_HEX_GREY = "#848484"
