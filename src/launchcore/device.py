"""Device identity and host telemetry.

The device identifier is the SHA-256 of the operating system's machine id
(``/etc/machine-id`` on Linux, ``IOPlatformUUID`` on macOS, ``MachineGuid``
on Windows). It is opaque to the rest of the library.
"""

from __future__ import annotations

import hashlib
import json
import logging
import platform
import socket
import subprocess
import sys

import psutil

from launchcore._constants import UNKNOWN_DEVICE_ID
from launchcore.models.account import DeviceInfo

_logger = logging.getLogger(__name__)

_LINUX_MACHINE_ID_PATHS = ("/etc/machine-id", "/var/lib/dbus/machine-id")

_ARCH_ALIASES: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "armv7l": "arm",
    "armv6l": "arm",
}


def _read_linux_machine_id() -> str:
    for candidate in _LINUX_MACHINE_ID_PATHS:
        try:
            with open(candidate, encoding="utf-8") as fh:
                value = fh.read().strip()
        except FileNotFoundError:
            continue
        if value:
            return value
    raise OSError("no machine-id file found")


def _read_darwin_machine_id() -> str:
    output = subprocess.run(
        ["ioreg", "-rd1", "-c", "IOPlatformExpertDevice"],
        capture_output=True,
        check=True,
        text=True,
        timeout=5,
    ).stdout
    for line in output.splitlines():
        if "IOPlatformUUID" in line:
            return line.split("=", 1)[1].strip().strip('"')
    raise ValueError("IOPlatformUUID not present in ioreg output")


def _read_windows_machine_id() -> str:
    import winreg  # pylint: disable=import-outside-toplevel

    with winreg.OpenKey(  # type: ignore[attr-defined]
        winreg.HKEY_LOCAL_MACHINE,  # type: ignore[attr-defined]
        r"SOFTWARE\Microsoft\Cryptography",
        0,
        winreg.KEY_READ | winreg.KEY_WOW64_64KEY,  # type: ignore[attr-defined]
    ) as key:
        value, _ = winreg.QueryValueEx(key, "MachineGuid")  # type: ignore[attr-defined]
    return str(value)


def read_machine_id() -> str:
    """Return the raw machine id of this host.

    Raises
    ------
    OSError, ValueError, subprocess.SubprocessError
        When the platform source is missing or unreadable.
    """
    if sys.platform == "darwin":
        raw = _read_darwin_machine_id()
    elif sys.platform == "win32":
        raw = _read_windows_machine_id()
    else:
        raw = _read_linux_machine_id()
    if not raw:
        raise ValueError("empty machine id")
    return raw


def resolve_device_id() -> str:
    """Best-effort stable device identifier; never raises."""
    try:
        raw = read_machine_id()
    except (OSError, ValueError, subprocess.SubprocessError):
        _logger.error("Failed to get machine ID", exc_info=True)
        return UNKNOWN_DEVICE_ID
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def _arch() -> str:
    machine = platform.machine()
    return _ARCH_ALIASES.get(machine.lower(), machine.lower())


def _cpu_model() -> str:
    return platform.processor() or platform.machine() or "unknown"


def collect_device_info(device_id: str | None = None) -> DeviceInfo:
    """Collect the telemetry sent to the account-linking service."""
    hostname = socket.gethostname()
    return DeviceInfo(
        uuid=device_id if device_id is not None else resolve_device_id(),
        id=hostname,
        hostname=hostname,
        platform=sys.platform,
        type=platform.system(),
        release=platform.release(),
        cpu=_cpu_model(),
        ram=psutil.virtual_memory().total,
        arch=_arch(),
    )


def device_info_header(device_id: str | None = None) -> str:
    """JSON value of the ``Device-Info`` header of the legacy server."""
    info = collect_device_info(device_id)
    return json.dumps(
        {
            "name": info.hostname,
            "platform": info.platform,
            "type": info.type,
            "release": info.release,
            "cpu": info.cpu,
            "ram": info.ram,
            "uuid": info.uuid,
            "arch": info.arch,
        },
        separators=(",", ":"),
    )
