"""Masking of credentials and device fingerprints in debug logs.

Request and response bodies of the auth services carry passwords, tokens
and support PINs; the ``Device-Info`` header and the account login body
carry a hashed machine id. :func:`redact_for_log` returns a copy of such a
value that is safe to pass to ``logger.debug``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

_MAX_DEPTH = 20

# Keys whose values are replaced entirely. Compared case-insensitively.
_SECRET_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "accesstoken",
        "clienttoken",
        "token",
        "roottoken",
        "authorization",
        "cookie",
        "supportpin",
        "support_pin",
    }
)

# Keys holding a machine fingerprint. Only a short prefix is kept so log
# lines from the same host can still be correlated.
_FINGERPRINT_KEYS: frozenset[str] = frozenset({"uuid", "device"})
_FINGERPRINT_PREFIX = 8

REDACTED = "<redacted>"


def _mask_fingerprint(value: str) -> str:
    if len(value) <= _FINGERPRINT_PREFIX:
        return REDACTED
    return f"{value[:_FINGERPRINT_PREFIX]}…"


def _redact_string(value: str, max_string: int, depth: int) -> Any:
    # Header values such as Device-Info are JSON objects encoded as text.
    stripped = value.strip()
    if stripped.startswith("{") and stripped.endswith("}"):
        try:
            embedded = json.loads(stripped)
        except (json.JSONDecodeError, RecursionError):
            embedded = None
        if isinstance(embedded, Mapping):
            return json.dumps(_redact_mapping(embedded, max_string, depth + 1), separators=(",", ":"))
    if len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value


def _redact_mapping(value: Mapping[Any, Any], max_string: int, depth: int) -> dict[str, Any]:
    redacted: dict[str, Any] = {}
    for raw_key, item in value.items():
        key = str(raw_key)
        lowered = key.lower()
        if lowered in _SECRET_KEYS:
            redacted[key] = REDACTED
        elif lowered in _FINGERPRINT_KEYS and isinstance(item, str):
            redacted[key] = _mask_fingerprint(item)
        else:
            redacted[key] = _redact(item, max_string, depth + 1)
    return redacted


def _redact(value: Any, max_string: int, depth: int) -> Any:
    if depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _redact_string(value, max_string, depth)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, BaseModel):
        return _redact_mapping(value.model_dump(mode="json", by_alias=True), max_string, depth)
    if isinstance(value, Mapping):
        return _redact_mapping(value, max_string, depth)
    if isinstance(value, Sequence):
        return [_redact(item, max_string, depth + 1) for item in value]
    return repr(value)


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a copy of *value* with secrets removed and fingerprints shortened.

    Mappings are walked recursively, pydantic models are dumped with their
    wire keys first, and strings holding a JSON object are decoded, redacted
    and re-encoded. Long strings are truncated to *max_string* characters.
    """
    return _redact(value, max_string, 0)
