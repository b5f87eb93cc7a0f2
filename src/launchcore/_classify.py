"""Map transport failures onto each provider's closed error-code set.

The lookup tables are plain data, one set per provider. Identifiers the
tables do not know resolve to ``UNKNOWN``; nothing here raises for an
unexpected payload.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import ValidationError

from launchcore.exceptions import ProtocolError, TransportUnreachableError
from launchcore.models.errors import (
    AccountErrorBody,
    AccountErrorCode,
    YggdrasilErrorBody,
    YggdrasilErrorCode,
)
from launchcore.models.response import ClassifiedError

E = TypeVar("E", bound=enum.Enum)

# ------------------------------------------------------------------
# Legacy token authentication server
# ------------------------------------------------------------------

_Y = YggdrasilErrorCode

#: (error, cause) pairs, checked first.
YGGDRASIL_CAUSES: Mapping[tuple[str, str], YggdrasilErrorCode] = {
    ("ForbiddenOperationException", "UserMigratedException"): _Y.ERROR_USER_MIGRATED,
}

#: (error, errorMessage) pairs.
YGGDRASIL_MESSAGES: Mapping[tuple[str, str], YggdrasilErrorCode] = {
    ("ForbiddenOperationException", "Invalid credentials. Invalid username or password."): _Y.ERROR_INVALID_CREDENTIALS,
    ("ForbiddenOperationException", "Invalid credentials."): _Y.ERROR_RATELIMIT,
    ("ForbiddenOperationException", "Invalid token."): _Y.ERROR_INVALID_TOKEN,
    ("ForbiddenOperationException", "Forbidden"): _Y.ERROR_CREDENTIALS_MISSING,
    ("IllegalArgumentException", "Access token already has a profile assigned."): _Y.ERROR_ACCESS_TOKEN_HAS_PROFILE,
    ("IllegalArgumentException", "Invalid salt version"): _Y.ERROR_INVALID_SALT_VERSION,
}

#: Identifiers that are meaningful without a message.
YGGDRASIL_ERRORS: Mapping[str, YggdrasilErrorCode] = {
    "Method Not Allowed": _Y.ERROR_METHOD_NOT_ALLOWED,
    "Not Found": _Y.ERROR_NOT_FOUND,
    "Unsupported Media Type": _Y.ERROR_UNSUPPORTED_MEDIA_TYPE,
    "ResourceException": _Y.ERROR_GONE,
    "GoneException": _Y.ERROR_GONE,
    # Short identifiers emitted by newer deployments of the same server.
    "InvalidCredentials": _Y.ERROR_INVALID_CREDENTIALS,
    "RateLimit": _Y.ERROR_RATELIMIT,
    "InvalidToken": _Y.ERROR_INVALID_TOKEN,
}

YGGDRASIL_INTERNAL: frozenset[YggdrasilErrorCode] = frozenset(
    {
        _Y.ERROR_METHOD_NOT_ALLOWED,
        _Y.ERROR_NOT_FOUND,
        _Y.ERROR_ACCESS_TOKEN_HAS_PROFILE,
        _Y.ERROR_CREDENTIALS_MISSING,
        _Y.ERROR_INVALID_SALT_VERSION,
        _Y.ERROR_UNSUPPORTED_MEDIA_TYPE,
    }
)

# ------------------------------------------------------------------
# Account-linking service
# ------------------------------------------------------------------

_A = AccountErrorCode

ACCOUNT_ERRORS: Mapping[str, AccountErrorCode] = {
    "ERROR_INVALID_REQUEST": _A.ERROR_INVALID_REQUEST,
    "ERROR_INVALID_DEVICE": _A.ERROR_INVALID_DEVICE,
    "InvalidCredentials": _A.ERROR_INVALID_CREDENTIALS,
    "RateLimit": _A.ERROR_RATELIMIT,
    "ERROR_ACCOUNT_BANNED": _A.ERROR_ACCOUNT_BANNED,
    "InvalidToken": _A.ERROR_INVALID_TOKEN,
    "NoMinecraftAccount": _A.ERROR_NO_MINECRAFT_ACCOUNT,
}

ACCOUNT_INTERNAL: frozenset[AccountErrorCode] = frozenset(
    {
        _A.ERROR_INVALID_REQUEST,
        _A.ERROR_INVALID_DEVICE,
    }
)


def decipher_yggdrasil_error(body: Any) -> YggdrasilErrorCode:
    """Map a legacy server error body to an error code."""
    if not isinstance(body, Mapping):
        return _Y.UNKNOWN
    try:
        parsed = YggdrasilErrorBody.model_validate(body)
    except ValidationError:
        return _Y.UNKNOWN
    if parsed.cause:
        by_cause = YGGDRASIL_CAUSES.get((parsed.error, parsed.cause))
        if by_cause is not None:
            return by_cause
    by_message = YGGDRASIL_MESSAGES.get((parsed.error, parsed.error_message))
    if by_message is not None:
        return by_message
    return YGGDRASIL_ERRORS.get(parsed.error, _Y.UNKNOWN)


def decipher_account_error(body: Any) -> AccountErrorCode:
    """Map an account-linking error body to an error code."""
    if not isinstance(body, Mapping):
        return _A.UNKNOWN
    try:
        parsed = AccountErrorBody.model_validate(body)
    except ValidationError:
        return _A.UNKNOWN
    return ACCOUNT_ERRORS.get(parsed.error, _A.UNKNOWN)


def _classify(
    error: BaseException,
    *,
    decipher: Callable[[Any], E],
    unreachable: E,
    unknown: E,
    internal: frozenset[E],
) -> ClassifiedError[E]:
    if isinstance(error, ProtocolError):
        code = decipher(error.body)
    elif isinstance(error, TransportUnreachableError):
        code = unreachable
    else:
        code = unknown
    return ClassifiedError(code=code, is_internal_error=code in internal)


def classify_yggdrasil_error(error: BaseException) -> ClassifiedError[YggdrasilErrorCode]:
    return _classify(
        error,
        decipher=decipher_yggdrasil_error,
        unreachable=_Y.ERROR_UNREACHABLE,
        unknown=_Y.UNKNOWN,
        internal=YGGDRASIL_INTERNAL,
    )


def classify_account_error(error: BaseException) -> ClassifiedError[AccountErrorCode]:
    return _classify(
        error,
        decipher=decipher_account_error,
        unreachable=_A.ERROR_UNREACHABLE,
        unknown=_A.UNKNOWN,
        internal=ACCOUNT_INTERNAL,
    )
