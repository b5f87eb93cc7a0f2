from __future__ import annotations

import pytest

from launchcore._classify import (
    classify_account_error,
    classify_yggdrasil_error,
    decipher_account_error,
    decipher_yggdrasil_error,
)
from launchcore.exceptions import (
    LauncherTransportError,
    MalformedResponseError,
    ProtocolError,
    TransportTimeoutError,
    TransportUnreachableError,
)
from launchcore.models import AccountErrorCode, YggdrasilErrorCode


def _http_error(status: int, body: object) -> ProtocolError:
    return ProtocolError(f"HTTP {status}", status_code=status, endpoint="https://auth.test/x", body=body)


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        (
            {"error": "ForbiddenOperationException", "errorMessage": "Invalid credentials. Invalid username or password."},
            YggdrasilErrorCode.ERROR_INVALID_CREDENTIALS,
        ),
        ({"error": "ForbiddenOperationException", "errorMessage": "Invalid credentials."}, YggdrasilErrorCode.ERROR_RATELIMIT),
        ({"error": "ForbiddenOperationException", "errorMessage": "Invalid token."}, YggdrasilErrorCode.ERROR_INVALID_TOKEN),
        ({"error": "ForbiddenOperationException", "errorMessage": "Forbidden"}, YggdrasilErrorCode.ERROR_CREDENTIALS_MISSING),
        (
            {"error": "ForbiddenOperationException", "errorMessage": "whatever", "cause": "UserMigratedException"},
            YggdrasilErrorCode.ERROR_USER_MIGRATED,
        ),
        (
            {"error": "IllegalArgumentException", "errorMessage": "Access token already has a profile assigned."},
            YggdrasilErrorCode.ERROR_ACCESS_TOKEN_HAS_PROFILE,
        ),
        ({"error": "IllegalArgumentException", "errorMessage": "Invalid salt version"}, YggdrasilErrorCode.ERROR_INVALID_SALT_VERSION),
        ({"error": "Method Not Allowed"}, YggdrasilErrorCode.ERROR_METHOD_NOT_ALLOWED),
        ({"error": "Not Found"}, YggdrasilErrorCode.ERROR_NOT_FOUND),
        ({"error": "Unsupported Media Type"}, YggdrasilErrorCode.ERROR_UNSUPPORTED_MEDIA_TYPE),
        ({"error": "GoneException"}, YggdrasilErrorCode.ERROR_GONE),
        ({"error": "ResourceException"}, YggdrasilErrorCode.ERROR_GONE),
        ({"error": "InvalidCredentials", "message": "nope"}, YggdrasilErrorCode.ERROR_INVALID_CREDENTIALS),
    ],
)
def test_yggdrasil_table(body: dict[str, str], expected: YggdrasilErrorCode) -> None:
    assert decipher_yggdrasil_error(body) is expected


@pytest.mark.parametrize(
    "body",
    [
        {"error": "BrandNewException", "errorMessage": "?"},
        {"error": "IllegalArgumentException", "errorMessage": "unheard of"},
        {"error": 42},
        {},
        "Service temporarily offline.",
        None,
        ["error"],
    ],
)
def test_yggdrasil_unrecognized_bodies_are_unknown(body: object) -> None:
    assert decipher_yggdrasil_error(body) is YggdrasilErrorCode.UNKNOWN


def test_invalid_credentials_on_403_is_user_fault() -> None:
    classified = classify_account_error(_http_error(403, {"error": "InvalidCredentials", "message": "Invalid username or password"}))
    assert classified.code is AccountErrorCode.ERROR_INVALID_CREDENTIALS
    assert classified.is_internal_error is False

    classified = classify_yggdrasil_error(_http_error(403, {"error": "InvalidCredentials", "message": "..."}))
    assert classified.code is YggdrasilErrorCode.ERROR_INVALID_CREDENTIALS
    assert classified.is_internal_error is False


def test_unreachable_host_maps_to_dedicated_code() -> None:
    error = TransportUnreachableError("Cannot connect to host auth.test:443", endpoint="https://auth.test/")
    assert classify_yggdrasil_error(error).code is YggdrasilErrorCode.ERROR_UNREACHABLE
    assert classify_account_error(error).code is AccountErrorCode.ERROR_UNREACHABLE


@pytest.mark.parametrize(
    "error",
    [
        TransportTimeoutError("timed out"),
        MalformedResponseError("bad json", status_code=200),
        LauncherTransportError("connection reset"),
    ],
)
def test_other_failures_are_unknown(error: LauncherTransportError) -> None:
    assert classify_yggdrasil_error(error).code is YggdrasilErrorCode.UNKNOWN
    assert classify_account_error(error).code is AccountErrorCode.UNKNOWN


def test_internal_flag_marks_provider_side_faults() -> None:
    assert classify_yggdrasil_error(_http_error(405, {"error": "Method Not Allowed"})).is_internal_error is True
    assert classify_yggdrasil_error(_http_error(403, {"error": "ForbiddenOperationException", "errorMessage": "Invalid token."})).is_internal_error is False
    assert classify_account_error(_http_error(400, {"error": "ERROR_INVALID_DEVICE", "message": "bad"})).is_internal_error is True
    assert classify_account_error(_http_error(403, {"error": "ERROR_ACCOUNT_BANNED", "message": "bye"})).is_internal_error is False


def test_account_table_is_separate_from_legacy_table() -> None:
    # Legacy identifiers mean nothing to the account-linking service.
    body = {"error": "ForbiddenOperationException", "errorMessage": "Invalid token."}
    assert decipher_account_error(body) is AccountErrorCode.UNKNOWN
    assert decipher_yggdrasil_error({"error": "NoMinecraftAccount", "message": "none"}) is YggdrasilErrorCode.UNKNOWN


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("ERROR_INVALID_REQUEST", AccountErrorCode.ERROR_INVALID_REQUEST),
        ("ERROR_INVALID_DEVICE", AccountErrorCode.ERROR_INVALID_DEVICE),
        ("RateLimit", AccountErrorCode.ERROR_RATELIMIT),
        ("ERROR_ACCOUNT_BANNED", AccountErrorCode.ERROR_ACCOUNT_BANNED),
        ("InvalidToken", AccountErrorCode.ERROR_INVALID_TOKEN),
        ("NoMinecraftAccount", AccountErrorCode.ERROR_NO_MINECRAFT_ACCOUNT),
        ("SomethingNew", AccountErrorCode.UNKNOWN),
    ],
)
def test_account_table(identifier: str, expected: AccountErrorCode) -> None:
    assert decipher_account_error({"error": identifier, "message": "m", "details": ["d"]}) is expected


def test_error_code_enum_absorbs_unknown_values() -> None:
    assert YggdrasilErrorCode("NOT_A_CODE") is YggdrasilErrorCode.UNKNOWN
    assert AccountErrorCode("NOT_A_CODE") is AccountErrorCode.UNKNOWN
