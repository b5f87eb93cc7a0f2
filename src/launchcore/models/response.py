"""Uniform success/error envelope returned by every remote call."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from launchcore.exceptions import LauncherTransportError

T = TypeVar("T")
E = TypeVar("E", bound=enum.Enum)


class ResponseStatus(enum.Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ClassifiedError(Generic[E]):
    """Provider error code plus whether the fault lies with the provider.

    ``is_internal_error`` lets a UI choose between "try again later" and a
    message the user can act on (wrong password, banned account, ...).
    """

    code: E
    is_internal_error: bool


@dataclass(frozen=True, slots=True)
class RestResponse(Generic[T]):
    """Result of a remote call.

    ``response_status`` is ``SUCCESS`` exactly when ``error`` is ``None``.
    On error, ``data`` holds whatever the caller's data provider supplied so
    it never has to be ``None``-checked before looking at the status.
    ``classified`` is only set on error envelopes of providers that
    classify their failures.
    """

    data: T
    response_status: ResponseStatus
    error: LauncherTransportError | None = None
    classified: ClassifiedError[Any] | None = None

    def __post_init__(self) -> None:
        if (self.response_status is ResponseStatus.SUCCESS) != (self.error is None):
            raise ValueError("response_status must be SUCCESS exactly when error is None")
        if self.classified is not None and self.error is None:
            raise ValueError("classified error requires an error")

    @property
    def ok(self) -> bool:
        return self.response_status is ResponseStatus.SUCCESS

    @classmethod
    def success(cls, data: T) -> RestResponse[T]:
        return cls(data=data, response_status=ResponseStatus.SUCCESS)

    @classmethod
    def failure(
        cls,
        error: LauncherTransportError,
        data_provider: Callable[[], T],
        classified: ClassifiedError[Any] | None = None,
    ) -> RestResponse[T]:
        return cls(
            data=data_provider(),
            response_status=ResponseStatus.ERROR,
            error=error,
            classified=classified,
        )
