"""Base model and enum for launcher API payloads.

Every wire model inherits from :class:`LauncherBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* ``populate_by_name`` so tests and callers may construct models with
  Python field names.

Error-code enums inherit from :class:`LauncherEnum` which requires an
``UNKNOWN`` member and adds a ``_missing_`` hook returning ``UNKNOWN`` for
any value without a mapped member.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LauncherEnum(enum.StrEnum):
    """Base for closed string enums received from or reported to callers.

    Every subclass **must** define ``UNKNOWN``.
    """

    @classmethod
    def _missing_(cls, value: object) -> LauncherEnum:
        return cls["UNKNOWN"]


class LauncherBaseModel(BaseModel):
    """Base for launcher API payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_wire(self) -> dict[str, object]:
        """Serialize with API (camelCase) keys, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
