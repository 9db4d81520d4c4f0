"""Base model and enum for gerrytruce snapshots.

Every snapshot model inherits from :class:`TruceBaseModel`, which is frozen
and accepts both camelCase source columns and snake_case field names.

Enums describing *external* categorical columns inherit from
:class:`TruceEnum` which adds an ``UNKNOWN`` member and a ``_missing_``
hook, so an unexpected value in a source table degrades to ``UNKNOWN``
instead of raising ``ValueError``.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TruceEnum(enum.StrEnum):
    """Base for enums parsed from source tables.

    Every subclass **must** define ``UNKNOWN = "unknown"``.
    Lookups are case-insensitive and tolerate surrounding whitespace.
    """

    @classmethod
    def _missing_(cls, value: object) -> TruceEnum:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        unknown: TruceEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown


class TruceBaseModel(BaseModel):
    """Frozen base for snapshot models.

    * camelCase → snake_case via ``alias_generator=to_camel``
    * ``populate_by_name`` so tests and callers can use field names
    * unknown columns are ignored
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
