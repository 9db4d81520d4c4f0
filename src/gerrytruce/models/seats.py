"""Seat bucket models."""

from __future__ import annotations

import enum

from pydantic import Field, computed_field

from gerrytruce.models._base import TruceBaseModel


class Bucket(enum.StrEnum):
    """Partisan-competitiveness bucket of a single district."""

    SAFE_D = "safe_d"
    LEAN_D = "lean_d"
    EVEN = "even"
    LEAN_R = "lean_r"
    SAFE_R = "safe_r"


class SeatCounts(TruceBaseModel):
    """Bucket counts for one state under one map variant.

    ``competitive_seats``, ``safe_seats`` and ``districts`` are derived, so
    ``safe_d + lean_d + even + lean_r + safe_r == districts`` and
    ``competitive_seats + safe_seats == districts`` always hold.
    """

    safe_d: int = Field(default=0, ge=0)
    lean_d: int = Field(default=0, ge=0)
    even: int = Field(default=0, ge=0)
    lean_r: int = Field(default=0, ge=0)
    safe_r: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def competitive_seats(self) -> int:
        return self.lean_r + self.even + self.lean_d

    @computed_field  # type: ignore[prop-decorator]
    @property
    def safe_seats(self) -> int:
        return self.safe_r + self.safe_d

    @computed_field  # type: ignore[prop-decorator]
    @property
    def districts(self) -> int:
        return self.competitive_seats + self.safe_seats

    @property
    def balance(self) -> int:
        """Net Republican-leaning seats: ``(safe_r + lean_r) - (safe_d + lean_d)``."""
        return (self.safe_r + self.lean_r) - (self.safe_d + self.lean_d)

    @property
    def republican_seats(self) -> int:
        return self.safe_r + self.lean_r

    @property
    def democratic_seats(self) -> int:
        return self.safe_d + self.lean_d

    def count(self, bucket: Bucket) -> int:
        return int(getattr(self, bucket.value))


class DistrictLean(TruceBaseModel):
    """A classified district of one map variant."""

    district_id: str
    """Source key, e.g. ``"AL-01"``."""
    state_id: str
    lean: int
    """Signed lean: positive = Republican, negative = Democratic."""
    bucket: Bucket
