"""Match pair and match candidate models."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import model_validator

from gerrytruce.models._base import TruceBaseModel
from gerrytruce.models.state import StateProfile


class MatchStrength(enum.StrEnum):
    """Display emphasis of a candidate; never affects inclusion."""

    STRONG = "strong"
    STANDARD = "standard"


class MatchEligibility(enum.StrEnum):
    SINGLE_DISTRICT = "single_district"
    """At-large state: cannot be gerrymandered, never matched."""
    NO_DATA = "no_data"
    """Seat data for the enacted or alternate map is unavailable."""
    UNMATCHED = "unmatched"
    """Eligible, but no partner passes the current thresholds."""
    MATCHED = "matched"


class MatchPair(TruceBaseModel):
    """Unordered pair of distinct states.

    Endpoints are stored sorted so ``MatchPair.of("TX", "CA")`` equals
    ``MatchPair.of("CA", "TX")`` and both hash alike.
    """

    first: str
    second: str

    @model_validator(mode="before")
    @classmethod
    def _normalize_endpoints(cls, values: Any) -> Any:
        if isinstance(values, (tuple, list)):
            if len(values) != 2:
                raise ValueError("a match pair needs exactly two states")
            values = {"first": values[0], "second": values[1]}
        if not isinstance(values, dict):
            return values
        a = str(values.get("first", "")).strip().upper()
        b = str(values.get("second", "")).strip().upper()
        if not a or not b:
            raise ValueError("match pair endpoints must be non-empty")
        if a == b:
            raise ValueError(f"a state cannot be paired with itself: {a}")
        low, high = sorted((a, b))
        return {"first": low, "second": high}

    @classmethod
    def of(cls, a: str, b: str) -> MatchPair:
        return cls.model_validate({"first": a, "second": b})

    @property
    def states(self) -> tuple[str, str]:
        return (self.first, self.second)

    @property
    def key(self) -> str:
        return f"{self.first}-{self.second}"

    def contains(self, state_id: str) -> bool:
        return state_id in (self.first, self.second)

    def touches(self, other: MatchPair) -> bool:
        return self.contains(other.first) or self.contains(other.second)

    def partner(self, state_id: str) -> str | None:
        if state_id == self.first:
            return self.second
        if state_id == self.second:
            return self.first
        return None


class MatchCandidate(TruceBaseModel):
    """A partner accepted for a focal state."""

    state: StateProfile
    strength: MatchStrength
    score: float
    """Ranking residual, lower is a closer match (``|delta(F) + delta(O)|``
    under the balance-delta policy)."""
    delta: int | None = None
    """The candidate's own balance delta, when the policy uses one."""
    district_difference: int = 0

    @property
    def state_id(self) -> str:
        return self.state.id

    @property
    def is_strong(self) -> bool:
        return self.strength is MatchStrength.STRONG
