"""Match acceptance and ranking policies.

A policy decides whether a candidate state is an acceptable truce partner
for a focal state and how candidates are ordered. Thresholds live in
frozen tolerance objects so they can be tuned without touching callers.

Policy (canonical, :class:`BalanceDeltaPolicy`):

- never the focal state itself, never an at-large state;
- both balance deltas known;
- deltas of opposite sign, a zero delta pairs with either sign;
- two clearly partisan states must lean to opposite parties;
- district counts within ``max_district_ratio`` of each other;
- ``|delta(F) + delta(O)| <= max_delta_sum``.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Callable
from typing import Protocol

from gerrytruce._constants import FLOAT_EPSILON
from gerrytruce.exceptions import TruceConfigError
from gerrytruce.models.match import MatchStrength
from gerrytruce.models.state import StateProfile


class Rejection(enum.StrEnum):
    """First predicate a candidate failed."""

    SAME_STATE = "same_state"
    SINGLE_DISTRICT = "single_district"
    NO_DATA = "no_data"
    SAME_DELTA_SIGN = "same_delta_sign"
    SAME_PARTY = "same_party"
    SIZE_MISMATCH = "size_mismatch"
    NO_CANCELLATION = "no_cancellation"
    DISTRICT_DIFFERENCE = "district_difference"
    SAME_GAP_SIGN = "same_gap_sign"
    GAP_MAGNITUDE = "gap_magnitude"
    NO_SHARED_VETO = "no_shared_veto"
    NO_SHARED_BALLOT = "no_shared_ballot"


@dataclasses.dataclass(frozen=True, slots=True)
class MatchSubject:
    """What a policy sees of one state."""

    profile: StateProfile
    districts: int
    """District count for the active apportionment era."""
    delta: int | None
    """``balance(enacted) - balance(alternate)``; ``None`` when unavailable."""

    @property
    def state_id(self) -> str:
        return self.profile.id


@dataclasses.dataclass(frozen=True)
class MatchTolerances:
    """Canonical thresholds of the balance-delta policy.

    Parameters
    ----------
    max_district_ratio : float
        Largest accepted ``max(districts) / min(districts)``.
    max_delta_sum : int
        Largest accepted ``|delta(F) + delta(O)|``.
    strong_delta_sum : int
        Sums at or below this are tagged :attr:`MatchStrength.STRONG`.
    lean_exemption : float
        States with ``|partisan_lean|`` at or below this are exempt from
        the opposite-party requirement.
    """

    max_district_ratio: float = 1.3
    max_delta_sum: int = 2
    strong_delta_sum: int = 1
    lean_exemption: float = 3.0


CANONICAL_TOLERANCES = MatchTolerances()


@dataclasses.dataclass(frozen=True)
class EfficiencyGapTolerances:
    """Thresholds of the efficiency-gap policy."""

    max_district_difference: int = 3
    max_gap_difference: float = 0.08
    strong_gap_difference: float = 0.04


EFFICIENCY_GAP_TOLERANCES = EfficiencyGapTolerances()


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def deltas_opposed(a: int, b: int) -> bool:
    """Opposite signs; a zero delta is compatible with either sign."""
    if a == 0 or b == 0:
        return True
    return _sign(a) != _sign(b)


def leans_compatible(a: float, b: float, exemption: float) -> bool:
    """Clearly partisan states must lean to opposite parties.

    A state whose ``|lean|`` is within *exemption* is near-neutral and never
    blocks a match.
    """
    if abs(a) <= exemption or abs(b) <= exemption:
        return True
    return _sign(a) != _sign(b)


def sizes_compatible(a: int, b: int, max_ratio: float) -> bool:
    low, high = sorted((a, b))
    if low <= 0:
        return False
    return high / low <= max_ratio + FLOAT_EPSILON


def delta_sum(focal: MatchSubject, other: MatchSubject) -> int | None:
    if focal.delta is None or other.delta is None:
        return None
    return focal.delta + other.delta


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


class MatchPolicy(Protocol):
    name: str
    requires_delta: bool
    """When ``True`` a focal state without a delta has no candidates."""

    def rejection(self, focal: MatchSubject, other: MatchSubject) -> Rejection | None: ...

    def score(self, focal: MatchSubject, other: MatchSubject) -> float: ...

    def strength(self, focal: MatchSubject, other: MatchSubject) -> MatchStrength: ...


def _common_rejection(focal: MatchSubject, other: MatchSubject) -> Rejection | None:
    if focal.state_id == other.state_id:
        return Rejection.SAME_STATE
    if focal.districts <= 1 or other.districts <= 1:
        return Rejection.SINGLE_DISTRICT
    return None


def accepts(policy: MatchPolicy, focal: MatchSubject, other: MatchSubject) -> bool:
    return policy.rejection(focal, other) is None


def sort_key(policy: MatchPolicy, focal: MatchSubject, other: MatchSubject) -> tuple[float, int, str]:
    """Closest match first, then closest district count, then state id."""
    return (
        policy.score(focal, other),
        abs(focal.districts - other.districts),
        other.state_id,
    )


@dataclasses.dataclass(frozen=True)
class BalanceDeltaPolicy:
    """Pairs whose enacted-vs-alternate seat deltas cancel nationally."""

    tolerances: MatchTolerances = CANONICAL_TOLERANCES
    name: str = "balance_delta"
    requires_delta: bool = True

    def rejection(self, focal: MatchSubject, other: MatchSubject) -> Rejection | None:
        common = _common_rejection(focal, other)
        if common is not None:
            return common
        if focal.delta is None or other.delta is None:
            return Rejection.NO_DATA
        if not deltas_opposed(focal.delta, other.delta):
            return Rejection.SAME_DELTA_SIGN
        if not leans_compatible(
            focal.profile.partisan_lean,
            other.profile.partisan_lean,
            self.tolerances.lean_exemption,
        ):
            return Rejection.SAME_PARTY
        if not sizes_compatible(focal.districts, other.districts, self.tolerances.max_district_ratio):
            return Rejection.SIZE_MISMATCH
        if abs(focal.delta + other.delta) > self.tolerances.max_delta_sum:
            return Rejection.NO_CANCELLATION
        return None

    def score(self, focal: MatchSubject, other: MatchSubject) -> float:
        total = delta_sum(focal, other)
        return float("inf") if total is None else float(abs(total))

    def strength(self, focal: MatchSubject, other: MatchSubject) -> MatchStrength:
        if self.score(focal, other) <= self.tolerances.strong_delta_sum:
            return MatchStrength.STRONG
        return MatchStrength.STANDARD


@dataclasses.dataclass(frozen=True)
class EfficiencyGapPolicy:
    """Similar district count, opposite efficiency-gap sign, similar magnitude."""

    tolerances: EfficiencyGapTolerances = EFFICIENCY_GAP_TOLERANCES
    name: str = "efficiency_gap"
    requires_delta: bool = False

    def rejection(self, focal: MatchSubject, other: MatchSubject) -> Rejection | None:
        common = _common_rejection(focal, other)
        if common is not None:
            return common
        if abs(focal.districts - other.districts) > self.tolerances.max_district_difference:
            return Rejection.DISTRICT_DIFFERENCE
        if _sign(focal.profile.efficiency_gap) == _sign(other.profile.efficiency_gap):
            return Rejection.SAME_GAP_SIGN
        if self.score(focal, other) > self.tolerances.max_gap_difference + FLOAT_EPSILON:
            return Rejection.GAP_MAGNITUDE
        return None

    def score(self, focal: MatchSubject, other: MatchSubject) -> float:
        return abs(abs(focal.profile.efficiency_gap) - abs(other.profile.efficiency_gap))

    def strength(self, focal: MatchSubject, other: MatchSubject) -> MatchStrength:
        if self.score(focal, other) <= self.tolerances.strong_gap_difference + FLOAT_EPSILON:
            return MatchStrength.STRONG
        return MatchStrength.STANDARD


POLICIES: dict[str, Callable[[], MatchPolicy]] = {
    "balance_delta": BalanceDeltaPolicy,
    "efficiency_gap": EfficiencyGapPolicy,
}


def get_policy(name: str) -> MatchPolicy:
    """Instantiate a registered policy with its default tolerances."""
    factory = POLICIES.get(name.strip().lower())
    if factory is None:
        raise TruceConfigError(
            f"unknown match policy {name!r}; expected one of {sorted(POLICIES)}",
            field="match_policy",
        )
    return factory()


# ---------------------------------------------------------------------------
# Reform-pathway filters
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class PathwayFilters:
    """Optional post-filters on the reform pathways both states share."""

    require_shared_veto: bool = False
    require_shared_ballot: bool = False

    def rejection(self, focal: StateProfile, other: StateProfile) -> Rejection | None:
        if self.require_shared_veto and not (focal.governor_can_veto and other.governor_can_veto):
            return Rejection.NO_SHARED_VETO
        if self.require_shared_ballot and not (focal.has_ballot_initiative and other.has_ballot_initiative):
            return Rejection.NO_SHARED_BALLOT
        return None
