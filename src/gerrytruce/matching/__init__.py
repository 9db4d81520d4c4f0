"""Matching engine and swappable match policies."""

from gerrytruce.matching.engine import MatchingEngine
from gerrytruce.matching.policy import (
    CANONICAL_TOLERANCES,
    EFFICIENCY_GAP_TOLERANCES,
    POLICIES,
    BalanceDeltaPolicy,
    EfficiencyGapPolicy,
    EfficiencyGapTolerances,
    MatchPolicy,
    MatchSubject,
    MatchTolerances,
    PathwayFilters,
    Rejection,
    get_policy,
)

__all__ = [
    "BalanceDeltaPolicy",
    "CANONICAL_TOLERANCES",
    "EFFICIENCY_GAP_TOLERANCES",
    "EfficiencyGapPolicy",
    "EfficiencyGapTolerances",
    "MatchPolicy",
    "MatchSubject",
    "MatchTolerances",
    "MatchingEngine",
    "POLICIES",
    "PathwayFilters",
    "Rejection",
    "get_policy",
]
