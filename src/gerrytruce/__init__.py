"""gerrytruce - match states with equal and opposite gerrymanders."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gerrytruce")
except PackageNotFoundError:
    __version__ = "0+local"
from gerrytruce.classify import categorize_leans, classify_lean
from gerrytruce.config import TruceConfig
from gerrytruce.engine import TruceEngine
from gerrytruce.exceptions import TruceConfigError, TruceDataError, TruceError
from gerrytruce.layout import LayoutConfig, plan_layout, state_groups
from gerrytruce.matching import (
    CANONICAL_TOLERANCES,
    BalanceDeltaPolicy,
    EfficiencyGapPolicy,
    MatchingEngine,
    MatchPolicy,
    MatchTolerances,
    PathwayFilters,
    Rejection,
    get_policy,
)
from gerrytruce.models import (
    Bucket,
    Column,
    Connector,
    Diagnostic,
    DiagnosticKind,
    DistrictEra,
    MapVariant,
    MatchCandidate,
    MatchEligibility,
    MatchPair,
    MatchStrength,
    NationalTotals,
    PairLayout,
    PositionedState,
    SeatCounts,
    StateProfile,
    TruceAdjustment,
)
from gerrytruce.store import AggregateStore
from gerrytruce.truce import PairSelection, SelectionMode, compute_truce_adjustment, national_totals

__all__ = [
    "__version__",
    "AggregateStore",
    "BalanceDeltaPolicy",
    "Bucket",
    "CANONICAL_TOLERANCES",
    "Column",
    "Connector",
    "Diagnostic",
    "DiagnosticKind",
    "DistrictEra",
    "EfficiencyGapPolicy",
    "LayoutConfig",
    "MapVariant",
    "MatchCandidate",
    "MatchEligibility",
    "MatchPair",
    "MatchPolicy",
    "MatchStrength",
    "MatchTolerances",
    "MatchingEngine",
    "NationalTotals",
    "PairLayout",
    "PairSelection",
    "PathwayFilters",
    "PositionedState",
    "Rejection",
    "SeatCounts",
    "SelectionMode",
    "StateProfile",
    "TruceAdjustment",
    "TruceConfig",
    "TruceConfigError",
    "TruceDataError",
    "TruceEngine",
    "TruceError",
    "categorize_leans",
    "classify_lean",
    "compute_truce_adjustment",
    "get_policy",
    "national_totals",
    "plan_layout",
    "state_groups",
]
