"""High-level synchronous engine for the presentation layer."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from gerrytruce.config import TruceConfig
from gerrytruce.ingestion.tables import DistrictTable, StateTable, parse_district_rows, parse_state_rows, read_csv_rows
from gerrytruce.layout import DEFAULT_LAYOUT, LayoutConfig, StateGroup, plan_layout, state_groups
from gerrytruce.matching.engine import MatchingEngine
from gerrytruce.matching.policy import PathwayFilters, Rejection, get_policy
from gerrytruce.models.diagnostics import Diagnostic
from gerrytruce.models.layout import PairLayout
from gerrytruce.models.match import MatchCandidate, MatchEligibility, MatchPair
from gerrytruce.models.seats import SeatCounts
from gerrytruce.models.state import MapVariant, StateProfile
from gerrytruce.models.truce import NationalTotals, TruceAdjustment
from gerrytruce.store.store import AggregateStore
from gerrytruce.truce.adjust import compute_truce_adjustment, national_totals
from gerrytruce.truce.selection import PairSelection

_logger = logging.getLogger(__name__)


def _upper_ids(ids: Iterable[str] | None) -> list[str] | None:
    return None if ids is None else sorted({state_id.strip().upper() for state_id in ids})


class TruceEngine:
    """Match, adjust and lay out truce pairs over one immutable snapshot.

    Usage::

        engine = TruceEngine.from_csv("states.csv", {MapVariant.ENACTED: "enacted.csv", ...})
        partners = engine.find_matches("TX")
        result = engine.adjust([("TX", "IL")])

    Every method is pure with respect to the snapshot: recomputation is a
    fresh call with new arguments.
    """

    def __init__(
        self,
        store: AggregateStore,
        config: TruceConfig | None = None,
        *,
        diagnostics: Iterable[Diagnostic] = (),
    ) -> None:
        self._store = store
        self._config = config if config is not None else TruceConfig()
        self._extra_diagnostics = tuple(diagnostics)
        self._matcher = MatchingEngine(
            store,
            alternate=self._config.alternate_variant,
            era=self._config.district_era,
            policy=get_policy(self._config.match_policy),
            filters=PathwayFilters(
                require_shared_veto=self._config.require_shared_veto,
                require_shared_ballot=self._config.require_shared_ballot,
            ),
        )
        if not store.table(self._config.alternate_variant):
            _logger.warning("No %s map data loaded; every state will lack a delta", self._config.alternate_variant)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_tables(
        cls,
        states: StateTable | Iterable[StateProfile],
        district_tables: Iterable[DistrictTable],
        config: TruceConfig | None = None,
    ) -> TruceEngine:
        config = config if config is not None else TruceConfig()
        extra: tuple[Diagnostic, ...] = ()
        if isinstance(states, StateTable):
            extra = states.diagnostics
            profiles: Iterable[StateProfile] = states.states
        else:
            profiles = states
        store = AggregateStore.build(profiles, district_tables, threshold=config.safe_seat_threshold)
        return cls(store, config, diagnostics=extra)

    @classmethod
    def from_csv(
        cls,
        states_path: str | Path,
        district_paths: Mapping[MapVariant, str | Path],
        config: TruceConfig | None = None,
    ) -> TruceEngine:
        """Load the summary table and one lean table per map variant."""
        config = config if config is not None else TruceConfig()
        state_table = parse_state_rows(read_csv_rows(states_path), lean_sign=config.state_lean_sign)
        tables = [parse_district_rows(read_csv_rows(path), variant) for variant, path in district_paths.items()]
        return cls.from_tables(state_table, tables, config)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    @property
    def config(self) -> TruceConfig:
        return self._config

    @property
    def store(self) -> AggregateStore:
        return self._store

    @property
    def matcher(self) -> MatchingEngine:
        return self._matcher

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self._extra_diagnostics + self._store.diagnostics

    def baseline(self) -> Mapping[str, SeatCounts]:
        return self._store.table(MapVariant.ENACTED)

    def baseline_totals(self) -> NationalTotals:
        return national_totals(self.baseline())

    def groups(self) -> list[StateGroup]:
        return state_groups(self._store.profiles, self._config.district_era)

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def find_matches(self, focal_id: str, universe: Iterable[str] | None = None) -> list[MatchCandidate]:
        return self._matcher.find_matches(focal_id.upper(), _upper_ids(universe))

    def explain(self, focal_id: str, other_id: str) -> Rejection | None:
        return self._matcher.rejection(focal_id.upper(), other_id.upper())

    def eligibility(self, state_id: str, universe: Iterable[str] | None = None) -> MatchEligibility:
        return self._matcher.eligibility(state_id.upper(), _upper_ids(universe))

    def all_pairs(self, universe: Iterable[str] | None = None) -> list[MatchPair]:
        return self._matcher.all_pairs(_upper_ids(universe))

    def delta(self, state_id: str) -> int | None:
        return self._matcher.delta(state_id.upper())

    def minority_seat_gain(self, state_id: str) -> int | None:
        return self._matcher.minority_seat_gain(state_id.upper())

    # ------------------------------------------------------------------
    # Truce adjustment
    # ------------------------------------------------------------------

    def new_selection(self) -> PairSelection:
        return PairSelection(mode=self._config.pair_selection)

    def adjust(self, pairs: PairSelection | Iterable[MatchPair | tuple[str, str]]) -> TruceAdjustment:
        selected = pairs.pairs if isinstance(pairs, PairSelection) else pairs
        return compute_truce_adjustment(
            self.baseline(),
            self._store.table(self._config.alternate_variant),
            selected,
        )

    def adjusted_totals(self, pairs: PairSelection | Iterable[MatchPair | tuple[str, str]]) -> NationalTotals:
        return national_totals(self.adjust(pairs).per_state)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def layout(
        self,
        subset: Iterable[str] | None = None,
        matches: Iterable[MatchPair | tuple[str, str]] | None = None,
        *,
        selected: PairSelection | Iterable[MatchPair | tuple[str, str]] = (),
        config: LayoutConfig | None = None,
    ) -> PairLayout:
        """Plan the two-column pair graph for *subset* (all states by default).

        When *matches* is omitted every accepted pair within the subset is
        drawn.
        """
        ids = _upper_ids(subset)
        profiles = [profile for profile in self._store.profiles if ids is None or profile.id in ids]
        if matches is None:
            matches = self.all_pairs(ids)
        chosen = selected.pairs if isinstance(selected, PairSelection) else selected
        return plan_layout(
            profiles,
            matches,
            era=self._config.district_era,
            selected=chosen,
            config=config if config is not None else DEFAULT_LAYOUT,
        )
