"""Immutable per-state, per-variant seat-count store.

This is the only component that owns :class:`SeatCounts`. Matching and
truce adjustment read from it and never mutate it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from gerrytruce._constants import SAFE_SEAT_THRESHOLD
from gerrytruce.classify import categorize_leans
from gerrytruce.ingestion.tables import DistrictTable, district_table_from_leans
from gerrytruce.models.diagnostics import Diagnostic, DiagnosticKind
from gerrytruce.models.seats import SeatCounts
from gerrytruce.models.state import MapVariant, StateProfile
from gerrytruce.store.checks import check_seat_counts, duplicate_variant, missing_variant

_logger = logging.getLogger(__name__)


class AggregateStore:
    """Lookup from ``(state id, variant)`` to :class:`SeatCounts`.

    Built once via :meth:`build`; every accessor returns read-only views.
    A missing ``(state, variant)`` entry is reported as ``None``, never as
    zero counts, so callers must branch on availability.
    """

    def __init__(
        self,
        profiles: Mapping[str, StateProfile],
        tables: Mapping[MapVariant, Mapping[str, SeatCounts]],
        *,
        diagnostics: Iterable[Diagnostic] = (),
        threshold: int = SAFE_SEAT_THRESHOLD,
    ) -> None:
        self._profiles: Mapping[str, StateProfile] = MappingProxyType(dict(profiles))
        self._tables: Mapping[MapVariant, Mapping[str, SeatCounts]] = MappingProxyType(
            {variant: MappingProxyType(dict(table)) for variant, table in tables.items()}
        )
        self._diagnostics: tuple[Diagnostic, ...] = tuple(diagnostics)
        self._threshold = threshold

    @classmethod
    def build(
        cls,
        states: Iterable[StateProfile],
        district_tables: Iterable[DistrictTable],
        *,
        threshold: int = SAFE_SEAT_THRESHOLD,
    ) -> AggregateStore:
        """Classify every district table and validate the bucket sums.

        Mismatches between a bucket sum and the state's official district
        count are recorded as diagnostics (alternate-map data may still be
        incomplete for some states) and do not prevent construction.
        """
        profiles = {state.id: state for state in states}
        tables: dict[MapVariant, dict[str, SeatCounts]] = {}
        diagnostics: list[Diagnostic] = []

        for district_table in district_tables:
            variant = district_table.variant
            diagnostics.extend(district_table.diagnostics)
            table = tables.setdefault(variant, {})
            for state_id in district_table.states:
                leans = district_table.leans_for(state_id) or []
                counts = categorize_leans(leans, threshold)
                if state_id in table:
                    diagnostics.append(duplicate_variant(state_id, variant))
                    _logger.warning("Duplicate %s district data for %s; later table wins", variant, state_id)
                table[state_id] = counts

                profile = profiles.get(state_id)
                if profile is None:
                    diagnostics.append(missing_variant(state_id, variant, "no state summary row"))
                    _logger.debug("District data for %s (%s) has no state summary", state_id, variant)
                    continue
                mismatch = check_seat_counts(profile, variant, counts)
                if mismatch is not None:
                    diagnostics.append(mismatch)
                    _logger.warning("Seat-count mismatch: %s", mismatch.message)

        tables.setdefault(MapVariant.ENACTED, {})
        for variant, table in tables.items():
            for state_id, profile in profiles.items():
                if state_id in table:
                    continue
                # At-large states have no alternate plans to draw.
                if variant.is_alternate and profile.districts_for(variant.era) <= 1:
                    continue
                diagnostics.append(missing_variant(state_id, variant))
                _logger.debug("No %s data for %s", variant, state_id)

        return cls(profiles, tables, diagnostics=diagnostics, threshold=threshold)

    @classmethod
    def from_leans(
        cls,
        states: Iterable[StateProfile],
        leans: Mapping[MapVariant, Mapping[str, Iterable[int]]],
        *,
        threshold: int = SAFE_SEAT_THRESHOLD,
    ) -> AggregateStore:
        """Convenience constructor from already-signed leans per variant."""
        tables = [district_table_from_leans(variant, per_state) for variant, per_state in leans.items()]
        return cls.build(states, tables, threshold=threshold)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def variants(self) -> tuple[MapVariant, ...]:
        return tuple(sorted(self._tables, key=list(MapVariant).index))

    @property
    def profiles(self) -> tuple[StateProfile, ...]:
        return tuple(self._profiles[state_id] for state_id in sorted(self._profiles))

    @property
    def state_ids(self) -> tuple[str, ...]:
        return tuple(sorted(self._profiles))

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self._diagnostics

    def diagnostics_of(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [diag for diag in self._diagnostics if diag.kind is kind]

    def profile(self, state_id: str) -> StateProfile | None:
        return self._profiles.get(state_id)

    def lookup(self, state_id: str, variant: MapVariant) -> SeatCounts | None:
        """Seat counts for ``(state_id, variant)`` or ``None`` when unavailable."""
        table = self._tables.get(variant)
        if table is None:
            return None
        return table.get(state_id)

    def has(self, state_id: str, variant: MapVariant) -> bool:
        return self.lookup(state_id, variant) is not None

    def table(self, variant: MapVariant) -> Mapping[str, SeatCounts]:
        """Read-only ``state_id -> SeatCounts`` view; empty when unknown."""
        return self._tables.get(variant, MappingProxyType({}))
