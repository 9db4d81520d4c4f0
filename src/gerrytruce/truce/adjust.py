"""Truce adjustment: nationwide seat totals with matched states redrawn.

Every function here is pure. The baseline table is never mutated; the
same pair set (in any order, with duplicates) always yields the same
result.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from gerrytruce.models.match import MatchPair
from gerrytruce.models.seats import SeatCounts
from gerrytruce.models.truce import NationalTotals, TruceAdjustment


def normalize_pairs(pairs: Iterable[MatchPair | tuple[str, str] | Any]) -> tuple[MatchPair, ...]:
    """Deduplicate pairs and sort them by endpoints."""
    normalized = {pair if isinstance(pair, MatchPair) else MatchPair.model_validate(pair) for pair in pairs}
    return tuple(sorted(normalized, key=lambda pair: pair.states))


def sum_seat_counts(counts: Iterable[SeatCounts]) -> SeatCounts:
    safe_d = lean_d = even = lean_r = safe_r = 0
    for item in counts:
        safe_d += item.safe_d
        lean_d += item.lean_d
        even += item.even
        lean_r += item.lean_r
        safe_r += item.safe_r
    return SeatCounts(safe_d=safe_d, lean_d=lean_d, even=even, lean_r=lean_r, safe_r=safe_r)


def national_totals(table: Mapping[str, SeatCounts]) -> NationalTotals:
    return NationalTotals(seats=sum_seat_counts(table.values()))


def compute_truce_adjustment(
    baseline: Mapping[str, SeatCounts],
    alternate: Mapping[str, SeatCounts],
    pairs: Iterable[MatchPair | tuple[str, str]],
) -> TruceAdjustment:
    """Substitute alternate-map counts for every state in at least one pair.

    A paired state without alternate-map counts keeps its baseline counts
    and is listed in ``fallback``. ``competitive_seats_added`` is the change
    in nationwide competitive seats.
    """
    selected = normalize_pairs(pairs)
    matched = sorted({state_id for pair in selected for state_id in pair.states})

    adjusted: dict[str, SeatCounts] = {state_id: baseline[state_id] for state_id in sorted(baseline)}
    substituted: list[str] = []
    fallback: list[str] = []
    for state_id in matched:
        replacement = alternate.get(state_id)
        if replacement is None or state_id not in adjusted:
            fallback.append(state_id)
            continue
        adjusted[state_id] = replacement
        substituted.append(state_id)

    added = sum(counts.competitive_seats for counts in adjusted.values()) - sum(
        counts.competitive_seats for counts in baseline.values()
    )
    return TruceAdjustment(
        per_state=adjusted,
        competitive_seats_added=added,
        pairs=selected,
        substituted=tuple(substituted),
        fallback=tuple(fallback),
    )
