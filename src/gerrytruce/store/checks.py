"""Construction-time consistency checks.

This module intentionally contains *no* parsing. It compares already
classified seat counts with the authoritative district counts and reports
mismatches as diagnostics; the store decides how to log them.
"""

from __future__ import annotations

from gerrytruce.models.diagnostics import Diagnostic, DiagnosticKind
from gerrytruce.models.seats import SeatCounts
from gerrytruce.models.state import MapVariant, StateProfile


def check_seat_counts(profile: StateProfile, variant: MapVariant, counts: SeatCounts) -> Diagnostic | None:
    """Compare a bucket sum with the state's seat count for the variant's era."""
    expected = profile.districts_for(variant.era)
    if counts.districts == expected:
        return None
    return Diagnostic(
        kind=DiagnosticKind.INVARIANT_VIOLATION,
        message=f"{profile.id} {variant.value}: {counts.districts} classified districts, expected {expected}",
        state_id=profile.id,
        variant=variant.value,
    )


def missing_variant(state_id: str, variant: MapVariant, reason: str = "no district data") -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.MISSING_DATA,
        message=f"{state_id} {variant.value}: {reason}",
        state_id=state_id,
        variant=variant.value,
    )


def duplicate_variant(state_id: str, variant: MapVariant) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.MALFORMED_INPUT,
        message=f"{state_id} {variant.value}: district data supplied by more than one table, later table wins",
        state_id=state_id,
        variant=variant.value,
    )
