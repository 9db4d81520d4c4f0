"""Source-table ingestion.

Turns row iterables (``csv.DictReader`` output or literal dicts) into the
immutable inputs of :class:`gerrytruce.store.AggregateStore`. A bad row is
recorded as a :class:`~gerrytruce.models.Diagnostic` and skipped or
neutralized; it never aborts the whole table.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError

from gerrytruce._constants import SAFE_SEAT_THRESHOLD
from gerrytruce.classify import classify_district
from gerrytruce.exceptions import TruceDataError
from gerrytruce.ingestion.normalize import parse_lean, safe_int, split_district_key
from gerrytruce.models._base import TruceBaseModel
from gerrytruce.models.diagnostics import Diagnostic, DiagnosticKind
from gerrytruce.models.seats import DistrictLean
from gerrytruce.models.state import LeanSign, MapVariant, StateProfile

_logger = logging.getLogger(__name__)

DISTRICT_KEY_COLUMNS = ("district", "dist", "cd", "id")
STATE_COLUMNS = ("state", "state_id", "stateid", "stateabrev")
LEAN_COLUMNS = ("lean", "pvi", "cook_pvi", "2025 cook pvi", "lean_str")


def _column(row: Mapping[str, Any], names: Iterable[str]) -> Any:
    """Case-insensitive lookup of the first matching column."""
    lowered = {str(key).strip().lower(): value for key, value in row.items() if key is not None}
    for name in names:
        if name in lowered:
            return lowered[name]
    return None


class DistrictTable(TruceBaseModel):
    """Parsed per-district leans of one map variant."""

    variant: MapVariant
    leans: dict[str, dict[str, int]] = Field(default_factory=dict)
    """``state_id -> {district_id: lean}`` in source order."""
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def states(self) -> list[str]:
        return sorted(self.leans)

    def leans_for(self, state_id: str) -> list[int] | None:
        districts = self.leans.get(state_id)
        if districts is None:
            return None
        return list(districts.values())

    def classified(self, threshold: int = SAFE_SEAT_THRESHOLD) -> list[DistrictLean]:
        return [
            classify_district(district_id, lean, threshold, state_id=state_id)
            for state_id in self.states
            for district_id, lean in self.leans[state_id].items()
        ]


class StateTable(TruceBaseModel):
    states: tuple[StateProfile, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    def by_id(self) -> dict[str, StateProfile]:
        return {state.id: state for state in self.states}


def parse_district_rows(rows: Iterable[Mapping[str, Any]], variant: MapVariant) -> DistrictTable:
    """Parse a district lean table.

    Two shapes are understood:

    - enacted tables keyed by ``"STATE-NN"`` with ``R+n`` / ``D+n`` /
      ``EVEN`` leans;
    - alternate-map tables with a ``state`` column, an optional district
      number and a signed integer lean.
    """
    leans: dict[str, dict[str, int]] = {}
    diagnostics: list[Diagnostic] = []

    for index, row in enumerate(rows):
        key = _column(row, DISTRICT_KEY_COLUMNS)
        parts = split_district_key(key)
        if parts is not None:
            state_id, number = parts
        else:
            raw_state = _column(row, STATE_COLUMNS)
            state_id = str(raw_state).strip().upper() if raw_state is not None else ""
            number_value = safe_int(key)
            number = f"{number_value:02d}" if number_value is not None else f"{len(leans.get(state_id, {})) + 1:02d}"
        if not state_id:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.MALFORMED_INPUT,
                    message=f"row {index}: no state in district key",
                    variant=variant.value,
                    source=str(key),
                )
            )
            _logger.debug("Skipping %s row %d without a state: %r", variant, index, key)
            continue

        district_id = f"{state_id}-{number}"
        raw_lean = _column(row, LEAN_COLUMNS)
        lean = parse_lean(raw_lean)
        if lean is None:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.MALFORMED_INPUT,
                    message=f"{district_id}: unparseable lean, treated as EVEN",
                    state_id=state_id,
                    variant=variant.value,
                    source=None if raw_lean is None else str(raw_lean),
                )
            )
            _logger.debug("Unparseable lean %r for %s (%s)", raw_lean, district_id, variant)
            lean = 0

        state_leans = leans.setdefault(state_id, {})
        if district_id in state_leans:
            # Keep both rows so the seat-count check sees them.
            renamed = f"{district_id}#{len(state_leans) + 1}"
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.MALFORMED_INPUT,
                    message=f"{district_id}: duplicate district key kept as {renamed}",
                    state_id=state_id,
                    variant=variant.value,
                    source=str(key),
                )
            )
            _logger.debug("Duplicate district key %s in %s table", district_id, variant)
            district_id = renamed
        state_leans[district_id] = lean

    return DistrictTable(variant=variant, leans=leans, diagnostics=tuple(diagnostics))


def district_table_from_leans(variant: MapVariant, leans: Mapping[str, Iterable[int]]) -> DistrictTable:
    """Build a table from already-signed leans, numbering districts from 1."""
    return DistrictTable(
        variant=variant,
        leans={
            state_id.upper(): {f"{state_id.upper()}-{i:02d}": int(lean) for i, lean in enumerate(values, start=1)}
            for state_id, values in leans.items()
        },
    )


def parse_state_rows(
    rows: Iterable[Mapping[str, Any]],
    *,
    strict: bool = False,
    lean_sign: LeanSign = LeanSign.DEMOCRATIC_POSITIVE,
) -> StateTable:
    """Parse the per-state summary table.

    *lean_sign* is the convention of the source's partisan-lean column.
    The default matches Cook-PVI summary tables, where a positive lean is
    Democratic; such values are negated so profiles read positive =
    Republican.

    With ``strict=True`` an invalid row raises :class:`TruceDataError`;
    otherwise it is skipped and recorded as a diagnostic.
    """
    states: dict[str, StateProfile] = {}
    diagnostics: list[Diagnostic] = []

    for index, row in enumerate(rows):
        try:
            profile = StateProfile.model_validate(dict(row))
        except ValidationError as exc:
            if strict:
                raise TruceDataError(f"invalid state row {index}: {exc.error_count()} error(s)", row=index) from exc
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.MALFORMED_INPUT,
                    message=f"row {index}: invalid state summary skipped",
                    source=str(_column(row, ("id", "state", "name"))),
                )
            )
            _logger.debug("Skipping invalid state row %d", index, exc_info=True)
            continue
        profile = profile.model_copy(
            update={"partisan_lean": lean_sign.to_republican_positive(profile.partisan_lean)}
        )
        if profile.id in states:
            if strict:
                raise TruceDataError(f"duplicate state id {profile.id}", row=index)
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.MALFORMED_INPUT,
                    message=f"row {index}: duplicate state id, later row wins",
                    state_id=profile.id,
                )
            )
        states[profile.id] = profile

    return StateTable(states=tuple(states.values()), diagnostics=tuple(diagnostics))


def read_csv_rows(path: str | Path) -> list[dict[str, str]]:
    """Read a CSV file into dict rows keyed by its header."""
    path = Path(path)
    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise TruceDataError(f"{path} has no header row")
        return [dict(row) for row in reader]
