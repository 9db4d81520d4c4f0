"""Efficiency gap and partisan lean from district vote totals."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import AliasChoices, Field, ValidationError, field_validator

from gerrytruce.ingestion.normalize import safe_float, safe_int
from gerrytruce.models._base import TruceBaseModel

_logger = logging.getLogger(__name__)


class DistrictVotes(TruceBaseModel):
    """Two-party House vote estimate for one district.

    Parameters
    ----------
    state_id : str
        Two-letter state abbreviation.
    votes_dem, votes_rep : int
        Estimated two-party votes (uncontested races use estimates).
    dpres : float or None
        Democratic share of the presidential vote, in percent.
    """

    state_id: str = Field(validation_alias=AliasChoices("state_id", "stateId", "stateabrev", "state"))
    votes_dem: int = Field(ge=0, validation_alias=AliasChoices("votes_dem", "votesDem", "votes_dem_est"))
    votes_rep: int = Field(ge=0, validation_alias=AliasChoices("votes_rep", "votesRep", "votes_rep_est"))
    dpres: float | None = None

    @field_validator("state_id", mode="before")
    @classmethod
    def _normalize_state(cls, value: Any) -> str:
        return str(value).strip().upper()

    @field_validator("votes_dem", "votes_rep", mode="before")
    @classmethod
    def _coerce_votes(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("dpres", mode="before")
    @classmethod
    def _coerce_dpres(cls, value: Any) -> float | None:
        return safe_float(value)

    @property
    def total(self) -> int:
        return self.votes_dem + self.votes_rep


def wasted_votes(district: DistrictVotes) -> tuple[int, int]:
    """Return ``(wasted_dem, wasted_rep)`` for one district.

    The winner wastes every vote above ``floor(total / 2) + 1``; the loser
    wastes all of its votes. A tie is scored as a Republican win.
    """
    threshold = district.total // 2 + 1
    if district.votes_dem > district.votes_rep:
        return district.votes_dem - threshold, district.votes_rep
    return district.votes_dem, district.votes_rep - threshold


def efficiency_gap(districts: Iterable[DistrictVotes]) -> float:
    """Signed efficiency gap; positive means a Republican advantage.

    ``(wasted_dem - wasted_rep) / total_votes``. Single-district states and
    inputs without votes return ``0.0``.
    """
    rows = list(districts)
    if len(rows) <= 1:
        return 0.0
    wasted_dem = wasted_rep = total = 0
    for row in rows:
        dem, rep = wasted_votes(row)
        wasted_dem += dem
        wasted_rep += rep
        total += row.total
    if total == 0:
        return 0.0
    return (wasted_dem - wasted_rep) / total


def partisan_lean(districts: Iterable[DistrictVotes]) -> float | None:
    """Vote-weighted presidential lean; positive = Republican.

    Computed as ``50 - weighted_mean(dpres)``. Districts without a
    presidential share are ignored; ``None`` when none carry one.
    """
    weighted = 0.0
    total = 0
    for row in districts:
        if row.dpres is None:
            continue
        weighted += row.dpres * row.total
        total += row.total
    if total == 0:
        return None
    return 50.0 - weighted / total


def state_metrics(rows: Iterable[Mapping[str, Any]]) -> dict[str, tuple[float, float | None]]:
    """Group vote rows by state and return ``{state: (efficiency_gap, lean)}``.

    Rows that do not validate (missing vote counts) are skipped.
    """
    by_state: dict[str, list[DistrictVotes]] = defaultdict(list)
    for row in rows:
        try:
            votes = DistrictVotes.model_validate(dict(row))
        except ValidationError:
            _logger.debug("Skipping vote row without usable counts: %r", row)
            continue
        by_state[votes.state_id].append(votes)
    return {
        state_id: (efficiency_gap(districts), partisan_lean(districts))
        for state_id, districts in sorted(by_state.items())
    }
