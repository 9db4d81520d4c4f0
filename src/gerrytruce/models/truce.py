"""Nationwide aggregate and truce-adjustment result models."""

from __future__ import annotations

from pydantic import Field

from gerrytruce._constants import MAJORITY, TOTAL_SEATS
from gerrytruce.models._base import TruceBaseModel
from gerrytruce.models.match import MatchPair
from gerrytruce.models.seats import SeatCounts


class NationalTotals(TruceBaseModel):
    """Per-bucket sum across all states of one seat table."""

    seats: SeatCounts
    majority: int = MAJORITY

    @property
    def total_seats(self) -> int:
        return self.seats.districts

    @property
    def competitive_seats(self) -> int:
        return self.seats.competitive_seats

    @property
    def safe_seats(self) -> int:
        return self.seats.safe_seats

    @property
    def is_complete(self) -> bool:
        """``True`` when the table covers the whole House."""
        return self.total_seats == TOTAL_SEATS

    def share(self, count: int) -> float:
        """Fraction of the House represented by *count* seats."""
        return count / TOTAL_SEATS


class TruceAdjustment(TruceBaseModel):
    """Result of substituting alternate maps for matched states."""

    per_state: dict[str, SeatCounts]
    competitive_seats_added: int
    pairs: tuple[MatchPair, ...] = ()
    substituted: tuple[str, ...] = Field(default=())
    """States whose alternate-map counts replaced the baseline."""
    fallback: tuple[str, ...] = Field(default=())
    """Paired states kept at baseline because no alternate map exists."""
