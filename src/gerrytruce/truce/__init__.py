"""Truce adjustment and pair selection."""

from gerrytruce.truce.adjust import compute_truce_adjustment, national_totals, normalize_pairs, sum_seat_counts
from gerrytruce.truce.selection import PairSelection, SelectionMode

__all__ = [
    "PairSelection",
    "SelectionMode",
    "compute_truce_adjustment",
    "national_totals",
    "normalize_pairs",
    "sum_seat_counts",
]
