"""District classifier.

Converts signed district leans into the five competitiveness buckets and
sums them into per-state :class:`~gerrytruce.models.SeatCounts`.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from typing import Any

from gerrytruce._constants import SAFE_SEAT_THRESHOLD
from gerrytruce.ingestion.normalize import parse_lean, split_district_key
from gerrytruce.models.seats import Bucket, DistrictLean, SeatCounts

_logger = logging.getLogger(__name__)


def classify_lean(lean: int | float, threshold: int = SAFE_SEAT_THRESHOLD) -> Bucket:
    """Bucket a signed lean. Both safe boundaries are inclusive."""
    if lean >= threshold:
        return Bucket.SAFE_R
    if lean <= -threshold:
        return Bucket.SAFE_D
    if lean > 0:
        return Bucket.LEAN_R
    if lean < 0:
        return Bucket.LEAN_D
    return Bucket.EVEN


def classify_encoded(value: Any, threshold: int = SAFE_SEAT_THRESHOLD) -> Bucket:
    """Bucket a raw lean cell; a malformed encoding counts as even."""
    lean = parse_lean(value)
    if lean is None:
        _logger.debug("Unparseable lean %r treated as EVEN", value)
        lean = 0
    return classify_lean(lean, threshold)


def categorize_leans(leans: Iterable[int | float], threshold: int = SAFE_SEAT_THRESHOLD) -> SeatCounts:
    """Sum bucket counts over one state's districts."""
    counts = Counter(classify_lean(lean, threshold) for lean in leans)
    return SeatCounts(
        safe_d=counts[Bucket.SAFE_D],
        lean_d=counts[Bucket.LEAN_D],
        even=counts[Bucket.EVEN],
        lean_r=counts[Bucket.LEAN_R],
        safe_r=counts[Bucket.SAFE_R],
    )


def classify_district(
    district_id: str,
    lean: int,
    threshold: int = SAFE_SEAT_THRESHOLD,
    *,
    state_id: str | None = None,
) -> DistrictLean:
    """Classify one district; *state_id* defaults to the prefix of *district_id*."""
    if state_id is None:
        parts = split_district_key(district_id)
        state_id = parts[0] if parts is not None else district_id.strip().upper()
    return DistrictLean(
        district_id=district_id,
        state_id=state_id,
        lean=lean,
        bucket=classify_lean(lean, threshold),
    )
