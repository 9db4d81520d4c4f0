from __future__ import annotations

import pytest
from pydantic import ValidationError

from gerrytruce.classify import categorize_leans, classify_district, classify_encoded, classify_lean
from gerrytruce.models.seats import Bucket, SeatCounts


@pytest.mark.parametrize(
    ("lean", "expected"),
    [
        (8, Bucket.SAFE_R),
        (7, Bucket.LEAN_R),
        (1, Bucket.LEAN_R),
        (0, Bucket.EVEN),
        (-1, Bucket.LEAN_D),
        (-7, Bucket.LEAN_D),
        (-8, Bucket.SAFE_D),
        (30, Bucket.SAFE_R),
    ],
)
def test_classify_lean_boundaries_are_inclusive(lean: int, expected: Bucket) -> None:
    assert classify_lean(lean) is expected


def test_classify_lean_honors_custom_threshold() -> None:
    assert classify_lean(5, threshold=5) is Bucket.SAFE_R
    assert classify_lean(-4, threshold=5) is Bucket.LEAN_D


def test_classify_encoded_parses_cook_style_strings() -> None:
    assert classify_encoded("R+12") is Bucket.SAFE_R
    assert classify_encoded("D+3") is Bucket.LEAN_D
    assert classify_encoded("EVEN") is Bucket.EVEN


def test_classify_encoded_treats_garbage_as_even() -> None:
    assert classify_encoded("R+?") is Bucket.EVEN
    assert classify_encoded(None) is Bucket.EVEN


def test_categorize_leans_sums_to_district_count() -> None:
    counts = categorize_leans([12, 8, 3, 0, -2, -9, -20])

    assert counts == SeatCounts(safe_d=2, lean_d=1, even=1, lean_r=1, safe_r=2)
    assert counts.districts == 7
    assert counts.competitive_seats + counts.safe_seats == counts.districts
    assert counts.balance == 0


def test_categorize_empty_is_all_zero() -> None:
    counts = categorize_leans([])
    assert counts.districts == 0
    assert counts.balance == 0


def test_classify_district_splits_key() -> None:
    district = classify_district("al-03", -9)
    assert district.state_id == "AL"
    assert district.bucket is Bucket.SAFE_D


class TestSeatCounts:
    def test_derived_fields_are_dumped(self) -> None:
        dumped = SeatCounts(safe_r=2, lean_d=1).model_dump()
        assert dumped["competitive_seats"] == 1
        assert dumped["safe_seats"] == 2
        assert dumped["districts"] == 3

    def test_negative_counts_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SeatCounts(safe_r=-1)

    def test_frozen(self) -> None:
        counts = SeatCounts(even=1)
        with pytest.raises(ValidationError):
            counts.even = 2  # type: ignore[misc]

    def test_party_totals(self) -> None:
        counts = SeatCounts(safe_d=1, lean_d=2, even=3, lean_r=4, safe_r=5)
        assert counts.republican_seats == 9
        assert counts.democratic_seats == 3
        assert counts.balance == 6
        assert counts.count(Bucket.EVEN) == 3
