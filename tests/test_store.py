from __future__ import annotations

import pytest

from gerrytruce.ingestion.tables import district_table_from_leans
from gerrytruce.models.diagnostics import DiagnosticKind
from gerrytruce.models.seats import SeatCounts
from gerrytruce.models.state import MapVariant, StateProfile
from gerrytruce.store.store import AggregateStore


def test_lookup_returns_counts(small_store: AggregateStore) -> None:
    assert small_store.lookup("TX", MapVariant.ENACTED) == SeatCounts(safe_r=7, safe_d=3)
    assert small_store.lookup("TX", MapVariant.PROPORTIONAL) == SeatCounts(lean_r=5, lean_d=5)


def test_missing_entries_are_none_not_zero(small_store: AggregateStore) -> None:
    assert small_store.lookup("NV", MapVariant.PROPORTIONAL) is None
    assert small_store.lookup("ZZ", MapVariant.ENACTED) is None
    assert small_store.lookup("TX", MapVariant.COMPACT) is None
    assert not small_store.has("NV", MapVariant.PROPORTIONAL)


def test_missing_variant_is_diagnosed_except_for_at_large(small_store: AggregateStore) -> None:
    missing = {(d.state_id, d.variant) for d in small_store.diagnostics_of(DiagnosticKind.MISSING_DATA)}

    assert ("NV", "proportional") in missing
    assert ("WY", "proportional") not in missing


def test_seat_count_mismatch_is_recorded_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    store = AggregateStore.from_leans(
        [StateProfile(id="AZ", name="Arizona", districts=9)],
        {MapVariant.ENACTED: {"AZ": [10, 10, -10, -10, 3, -3, 1, 0]}},
    )

    violations = store.diagnostics_of(DiagnosticKind.INVARIANT_VIOLATION)
    assert len(violations) == 1
    assert violations[0].state_id == "AZ"
    assert store.lookup("AZ", MapVariant.ENACTED).districts == 8
    assert "Seat-count mismatch" in caplog.text


def test_district_data_without_summary_row() -> None:
    store = AggregateStore.from_leans([], {MapVariant.ENACTED: {"PR": [1, 2]}})

    assert store.lookup("PR", MapVariant.ENACTED) is not None
    assert store.profile("PR") is None
    assert store.diagnostics_of(DiagnosticKind.MISSING_DATA)


def test_tables_are_read_only(small_store: AggregateStore) -> None:
    table = small_store.table(MapVariant.ENACTED)

    with pytest.raises(TypeError):
        table["TX"] = SeatCounts()  # type: ignore[index]
    assert dict(small_store.table(MapVariant.COMPACT)) == {}


def test_accessors_are_sorted(small_store: AggregateStore) -> None:
    assert small_store.state_ids == tuple(sorted(small_store.state_ids))
    assert [p.id for p in small_store.profiles] == list(small_store.state_ids)
    assert small_store.variants == (MapVariant.ENACTED, MapVariant.PROPORTIONAL)


def test_house_fixture_sums_to_435(house_store: AggregateStore) -> None:
    total = sum(counts.districts for counts in house_store.table(MapVariant.ENACTED).values())
    assert total == 435
    assert not house_store.diagnostics_of(DiagnosticKind.INVARIANT_VIOLATION)


def test_second_table_for_same_variant_is_diagnosed(caplog: pytest.LogCaptureFixture) -> None:
    first = district_table_from_leans(MapVariant.ENACTED, {"CT": [-10, -10, -10, -10, -10]})
    second = district_table_from_leans(MapVariant.ENACTED, {"CT": [-3, -3, -3, -3, -3]})

    store = AggregateStore.build([StateProfile(id="CT", districts=5)], [first, second])

    duplicates = [d for d in store.diagnostics_of(DiagnosticKind.MALFORMED_INPUT) if d.state_id == "CT"]
    assert len(duplicates) == 1
    assert store.lookup("CT", MapVariant.ENACTED) == SeatCounts(lean_d=5)
    assert "Duplicate enacted district data for CT" in caplog.text
