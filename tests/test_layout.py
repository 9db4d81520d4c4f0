from __future__ import annotations

import pytest

from gerrytruce.layout import DEFAULT_LAYOUT, box_height, column_for, grid_rows, plan_layout, state_groups
from gerrytruce.models.layout import Column
from gerrytruce.models.match import MatchPair
from gerrytruce.models.state import DistrictEra, StateProfile


def _state(state_id: str, districts: int, lean: float, name: str | None = None, **extra: object) -> StateProfile:
    return StateProfile(id=state_id, name=name or state_id, districts=districts, partisan_lean=lean, **extra)


@pytest.mark.parametrize(("districts", "rows"), [(1, 2), (4, 2), (10, 2), (18, 3), (38, 4), (52, 5)])
def test_grid_rows(districts: int, rows: int) -> None:
    assert grid_rows(districts) == rows


def test_box_height() -> None:
    assert box_height(10) == pytest.approx(33.5)
    assert box_height(52) == pytest.approx(19 + 5 * 5.5 - 0.5 + 4)


class TestColumnFor:
    def test_sign_of_lean(self) -> None:
        assert column_for(_state("IL", 17, -8)) is Column.LEFT
        assert column_for(_state("TX", 38, 10)) is Column.RIGHT

    def test_pinned_even_states(self) -> None:
        assert column_for(_state("MI", 13, 0)) is Column.RIGHT
        assert column_for(_state("WI", 8, 0)) is Column.RIGHT

    def test_even_lean_uses_efficiency_gap(self) -> None:
        assert column_for(_state("PA", 17, 0, efficiency_gap=-0.02)) is Column.LEFT
        assert column_for(_state("PA", 17, 0, efficiency_gap=0.02)) is Column.RIGHT

    def test_even_lean_without_gap_is_stable(self) -> None:
        first = column_for(_state("GA", 14, 0))
        assert all(column_for(_state("GA", 14, 0)) is first for _ in range(5))


def test_single_pair_geometry() -> None:
    layout = plan_layout([_state("TX", 10, 10), _state("IL", 10, -8)], [("TX", "IL")])

    il = layout.positions["IL"]
    tx = layout.positions["TX"]
    assert (il.column, il.x, il.y, il.width) == (Column.LEFT, 35.0, 8.0, 110.0)
    assert (tx.column, tx.x, tx.y) == (Column.RIGHT, 235.0, 8.0)
    assert il.height == pytest.approx(33.5)
    assert layout.total_height == pytest.approx(49.5)

    [connector] = layout.connectors
    assert (connector.from_state, connector.to_state) == ("IL", "TX")
    assert connector.path == "M 145 24.75 C 190 24.75, 190 24.75, 235 24.75"
    assert not connector.selected


def test_shorter_column_is_centred_in_band() -> None:
    layout = plan_layout(
        [_state("AA", 10, -5, name="Alpha"), _state("BB", 10, -6, name="Beta"), _state("CC", 10, 6, name="Gamma")]
    )

    [band] = layout.bands
    assert (band.left_count, band.right_count) == (2, 1)
    assert band.height == pytest.approx(2 * 33.5 + 3)
    assert layout.positions["AA"].y == pytest.approx(8.0)
    assert layout.positions["BB"].y == pytest.approx(8.0 + 33.5 + 3)
    assert layout.positions["CC"].y == pytest.approx(8.0 + (70.0 - 33.5) / 2)
    assert [pos.state_id for pos in layout.column(Column.LEFT)] == ["AA", "BB"]


def test_bands_descend_by_district_count() -> None:
    layout = plan_layout([_state("SM", 4, 2), _state("BG", 38, 9), _state("MD", 10, -3)])

    assert [band.districts for band in layout.bands] == [38, 10, 4]
    tops = [band.top for band in layout.bands]
    assert tops == sorted(tops)
    assert layout.bands[1].top == pytest.approx(layout.bands[0].top + layout.bands[0].height + DEFAULT_LAYOUT.group_gap)


def test_connectors_skip_hidden_states_and_flag_selection() -> None:
    layout = plan_layout(
        [_state("TX", 10, 10), _state("IL", 10, -8), _state("CA", 12, -12)],
        [("TX", "IL"), ("TX", "CA"), ("TX", "NY")],
        selected=[MatchPair.of("CA", "TX")],
    )

    assert [(c.from_state, c.to_state, c.selected) for c in layout.connectors] == [
        ("CA", "TX", True),
        ("IL", "TX", False),
    ]


def test_empty_layout() -> None:
    layout = plan_layout([])
    assert layout.positions == {}
    assert layout.total_height == pytest.approx(16.0)


def test_state_groups() -> None:
    states = [_state("CA", 52, -12), _state("TX", 38, 10), _state("OH", 15, 6), _state("WY", 1, 25)]
    big, mid_small, single = state_groups(states)

    assert [s.id for s in big.states] == ["CA", "TX"]
    assert [s.id for s in mid_small.states] == ["OH"]
    assert [s.id for s in single.states] == ["WY"]
    assert (big.key, mid_small.key, single.key) == ("big", "mid_small", "single")


def test_state_groups_follow_era() -> None:
    states = [_state("XX", 25, 1, districts_future=23)]
    big, mid_small, _ = state_groups(states, DistrictEra.PROJECTED)

    assert big.states == ()
    assert [s.id for s in mid_small.states] == ["XX"]
