from __future__ import annotations

import pytest

from gerrytruce.models.state import MapVariant, StateProfile
from gerrytruce.store.store import AggregateStore

SAFE = 15
LEAN = 5


def leans(*, safe_r: int = 0, safe_d: int = 0, lean_r: int = 0, lean_d: int = 0) -> list[int]:
    return [SAFE] * safe_r + [-SAFE] * safe_d + [LEAN] * lean_r + [-LEAN] * lean_d


# Small hand-checked snapshot. Balance deltas (enacted - proportional):
# TX +4, IL -4, NC +6, OH +8, FL +6, CA -6, NY +4, MI 0, NV none, WY at-large.
SMALL_STATES = [
    StateProfile(
        id="TX",
        name="Texas",
        districts=10,
        partisan_lean=10,
        efficiency_gap=0.10,
        governor_can_veto=True,
    ),
    StateProfile(
        id="IL",
        name="Illinois",
        districts=10,
        partisan_lean=-8,
        efficiency_gap=-0.07,
        governor_can_veto=True,
        has_ballot_initiative=True,
    ),
    StateProfile(
        id="NC",
        name="North Carolina",
        districts=13,
        partisan_lean=3,
        efficiency_gap=0.20,
        has_ballot_initiative=True,
    ),
    StateProfile(id="OH", name="Ohio", districts=14, partisan_lean=6, efficiency_gap=0.05),
    StateProfile(id="FL", name="Florida", districts=10, partisan_lean=7, efficiency_gap=0.12),
    StateProfile(
        id="CA",
        name="California",
        districts=12,
        partisan_lean=-12,
        efficiency_gap=-0.15,
        governor_can_veto=True,
        has_ballot_initiative=True,
    ),
    StateProfile(id="NY", name="New York", districts=11, partisan_lean=-9, efficiency_gap=-0.01),
    StateProfile(id="MI", name="Michigan", districts=13, partisan_lean=0, efficiency_gap=0.01),
    StateProfile(id="NV", name="Nevada", districts=4, partisan_lean=-1),
    StateProfile(id="WY", name="Wyoming", districts=1, partisan_lean=25),
]

SMALL_ENACTED = {
    "TX": leans(safe_r=7, safe_d=3),
    "IL": leans(safe_r=2, safe_d=8),
    "NC": leans(safe_r=10, safe_d=3),
    "OH": leans(safe_r=12, safe_d=2),
    "FL": leans(safe_r=8, safe_d=2),
    "CA": leans(safe_r=2, safe_d=10),
    "NY": leans(safe_r=5, safe_d=6),
    "MI": leans(safe_r=7, safe_d=6),
    "NV": [-3, -3, 2, -10],
    "WY": [25],
}

SMALL_PROPORTIONAL = {
    "TX": leans(lean_r=5, lean_d=5),
    "IL": leans(lean_r=4, lean_d=6),
    "NC": leans(lean_r=7, lean_d=6),
    "OH": leans(lean_r=8, lean_d=6),
    "FL": leans(lean_r=5, lean_d=5),
    "CA": leans(lean_r=5, lean_d=7),
    "NY": leans(lean_r=3, lean_d=8),
    "MI": leans(safe_r=7, safe_d=6),
}


# 2022 apportionment, 435 seats.
HOUSE_2022 = {
    "AL": 7, "AK": 1, "AZ": 9, "AR": 4, "CA": 52, "CO": 8, "CT": 5, "DE": 1, "FL": 28, "GA": 14,
    "HI": 2, "ID": 2, "IL": 17, "IN": 9, "IA": 4, "KS": 4, "KY": 6, "LA": 6, "ME": 2, "MD": 8,
    "MA": 9, "MI": 13, "MN": 8, "MS": 4, "MO": 8, "MT": 2, "NE": 3, "NV": 4, "NH": 2, "NJ": 12,
    "NM": 3, "NY": 26, "NC": 14, "ND": 1, "OH": 15, "OK": 5, "OR": 6, "PA": 17, "RI": 2, "SC": 7,
    "SD": 1, "TN": 9, "TX": 38, "UT": 4, "VT": 1, "VA": 11, "WA": 10, "WV": 2, "WI": 8, "WY": 1,
}  # fmt: skip


def _pattern(state_id: str, count: int, shift: int) -> list[int]:
    seed = sum(ord(ch) for ch in state_id) + shift
    return [((seed + 7 * i) % 41) - 20 for i in range(count)]


@pytest.fixture
def small_store() -> AggregateStore:
    return AggregateStore.from_leans(
        SMALL_STATES,
        {MapVariant.ENACTED: SMALL_ENACTED, MapVariant.PROPORTIONAL: SMALL_PROPORTIONAL},
    )


@pytest.fixture
def house_states() -> list[StateProfile]:
    return [
        StateProfile(
            id=state_id,
            name=state_id,
            districts=count,
            partisan_lean=(sum(_pattern(state_id, count, 0)) / count),
        )
        for state_id, count in HOUSE_2022.items()
    ]


@pytest.fixture
def house_store(house_states: list[StateProfile]) -> AggregateStore:
    return AggregateStore.from_leans(
        house_states,
        {
            MapVariant.ENACTED: {s.id: _pattern(s.id, s.districts, 0) for s in house_states},
            MapVariant.PROPORTIONAL: {s.id: _pattern(s.id, s.districts, 3) for s in house_states if s.districts > 1},
        },
    )
