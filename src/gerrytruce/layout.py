"""Pair layout planner.

Places states in two columns (Democratic-leaning left, Republican-leaning
right), stacks them in bands by district count, and routes a cubic
connector between every visible matched pair. Output is raw coordinates
only; drawing is left to the caller.
"""

from __future__ import annotations

import dataclasses
import math
import zlib
from collections import defaultdict
from collections.abc import Iterable

from gerrytruce._constants import BIG_STATE_MIN_DISTRICTS, SINGLE_DISTRICT, ZERO_LEAN_SIDES
from gerrytruce.models._base import TruceBaseModel
from gerrytruce.models.layout import Column, Connector, DistrictBand, PairLayout, Point, PositionedState
from gerrytruce.models.match import MatchPair
from gerrytruce.models.state import DistrictEra, StateProfile
from gerrytruce.truce.adjust import normalize_pairs


@dataclasses.dataclass(frozen=True)
class LayoutConfig:
    """Geometry constants, in canvas units.

    Parameters
    ----------
    left_x, right_x : float
        Column x-coordinates where connectors attach. Left boxes extend
        leftwards from ``left_x``, right boxes rightwards from ``right_x``.
    box_width : float
        Width of a state box.
    header_height : float
        Height of the name/lean header inside a box.
    square_size, square_gap : float
        Seat-grid cell size and spacing; they drive the box height.
    inner_gap : float
        Vertical gap between boxes inside a band.
    group_gap : float
        Vertical gap between bands.
    top_padding, bottom_padding : float
        Canvas padding above the first and below the last band.
    """

    left_x: float = 145.0
    right_x: float = 235.0
    box_width: float = 110.0
    header_height: float = 19.0
    square_size: float = 5.0
    square_gap: float = 0.5
    inner_gap: float = 3.0
    group_gap: float = 8.0
    top_padding: float = 8.0
    bottom_padding: float = 8.0

    @property
    def square_pitch(self) -> float:
        return self.square_size + self.square_gap

    @property
    def control_x(self) -> float:
        return (self.left_x + self.right_x) / 2


DEFAULT_LAYOUT = LayoutConfig()


def grid_rows(districts: int) -> int:
    """Seat-grid rows for a state: ``max(2, round(sqrt(districts / 2)))``."""
    return max(2, math.floor(math.sqrt(districts * 0.5) + 0.5))


def box_height(districts: int, config: LayoutConfig = DEFAULT_LAYOUT) -> float:
    squares = grid_rows(districts) * config.square_pitch - config.square_gap
    return config.header_height + squares + 4


def column_for(state: StateProfile) -> Column:
    """Column of a state; an exactly even lean gets a fixed side."""
    if state.partisan_lean < 0:
        return Column.LEFT
    if state.partisan_lean > 0:
        return Column.RIGHT
    pinned = ZERO_LEAN_SIDES.get(state.id)
    if pinned is not None:
        return Column(pinned)
    if state.efficiency_gap < 0:
        return Column.LEFT
    if state.efficiency_gap > 0:
        return Column.RIGHT
    return Column.LEFT if zlib.crc32(state.id.encode("ascii", "replace")) % 2 == 0 else Column.RIGHT


def plan_layout(
    states: Iterable[StateProfile],
    matches: Iterable[MatchPair | tuple[str, str]] = (),
    *,
    era: DistrictEra = DistrictEra.CURRENT,
    selected: Iterable[MatchPair | tuple[str, str]] = (),
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> PairLayout:
    unique = {state.id: state for state in states}
    columns: dict[Column, dict[int, list[StateProfile]]] = {
        Column.LEFT: defaultdict(list),
        Column.RIGHT: defaultdict(list),
    }
    for state in sorted(unique.values(), key=lambda s: (s.name, s.id)):
        columns[column_for(state)][state.districts_for(era)].append(state)

    counts = sorted({districts for groups in columns.values() for districts in groups}, reverse=True)

    bands: list[DistrictBand] = []
    positions: dict[str, PositionedState] = {}
    current_y = config.top_padding
    for districts in counts:
        left = columns[Column.LEFT].get(districts, [])
        right = columns[Column.RIGHT].get(districts, [])
        height = box_height(districts, config)
        widest = max(len(left), len(right))
        allocated = widest * height + (widest - 1) * config.inner_gap
        bands.append(
            DistrictBand(
                districts=districts,
                top=current_y,
                height=allocated,
                left_count=len(left),
                right_count=len(right),
            )
        )

        for column, members in ((Column.LEFT, left), (Column.RIGHT, right)):
            if not members:
                continue
            used = len(members) * height + (len(members) - 1) * config.inner_gap
            offset = (allocated - used) / 2
            anchor = config.left_x if column is Column.LEFT else config.right_x
            box_x = anchor - config.box_width if column is Column.LEFT else anchor
            for index, state in enumerate(members):
                positions[state.id] = PositionedState(
                    state_id=state.id,
                    column=column,
                    districts=districts,
                    x=box_x,
                    y=current_y + offset + index * (height + config.inner_gap),
                    width=config.box_width,
                    height=height,
                    anchor_x=anchor,
                )
        current_y += allocated + config.group_gap

    total_height = (current_y - config.group_gap if counts else current_y) + config.bottom_padding

    chosen = set(normalize_pairs(selected))
    connectors: list[Connector] = []
    for pair in normalize_pairs(matches):
        start_pos = positions.get(pair.first)
        end_pos = positions.get(pair.second)
        if start_pos is None or end_pos is None:
            continue
        connectors.append(
            Connector(
                from_state=pair.first,
                to_state=pair.second,
                start=Point(x=start_pos.anchor_x, y=start_pos.center_y),
                control1=Point(x=config.control_x, y=start_pos.center_y),
                control2=Point(x=config.control_x, y=end_pos.center_y),
                end=Point(x=end_pos.anchor_x, y=end_pos.center_y),
                selected=pair in chosen,
            )
        )

    return PairLayout(positions=positions, connectors=connectors, bands=bands, total_height=total_height)


class StateGroup(TruceBaseModel):
    key: str
    label: str
    description: str
    states: tuple[StateProfile, ...] = ()


def state_groups(states: Iterable[StateProfile], era: DistrictEra = DistrictEra.CURRENT) -> list[StateGroup]:
    """Split states into the big four, mid/small states and at-large states."""
    big: list[StateProfile] = []
    mid_small: list[StateProfile] = []
    single: list[StateProfile] = []
    for state in sorted(states, key=lambda s: (s.name, s.id)):
        districts = state.districts_for(era)
        if districts >= BIG_STATE_MIN_DISTRICTS:
            big.append(state)
        elif districts > SINGLE_DISTRICT:
            mid_small.append(state)
        else:
            single.append(state)
    return [
        StateGroup(
            key="big",
            label="The Big Four",
            description=f"States with {BIG_STATE_MIN_DISTRICTS} or more congressional districts.",
            states=tuple(big),
        ),
        StateGroup(
            key="mid_small",
            label="Mid & Small States",
            description=f"States with 2 to {BIG_STATE_MIN_DISTRICTS - 1} districts.",
            states=tuple(mid_small),
        ),
        StateGroup(
            key="single",
            label="Single-District States",
            description="At-large states cannot be gerrymandered and are never matched.",
            states=tuple(single),
        ),
    ]
