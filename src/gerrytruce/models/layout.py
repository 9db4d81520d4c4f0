"""Pair layout output models (raw coordinates, no rendering primitives)."""

from __future__ import annotations

import enum

from gerrytruce.models._base import TruceBaseModel


class Column(enum.StrEnum):
    LEFT = "left"
    """Democratic-leaning states."""
    RIGHT = "right"
    """Republican-leaning states."""


class Point(TruceBaseModel):
    x: float
    y: float


class PositionedState(TruceBaseModel):
    """Box placement of one state."""

    state_id: str
    column: Column
    districts: int
    x: float
    """Left edge of the box."""
    y: float
    """Top edge of the box."""
    width: float
    height: float
    anchor_x: float
    """Column x-coordinate connectors attach to."""

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


class Connector(TruceBaseModel):
    """Cubic Bézier between two positioned states."""

    from_state: str
    to_state: str
    start: Point
    control1: Point
    control2: Point
    end: Point
    selected: bool = False

    @property
    def path(self) -> str:
        """SVG path data, ``M x y C c1x c1y, c2x c2y, x y``."""
        return (
            f"M {self.start.x:g} {self.start.y:g} "
            f"C {self.control1.x:g} {self.control1.y:g}, "
            f"{self.control2.x:g} {self.control2.y:g}, "
            f"{self.end.x:g} {self.end.y:g}"
        )


class DistrictBand(TruceBaseModel):
    """Vertical band shared by all states with one district count."""

    districts: int
    top: float
    height: float
    left_count: int
    right_count: int


class PairLayout(TruceBaseModel):
    positions: dict[str, PositionedState]
    connectors: list[Connector]
    bands: list[DistrictBand]
    total_height: float

    def column(self, column: Column) -> list[PositionedState]:
        """States of *column* from top to bottom."""
        items = [pos for pos in self.positions.values() if pos.column is column]
        return sorted(items, key=lambda pos: (pos.y, pos.state_id))
