"""State summary model and map-variant enums."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from gerrytruce.ingestion.normalize import safe_bool, safe_float, safe_int
from gerrytruce.models._base import TruceBaseModel, TruceEnum


class DistrictEra(enum.StrEnum):
    """Apportionment era used for district counts."""

    CURRENT = "2022"
    PROJECTED = "2032"


class MapVariant(enum.StrEnum):
    """A district plan for which per-district leans are available."""

    ENACTED = "enacted"
    PROPORTIONAL = "proportional"
    COMPETITIVE = "competitive"
    COMPACT = "compact"

    @property
    def is_alternate(self) -> bool:
        return self is not MapVariant.ENACTED

    @property
    def era(self) -> DistrictEra:
        """Apportionment era the plan was drawn for."""
        # All shipped plans (enacted and the three hypothetical ones) use the
        # 2020 census apportionment.
        return DistrictEra.CURRENT


class LeanSign(enum.StrEnum):
    """Sign convention of a source table's state partisan-lean column.

    :class:`StateProfile` always stores positive = Republican; tables in
    the other convention are negated on ingestion.
    """

    REPUBLICAN_POSITIVE = "r_positive"
    DEMOCRATIC_POSITIVE = "d_positive"
    """Cook-PVI summary tables (``partisanLean`` of +15 is D+15)."""

    def to_republican_positive(self, lean: float) -> float:
        if self is LeanSign.DEMOCRATIC_POSITIVE:
            return -lean if lean else 0.0
        return lean


class RedistrictingAuthority(TruceEnum):
    LEGISLATURE = "legislature"
    INDEPENDENT_COMMISSION = "independent_commission"
    POLITICIAN_COMMISSION = "politician_commission"
    ADVISORY_COMMISSION = "advisory_commission"
    UNKNOWN = "unknown"


class StateControl(TruceEnum):
    DEM = "dem"
    REP = "rep"
    SPLIT = "split"
    UNKNOWN = "unknown"


class StateProfile(TruceBaseModel):
    """Per-state summary row.

    Parameters
    ----------
    id : str
        Two-letter postal abbreviation, e.g. ``"CA"``.
    name : str
        Display name.
    districts : int
        Seats under the current (2022) apportionment.
    districts_future : int or None
        Projected seats after the next census (2032).
    efficiency_gap : float
        Signed fraction; positive = Republican advantage.
    partisan_lean : float
        Signed points; positive = Republican lean, negative = Democratic.
    state_control : StateControl
        Party control of the state government.
    redistricting_authority : RedistrictingAuthority
        Body that draws the congressional map.
    governor_can_veto : bool
        Reform pathway: the governor can veto a legislative map.
    has_ballot_initiative : bool
        Reform pathway: citizens can amend redistricting by initiative.
    """

    id: str = Field(validation_alias=AliasChoices("id", "stateId", "state_id", "state"))
    name: str = ""
    districts: int = Field(
        ge=0,
        validation_alias=AliasChoices("districts", "districts2022", "districts_2022"),
    )
    districts_future: int | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "districtsFuture",
            "districts_future",
            "districts2032",
            "districts_2032",
            "districts2030",
        ),
    )
    efficiency_gap: float = 0.0
    partisan_lean: float = 0.0
    state_control: StateControl = StateControl.UNKNOWN
    redistricting_authority: RedistrictingAuthority = RedistrictingAuthority.UNKNOWN
    governor_can_veto: bool = False
    has_ballot_initiative: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> str:
        text = str(value).strip().upper() if value is not None else ""
        if not text:
            raise ValueError("state id must be non-empty")
        return text

    @field_validator("districts", "districts_future", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("efficiency_gap", "partisan_lean", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float:
        parsed = safe_float(value)
        return 0.0 if parsed is None else parsed

    @field_validator("governor_can_veto", "has_ballot_initiative", mode="before")
    @classmethod
    def _coerce_bools(cls, value: Any) -> bool:
        return safe_bool(value, default=False)

    def districts_for(self, era: DistrictEra) -> int:
        """District count for *era*, falling back to the current count."""
        if era is DistrictEra.PROJECTED and self.districts_future is not None:
            return self.districts_future
        return self.districts

    @property
    def lean_party(self) -> str | None:
        """``"R"``, ``"D"`` or ``None`` for an exactly even lean."""
        if self.partisan_lean > 0:
            return "R"
        if self.partisan_lean < 0:
            return "D"
        return None
