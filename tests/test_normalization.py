from __future__ import annotations

import pytest

from gerrytruce.ingestion.normalize import format_lean, parse_lean, safe_bool, safe_float, safe_int, split_district_key
from gerrytruce.models.state import DistrictEra, RedistrictingAuthority, StateControl, StateProfile


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("R+7", 7),
        ("D+12", -12),
        ("d+3", -3),
        ("R + 4", 4),
        ("EVEN", 0),
        ("even", 0),
        ("-4", -4),
        ("2.6", 3),
        (5, 5),
        (-1.4, -1),
    ],
)
def test_parse_lean_accepts_known_encodings(raw: object, expected: int) -> None:
    assert parse_lean(raw) == expected


@pytest.mark.parametrize("raw", ["R+?", "", "  ", None, "X+3", True, float("nan")])
def test_parse_lean_rejects_garbage(raw: object) -> None:
    assert parse_lean(raw) is None


def test_format_lean() -> None:
    assert format_lean(7) == "R+7"
    assert format_lean(-3) == "D+3"
    assert format_lean(0) == "EVEN"


def test_split_district_key() -> None:
    assert split_district_key("AL-01") == ("AL", "01")
    assert split_district_key("ak-al") == ("AK", "AL")
    assert split_district_key("12") is None
    assert split_district_key(None) is None


def test_safe_numbers() -> None:
    assert safe_float("1,234.5") == 1234.5
    assert safe_float("--") is None
    assert safe_float("nan") is None
    assert safe_int("52.0") == 52
    assert safe_int("abc") is None


def test_safe_bool() -> None:
    assert safe_bool("Yes") is True
    assert safe_bool("0") is False
    assert safe_bool("", default=True) is True
    assert safe_bool("maybe") is False


class TestStateProfile:
    def test_accepts_source_column_aliases(self) -> None:
        profile = StateProfile.model_validate(
            {
                "stateId": " tx ",
                "name": "Texas",
                "districts2022": "38",
                "districts2032": "41",
                "efficiencyGap": "0.084",
                "partisanLean": "8.6",
                "stateControl": "REP",
                "redistrictingAuthority": "legislature",
                "governorCanVeto": "true",
                "hasBallotInitiative": "false",
            }
        )

        assert profile.id == "TX"
        assert profile.districts == 38
        assert profile.districts_future == 41
        assert profile.efficiency_gap == pytest.approx(0.084)
        assert profile.partisan_lean == pytest.approx(8.6)
        assert profile.state_control is StateControl.REP
        assert profile.redistricting_authority is RedistrictingAuthority.LEGISLATURE
        assert profile.governor_can_veto is True
        assert profile.has_ballot_initiative is False

    def test_unknown_enum_values_degrade(self) -> None:
        profile = StateProfile(id="XX", districts=2, state_control="coalition")
        assert profile.state_control is StateControl.UNKNOWN

    def test_enum_lookup_is_case_insensitive_with_unknown_fallback(self) -> None:
        assert StateControl(" Dem ") is StateControl.DEM
        assert StateControl("coalition") is StateControl.UNKNOWN
        assert StateControl(3) is StateControl.UNKNOWN
        assert RedistrictingAuthority("LEGISLATURE") is RedistrictingAuthority.LEGISLATURE
        assert RedistrictingAuthority("court") is RedistrictingAuthority.UNKNOWN

    def test_districts_for_era_falls_back_to_current(self) -> None:
        profile = StateProfile(id="CA", districts=52)
        assert profile.districts_for(DistrictEra.PROJECTED) == 52
        projected = StateProfile(id="CA", districts=52, districts_future=48)
        assert projected.districts_for(DistrictEra.PROJECTED) == 48
        assert projected.districts_for(DistrictEra.CURRENT) == 52

    def test_lean_party(self) -> None:
        assert StateProfile(id="A1", districts=2, partisan_lean=2).lean_party == "R"
        assert StateProfile(id="A2", districts=2, partisan_lean=-2).lean_party == "D"
        assert StateProfile(id="A3", districts=2).lean_party is None
