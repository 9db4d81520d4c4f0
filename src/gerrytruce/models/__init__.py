"""Snapshot and result models."""

from gerrytruce.models._base import TruceBaseModel, TruceEnum
from gerrytruce.models.diagnostics import Diagnostic, DiagnosticKind
from gerrytruce.models.layout import Column, Connector, DistrictBand, PairLayout, Point, PositionedState
from gerrytruce.models.match import MatchCandidate, MatchEligibility, MatchPair, MatchStrength
from gerrytruce.models.seats import Bucket, DistrictLean, SeatCounts
from gerrytruce.models.state import (
    DistrictEra,
    LeanSign,
    MapVariant,
    RedistrictingAuthority,
    StateControl,
    StateProfile,
)
from gerrytruce.models.truce import NationalTotals, TruceAdjustment

__all__ = [
    "Bucket",
    "Column",
    "Connector",
    "Diagnostic",
    "DiagnosticKind",
    "DistrictBand",
    "DistrictEra",
    "DistrictLean",
    "LeanSign",
    "MapVariant",
    "MatchCandidate",
    "MatchEligibility",
    "MatchPair",
    "MatchStrength",
    "NationalTotals",
    "PairLayout",
    "Point",
    "PositionedState",
    "RedistrictingAuthority",
    "SeatCounts",
    "StateControl",
    "StateProfile",
    "TruceAdjustment",
    "TruceBaseModel",
    "TruceEnum",
]
