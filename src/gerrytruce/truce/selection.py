"""Pair-selection state machine.

Selections are immutable values: every transition returns a new
:class:`PairSelection`, which is what gets handed to
:func:`~gerrytruce.truce.adjust.compute_truce_adjustment`.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import Any

from pydantic import model_validator

from gerrytruce.models._base import TruceBaseModel
from gerrytruce.models.match import MatchPair


class SelectionMode(enum.StrEnum):
    EXCLUSIVE = "exclusive"
    """Each state belongs to at most one selected pair."""
    MULTI = "multi"
    """A state may take part in several selected pairs."""


def _latest_per_state(pairs: Iterable[MatchPair]) -> tuple[MatchPair, ...]:
    """Keep the most recent pair touching each state, in selection order."""
    kept: list[MatchPair] = []
    for pair in reversed(list(pairs)):
        if not any(pair.touches(existing) for existing in kept):
            kept.append(pair)
    return tuple(reversed(kept))


class PairSelection(TruceBaseModel):
    mode: SelectionMode = SelectionMode.EXCLUSIVE
    pairs: tuple[MatchPair, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _one_pair_per_state(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        if SelectionMode(values.get("mode", SelectionMode.EXCLUSIVE)) is not SelectionMode.EXCLUSIVE:
            return values
        pairs = [
            pair if isinstance(pair, MatchPair) else MatchPair.model_validate(pair) for pair in values.get("pairs", ())
        ]
        return {**values, "pairs": _latest_per_state(pairs)}

    def contains(self, a: str, b: str) -> bool:
        return MatchPair.of(a, b) in self.pairs

    def select(self, a: str, b: str) -> PairSelection:
        """Add a pair; in exclusive mode pairs touching either state are dropped first."""
        pair = MatchPair.of(a, b)
        if pair in self.pairs:
            return self
        kept = self.pairs
        if self.mode is SelectionMode.EXCLUSIVE:
            kept = tuple(existing for existing in kept if not existing.touches(pair))
        return self.model_copy(update={"pairs": (*kept, pair)})

    def deselect(self, a: str, b: str) -> PairSelection:
        pair = MatchPair.of(a, b)
        return self.model_copy(update={"pairs": tuple(existing for existing in self.pairs if existing != pair)})

    def toggle(self, a: str, b: str) -> PairSelection:
        if self.contains(a, b):
            return self.deselect(a, b)
        return self.select(a, b)

    def clear(self) -> PairSelection:
        return self.model_copy(update={"pairs": ()})

    def with_mode(self, mode: SelectionMode) -> PairSelection:
        """Switch policy; going exclusive keeps the most recent pair per state."""
        if mode is SelectionMode.EXCLUSIVE:
            return PairSelection(mode=mode, pairs=self.pairs)
        return self.model_copy(update={"mode": mode})

    @property
    def states(self) -> frozenset[str]:
        return frozenset(state_id for pair in self.pairs for state_id in pair.states)

    def partners_of(self, state_id: str) -> list[str]:
        return [partner for pair in self.pairs if (partner := pair.partner(state_id)) is not None]
