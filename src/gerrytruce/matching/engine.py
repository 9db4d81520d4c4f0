"""Partner search for a focal state."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gerrytruce.matching.policy import (
    BalanceDeltaPolicy,
    MatchPolicy,
    MatchSubject,
    PathwayFilters,
    Rejection,
    sort_key,
)
from gerrytruce.models.match import MatchCandidate, MatchEligibility, MatchPair
from gerrytruce.models.state import DistrictEra, MapVariant
from gerrytruce.store.store import AggregateStore

_logger = logging.getLogger(__name__)


class MatchingEngine:
    """Read-only matcher over an :class:`AggregateStore`.

    Deltas are computed once at construction; each query is a linear scan
    of the candidate universe.
    """

    def __init__(
        self,
        store: AggregateStore,
        *,
        alternate: MapVariant = MapVariant.PROPORTIONAL,
        era: DistrictEra = DistrictEra.CURRENT,
        policy: MatchPolicy | None = None,
        filters: PathwayFilters | None = None,
    ) -> None:
        if not alternate.is_alternate:
            raise ValueError("alternate must be a hypothetical map variant, not the enacted map")
        self._store = store
        self._alternate = alternate
        self._era = era
        self._policy: MatchPolicy = policy if policy is not None else BalanceDeltaPolicy()
        self._filters = filters if filters is not None else PathwayFilters()
        self._subjects: dict[str, MatchSubject] = {
            profile.id: MatchSubject(
                profile=profile,
                districts=profile.districts_for(era),
                delta=self._compute_delta(profile.id),
            )
            for profile in store.profiles
        }

    @property
    def policy(self) -> MatchPolicy:
        return self._policy

    @property
    def alternate(self) -> MapVariant:
        return self._alternate

    @property
    def era(self) -> DistrictEra:
        return self._era

    # ------------------------------------------------------------------
    # Seat balance
    # ------------------------------------------------------------------

    def balance(self, state_id: str, variant: MapVariant) -> int | None:
        counts = self._store.lookup(state_id, variant)
        return None if counts is None else counts.balance

    def _compute_delta(self, state_id: str) -> int | None:
        enacted = self.balance(state_id, MapVariant.ENACTED)
        alternate = self.balance(state_id, self._alternate)
        if enacted is None or alternate is None:
            return None
        return enacted - alternate

    def delta(self, state_id: str) -> int | None:
        """Net seats the enacted map shifts toward Republicans vs the alternate map."""
        subject = self._subjects.get(state_id)
        return None if subject is None else subject.delta

    def subject(self, state_id: str) -> MatchSubject | None:
        return self._subjects.get(state_id)

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def _universe(self, universe: Iterable[str] | None) -> list[MatchSubject]:
        if universe is None:
            return [self._subjects[state_id] for state_id in sorted(self._subjects)]
        subjects: list[MatchSubject] = []
        for state_id in sorted(set(universe)):
            subject = self._subjects.get(state_id)
            if subject is None:
                _logger.debug("Ignoring unknown state %s in candidate universe", state_id)
                continue
            subjects.append(subject)
        return subjects

    def rejection(self, focal_id: str, other_id: str) -> Rejection | None:
        """Why *other_id* is not a partner of *focal_id*, or ``None`` if it is."""
        focal = self._subjects.get(focal_id)
        other = self._subjects.get(other_id)
        if focal is None or other is None:
            return Rejection.NO_DATA
        reason = self._policy.rejection(focal, other)
        if reason is not None:
            return reason
        return self._filters.rejection(focal.profile, other.profile)

    def find_matches(self, focal_id: str, universe: Iterable[str] | None = None) -> list[MatchCandidate]:
        """Ordered partner candidates for *focal_id*.

        Returns an empty list when the focal state is unknown or, under a
        delta-based policy, has no delta.
        """
        focal = self._subjects.get(focal_id)
        if focal is None:
            return []
        if self._policy.requires_delta and focal.delta is None:
            return []

        accepted: list[MatchSubject] = []
        for other in self._universe(universe):
            if self._policy.rejection(focal, other) is not None:
                continue
            if self._filters.rejection(focal.profile, other.profile) is not None:
                continue
            accepted.append(other)

        accepted.sort(key=lambda other: sort_key(self._policy, focal, other))
        return [
            MatchCandidate(
                state=other.profile,
                strength=self._policy.strength(focal, other),
                score=self._policy.score(focal, other),
                delta=other.delta,
                district_difference=abs(focal.districts - other.districts),
            )
            for other in accepted
        ]

    def all_pairs(self, universe: Iterable[str] | None = None) -> list[MatchPair]:
        """Every accepted pair within *universe*, each listed once."""
        subjects = self._universe(universe)
        ids = [subject.state_id for subject in subjects]
        pairs: set[MatchPair] = set()
        for subject in subjects:
            for candidate in self.find_matches(subject.state_id, ids):
                pairs.add(MatchPair.of(subject.state_id, candidate.state_id))
        return sorted(pairs, key=lambda pair: pair.states)

    def eligibility(self, state_id: str, universe: Iterable[str] | None = None) -> MatchEligibility:
        """Distinguish at-large states from eligible-but-unmatched ones."""
        subject = self._subjects.get(state_id)
        if subject is None:
            return MatchEligibility.NO_DATA
        if subject.districts <= 1:
            return MatchEligibility.SINGLE_DISTRICT
        if self._policy.requires_delta and subject.delta is None:
            return MatchEligibility.NO_DATA
        if self.find_matches(state_id, universe):
            return MatchEligibility.MATCHED
        return MatchEligibility.UNMATCHED

    def minority_seat_gain(self, state_id: str) -> int | None:
        """Seats the state's minority party gains under the alternate map.

        The minority party is the one opposite the state's partisan lean;
        ``None`` for an exactly even lean or missing data.
        """
        subject = self._subjects.get(state_id)
        if subject is None:
            return None
        enacted = self._store.lookup(state_id, MapVariant.ENACTED)
        alternate = self._store.lookup(state_id, self._alternate)
        if enacted is None or alternate is None:
            return None
        party = subject.profile.lean_party
        if party == "R":
            return alternate.democratic_seats - enacted.democratic_seats
        if party == "D":
            return alternate.republican_seats - enacted.republican_seats
        return None
