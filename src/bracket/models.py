"""
Immutable bracket values: participants, matches and tournaments.

Every progression step returns a new Tournament; Match and Participant values
are shared between snapshots and never mutated.
"""
from dataclasses import dataclass, replace
from functools import cached_property
from typing import Dict, List, Optional, Tuple

FIRST = 'first'
SECOND = 'second'
SLOTS = (FIRST, SECOND)

STATUS_IN_PROGRESS = 'in-progress'
STATUS_COMPLETED = 'completed'


@dataclass(frozen=True)
class Participant:
    id: str
    name: str
    seed: int

    def to_dict(self) -> Dict:
        return {'id': self.id, 'name': self.name, 'seed': self.seed}


@dataclass(frozen=True)
class Match:
    id: str
    round: int
    position: int
    first: Optional[Participant] = None
    second: Optional[Participant] = None
    winner: Optional[Participant] = None
    next_match_id: Optional[str] = None
    next_slot: Optional[str] = None

    def slot(self, name: str) -> Optional[Participant]:
        if name == FIRST:
            return self.first
        if name == SECOND:
            return self.second
        raise ValueError(f"Unknown slot: {name}")

    def with_slot(self, name: str, participant: Optional[Participant]) -> 'Match':
        if name not in SLOTS:
            raise ValueError(f"Unknown slot: {name}")
        return replace(self, **{name: participant})

    @property
    def occupants(self) -> List[Participant]:
        return [p for p in (self.first, self.second) if p is not None]

    def occupant(self, participant_id: str) -> Optional[Participant]:
        """Return the slot occupant with this id, if any."""
        for p in self.occupants:
            if p.id == participant_id:
                return p
        return None

    @property
    def is_final(self) -> bool:
        return self.next_match_id is None

    @property
    def is_bye(self) -> bool:
        """Decided with a single participant present."""
        return self.winner is not None and len(self.occupants) == 1

    @property
    def can_play(self) -> bool:
        return self.first is not None and self.second is not None and self.winner is None

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'round': self.round,
            'position': self.position,
            'first': self.first.to_dict() if self.first else None,
            'second': self.second.to_dict() if self.second else None,
            'winner': self.winner.to_dict() if self.winner else None,
            'next_match_id': self.next_match_id,
            'next_slot': self.next_slot,
        }


@dataclass(frozen=True)
class Tournament:
    id: str
    name: str
    participants: Tuple[Participant, ...]
    matches: Tuple[Match, ...]
    rounds: int
    champion: Optional[Participant] = None
    status: str = STATUS_IN_PROGRESS

    @cached_property
    def matches_by_id(self) -> Dict[str, Match]:
        return {m.id: m for m in self.matches}

    def get_match(self, match_id: str) -> Optional[Match]:
        return self.matches_by_id.get(match_id)

    def matches_in_round(self, round_number: int) -> List[Match]:
        return sorted(
            (m for m in self.matches if m.round == round_number),
            key=lambda m: m.position
        )

    @property
    def final_match(self) -> Optional[Match]:
        finals = self.matches_in_round(self.rounds)
        return finals[0] if finals else None

    def with_matches(self, updated: Dict[str, Match]) -> 'Tournament':
        """Return a new snapshot with the given matches replaced.

        Champion and status are derived from the final match of the result.
        """
        matches = tuple(updated.get(m.id, m) for m in self.matches)
        snapshot = replace(self, matches=matches)
        final = snapshot.final_match
        champion = final.winner if final else None
        return replace(
            snapshot,
            champion=champion,
            status=STATUS_COMPLETED if champion is not None else STATUS_IN_PROGRESS
        )

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'participants': [p.to_dict() for p in self.participants],
            'matches': [m.to_dict() for m in self.matches],
            'rounds': self.rounds,
            'champion': self.champion.to_dict() if self.champion else None,
            'status': self.status,
        }
