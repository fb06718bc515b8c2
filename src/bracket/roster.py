"""
Participant roster helpers used before a bracket is built.

Seeds always follow list order after any of these edits, so the caller can
hand the result straight to build_bracket().
"""
import random
from dataclasses import replace
from typing import List, Optional, Sequence

from .errors import InvalidParticipantsError
from .ids import IdGenerator, default_ids
from .models import Participant


def create_participant(name: str, seed: int, ids: Optional[IdGenerator] = None) -> Participant:
    """Create a participant with a fresh id."""
    name = (name or '').strip()
    if not name:
        raise InvalidParticipantsError("Participant name is required")
    ids = ids or default_ids
    return Participant(id=ids(), name=name, seed=seed)


def participants_from_entries(entries: Sequence, ids: Optional[IdGenerator] = None) -> List[Participant]:
    """
    Create participants from loaded roster data.

    Each entry is either a name or a mapping with ``name`` and an optional
    ``seed``; entries without a seed are seeded by their list position.
    """
    participants = []
    for i, entry in enumerate(entries):
        if isinstance(entry, str):
            name, seed = entry, i + 1
        elif isinstance(entry, dict):
            name, seed = entry.get('name'), entry.get('seed', i + 1)
        else:
            raise InvalidParticipantsError(f"Invalid participant entry: {entry!r}")
        if not isinstance(name, str):
            raise InvalidParticipantsError(f"Participant name must be text, got {name!r}")
        participants.append(create_participant(name, seed, ids=ids))
    return participants


def renumber_seeds(participants: Sequence[Participant]) -> List[Participant]:
    """Return copies seeded 1..n in the given order."""
    return [replace(p, seed=i + 1) for i, p in enumerate(participants)]


def remove_participant(participants: Sequence[Participant], participant_id: str) -> List[Participant]:
    remaining = [p for p in participants if p.id != participant_id]
    return renumber_seeds(remaining)


def move_participant(participants: Sequence[Participant], from_index: int, to_index: int) -> List[Participant]:
    """Move one participant to a new position and reseed (drag-to-reorder)."""
    size = len(participants)
    if not 0 <= from_index < size or not 0 <= to_index < size:
        raise IndexError(f"Index out of range for {size} participants")
    reordered = list(participants)
    moved = reordered.pop(from_index)
    reordered.insert(to_index, moved)
    return renumber_seeds(reordered)


def shuffle_participants(participants: Sequence[Participant], rng: Optional[random.Random] = None) -> List[Participant]:
    """Random seeding: shuffle, then renumber."""
    rng = rng or random.Random()
    shuffled = list(participants)
    rng.shuffle(shuffled)
    return renumber_seeds(shuffled)
