"""
Single elimination bracket generation.
"""
import logging
import math
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .errors import InvalidParticipantsError
from .ids import IdGenerator, default_ids
from .models import FIRST, SECOND, SLOTS, Match, Participant, Tournament

logger = logging.getLogger(__name__)


def calculate_bracket_size(num_participants: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_participants <= 0:
        return 0
    return 2 ** math.ceil(math.log2(num_participants))


def calculate_rounds(num_participants: int) -> int:
    bracket_size = calculate_bracket_size(num_participants)
    if bracket_size == 0:
        return 0
    return int(math.log2(bracket_size))


def calculate_byes(num_participants: int) -> int:
    """Calculate number of byes needed."""
    return calculate_bracket_size(num_participants) - num_participants


def generate_seed_order(bracket_size: int) -> List[int]:
    """
    Generate the standard tournament bracket order as 0-based seed indexes.

    Bracket slot ``k`` holds the seed-sorted participant at ``order[k]``.

    For 8 slots: [0, 7, 3, 4, 1, 6, 2, 5]
    This gives matchups: 1v8, 4v5, 2v7, 3v6
    Winners: 1v4 side, 2v3 side
    Final: 1v2 (if chalk)
    """
    if bracket_size <= 1:
        return [0]

    upper_half = generate_seed_order(bracket_size // 2)

    # Pair each seed with its complement
    result = []
    for seed in upper_half:
        result.extend([seed, bracket_size - 1 - seed])

    return result


def _validate_participants(participants: Sequence[Participant]):
    if len(participants) < 2:
        raise InvalidParticipantsError(
            f"At least 2 participants are required, got {len(participants)}"
        )

    seen_ids = set()
    seen_seeds = set()
    for p in participants:
        if p.id in seen_ids:
            raise InvalidParticipantsError(f"Duplicate participant id: {p.id}")
        seen_ids.add(p.id)

        if isinstance(p.seed, bool) or not isinstance(p.seed, int) or p.seed < 1:
            raise InvalidParticipantsError(
                f"Seed must be a positive integer, got {p.seed!r} for {p.name}"
            )
        if p.seed in seen_seeds:
            raise InvalidParticipantsError(f"Duplicate seed: {p.seed}")
        seen_seeds.add(p.seed)


def _find_dead_slots(rounds: Dict[int, List[Match]], total_rounds: int) -> Set[Tuple[str, str]]:
    """
    Find (match id, slot) pairs that can never receive a participant.

    A round 1 slot is dead when it is empty; a later slot is dead when no
    participant was placed anywhere below its feeding match.
    """
    dead = set()
    live = {}

    for round_number in range(1, total_rounds + 1):
        for match in rounds[round_number]:
            if round_number == 1:
                for slot in SLOTS:
                    if match.slot(slot) is None:
                        dead.add((match.id, slot))
                live[match.id] = bool(match.occupants)
                continue

            start = match.position * 2
            feeders = rounds[round_number - 1][start:start + 2]
            for slot, feeder in zip(SLOTS, feeders):
                if not live[feeder.id]:
                    dead.add((match.id, slot))
            live[match.id] = any(live[feeder.id] for feeder in feeders)

    return dead


def _advance_bye(matches: Dict[str, Match], match_id: str, dead: Set[Tuple[str, str]]):
    """Decide a bye and push its winner forward, cascading into further byes."""
    match = matches[match_id]
    if match.winner is not None or len(match.occupants) != 1:
        return

    empty_slot = FIRST if match.first is None else SECOND
    if (match.id, empty_slot) not in dead:
        # Opponent still to come from an earlier round
        return

    winner = match.occupants[0]
    matches[match.id] = replace(match, winner=winner)
    logger.debug("Bye: %s advances from round %d match %d", winner.name, match.round, match.position)

    if match.next_match_id is None:
        return

    matches[match.next_match_id] = matches[match.next_match_id].with_slot(match.next_slot, winner)
    _advance_bye(matches, match.next_match_id, dead)


def build_bracket(participants: Sequence[Participant], name: str,
                  ids: Optional[IdGenerator] = None) -> Tournament:
    """
    Build a complete single elimination bracket.

    Participants are ordered by seed and placed with standard seeding. Every
    match of every round is created and linked to the match its winner feeds,
    and round 1 byes are decided straight away.

    Raises InvalidParticipantsError for fewer than 2 participants, duplicate
    ids, or seeds that are not unique positive integers.
    """
    _validate_participants(participants)
    ids = ids or default_ids

    seeded = sorted(participants, key=lambda p: p.seed)
    num_participants = len(seeded)
    bracket_size = calculate_bracket_size(num_participants)
    total_rounds = calculate_rounds(num_participants)

    seed_order = generate_seed_order(bracket_size)
    slots = [seeded[idx] if idx < num_participants else None for idx in seed_order]

    # Create every match, round by round
    rounds = {}
    for round_number in range(1, total_rounds + 1):
        match_count = bracket_size // 2 ** round_number
        rounds[round_number] = [
            Match(id=ids(), round=round_number, position=pos)
            for pos in range(match_count)
        ]

    # Link each match to the one its winner plays next
    for round_number in range(1, total_rounds):
        next_round = rounds[round_number + 1]
        rounds[round_number] = [
            replace(
                m,
                next_match_id=next_round[m.position // 2].id,
                next_slot=FIRST if m.position % 2 == 0 else SECOND
            )
            for m in rounds[round_number]
        ]

    # Fill first round with participants
    rounds[1] = [
        replace(m, first=slots[m.position * 2], second=slots[m.position * 2 + 1])
        for m in rounds[1]
    ]

    matches = {}
    for round_number in range(1, total_rounds + 1):
        for m in rounds[round_number]:
            matches[m.id] = m

    dead = _find_dead_slots(rounds, total_rounds)
    for m in rounds[1]:
        _advance_bye(matches, m.id, dead)

    tournament = Tournament(
        id=ids(),
        name=name,
        participants=tuple(seeded),
        matches=tuple(matches.values()),
        rounds=total_rounds
    )
    logger.debug(
        "Built bracket %r: %d participants, %d rounds, %d byes",
        name, num_participants, total_rounds, calculate_byes(num_participants)
    )
    # Derive champion/status from the final
    return tournament.with_matches({})
