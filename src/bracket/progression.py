"""
Match progression: recording winners and undoing results.

Both operations take a Tournament snapshot and return a new one. The input
snapshot is left untouched so callers can keep it for undo history.
"""
import logging
from dataclasses import replace
from typing import Dict

from .errors import InvalidWinnerError, MatchNotFoundError, MatchNotReadyError, NothingToResetError
from .models import Match, Participant, Tournament

logger = logging.getLogger(__name__)


def record_winner(tournament: Tournament, match_id: str, winner: Participant,
                  strict: bool = False) -> Tournament:
    """
    Record the winner of a match and move them into the next match.

    Unknown match ids are ignored (the input snapshot is returned) unless
    ``strict`` is set, in which case MatchNotFoundError is raised.

    Raises InvalidWinnerError if ``winner`` is not in the match and
    MatchNotReadyError if the match does not have two participants yet.
    Recording a different winner for a decided match undoes the old result
    first, including everything it fed downstream.
    """
    match = tournament.get_match(match_id)
    if match is None:
        if strict:
            raise MatchNotFoundError(match_id)
        logger.debug("record_winner: no match %s, ignoring", match_id)
        return tournament

    occupant = match.occupant(winner.id)
    if occupant is None:
        raise InvalidWinnerError(
            f"{winner.name} is not playing in round {match.round} match {match.position + 1}"
        )
    if match.first is None or match.second is None:
        raise MatchNotReadyError(
            f"Round {match.round} match {match.position + 1} is waiting for an opponent"
        )

    if match.winner is not None:
        if match.winner.id == occupant.id:
            return tournament
        tournament = reset_match(tournament, match_id)
        match = tournament.get_match(match_id)

    updated = {match.id: replace(match, winner=occupant)}
    if match.next_match_id is not None:
        next_match = tournament.get_match(match.next_match_id)
        updated[next_match.id] = next_match.with_slot(match.next_slot, occupant)

    logger.debug("%s wins round %d match %d", occupant.name, match.round, match.position + 1)
    return tournament.with_matches(updated)


def _clear_downstream(matches: Dict[str, Match], match: Match):
    """Remove everything ``match``'s winner caused further along the bracket."""
    if match.next_match_id is None:
        return

    next_match = matches[match.next_match_id]
    if next_match.winner is not None:
        _clear_downstream(matches, next_match)
        next_match = replace(next_match, winner=None)
    matches[next_match.id] = next_match.with_slot(match.next_slot, None)


def reset_match(tournament: Tournament, match_id: str, strict: bool = False) -> Tournament:
    """
    Undo a match result along with every downstream result that depended on it.

    Unknown ids, undecided matches and byes are left alone (the input snapshot
    is returned); with ``strict`` set they raise MatchNotFoundError or
    NothingToResetError instead.
    """
    match = tournament.get_match(match_id)
    if match is None:
        if strict:
            raise MatchNotFoundError(match_id)
        logger.debug("reset_match: no match %s, ignoring", match_id)
        return tournament

    if match.winner is None or match.is_bye:
        if strict:
            reason = "is a bye" if match.is_bye else "has no result"
            raise NothingToResetError(
                f"Round {match.round} match {match.position + 1} {reason}"
            )
        logger.debug("reset_match: nothing to reset for %s", match_id)
        return tournament

    matches = dict(tournament.matches_by_id)
    _clear_downstream(matches, match)
    matches[match.id] = replace(match, winner=None)

    logger.debug("Reset round %d match %d", match.round, match.position + 1)
    return tournament.with_matches(matches)
