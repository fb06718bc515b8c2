"""
Bracket data formatted for UI display.
"""
from typing import Dict

from .builder import calculate_bracket_size
from .models import Tournament


def round_label(round_number: int, total_rounds: int) -> str:
    """Get the name of a round counted back from the final."""
    from_final = total_rounds - round_number
    if from_final == 0:
        return "Final"
    elif from_final == 1:
        return "Semifinals"
    elif from_final == 2:
        return "Quarterfinals"
    else:
        return f"Round {round_number}"


def get_bracket_display(tournament: Tournament) -> Dict:
    """
    Get bracket data formatted for UI display.

    Returns dict with:
    - 'rounds': list of {round, label, matches} in round order, each match
      carrying is_bye / can_play / is_final flags
    - 'byes': first round byes
    - 'completed_matches': matches with a winner (byes included)
    - 'playable_matches': matches with at least one participant
    """
    rounds = []
    for round_number in range(1, tournament.rounds + 1):
        matches = []
        for match in tournament.matches_in_round(round_number):
            match_data = match.to_dict()
            match_data['is_bye'] = match.is_bye
            match_data['can_play'] = match.can_play
            match_data['is_final'] = match.is_final
            matches.append(match_data)
        rounds.append({
            'round': round_number,
            'label': round_label(round_number, tournament.rounds),
            'matches': matches
        })

    first_round = tournament.matches_in_round(1)

    return {
        'id': tournament.id,
        'name': tournament.name,
        'status': tournament.status,
        'champion': tournament.champion.to_dict() if tournament.champion else None,
        'participants': [p.to_dict() for p in tournament.participants],
        'total_participants': len(tournament.participants),
        'total_rounds': tournament.rounds,
        'bracket_size': calculate_bracket_size(len(tournament.participants)),
        'byes': sum(1 for m in first_round if m.is_bye),
        'total_matches': len(tournament.matches),
        'completed_matches': sum(1 for m in tournament.matches if m.winner is not None),
        'playable_matches': sum(1 for m in tournament.matches if m.occupants),
        'rounds': rounds
    }
