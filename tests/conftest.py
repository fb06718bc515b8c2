"""
Shared pytest fixtures for bracket manager tests.

Running tests:
    pytest tests/                  - full suite
    pytest tests/ -m "not slow"   - skip the exhaustive bracket sweeps
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bracket import IdGenerator, create_participant, record_winner


@pytest.fixture
def ids():
    """Fresh id generator so ids are predictable per test."""
    return IdGenerator(prefix='test')


@pytest.fixture
def make_participants(ids):
    """Factory: make_participants(n) -> participants seeded 1..n."""
    def _make(count):
        return [create_participant(f"Player {i}", i, ids=ids) for i in range(1, count + 1)]
    return _make


def find_match(tournament, round_number, position):
    """Return the match at (round, position)."""
    return tournament.matches_in_round(round_number)[position]


def play_chalk(tournament, up_to_round=None):
    """Play every playable match with the better seed winning."""
    last_round = up_to_round or tournament.rounds
    for round_number in range(1, last_round + 1):
        for match in tournament.matches_in_round(round_number):
            if match.can_play:
                winner = min(match.occupants, key=lambda p: p.seed)
                tournament = record_winner(tournament, match.id, winner)
    return tournament
