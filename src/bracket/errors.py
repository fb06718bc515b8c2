"""
Errors raised by bracket building and match progression.
"""


class BracketError(Exception):
    """Base class for all bracket errors."""


class InvalidParticipantsError(BracketError, ValueError):
    """Participant list cannot be turned into a bracket."""


class InvalidWinnerError(BracketError, ValueError):
    """Winner does not occupy either slot of the match."""


class MatchNotReadyError(BracketError):
    """Match is still waiting for an opponent (or is a bye)."""


class MatchNotFoundError(BracketError, LookupError):
    """No match with the given id in this tournament."""

    def __init__(self, match_id):
        super().__init__(f"Match not found: {match_id}")
        self.match_id = match_id


class NothingToResetError(BracketError):
    """Match has no result that can be undone."""
