from .builder import (
    build_bracket,
    calculate_bracket_size,
    calculate_byes,
    calculate_rounds,
    generate_seed_order,
)
from .display import get_bracket_display, round_label
from .errors import (
    BracketError,
    InvalidParticipantsError,
    InvalidWinnerError,
    MatchNotFoundError,
    MatchNotReadyError,
    NothingToResetError,
)
from .ids import IdGenerator, default_ids
from .models import (
    FIRST,
    SECOND,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    Match,
    Participant,
    Tournament,
)
from .progression import record_winner, reset_match
from .roster import (
    create_participant,
    participants_from_entries,
    move_participant,
    remove_participant,
    renumber_seeds,
    shuffle_participants,
)
