"""
Flask web application for the Bracket Manager.

Tournaments live in memory for the life of the process; each request swaps
in the new snapshot returned by the bracket operations.
"""
import threading

from flask import Flask, request, jsonify

from bracket import (
    BracketError,
    IdGenerator,
    InvalidParticipantsError,
    InvalidWinnerError,
    MatchNotFoundError,
    MatchNotReadyError,
    NothingToResetError,
    build_bracket,
    get_bracket_display,
    participants_from_entries,
    record_winner,
    reset_match,
)
from settings import load_settings

app = Flask(__name__)
app.config['BRACKET_SETTINGS'] = load_settings()

_ids = IdGenerator()
_tournaments = {}
_store_lock = threading.Lock()

ERROR_STATUS_CODES = (
    (MatchNotFoundError, 404),
    (MatchNotReadyError, 409),
    (NothingToResetError, 409),
    (InvalidWinnerError, 400),
    (InvalidParticipantsError, 400),
)


def get_settings() -> dict:
    return app.config['BRACKET_SETTINGS']


@app.errorhandler(BracketError)
def handle_bracket_error(error):
    status = next((code for cls, code in ERROR_STATUS_CODES if isinstance(error, cls)), 400)
    return jsonify({'success': False, 'error': str(error)}), status


def _not_found(tournament_id):
    return jsonify({'success': False, 'error': f'Tournament not found: {tournament_id}'}), 404


def _update_tournament(tournament_id, operation):
    """Apply ``operation`` to the stored snapshot and store the result.

    Returns None when the tournament does not exist.
    """
    with _store_lock:
        tournament = _tournaments.get(tournament_id)
        if tournament is None:
            return None
        updated = operation(tournament)
        _tournaments[tournament_id] = updated
        return updated


@app.route('/api/tournaments', methods=['GET'])
def api_list_tournaments():
    with _store_lock:
        tournaments = list(_tournaments.values())
    return jsonify({
        'success': True,
        'tournaments': [{'id': t.id, 'name': t.name, 'status': t.status} for t in tournaments]
    })


@app.route('/api/tournaments', methods=['POST'])
def api_create_tournament():
    """Build a new bracket from a list of participants."""
    settings = get_settings()
    data = request.get_json(silent=True) or {}

    entries = data.get('participants')
    if not isinstance(entries, list):
        return jsonify({'success': False, 'error': 'Participants must be a list.'}), 400

    max_participants = settings.get('max_participants')
    if max_participants and len(entries) > max_participants:
        return jsonify({
            'success': False,
            'error': f'At most {max_participants} participants are allowed.'
        }), 400

    name = (data.get('name') or '').strip() or settings['default_tournament_name']
    participants = participants_from_entries(entries, ids=_ids)
    tournament = build_bracket(participants, name, ids=_ids)

    with _store_lock:
        _tournaments[tournament.id] = tournament
    app.logger.info(f'Created tournament {tournament.id} ({name}) with {len(participants)} participants')

    return jsonify({'success': True, 'tournament': get_bracket_display(tournament)}), 201


@app.route('/api/tournaments/<tournament_id>', methods=['GET'])
def api_get_tournament(tournament_id):
    with _store_lock:
        tournament = _tournaments.get(tournament_id)
    if tournament is None:
        return _not_found(tournament_id)
    return jsonify({'success': True, 'tournament': get_bracket_display(tournament)})


@app.route('/api/tournaments/<tournament_id>', methods=['DELETE'])
def api_delete_tournament(tournament_id):
    with _store_lock:
        removed = _tournaments.pop(tournament_id, None)
    if removed is None:
        return _not_found(tournament_id)
    app.logger.info(f'Deleted tournament {tournament_id}')
    return jsonify({'success': True})


@app.route('/api/tournaments/<tournament_id>/matches/<match_id>/winner', methods=['POST'])
def api_record_winner(tournament_id, match_id):
    """Record a match winner and advance them."""
    data = request.get_json(silent=True) or {}
    participant_id = data.get('participant_id')
    if not participant_id:
        return jsonify({'success': False, 'error': 'participant_id is required.'}), 400

    strict = get_settings()['strict_match_lookups']

    def apply(tournament):
        winner = next((p for p in tournament.participants if p.id == participant_id), None)
        if winner is None:
            raise InvalidWinnerError(f'Unknown participant: {participant_id}')
        return record_winner(tournament, match_id, winner, strict=strict)

    tournament = _update_tournament(tournament_id, apply)
    if tournament is None:
        return _not_found(tournament_id)
    return jsonify({'success': True, 'tournament': get_bracket_display(tournament)})


@app.route('/api/tournaments/<tournament_id>/matches/<match_id>/reset', methods=['POST'])
def api_reset_match(tournament_id, match_id):
    """Undo a match result and everything downstream of it."""
    strict = get_settings()['strict_match_lookups']
    tournament = _update_tournament(
        tournament_id,
        lambda t: reset_match(t, match_id, strict=strict)
    )
    if tournament is None:
        return _not_found(tournament_id)
    return jsonify({'success': True, 'tournament': get_bracket_display(tournament)})


if __name__ == '__main__':
    app.run(debug=True)
