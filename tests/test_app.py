"""
Unit tests for the Flask JSON API.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import app as app_module
from app import app
from settings import get_default_settings


@pytest.fixture
def client(monkeypatch):
    """Test client with default settings and an empty tournament store."""
    app.config['TESTING'] = True
    monkeypatch.setitem(app.config, 'BRACKET_SETTINGS', get_default_settings())
    monkeypatch.setattr(app_module, '_tournaments', {})
    with app.test_client() as client:
        yield client


def create(client, participants, name='Cup'):
    return client.post('/api/tournaments', json={'name': name, 'participants': participants})


def match_at(tournament, round_number, position):
    return tournament['rounds'][round_number - 1]['matches'][position]


class TestCreateTournament:
    """Tests for POST /api/tournaments."""

    def test_create(self, client):
        """Test a bracket is built from names."""
        response = create(client, ['Ann', 'Bea', 'Cid', 'Dee', 'Eve'])

        assert response.status_code == 201
        data = response.get_json()
        assert data['success']
        tournament = data['tournament']
        assert tournament['name'] == 'Cup'
        assert tournament['total_rounds'] == 3
        assert tournament['byes'] == 3
        assert match_at(tournament, 1, 0)['first']['name'] == 'Ann'
        assert match_at(tournament, 1, 0)['is_bye']

    def test_create_with_seeds(self, client):
        """Test explicit seeds decide placement."""
        response = create(client, [{'name': 'Ann', 'seed': 2}, {'name': 'Bea', 'seed': 1}])

        final = match_at(response.get_json()['tournament'], 1, 0)
        assert final['first']['name'] == 'Bea'
        assert final['second']['name'] == 'Ann'

    def test_default_name(self, client):
        """Test a blank name falls back to the configured default."""
        response = create(client, ['Ann', 'Bea'], name='  ')
        assert response.get_json()['tournament']['name'] == 'Tournament'

    def test_too_few_participants(self, client):
        """Test one participant is rejected."""
        response = create(client, ['Ann'])
        assert response.status_code == 400
        assert response.get_json()['success'] is False
        assert 'At least 2' in response.get_json()['error']

    def test_too_many_participants(self, client):
        """Test the configured maximum is enforced."""
        app.config['BRACKET_SETTINGS']['max_participants'] = 4
        response = create(client, ['A', 'B', 'C', 'D', 'E'])
        assert response.status_code == 400
        assert 'At most 4' in response.get_json()['error']

    def test_participants_must_be_list(self, client):
        """Test a missing participant list is rejected."""
        response = client.post('/api/tournaments', json={'name': 'Cup'})
        assert response.status_code == 400

    def test_bad_entry(self, client):
        """Test a malformed participant entry is rejected."""
        response = create(client, ['Ann', 5])
        assert response.status_code == 400

    def test_listed_after_create(self, client):
        """Test new tournaments appear in the listing."""
        created = create(client, ['Ann', 'Bea']).get_json()['tournament']

        listing = client.get('/api/tournaments').get_json()['tournaments']

        assert listing == [{'id': created['id'], 'name': 'Cup', 'status': 'in-progress'}]


class TestTournamentLookup:
    """Tests for GET and DELETE /api/tournaments/<id>."""

    def test_get(self, client):
        """Test fetching a stored tournament."""
        created = create(client, ['Ann', 'Bea']).get_json()['tournament']
        response = client.get(f"/api/tournaments/{created['id']}")
        assert response.status_code == 200
        assert response.get_json()['tournament'] == created

    def test_get_missing(self, client):
        """Test unknown tournaments give 404."""
        response = client.get('/api/tournaments/nope')
        assert response.status_code == 404
        assert response.get_json()['success'] is False

    def test_delete(self, client):
        """Test deleting removes the tournament."""
        created = create(client, ['Ann', 'Bea']).get_json()['tournament']

        assert client.delete(f"/api/tournaments/{created['id']}").status_code == 200
        assert client.get(f"/api/tournaments/{created['id']}").status_code == 404
        assert client.delete(f"/api/tournaments/{created['id']}").status_code == 404


class TestProgressionRoutes:
    """Tests for the winner and reset routes."""

    @pytest.fixture
    def tournament(self, client):
        return create(client, ['Ann', 'Bea', 'Cid', 'Dee']).get_json()['tournament']

    def post_winner(self, client, tournament, match_id, participant_id):
        return client.post(
            f"/api/tournaments/{tournament['id']}/matches/{match_id}/winner",
            json={'participant_id': participant_id}
        )

    def post_reset(self, client, tournament, match_id):
        return client.post(f"/api/tournaments/{tournament['id']}/matches/{match_id}/reset")

    def test_record_and_complete(self, client, tournament):
        """Test playing the bracket through to a champion."""
        semi_top = match_at(tournament, 1, 0)
        semi_bottom = match_at(tournament, 1, 1)
        self.post_winner(client, tournament, semi_top['id'], semi_top['first']['id'])
        response = self.post_winner(client, tournament, semi_bottom['id'], semi_bottom['second']['id'])

        final = match_at(response.get_json()['tournament'], 2, 0)
        assert final['first']['name'] == 'Ann'
        assert final['second']['name'] == 'Cid'
        assert final['can_play']

        response = self.post_winner(client, tournament, final['id'], final['second']['id'])
        data = response.get_json()['tournament']
        assert data['status'] == 'completed'
        assert data['champion']['name'] == 'Cid'

        stored = client.get(f"/api/tournaments/{tournament['id']}").get_json()['tournament']
        assert stored['champion']['name'] == 'Cid'

    def test_reset_route(self, client, tournament):
        """Test resetting a result clears what it fed."""
        semi_top = match_at(tournament, 1, 0)
        self.post_winner(client, tournament, semi_top['id'], semi_top['first']['id'])

        response = self.post_reset(client, tournament, semi_top['id'])

        assert response.status_code == 200
        data = response.get_json()['tournament']
        assert match_at(data, 1, 0)['winner'] is None
        assert match_at(data, 2, 0)['first'] is None

    def test_winner_not_in_match(self, client, tournament):
        """Test a participant from another match is rejected."""
        semi_top = match_at(tournament, 1, 0)
        other = match_at(tournament, 1, 1)['first']['id']
        response = self.post_winner(client, tournament, semi_top['id'], other)
        assert response.status_code == 400

    def test_unknown_participant(self, client, tournament):
        """Test an unknown participant id is rejected."""
        semi_top = match_at(tournament, 1, 0)
        response = self.post_winner(client, tournament, semi_top['id'], 'ghost')
        assert response.status_code == 400
        assert 'Unknown participant' in response.get_json()['error']

    def test_missing_participant_id(self, client, tournament):
        """Test the winner route needs a participant id."""
        semi_top = match_at(tournament, 1, 0)
        response = client.post(
            f"/api/tournaments/{tournament['id']}/matches/{semi_top['id']}/winner", json={}
        )
        assert response.status_code == 400

    def test_match_not_ready(self, client, tournament):
        """Test deciding a match still waiting for players gives 409."""
        semi_top = match_at(tournament, 1, 0)
        self.post_winner(client, tournament, semi_top['id'], semi_top['first']['id'])
        final = match_at(tournament, 2, 0)

        response = self.post_winner(client, tournament, final['id'], semi_top['first']['id'])

        assert response.status_code == 409

    def test_unknown_match_strict(self, client, tournament):
        """Test unknown match ids give 404 with strict lookups."""
        player = tournament['participants'][0]['id']
        assert self.post_winner(client, tournament, 'nope', player).status_code == 404
        assert self.post_reset(client, tournament, 'nope').status_code == 404

    def test_nothing_to_reset_strict(self, client, tournament):
        """Test resetting an undecided match gives 409 with strict lookups."""
        semi_top = match_at(tournament, 1, 0)
        assert self.post_reset(client, tournament, semi_top['id']).status_code == 409

    def test_lenient_lookups(self, client, tournament):
        """Test no-op behaviour when strict lookups are off."""
        app.config['BRACKET_SETTINGS']['strict_match_lookups'] = False
        player = tournament['participants'][0]['id']

        response = self.post_winner(client, tournament, 'nope', player)
        assert response.status_code == 200
        assert response.get_json()['tournament'] == tournament

        semi_top = match_at(tournament, 1, 0)
        response = self.post_reset(client, tournament, semi_top['id'])
        assert response.status_code == 200
        assert response.get_json()['tournament'] == tournament

    def test_unknown_tournament(self, client):
        """Test progression on an unknown tournament gives 404."""
        response = client.post('/api/tournaments/nope/matches/m/winner', json={'participant_id': 'p'})
        assert response.status_code == 404
        assert client.post('/api/tournaments/nope/matches/m/reset').status_code == 404
