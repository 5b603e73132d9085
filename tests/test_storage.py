"""Tests for storage module."""

import pytest
import os
import shutil
from unittest.mock import Mock, patch

from sportsorganizer.storage import get_repository, reset_repository, CompetitionRepository
from sportsorganizer.storage.exceptions import ConfigurationError, QueryError
from sportsorganizer.storage.supabase_db import SupabaseRepository
from sportsorganizer.models import Match, Team

from conftest import make_competition


class TestFactory:
    """Tests for factory function."""

    def setup_method(self):
        """Reset singleton before each test."""
        reset_repository()

    def teardown_method(self):
        """Clean up after each test."""
        reset_repository()
        # Clean up test directories
        for test_dir in ['data/test_factory', 'data/test_singleton']:
            if os.path.exists(test_dir):
                try:
                    shutil.rmtree(test_dir)
                except PermissionError:
                    pass  # Windows file locking, ignore

    def test_sqlite_explicit(self):
        """Explicit sqlite DB_TYPE works."""
        with patch.dict(os.environ, {'DB_TYPE': 'sqlite', 'DATA_DIR': 'data/test_factory'}, clear=False):
            reset_repository()
            repository = get_repository()
            assert repository.__class__.__name__ == 'SQLiteRepository'
            assert os.path.exists(os.path.join('data/test_factory', 'sportsorganizer.db'))
            reset_repository()  # Close before cleanup

    def test_invalid_db_type_raises(self):
        """Invalid DB_TYPE raises ConfigurationError."""
        with patch.dict(os.environ, {'DB_TYPE': 'invalid'}, clear=False):
            reset_repository()
            with pytest.raises(ConfigurationError):
                get_repository()

    def test_supabase_without_credentials_raises(self):
        """Supabase backend requires its URL and key."""
        env = {'DB_TYPE': 'supabase', 'SUPABASE_URL': '', 'SUPABASE_KEY': ''}
        with patch.dict(os.environ, env, clear=False):
            reset_repository()
            with pytest.raises(ConfigurationError):
                get_repository()

    def test_singleton_returns_same_instance(self):
        """Factory returns same instance on subsequent calls."""
        with patch.dict(os.environ, {'DB_TYPE': 'sqlite', 'DATA_DIR': 'data/test_singleton'}, clear=False):
            reset_repository()
            repo1 = get_repository()
            repo2 = get_repository()
            assert repo1 is repo2
            reset_repository()  # Close before cleanup


class TestSQLiteRepository:
    """Tests for SQLite implementation."""

    def test_implements_interface(self, repo):
        """SQLiteRepository implements CompetitionRepository."""
        assert isinstance(repo, CompetitionRepository)

    def test_health_check(self, repo):
        """Health check returns True for valid connection."""
        assert repo.health_check() is True

    def test_initialize_is_idempotent(self, repo):
        """Calling initialize again is harmless."""
        repo.initialize()
        assert repo.health_check() is True

    def test_create_and_get_competition(self, repo):
        """Can save and retrieve a competition."""
        created = repo.create_competition(make_competition(points_per_win=2))
        assert created.id is not None

        fetched = repo.get_competition(created.id)
        assert fetched.competition_name == 'Summer Cup'
        assert fetched.field_count == 2
        assert fetched.points_per_win == 2
        assert fetched.points_per_draw == 1

    def test_get_missing_competition(self, repo):
        """Unknown competition gives None."""
        assert repo.get_competition(999) is None

    def test_update_competition(self, repo, group_competition):
        """Configuration changes are persisted."""
        repo.update_competition(group_competition.model_copy(update={'field_count': 5}))
        assert repo.get_competition(group_competition.id).field_count == 5

    def test_delete_competition(self, repo, group_competition, saved_teams):
        """Deleting a competition removes its teams and matches."""
        repo.create_match(Match(competition_id=group_competition.id, stage="Group Stage"))
        repo.delete_competition(group_competition.id)

        assert repo.get_competition(group_competition.id) is None
        assert repo.get_teams_for_competition(group_competition.id) == []
        assert repo.get_matches_for_competition(group_competition.id) == []

    def test_create_teams_assigns_ids(self, repo, saved_teams):
        """Created teams come back with ids in input order."""
        assert all(t.id for t in saved_teams)
        assert [t.team_name for t in saved_teams] == ['Lions', 'Tigers', 'Bears', 'Wolves']

    def test_update_teams(self, repo, group_competition, saved_teams):
        """Names and groups are persisted."""
        renamed = saved_teams[0].model_copy(update={'team_name': 'Eagles', 'group_name': 'Group B'})
        repo.update_teams([renamed])

        stored = repo.get_teams_for_competition(group_competition.id)
        assert stored[0].team_name == 'Eagles'
        assert stored[0].group_name == 'Group B'

    def test_update_teams_keeps_group_when_unset(self, repo, group_competition, saved_teams):
        """A team without a group keeps its stored group."""
        repo.update_teams([saved_teams[0].model_copy(update={'group_name': 'Group C'})])
        repo.update_teams([saved_teams[0].model_copy(update={'team_name': 'Renamed'})])

        stored = repo.get_teams_for_competition(group_competition.id)[0]
        assert stored.team_name == 'Renamed'
        assert stored.group_name == 'Group C'

    def test_delete_teams(self, repo, group_competition, saved_teams):
        """All teams of a competition can be deleted."""
        repo.delete_teams_for_competition(group_competition.id)
        assert repo.get_teams_for_competition(group_competition.id) == []

    def test_create_match_returns_id(self, repo, group_competition):
        """create_match assigns consecutive ids."""
        first = repo.create_match(Match(competition_id=group_competition.id, stage="Final"))
        second = repo.create_match(Match(
            competition_id=group_competition.id, stage="Semi-Final", next_match_id=first.id
        ))
        assert second.id > first.id
        assert repo.get_match(second.id).next_match_id == first.id

    def test_create_matches_bulk(self, repo, group_competition, saved_teams):
        """Bulk insert stores every match."""
        matches = [
            Match(competition_id=group_competition.id, field_number=1,
                  team1_id=saved_teams[0].id, team2_id=saved_teams[1].id, stage="Group Stage"),
            Match(competition_id=group_competition.id, field_number=2,
                  team1_id=saved_teams[2].id, team2_id=saved_teams[3].id, stage="Group Stage"),
        ]
        repo.create_matches(matches)

        stored = repo.get_matches_for_competition(group_competition.id)
        assert len(stored) == 2
        assert stored[0].status == 'scheduled'
        assert (stored[0].score1, stored[0].score2) == (0, 0)

    def test_get_matches_for_field(self, repo, group_competition):
        """Field queries only return that field's matches."""
        repo.create_matches([
            Match(competition_id=group_competition.id, field_number=1),
            Match(competition_id=group_competition.id, field_number=2),
            Match(competition_id=group_competition.id, field_number=1),
        ])
        assert len(repo.get_matches_for_field(group_competition.id, 1)) == 2
        assert len(repo.get_matches_for_field(group_competition.id, 2)) == 1
        assert repo.get_matches_for_field(group_competition.id, 3) == []

    def test_update_match(self, repo, group_competition):
        """Scores and status are written, unset bracket columns are kept."""
        match = repo.create_match(Match(
            competition_id=group_competition.id, team1_id=1, stage="Final"
        ))
        repo.update_match(match.model_copy(update={
            'score1': 2, 'score2': 1, 'status': 'finished', 'team2_id': 4, 'stage': None
        }))

        stored = repo.get_match(match.id)
        assert (stored.score1, stored.score2) == (2, 1)
        assert stored.status == 'finished'
        assert stored.team1_id == 1
        assert stored.team2_id == 4
        assert stored.stage == 'Final'

    def test_get_missing_match(self, repo):
        """Unknown match gives None."""
        assert repo.get_match(12345) is None

    def test_delete_matches(self, repo, group_competition):
        """All matches of a competition can be deleted."""
        repo.create_matches([Match(competition_id=group_competition.id)])
        repo.delete_matches_for_competition(group_competition.id)
        assert repo.get_matches_for_competition(group_competition.id) == []

    def test_competitions_are_isolated(self, repo):
        """Queries only return rows of the requested competition."""
        first = repo.create_competition(make_competition())
        second = repo.create_competition(make_competition(competition_name='Other'))
        repo.create_teams([Team(competition_id=first.id, team_name='Solo')])

        assert len(repo.get_teams_for_competition(first.id)) == 1
        assert repo.get_teams_for_competition(second.id) == []

    def test_sql_error_becomes_query_error(self, repo):
        """Driver failures surface as QueryError."""
        with pytest.raises(QueryError):
            repo._fetch_all("SELECT * FROM no_such_table")


class TestSupabaseRepository:
    """Tests for the Supabase implementation with a mocked client."""

    def _repository(self, client):
        with patch.dict(os.environ, {'SUPABASE_URL': 'https://x.supabase.co', 'SUPABASE_KEY': 'key'}):
            repository = SupabaseRepository()
        repository._client = client
        return repository

    def test_create_match_returns_stored_row(self):
        """The inserted row (with its id) is returned."""
        client = Mock()
        client.table.return_value.insert.return_value.execute.return_value = Mock(
            data=[{'id': 11, 'competition_id': 1, 'stage': 'Final', 'score1': 0,
                   'score2': 0, 'status': 'scheduled'}]
        )
        repository = self._repository(client)

        created = repository.create_match(Match(competition_id=1, stage='Final'))

        assert created.id == 11
        client.table.assert_called_with('matches')
        row = client.table.return_value.insert.call_args[0][0]
        assert 'id' not in row

    def test_client_failure_becomes_query_error(self):
        """Client exceptions surface as QueryError."""
        client = Mock()
        client.table.return_value.select.return_value.eq.return_value.limit.return_value \
            .execute.side_effect = RuntimeError("boom")
        repository = self._repository(client)

        with pytest.raises(QueryError):
            repository.get_match(1)

    def test_update_match_skips_unset_columns(self):
        """Only set bracket columns are sent."""
        client = Mock()
        repository = self._repository(client)

        repository.update_match(Match(id=3, competition_id=1, score1=1, status='finished'))

        sent = client.table.return_value.update.call_args[0][0]
        assert sent == {'score1': 1, 'score2': 0, 'status': 'finished'}
        client.table.return_value.update.return_value.eq.assert_called_with('id', 3)

    def test_health_check_false_on_error(self):
        """Health check reports failures instead of raising."""
        client = Mock()
        client.table.side_effect = RuntimeError("offline")
        assert self._repository(client).health_check() is False
