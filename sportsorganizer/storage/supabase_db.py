"""
Supabase Storage for Sports Organizer.

Provides PostgreSQL-based remote storage using Supabase's REST API.
Key differences from SQLite:
- Uses supabase-py client library (REST API)
- insert() returns the created rows, including their generated ids
- Batch size limits (chunk large inserts at 500 rows)
- initialize() verifies tables exist (doesn't create them)
- Team updates are issued row by row (upsert would try to write the id)

Requires: pip install supabase
Tables `competitions`, `teams` and `matches` must exist in the project.
"""

import os
from typing import Optional, List, Dict, Any

from .base import CompetitionRepository
from .exceptions import ConfigurationError, ConnectionError, QueryError
from ..models import Competition, Match, Team


# Batch size for bulk insert operations
BATCH_SIZE = 500


class SupabaseRepository(CompetitionRepository):
    """
    Supabase remote repository implementation.

    Uses PostgreSQL via Supabase's REST API.
    Implements the CompetitionRepository abstract base class.
    """

    def __init__(self):
        """
        Create Supabase repository instance.

        Reads configuration from environment variables:
        - SUPABASE_URL: Project URL (e.g., https://your-project.supabase.co)
        - SUPABASE_KEY: Anon or service key
        """
        self._url = os.environ.get('SUPABASE_URL')
        self._key = os.environ.get('SUPABASE_KEY')
        self._client = None
        self._initialized = False

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def initialize(self) -> None:
        """Initialize the connection and verify schema."""
        if self._initialized:
            return

        if not self._url:
            raise ConfigurationError(
                "SUPABASE_URL environment variable is required for Supabase backend"
            )
        if not self._key:
            raise ConfigurationError(
                "SUPABASE_KEY environment variable is required for Supabase backend"
            )

        client = self._get_client()
        try:
            client.table('competitions').select('id').limit(1).execute()
        except Exception as e:
            raise ConnectionError(
                f"Failed to connect to Supabase or schema not initialized. "
                f"Error: {e}"
            )

        self._initialized = True

    def _get_client(self):
        """Get or create Supabase client."""
        if self._client is None:
            try:
                from supabase import create_client
            except ImportError:
                raise ConfigurationError(
                    "supabase package not installed. "
                    "Install with: pip install supabase"
                )

            try:
                self._client = create_client(self._url, self._key)
            except Exception as e:
                raise ConnectionError(f"Failed to create Supabase client: {e}")

        return self._client

    def _execute(self, query) -> List[Dict[str, Any]]:
        """Execute a query builder and return its rows."""
        try:
            response = query.execute()
        except Exception as e:
            raise QueryError(f"Supabase query failed: {e}") from e
        return response.data or []

    def close(self) -> None:
        """Close connection (no-op for Supabase REST API)."""
        # REST API doesn't maintain persistent connections
        self._client = None

    def health_check(self) -> bool:
        """Check if the connection is healthy."""
        try:
            client = self._get_client()
            client.table('competitions').select('id').limit(1).execute()
            return True
        except Exception:
            return False

    # =========================================================================
    # COMPETITIONS
    # =========================================================================

    def create_competition(self, competition: Competition) -> Competition:
        """Insert a competition and return the stored row."""
        client = self._get_client()
        rows = self._execute(client.table('competitions').insert(competition.to_row()))
        if not rows:
            raise QueryError("Supabase returned no row for created competition")
        return Competition(**rows[0])

    def get_competition(self, competition_id: int) -> Optional[Competition]:
        """Fetch a competition by id."""
        client = self._get_client()
        rows = self._execute(
            client.table('competitions').select('*').eq('id', competition_id).limit(1)
        )
        return Competition(**rows[0]) if rows else None

    def update_competition(self, competition: Competition) -> None:
        """Update the configuration of a competition (unset values are skipped)."""
        client = self._get_client()
        update_data = {
            key: value
            for key, value in competition.to_row().items()
            if key != 'id' and value is not None
        }
        if update_data:
            self._execute(
                client.table('competitions').update(update_data).eq('id', competition.id)
            )

    def delete_competition(self, competition_id: int) -> None:
        """Delete matches, teams, then the competition itself."""
        client = self._get_client()
        self._execute(client.table('matches').delete().eq('competition_id', competition_id))
        self._execute(client.table('teams').delete().eq('competition_id', competition_id))
        self._execute(client.table('competitions').delete().eq('id', competition_id))

    # =========================================================================
    # TEAMS
    # =========================================================================

    def create_teams(self, teams: List[Team]) -> List[Team]:
        """Insert teams and return the stored rows with their ids."""
        client = self._get_client()
        rows = [team.to_row() for team in teams]

        created = []
        for i in range(0, len(rows), BATCH_SIZE):
            batch = rows[i:i + BATCH_SIZE]
            created.extend(self._execute(client.table('teams').insert(batch)))

        return [Team(**row) for row in created]

    def update_teams(self, teams: List[Team]) -> None:
        """Update names and groups of existing teams, one row at a time."""
        client = self._get_client()
        for team in teams:
            update_data: Dict[str, Any] = {'team_name': team.team_name}
            if team.group_name is not None:
                update_data['group_name'] = team.group_name
            self._execute(client.table('teams').update(update_data).eq('id', team.id))

    def get_teams_for_competition(self, competition_id: int) -> List[Team]:
        """Fetch all teams of a competition."""
        client = self._get_client()
        rows = self._execute(
            client.table('teams')
            .select('*')
            .eq('competition_id', competition_id)
            .order('id')
        )
        return [Team(**row) for row in rows]

    def delete_teams_for_competition(self, competition_id: int) -> None:
        """Delete all teams of a competition."""
        client = self._get_client()
        self._execute(client.table('teams').delete().eq('competition_id', competition_id))

    # =========================================================================
    # MATCHES
    # =========================================================================

    def create_match(self, match: Match) -> Match:
        """Insert one match and return the stored row with its id."""
        client = self._get_client()
        rows = self._execute(client.table('matches').insert(match.to_row()))
        if not rows:
            raise QueryError("Supabase returned no row for created match")
        return Match(**rows[0])

    def create_matches(self, matches: List[Match]) -> None:
        """Insert matches in batches."""
        client = self._get_client()
        rows = [match.to_row() for match in matches]

        for i in range(0, len(rows), BATCH_SIZE):
            batch = rows[i:i + BATCH_SIZE]
            self._execute(client.table('matches').insert(batch))

    def get_match(self, match_id: int) -> Optional[Match]:
        """Fetch a match by id."""
        client = self._get_client()
        rows = self._execute(
            client.table('matches').select('*').eq('id', match_id).limit(1)
        )
        return Match(**rows[0]) if rows else None

    def update_match(self, match: Match) -> None:
        """Update scores and status; bracket columns only when set."""
        client = self._get_client()
        update_data: Dict[str, Any] = {
            'score1': match.score1,
            'score2': match.score2,
            'status': match.status,
        }
        for key in ('stage', 'team1_id', 'team2_id', 'next_match_id'):
            value = getattr(match, key)
            if value is not None:
                update_data[key] = value

        self._execute(client.table('matches').update(update_data).eq('id', match.id))

    def get_matches_for_competition(self, competition_id: int) -> List[Match]:
        """Fetch all matches of a competition."""
        client = self._get_client()
        rows = self._execute(
            client.table('matches')
            .select('*')
            .eq('competition_id', competition_id)
            .order('id')
        )
        return [Match(**row) for row in rows]

    def get_matches_for_field(self, competition_id: int, field_number: int) -> List[Match]:
        """Fetch the matches of one field."""
        client = self._get_client()
        rows = self._execute(
            client.table('matches')
            .select('*')
            .eq('competition_id', competition_id)
            .eq('field_number', field_number)
            .order('id')
        )
        return [Match(**row) for row in rows]

    def delete_matches_for_competition(self, competition_id: int) -> None:
        """Delete all matches of a competition."""
        client = self._get_client()
        self._execute(client.table('matches').delete().eq('competition_id', competition_id))
