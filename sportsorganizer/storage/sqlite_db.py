"""
SQLite Storage for Sports Organizer.

Local storage of competitions, teams and matches with:
- The same table layout as the remote Supabase schema
- Atomic transactions for data safety
- Autoincrement ids, returned on insert so knockout rounds can link
- Concurrent read access via WAL mode

This is the SQLite implementation of the CompetitionRepository.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Iterator, List, Dict, Any
import threading

from .base import CompetitionRepository
from .exceptions import QueryError
from ..models import Competition, Match, Team
from .. import config


COMPETITION_COLUMNS = (
    'competition_name', 'sport', 'field_count', 'scoring_type',
    'tournament_mode', 'game_duration', 'winning_score', 'number_of_groups',
    'qualifiers_per_group', 'points_per_win', 'points_per_draw',
    'start_date', 'end_date'
)

MATCH_COLUMNS = (
    'competition_id', 'field_number', 'team1_id', 'team2_id', 'score1',
    'score2', 'status', 'start_time', 'stage', 'next_match_id'
)


class SQLiteRepository(CompetitionRepository):
    """
    SQLite repository for competition data.
    Thread-safe with connection per thread.

    Implements the CompetitionRepository abstract base class.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str = "data/sportsorganizer.db"):
        """
        Create SQLite repository instance.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = Path(db_path)
        self._local = threading.local()
        self._initialized = False

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def initialize(self) -> None:
        """Initialize the database connection and schema."""
        if self._initialized:
            return

        # Ensure parent directory exists
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_schema()
        self._initialized = True

    def close(self) -> None:
        """Close database connections and clean up resources."""
        if hasattr(self._local, 'conn') and self._local.conn is not None:
            self._local.conn.close()
            self._local.conn = None

    def health_check(self) -> bool:
        """Check if the database connection is healthy."""
        try:
            conn = self._get_connection()
            conn.execute("SELECT 1")
            return True
        except sqlite3.Error:
            return False

    # =========================================================================
    # CONNECTION MANAGEMENT
    # =========================================================================

    def _get_connection(self) -> sqlite3.Connection:
        """Get thread-local database connection."""
        if not hasattr(self._local, 'conn') or self._local.conn is None:
            self._local.conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                timeout=30.0
            )
            self._local.conn.row_factory = sqlite3.Row
            if config.SQLITE_WAL:
                # Enable WAL mode for better concurrent access
                self._local.conn.execute("PRAGMA journal_mode=WAL")
                self._local.conn.execute("PRAGMA synchronous=NORMAL")
        return self._local.conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database transactions."""
        conn = self._get_connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise QueryError(f"SQLite query failed: {e}") from e
        except Exception:
            conn.rollback()
            raise

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[Dict[str, Any]]:
        """Run a read query and return rows as dictionaries."""
        try:
            cursor = self._get_connection().execute(sql, params)
            return [dict(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise QueryError(f"SQLite query failed: {e}") from e

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self.transaction() as conn:
            conn.executescript('''
                -- Metadata table
                CREATE TABLE IF NOT EXISTS metadata (
                    key TEXT PRIMARY KEY,
                    value TEXT,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                );

                -- Competitions
                CREATE TABLE IF NOT EXISTS competitions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    competition_name TEXT NOT NULL,
                    sport TEXT,
                    field_count INTEGER,
                    scoring_type TEXT,
                    tournament_mode TEXT,
                    game_duration INTEGER,
                    winning_score INTEGER,
                    number_of_groups INTEGER,
                    qualifiers_per_group INTEGER,
                    points_per_win INTEGER NOT NULL DEFAULT 3,
                    points_per_draw INTEGER NOT NULL DEFAULT 1,
                    start_date TEXT,
                    end_date TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                );

                -- Teams
                CREATE TABLE IF NOT EXISTS teams (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    competition_id INTEGER NOT NULL,
                    team_name TEXT NOT NULL,
                    group_name TEXT,
                    FOREIGN KEY (competition_id) REFERENCES competitions(id)
                );

                -- Matches
                CREATE TABLE IF NOT EXISTS matches (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    competition_id INTEGER NOT NULL,
                    field_number INTEGER,
                    team1_id INTEGER,
                    team2_id INTEGER,
                    score1 INTEGER NOT NULL DEFAULT 0,
                    score2 INTEGER NOT NULL DEFAULT 0,
                    status TEXT NOT NULL DEFAULT 'scheduled',
                    start_time TEXT,
                    stage TEXT,
                    next_match_id INTEGER,
                    FOREIGN KEY (competition_id) REFERENCES competitions(id)
                );

                -- Indexes for fast queries
                CREATE INDEX IF NOT EXISTS idx_teams_competition ON teams(competition_id);
                CREATE INDEX IF NOT EXISTS idx_matches_competition ON matches(competition_id);
                CREATE INDEX IF NOT EXISTS idx_matches_field ON matches(competition_id, field_number);
            ''')

            conn.execute(
                "INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)",
                ('schema_version', str(self.SCHEMA_VERSION))
            )

    # =========================================================================
    # COMPETITIONS
    # =========================================================================

    def create_competition(self, competition: Competition) -> Competition:
        """Insert a competition and return it with its id."""
        row = competition.to_row()
        with self.transaction() as conn:
            cursor = conn.execute(
                f"INSERT INTO competitions ({', '.join(COMPETITION_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in COMPETITION_COLUMNS)})",
                tuple(row.get(col) for col in COMPETITION_COLUMNS)
            )
            new_id = cursor.lastrowid
        return competition.model_copy(update={'id': new_id})

    def get_competition(self, competition_id: int) -> Optional[Competition]:
        """Fetch a competition by id."""
        rows = self._fetch_all(
            "SELECT * FROM competitions WHERE id = ?", (competition_id,)
        )
        if not rows:
            return None
        rows[0].pop('created_at', None)
        return Competition(**rows[0])

    def update_competition(self, competition: Competition) -> None:
        """Update the configuration columns of a competition."""
        row = competition.to_row()
        with self.transaction() as conn:
            conn.execute(
                f"UPDATE competitions SET "
                f"{', '.join(f'{col} = ?' for col in COMPETITION_COLUMNS)} "
                f"WHERE id = ?",
                tuple(row.get(col) for col in COMPETITION_COLUMNS) + (competition.id,)
            )

    def delete_competition(self, competition_id: int) -> None:
        """Delete a competition and everything that belongs to it."""
        with self.transaction() as conn:
            conn.execute("DELETE FROM matches WHERE competition_id = ?", (competition_id,))
            conn.execute("DELETE FROM teams WHERE competition_id = ?", (competition_id,))
            conn.execute("DELETE FROM competitions WHERE id = ?", (competition_id,))

    # =========================================================================
    # TEAMS
    # =========================================================================

    def create_teams(self, teams: List[Team]) -> List[Team]:
        """Insert teams and return them with their ids."""
        created = []
        with self.transaction() as conn:
            for team in teams:
                cursor = conn.execute(
                    "INSERT INTO teams (competition_id, team_name, group_name) VALUES (?, ?, ?)",
                    (team.competition_id, team.team_name, team.group_name)
                )
                created.append(team.model_copy(update={'id': cursor.lastrowid}))
        return created

    def update_teams(self, teams: List[Team]) -> None:
        """Update names and groups of existing teams."""
        with self.transaction() as conn:
            for team in teams:
                conn.execute('''
                    UPDATE teams
                    SET team_name = ?, group_name = COALESCE(?, group_name)
                    WHERE id = ?
                ''', (team.team_name, team.group_name, team.id))

    def get_teams_for_competition(self, competition_id: int) -> List[Team]:
        """Fetch all teams of a competition."""
        rows = self._fetch_all(
            "SELECT * FROM teams WHERE competition_id = ? ORDER BY id",
            (competition_id,)
        )
        return [Team(**row) for row in rows]

    def delete_teams_for_competition(self, competition_id: int) -> None:
        """Delete all teams of a competition."""
        with self.transaction() as conn:
            conn.execute("DELETE FROM teams WHERE competition_id = ?", (competition_id,))

    # =========================================================================
    # MATCHES
    # =========================================================================

    def _insert_match(self, conn: sqlite3.Connection, match: Match) -> int:
        row = match.to_row()
        cursor = conn.execute(
            f"INSERT INTO matches ({', '.join(MATCH_COLUMNS)}) "
            f"VALUES ({', '.join('?' for _ in MATCH_COLUMNS)})",
            tuple(row.get(col) for col in MATCH_COLUMNS)
        )
        return cursor.lastrowid

    def create_match(self, match: Match) -> Match:
        """Insert one match and return it with its id."""
        with self.transaction() as conn:
            new_id = self._insert_match(conn, match)
        return match.model_copy(update={'id': new_id})

    def create_matches(self, matches: List[Match]) -> None:
        """Insert matches in a single transaction."""
        with self.transaction() as conn:
            for match in matches:
                self._insert_match(conn, match)

    def get_match(self, match_id: int) -> Optional[Match]:
        """Fetch a match by id."""
        rows = self._fetch_all("SELECT * FROM matches WHERE id = ?", (match_id,))
        return Match(**rows[0]) if rows else None

    def update_match(self, match: Match) -> None:
        """Update scores, status and the optional bracket columns."""
        with self.transaction() as conn:
            conn.execute('''
                UPDATE matches
                SET score1 = ?,
                    score2 = ?,
                    status = ?,
                    stage = COALESCE(?, stage),
                    team1_id = COALESCE(?, team1_id),
                    team2_id = COALESCE(?, team2_id),
                    next_match_id = COALESCE(?, next_match_id)
                WHERE id = ?
            ''', (
                match.score1,
                match.score2,
                match.status,
                match.stage,
                match.team1_id,
                match.team2_id,
                match.next_match_id,
                match.id
            ))

    def get_matches_for_competition(self, competition_id: int) -> List[Match]:
        """Fetch all matches of a competition."""
        rows = self._fetch_all(
            "SELECT * FROM matches WHERE competition_id = ? ORDER BY id",
            (competition_id,)
        )
        return [Match(**row) for row in rows]

    def get_matches_for_field(self, competition_id: int, field_number: int) -> List[Match]:
        """Fetch the matches of one field."""
        rows = self._fetch_all(
            "SELECT * FROM matches WHERE competition_id = ? AND field_number = ? ORDER BY id",
            (competition_id, field_number)
        )
        return [Match(**row) for row in rows]

    def delete_matches_for_competition(self, competition_id: int) -> None:
        """Delete all matches of a competition."""
        with self.transaction() as conn:
            conn.execute("DELETE FROM matches WHERE competition_id = ?", (competition_id,))
