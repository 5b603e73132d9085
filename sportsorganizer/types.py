"""
Type definitions for the Sports Organizer storage rows and API payloads.

Provides TypedDict classes for structured data validation and IDE support.
Row dictionaries use the snake_case column names of the remote tables.
"""

from typing import TypedDict, Optional, List


class TeamRow(TypedDict, total=False):
    """Row of the `teams` table."""
    id: int
    competition_id: int
    team_name: str
    group_name: Optional[str]


class MatchRow(TypedDict, total=False):
    """Row of the `matches` table."""
    id: int
    competition_id: int
    field_number: Optional[int]
    team1_id: Optional[int]
    team2_id: Optional[int]
    score1: int
    score2: int
    status: str  # scheduled, in_progress, paused, finished
    start_time: Optional[str]
    stage: Optional[str]  # "Group A", "Round 1", "Semi-Final", "Final"
    next_match_id: Optional[int]


class CompetitionRow(TypedDict, total=False):
    """Row of the `competitions` table."""
    id: int
    competition_name: str
    sport: Optional[str]
    field_count: Optional[int]
    scoring_type: Optional[str]  # Points, Time
    tournament_mode: Optional[str]  # Knockout, Group Stage, Combined
    game_duration: Optional[int]
    winning_score: Optional[int]
    number_of_groups: Optional[int]
    qualifiers_per_group: Optional[int]
    points_per_win: int
    points_per_draw: int
    start_date: Optional[str]
    end_date: Optional[str]


class TeamStatsDict(TypedDict):
    """One row of a standings table as returned by the API."""
    teamId: int
    teamName: Optional[str]
    played: int
    won: int
    drawn: int
    lost: int
    points: int
    goalsFor: int
    goalsAgainst: int
    goalDifference: int


class CompetitorViewDict(TypedDict, total=False):
    """Response from the competitor standings endpoint."""
    competition: dict
    standings: dict  # group name -> List[TeamStatsDict]
    matches: List[dict]
    teamNames: dict  # team id -> team name
