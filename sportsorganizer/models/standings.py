"""Standings data model."""

from dataclasses import dataclass


@dataclass
class TeamStats:
    """
    Aggregated results of one team, derived from finished matches.

    Never persisted: recomputed from the match log on every request.
    """

    team_id: int
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    points: int = 0
    goals_for: int = 0
    goals_against: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def to_dict(self) -> dict:
        """Serialize for API responses."""
        return {
            "teamId": self.team_id,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "points": self.points,
            "goalsFor": self.goals_for,
            "goalsAgainst": self.goals_against,
            "goalDifference": self.goal_difference,
        }
