"""Match data model."""

from typing import Optional
from pydantic import BaseModel, Field

from sportsorganizer.types import MatchRow


SCHEDULED = "scheduled"
IN_PROGRESS = "in_progress"
PAUSED = "paused"
FINISHED = "finished"

MATCH_STATUSES = (SCHEDULED, IN_PROGRESS, PAUSED, FINISHED)

# Knockout stage labels
FINAL_STAGE = "Final"
SEMI_FINAL_STAGE = "Semi-Final"
GROUP_STAGE = "Group Stage"


class Match(BaseModel):
    """Represents a single match within a competition."""

    id: Optional[int] = None
    competition_id: int = Field(..., alias="competitionId")
    field_number: Optional[int] = Field(None, alias="fieldNumber")
    team1_id: Optional[int] = Field(None, alias="team1Id")
    team2_id: Optional[int] = Field(None, alias="team2Id")
    score1: int = 0
    score2: int = 0
    status: str = SCHEDULED  # scheduled, in_progress, paused, finished
    start_time: Optional[str] = Field(None, alias="startTime")
    stage: Optional[str] = None  # e.g. "Group A", "Round 1", "Final"

    # Knockout only: the match (closer to the final) the winner advances into
    next_match_id: Optional[int] = Field(None, alias="nextMatchId")

    class Config:
        """Pydantic configuration."""

        populate_by_name = True

    @property
    def is_finished(self) -> bool:
        return self.status == FINISHED

    @property
    def has_teams(self) -> bool:
        """True when at least one team slot is filled."""
        return self.team1_id is not None or self.team2_id is not None

    def is_knockout(self) -> bool:
        """Check if this match belongs to a knockout bracket."""
        if not self.stage:
            return False
        return (
            "Round" in self.stage
            or "Semi" in self.stage
            or "Final" in self.stage
        )

    def winner_id(self) -> Optional[int]:
        """Get the strict winner's team id, None on a draw."""
        if self.score1 > self.score2:
            return self.team1_id
        if self.score2 > self.score1:
            return self.team2_id
        return None

    def to_row(self) -> MatchRow:
        """Convert to a storage row, omitting the id when unsaved."""
        row = self.model_dump()
        if self.id is None:
            row.pop("id")
        return row
