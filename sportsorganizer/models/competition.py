"""Competition data model."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from sportsorganizer import config
from sportsorganizer.types import CompetitionRow


KNOCKOUT = "Knockout"
GROUP_STAGE_MODE = "Group Stage"
COMBINED = "Combined"

TOURNAMENT_MODES = (KNOCKOUT, GROUP_STAGE_MODE, COMBINED)
SCORING_POINTS = "Points"

# Group labels run from "Group A" to "Group Z"
MAX_GROUPS = 26


class Competition(BaseModel):
    """Represents a competition and its tournament configuration."""

    id: Optional[int] = None
    competition_name: str = Field(..., alias="competitionName")
    sport: Optional[str] = None
    field_count: Optional[int] = Field(None, alias="fieldCount")
    scoring_type: Optional[str] = Field(None, alias="scoringType")  # Points or Time
    tournament_mode: Optional[str] = Field(None, alias="tournamentMode")
    game_duration: Optional[int] = Field(None, alias="gameDuration")
    winning_score: Optional[int] = Field(None, alias="winningScore")
    number_of_groups: Optional[int] = Field(None, alias="numberOfGroups", le=MAX_GROUPS)
    qualifiers_per_group: Optional[int] = Field(None, alias="qualifiersPerGroup")
    points_per_win: int = Field(default=config.DEFAULT_POINTS_PER_WIN, alias="pointsPerWin")
    points_per_draw: int = Field(default=config.DEFAULT_POINTS_PER_DRAW, alias="pointsPerDraw")
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")

    class Config:
        """Pydantic configuration."""

        populate_by_name = True

    @field_validator("tournament_mode")
    @classmethod
    def check_tournament_mode(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in TOURNAMENT_MODES:
            raise ValueError(f"tournament mode must be one of {', '.join(TOURNAMENT_MODES)}")
        return value

    def to_row(self) -> CompetitionRow:
        """Convert to a storage row, omitting the id when unsaved."""
        row = self.model_dump()
        if self.id is None:
            row.pop("id")
        return row
