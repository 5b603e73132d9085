"""Team data model."""

from typing import Optional
from pydantic import BaseModel, Field

from sportsorganizer.types import TeamRow


class Team(BaseModel):
    """
    Represents a team participating in a competition.

    A team without an id (or with id 0) has not been persisted yet and is
    treated as a placeholder by the match generators.
    """

    id: Optional[int] = None
    competition_id: int = Field(..., alias="competitionId")
    team_name: str = Field(..., alias="teamName")
    group_name: Optional[str] = Field(None, alias="groupName")

    class Config:
        """Pydantic configuration."""

        populate_by_name = True

    @property
    def is_saved(self) -> bool:
        """Check if the team has a real identifier."""
        return bool(self.id)

    def to_row(self) -> TeamRow:
        """Convert to a storage row, omitting the id when unsaved."""
        row = self.model_dump()
        if not self.is_saved:
            row.pop("id")
        return row
