"""API route definitions."""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from sportsorganizer.api.dependencies import get_competition_service, get_referee_service
from sportsorganizer.models import Competition, Match, Team, TeamStats
from sportsorganizer.services.competition_service import CompetitionService
from sportsorganizer.services.referee_service import RefereeService
from sportsorganizer.services.result import Error
from sportsorganizer.storage import DatabaseError, NotFoundError
from sportsorganizer.types import CompetitorViewDict, TeamStatsDict

logger = logging.getLogger(__name__)
router = APIRouter()


class TeamSetupRequest(BaseModel):
    """Body of the team setup endpoint."""

    number_of_teams: int = Field(..., alias="numberOfTeams", ge=2)

    class Config:
        """Pydantic configuration."""

        populate_by_name = True


class TeamListRequest(BaseModel):
    """Body of the team confirmation endpoint."""

    teams: List[Team]
    config_value: Optional[int] = Field(None, alias="configValue", ge=0)

    class Config:
        """Pydantic configuration."""

        populate_by_name = True


class ScoreUpdate(BaseModel):
    """Body of the score endpoint."""

    score1: int
    score2: int


class StatusUpdate(BaseModel):
    """Body of the status endpoint."""

    status: str


def _match_json(match: Match) -> dict:
    return match.model_dump(by_alias=True)


def _standings_row(stats: TeamStats, team_names: Dict[int, str]) -> TeamStatsDict:
    row = stats.to_dict()
    row["teamName"] = team_names.get(stats.team_id)
    return row


@router.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint.

    Returns:
        Health status
    """
    return JSONResponse(content={"status": "healthy", "version": "1.0.0"})


@router.post("/api/competitions", status_code=201)
async def create_competition(
    competition: Competition,
    service: CompetitionService = Depends(get_competition_service),
) -> JSONResponse:
    """Create a competition.

    Returns:
        The competition with its id
    """
    try:
        created = service.create_competition(competition)
        return JSONResponse(status_code=201, content=created.model_dump(by_alias=True))
    except DatabaseError as e:
        logger.error(f"Error creating competition: {e}")
        raise HTTPException(status_code=500, detail="Failed to create competition")


@router.get("/api/competitions/{competition_id}")
async def get_competition(
    competition_id: int,
    service: CompetitionService = Depends(get_competition_service),
) -> JSONResponse:
    """Get one competition."""
    try:
        competition = service.get_competition(competition_id)
        return JSONResponse(content=competition.model_dump(by_alias=True))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatabaseError as e:
        logger.error(f"Error fetching competition: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch competition")


@router.post("/api/competitions/{competition_id}/teams", status_code=201)
async def setup_teams(
    competition_id: int,
    body: TeamSetupRequest,
    service: CompetitionService = Depends(get_competition_service),
) -> JSONResponse:
    """Create the default teams of a competition.

    Returns:
        List of teams with their ids
    """
    try:
        teams = service.setup_teams(competition_id, body.number_of_teams)
        return JSONResponse(
            status_code=201,
            content=[t.model_dump(by_alias=True) for t in teams]
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatabaseError as e:
        logger.error(f"Error creating teams: {e}")
        raise HTTPException(status_code=500, detail="Failed to create teams")


@router.put("/api/competitions/{competition_id}/teams")
async def confirm_teams(
    competition_id: int,
    body: TeamListRequest,
    service: CompetitionService = Depends(get_competition_service),
) -> JSONResponse:
    """Save team names, draw groups and generate the schedule.

    Returns:
        Number of matches created
    """
    try:
        created = service.confirm_teams(competition_id, body.teams, body.config_value)
        return JSONResponse(content={"matchesCreated": created})
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatabaseError as e:
        logger.error(f"Error generating matches: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate matches")


@router.post("/api/competitions/{competition_id}/knockout")
async def generate_knockout_stage(
    competition_id: int,
    service: CompetitionService = Depends(get_competition_service),
) -> JSONResponse:
    """Generate the knockout stage from the group standings.

    Returns:
        Status "created" with the match count, "exists" or "empty"
    """
    try:
        created = service.generate_knockout_stage(competition_id)
    except DatabaseError as e:
        logger.error(f"Error generating knockout stage: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate knockout stage")

    if created == -1:
        return JSONResponse(status_code=409, content={"status": "exists", "matchesCreated": 0})
    if created == 0:
        return JSONResponse(content={"status": "empty", "matchesCreated": 0})
    return JSONResponse(content={"status": "created", "matchesCreated": created})


@router.get("/api/competitions/{competition_id}/standings")
async def get_standings(
    competition_id: int,
    service: CompetitionService = Depends(get_competition_service),
) -> JSONResponse:
    """Competitor view: standings per group plus playable matches.

    Returns:
        Competition, standings by group, matches and team names
    """
    result = service.load_competitor_view(competition_id)
    if isinstance(result, Error):
        if result.not_found:
            raise HTTPException(status_code=404, detail=result.message)
        raise HTTPException(status_code=500, detail=result.message)

    view = result.data
    team_names = view['team_names']
    content: CompetitorViewDict = {
        "competition": view['competition'].model_dump(by_alias=True),
        "standings": {
            group: [_standings_row(stats, team_names) for stats in table]
            for group, table in view['standings'].items()
        },
        "matches": [_match_json(m) for m in view['matches']],
        "teamNames": {str(team_id): name for team_id, name in team_names.items()},
    }
    return JSONResponse(content=content)


@router.get("/api/competitions/{competition_id}/fields/{field_number}/matches")
async def get_field_matches(
    competition_id: int,
    field_number: int,
    service: RefereeService = Depends(get_referee_service),
) -> JSONResponse:
    """List the playable matches of one field in referee order."""
    try:
        matches = service.matches_for_field(competition_id, field_number)
        return JSONResponse(content=[_match_json(m) for m in matches])
    except DatabaseError as e:
        logger.error(f"Error fetching field matches: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch matches")


@router.put("/api/matches/{match_id}/score")
async def update_score(
    match_id: int,
    body: ScoreUpdate,
    service: RefereeService = Depends(get_referee_service),
) -> JSONResponse:
    """Update the score of a match."""
    try:
        match = service.update_score(match_id, body.score1, body.score2)
        return JSONResponse(content=_match_json(match))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatabaseError as e:
        logger.error(f"Error updating score: {e}")
        raise HTTPException(status_code=500, detail="Failed to update score")


@router.put("/api/matches/{match_id}/status")
async def update_status(
    match_id: int,
    body: StatusUpdate,
    service: RefereeService = Depends(get_referee_service),
) -> JSONResponse:
    """Update the status of a match, advancing knockout winners."""
    try:
        match = service.update_status(match_id, body.status)
        return JSONResponse(content=_match_json(match))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatabaseError as e:
        logger.error(f"Error updating status: {e}")
        raise HTTPException(status_code=500, detail="Failed to update status")
