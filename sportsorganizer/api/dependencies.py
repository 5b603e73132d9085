"""FastAPI dependencies for dependency injection."""

from fastapi import Depends

from sportsorganizer.services.competition_service import CompetitionService
from sportsorganizer.services.referee_service import RefereeService
from sportsorganizer.storage import CompetitionRepository, get_repository


def get_repo() -> CompetitionRepository:
    """Get repository dependency."""
    return get_repository()


def get_competition_service(
    repository: CompetitionRepository = Depends(get_repo),
) -> CompetitionService:
    """Get competition service dependency."""
    return CompetitionService(repository)


def get_referee_service(
    repository: CompetitionRepository = Depends(get_repo),
) -> RefereeService:
    """Get referee service dependency."""
    return RefereeService(repository)
