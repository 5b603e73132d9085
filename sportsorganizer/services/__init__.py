"""Services for the Sports Organizer application."""

from sportsorganizer.services.competition_service import CompetitionService
from sportsorganizer.services.referee_service import RefereeService
from sportsorganizer.services.result import Success, Error, run_remote

__all__ = ["CompetitionService", "RefereeService", "Success", "Error", "run_remote"]
