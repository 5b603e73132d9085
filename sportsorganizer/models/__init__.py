"""Data models for the Sports Organizer application."""

from sportsorganizer.models.competition import Competition
from sportsorganizer.models.match import Match
from sportsorganizer.models.standings import TeamStats
from sportsorganizer.models.team import Team

__all__ = ["Competition", "Match", "Team", "TeamStats"]
