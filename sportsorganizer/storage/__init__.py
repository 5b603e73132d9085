"""
Storage module for competitions, teams and matches.

Provides a unified repository interface for multiple database backends:
- SQLite (local development, offline use)
- Supabase (PostgreSQL remote tables)

Usage:
    from sportsorganizer.storage import get_repository

    repo = get_repository()  # Uses DB_TYPE env var
    matches = repo.get_matches_for_competition(competition_id)
"""

from .base import CompetitionRepository
from .factory import get_repository, reset_repository
from .exceptions import (
    DatabaseError,
    ConnectionError,
    ConfigurationError,
    SchemaError,
    QueryError,
    NotFoundError
)

__all__ = [
    'CompetitionRepository',
    'get_repository',
    'reset_repository',
    'DatabaseError',
    'ConnectionError',
    'ConfigurationError',
    'SchemaError',
    'QueryError',
    'NotFoundError'
]
