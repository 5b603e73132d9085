"""
Factory function to create the appropriate repository implementation.

Reads configuration from environment variables to determine which
storage backend to use.
"""

import logging
import os
from typing import Optional

from .base import CompetitionRepository
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


# Singleton instance
_repository: Optional[CompetitionRepository] = None


def get_repository() -> CompetitionRepository:
    """
    Get or create the repository instance.

    Uses the DB_TYPE environment variable to determine which implementation:
    - "sqlite" (default): Local SQLite database
    - "supabase": Supabase PostgreSQL tables

    Additional environment variables per type:
    - SQLite: DATA_DIR, or uses the "data" directory
    - Supabase: SUPABASE_URL, SUPABASE_KEY

    Returns:
        CompetitionRepository implementation

    Raises:
        ConfigurationError: If DB_TYPE is unknown or required env vars are missing
    """
    global _repository

    if _repository is not None:
        return _repository

    db_type = os.environ.get('DB_TYPE', 'sqlite').lower()
    logger.info(f"Database type: {db_type}")

    if db_type == 'sqlite':
        from .sqlite_db import SQLiteRepository

        data_dir = os.environ.get('DATA_DIR') or 'data'
        db_path = os.path.join(data_dir, 'sportsorganizer.db')

        repository: CompetitionRepository = SQLiteRepository(db_path=db_path)

    elif db_type == 'supabase':
        from .supabase_db import SupabaseRepository
        repository = SupabaseRepository()

    else:
        raise ConfigurationError(
            f"Unknown DB_TYPE: {db_type}. "
            f"Valid options: sqlite, supabase"
        )

    # Initialize before publishing the singleton
    repository.initialize()
    _repository = repository

    return _repository


def reset_repository() -> None:
    """
    Reset the repository singleton.

    Used for testing or when switching configurations.
    """
    global _repository
    if _repository is not None:
        _repository.close()
        _repository = None
