"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

import os
import random
from typing import Optional


def _get_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_optional_int(key: str) -> Optional[int]:
    """Get integer from environment variable, None when unset or invalid."""
    value = os.environ.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment variable."""
    value = os.environ.get(key)
    if value is None:
        return default
    return value.lower() in ('true', '1', 'yes')


def _get_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


# =============================================================================
# SERVER SETTINGS
# =============================================================================
PORT = _get_int('PORT', 8000)
HOST = _get_str('HOST', '0.0.0.0')

# =============================================================================
# STORAGE SETTINGS
# =============================================================================
# Write-ahead logging for the local SQLite backend
SQLITE_WAL = _get_bool('SQLITE_WAL', True)

# =============================================================================
# TOURNAMENT DEFAULTS
# =============================================================================
# Used when a competition does not specify its own values
DEFAULT_FIELD_COUNT = _get_int('DEFAULT_FIELD_COUNT', 1)
DEFAULT_QUALIFIERS_PER_GROUP = _get_int('DEFAULT_QUALIFIERS_PER_GROUP', 2)
DEFAULT_POINTS_PER_WIN = _get_int('DEFAULT_POINTS_PER_WIN', 3)
DEFAULT_POINTS_PER_DRAW = _get_int('DEFAULT_POINTS_PER_DRAW', 1)

# =============================================================================
# LOGGING
# =============================================================================
LOG_LEVEL = _get_str('LOG_LEVEL', 'INFO')


def get_rng() -> random.Random:
    """Create the random source used for draws, seeded from RANDOM_SEED."""
    seed = _get_optional_int('RANDOM_SEED')
    return random.Random(seed)
