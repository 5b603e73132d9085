"""
Shared test fixtures and configuration.

Provides reusable fixtures for all test files including repository
instances, sample competitions and teams, seeded random sources, and
the FastAPI test client.
"""

import pytest
import os
import random
import shutil
import tempfile
from typing import List
from unittest.mock import patch

from fastapi.testclient import TestClient

from sportsorganizer.storage import get_repository, reset_repository
from sportsorganizer.models import Competition, Match, Team
from sportsorganizer.models.competition import COMBINED, GROUP_STAGE_MODE, KNOCKOUT
from sportsorganizer.models.match import FINISHED


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================

@pytest.fixture
def test_data_dir():
    """Provide a temporary directory for test data."""
    temp_dir = tempfile.mkdtemp(prefix="sportsorganizer_test_")
    yield temp_dir

    # Cleanup
    if os.path.exists(temp_dir):
        try:
            shutil.rmtree(temp_dir)
        except PermissionError:
            pass  # Windows file locking, ignore


@pytest.fixture
def repo(test_data_dir):
    """Provide a clean SQLite repository."""
    with patch.dict(os.environ, {'DB_TYPE': 'sqlite', 'DATA_DIR': test_data_dir}, clear=False):
        reset_repository()
        repository = get_repository()
        yield repository
        reset_repository()  # Close connection before cleanup


@pytest.fixture
def rng():
    """Provide a deterministic random source."""
    return random.Random(42)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

def make_competition(**overrides) -> Competition:
    """Build a competition with test defaults."""
    data = {
        'competition_name': 'Summer Cup',
        'sport': 'Football',
        'field_count': 2,
        'scoring_type': 'Points',
        'tournament_mode': GROUP_STAGE_MODE,
        'number_of_groups': 1,
        'qualifiers_per_group': 2,
    }
    data.update(overrides)
    return Competition(**data)


def make_teams(competition_id: int, count: int, start_id: int = 1) -> List[Team]:
    """Build saved-looking teams with consecutive ids."""
    return [
        Team(id=start_id + i, competition_id=competition_id, team_name=f"Team {start_id + i}")
        for i in range(count)
    ]


def finished(team1_id: int, team2_id: int, score1: int, score2: int,
             stage: str = "Group Stage", competition_id: int = 1) -> Match:
    """Build a finished match."""
    return Match(
        competition_id=competition_id,
        team1_id=team1_id,
        team2_id=team2_id,
        score1=score1,
        score2=score2,
        status=FINISHED,
        stage=stage
    )


@pytest.fixture
def group_competition(repo) -> Competition:
    """Provide a persisted single-group competition."""
    return repo.create_competition(make_competition())


@pytest.fixture
def knockout_competition(repo) -> Competition:
    """Provide a persisted knockout competition."""
    return repo.create_competition(make_competition(
        competition_name='Cup', tournament_mode=KNOCKOUT
    ))


@pytest.fixture
def combined_competition(repo) -> Competition:
    """Provide a persisted two-group combined competition."""
    return repo.create_competition(make_competition(
        competition_name='World Cup',
        tournament_mode=COMBINED,
        number_of_groups=2,
        qualifiers_per_group=2
    ))


@pytest.fixture
def saved_teams(repo, group_competition) -> List[Team]:
    """Provide four persisted teams of the group competition."""
    teams = [
        Team(competition_id=group_competition.id, team_name=name)
        for name in ('Lions', 'Tigers', 'Bears', 'Wolves')
    ]
    return repo.create_teams(teams)


# =============================================================================
# FASTAPI TEST CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def client(repo):
    """Provide a test client wired to the temporary repository."""
    from sportsorganizer.main import app
    from sportsorganizer.api.dependencies import get_repo

    app.dependency_overrides[get_repo] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()
