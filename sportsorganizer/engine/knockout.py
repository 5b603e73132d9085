"""
Single-elimination bracket generation.

The bracket is sized to the next power of two and built backwards, from the
final to the first round. Each match is persisted as soon as it is created
so that its identifier exists before the round further from the final links
to it through next_match_id. Only the first round receives teams; later
rounds are filled by the refereeing flow as winners advance.

Byes are not resolved: when the team count is not a power of two, some
first-round slots (possibly whole matches) stay empty.
"""

import logging
import math
import random
from typing import List, Optional

from ..models import Match, Team
from ..models.match import SCHEDULED, FINAL_STAGE, SEMI_FINAL_STAGE
from ..storage.base import CompetitionRepository
from .round_robin import real_teams

logger = logging.getLogger(__name__)


def calculate_bracket_size(num_teams: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_teams <= 0:
        return 0
    return 2 ** math.ceil(math.log2(num_teams))


def calculate_total_rounds(num_teams: int) -> int:
    """Calculate the number of rounds needed for a bracket."""
    bracket_size = calculate_bracket_size(num_teams)
    if bracket_size <= 1:
        return 0
    return int(math.log2(bracket_size))


def calculate_byes(num_teams: int) -> int:
    """Calculate number of empty first-round slots."""
    return calculate_bracket_size(num_teams) - num_teams


def stage_name(distance: int, total_rounds: int) -> str:
    """
    Get the stage label of a round.

    Args:
        distance: Rounds away from the final (1 = final, 2 = semi-final)
        total_rounds: Number of rounds in the bracket

    Returns:
        "Final", "Semi-Final", or "Round k" counted from the first round
    """
    if distance == 1:
        return FINAL_STAGE
    if distance == 2:
        return SEMI_FINAL_STAGE
    return f"Round {total_rounds - distance + 1}"


def build_knockout(
    repository: CompetitionRepository,
    competition_id: int,
    teams: List[Team],
    field_count: int,
    rng: Optional[random.Random] = None
) -> List[Match]:
    """
    Build and persist a linked single-elimination bracket.

    Args:
        repository: Persistence collaborator assigning match identifiers
        competition_id: Competition the bracket belongs to
        teams: Entrants (placeholders without an id are dropped)
        field_count: Number of fields to rotate over within each round
        rng: Random source for seeding (defaults to a fresh Random)

    Returns:
        Created matches in creation order (final first), bracket_size - 1
        of them. Empty when fewer than two real teams remain.

    Raises:
        Whatever the repository raises. Matches created before the failure
        stay persisted.
    """
    rng = rng or random.Random()
    entrants = real_teams(teams)
    rng.shuffle(entrants)

    num_teams = len(entrants)
    if num_teams < 2:
        return []

    bracket_size = calculate_bracket_size(num_teams)
    total_rounds = calculate_total_rounds(num_teams)
    logger.info(
        f"Building knockout bracket for competition {competition_id}: "
        f"{num_teams} teams, bracket size {bracket_size}, {total_rounds} rounds"
    )

    created: List[Match] = []
    next_round_ids: List[int] = []

    for distance in range(1, total_rounds + 1):
        matches_in_round = 2 ** (distance - 1)
        is_first_round = distance == total_rounds
        stage = stage_name(distance, total_rounds)
        round_ids: List[int] = []

        for m in range(matches_in_round):
            team1_id = None
            team2_id = None
            if is_first_round:
                if 2 * m < num_teams:
                    team1_id = entrants[2 * m].id
                if 2 * m + 1 < num_teams:
                    team2_id = entrants[2 * m + 1].id

            match = Match(
                competition_id=competition_id,
                field_number=(m % field_count) + 1,
                team1_id=team1_id,
                team2_id=team2_id,
                status=SCHEDULED,
                stage=stage,
                next_match_id=next_round_ids[m // 2] if next_round_ids else None
            )

            saved = repository.create_match(match)
            round_ids.append(saved.id)
            created.append(saved)
            logger.debug(
                f"Created {stage} match {saved.id} -> next {saved.next_match_id}"
            )

        next_round_ids = round_ids

    logger.info(f"Created {len(created)} knockout matches for competition {competition_id}")
    return created
