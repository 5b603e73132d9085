"""
Group assignment.

Randomly partitions a competition's teams into labelled groups of
near-equal size ("Group A", "Group B", ...).
"""

import logging
import random
from typing import Dict, List, Optional

from ..models import Team

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "Group A"


def group_label(index: int) -> str:
    """Get the group label for a zero-based group index."""
    return f"Group {chr(ord('A') + index)}"


def generate_teams(competition_id: int, number_of_teams: int) -> List[Team]:
    """
    Create unsaved placeholder teams named "Team 1".."Team n".

    The returned teams have no id until they are persisted.
    """
    return [
        Team(competition_id=competition_id, team_name=f"Team {i}")
        for i in range(1, number_of_teams + 1)
    ]


def assign_groups(
    teams: List[Team],
    number_of_groups: int,
    rng: Optional[random.Random] = None
) -> List[Team]:
    """
    Assign teams to groups.

    Teams are shuffled, then labelled cyclically: the team at shuffled
    position i joins group i mod number_of_groups, so group sizes differ
    by at most one.

    Args:
        teams: Teams to distribute
        number_of_groups: How many groups to create
        rng: Random source for the shuffle (defaults to the module RNG)

    Returns:
        New team objects carrying their group name, in shuffled order.
        The input is returned unchanged when number_of_groups <= 1.
    """
    if number_of_groups <= 1:
        return teams

    rng = rng or random.Random()
    shuffled = list(teams)
    rng.shuffle(shuffled)

    assigned = [
        team.model_copy(update={'group_name': group_label(index % number_of_groups)})
        for index, team in enumerate(shuffled)
    ]
    logger.info(f"Assigned {len(assigned)} teams to {number_of_groups} groups")
    return assigned


def group_teams(teams: List[Team]) -> Dict[str, List[Team]]:
    """Group teams by group name, in first-seen order. Ungrouped teams land in Group A."""
    groups: Dict[str, List[Team]] = {}
    for team in teams:
        groups.setdefault(team.group_name or DEFAULT_GROUP, []).append(team)
    return groups
