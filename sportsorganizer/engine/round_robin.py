"""
Round-robin match generation.

Every unordered pair of teams in a group plays exactly once. Fields are
assigned cyclically in pairing order, and the field counter can be carried
from one group to the next so the rotation does not restart at field 1.
"""

import logging
from typing import List, Tuple

from ..models import Match, Team
from ..models.competition import KNOCKOUT, GROUP_STAGE_MODE, COMBINED
from ..models.match import SCHEDULED, GROUP_STAGE
from .groups import group_teams

logger = logging.getLogger(__name__)


def real_teams(teams: List[Team]) -> List[Team]:
    """Filter out placeholder teams that have not been persisted."""
    return [team for team in teams if team.is_saved]


def round_robin(
    competition_id: int,
    teams: List[Team],
    field_count: int,
    stage_label: str,
    start_counter: int = 0
) -> Tuple[List[Match], int]:
    """
    Generate one match for every pair of teams.

    Args:
        competition_id: Competition the matches belong to
        teams: Teams in pairing order
        field_count: Number of fields to rotate over
        stage_label: Stage name written on every match (e.g. "Group A")
        start_counter: Match counter to continue field rotation from

    Returns:
        Tuple of (matches, end_counter). For n teams there are n(n-1)/2
        matches; end_counter = start_counter + len(matches).
    """
    team_ids = [team.id for team in real_teams(teams)]
    counter = start_counter
    matches = []

    if len(team_ids) < 2:
        return matches, counter

    for i in range(len(team_ids)):
        for j in range(i + 1, len(team_ids)):
            matches.append(Match(
                competition_id=competition_id,
                field_number=(counter % field_count) + 1,
                team1_id=team_ids[i],
                team2_id=team_ids[j],
                status=SCHEDULED,
                stage=stage_label
            ))
            counter += 1

    logger.debug(f"Generated {len(matches)} round-robin matches for {stage_label}")
    return matches, counter


def generate_group_matches(
    competition_id: int,
    teams: List[Team],
    field_count: int,
    number_of_groups: int = 1
) -> List[Match]:
    """
    Generate the group stage.

    With grouping active, runs a round robin per group (labelled with the
    group name) and carries the field counter across groups. Otherwise runs
    a single round robin labelled "Group Stage".
    """
    if number_of_groups <= 1:
        matches, _ = round_robin(competition_id, teams, field_count, GROUP_STAGE)
        return matches

    matches: List[Match] = []
    counter = 0
    for group_name, members in group_teams(teams).items():
        group_matches, counter = round_robin(
            competition_id, members, field_count, group_name, counter
        )
        matches.extend(group_matches)

    return matches


def pair_first_round(
    competition_id: int,
    teams: List[Team],
    field_count: int
) -> List[Match]:
    """
    Pair consecutive teams into a flat "Round 1".

    An odd team out is left unpaired. This is the bulk fallback for
    knockout competitions; the linked bracket is built by build_knockout.
    """
    team_ids = [team.id for team in teams]
    matches = []
    for i in range(0, len(team_ids) - 1, 2):
        matches.append(Match(
            competition_id=competition_id,
            field_number=(len(matches) % field_count) + 1,
            team1_id=team_ids[i],
            team2_id=team_ids[i + 1],
            status=SCHEDULED,
            stage="Round 1"
        ))
    return matches


def generate_matches(
    competition_id: int,
    teams: List[Team],
    tournament_mode: str,
    field_count: int,
    number_of_groups: int = 1
) -> List[Match]:
    """
    Generate the matches of a competition for bulk persistence.

    Args:
        competition_id: Competition the matches belong to
        teams: Competition teams (placeholders are ignored)
        tournament_mode: "Knockout", "Group Stage" or "Combined"
        field_count: Number of fields to rotate over
        number_of_groups: Groups for the group stage

    Returns:
        Matches without ids, or an empty list for fewer than two real teams
    """
    valid_teams = real_teams(teams)
    if len(valid_teams) < 2:
        return []

    if tournament_mode == KNOCKOUT:
        matches = pair_first_round(competition_id, valid_teams, field_count)
    elif tournament_mode in (GROUP_STAGE_MODE, COMBINED):
        matches = generate_group_matches(
            competition_id, valid_teams, field_count, number_of_groups
        )
    else:
        matches = generate_group_matches(competition_id, valid_teams, field_count, 1)

    logger.info(
        f"Generated {len(matches)} matches for competition {competition_id} "
        f"({tournament_mode})"
    )
    return matches
