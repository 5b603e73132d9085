"""
Standings calculation.

Folds finished matches into per-team aggregates and ranks them by points,
then goal difference, then goals scored (all descending). Teams still tied
on all three keys keep the order of the team id list. There is no
head-to-head tiebreak.
"""

from typing import Dict, Iterable, List

from ..models import Match, Team, TeamStats
from .groups import DEFAULT_GROUP

UNGROUPED = "General"


def calculate_standings(
    matches: Iterable[Match],
    team_ids: Iterable[int],
    points_per_win: int = 3,
    points_per_draw: int = 1
) -> List[TeamStats]:
    """
    Calculate a ranked standings table.

    Args:
        matches: Match snapshot; only finished matches count
        team_ids: Teams to rank (every one appears, even with no games)
        points_per_win: Points for a strict win
        points_per_draw: Points for each side of a draw

    Returns:
        TeamStats sorted from first to last place
    """
    stats: Dict[int, TeamStats] = {}
    for team_id in team_ids:
        stats.setdefault(team_id, TeamStats(team_id=team_id))

    for match in matches:
        if not match.is_finished:
            continue

        t1 = stats.get(match.team1_id)
        t2 = stats.get(match.team2_id)
        if t1 is None or t2 is None:
            continue

        t1.played += 1
        t2.played += 1

        t1.goals_for += match.score1
        t1.goals_against += match.score2
        t2.goals_for += match.score2
        t2.goals_against += match.score1

        if match.score1 > match.score2:
            t1.won += 1
            t1.points += points_per_win
            t2.lost += 1
        elif match.score2 > match.score1:
            t2.won += 1
            t2.points += points_per_win
            t1.lost += 1
        else:
            t1.drawn += 1
            t2.drawn += 1
            t1.points += points_per_draw
            t2.points += points_per_draw

    return sorted(
        stats.values(),
        key=lambda s: (s.points, s.goal_difference, s.goals_for),
        reverse=True
    )


def is_group_match(match: Match) -> bool:
    return bool(match.stage and match.stage.startswith("Group"))


def group_standings(
    teams: List[Team],
    matches: List[Match],
    points_per_win: int = 3,
    points_per_draw: int = 1
) -> Dict[str, List[TeamStats]]:
    """
    Calculate standings for every group of a competition.

    Only group-stage matches count. Teams without a group are ranked
    together under "General".
    """
    group_matches = [m for m in matches if is_group_match(m)]

    teams_by_group: Dict[str, List[int]] = {}
    for team in teams:
        teams_by_group.setdefault(team.group_name or UNGROUPED, []).append(team.id)

    return {
        name: calculate_standings(group_matches, ids, points_per_win, points_per_draw)
        for name, ids in teams_by_group.items()
    }


def qualified_team_ids(
    teams: List[Team],
    matches: List[Match],
    qualifiers_per_group: int,
    points_per_win: int = 3,
    points_per_draw: int = 1
) -> List[int]:
    """
    Get the ids of the top teams of every group, group by group.

    Ungrouped teams count as Group A, like the group-stage generator.
    """
    group_matches = [m for m in matches if is_group_match(m)]

    teams_by_group: Dict[str, List[int]] = {}
    for team in teams:
        teams_by_group.setdefault(team.group_name or DEFAULT_GROUP, []).append(team.id)

    qualified = []
    for ids in teams_by_group.values():
        table = calculate_standings(group_matches, ids, points_per_win, points_per_draw)
        qualified.extend(s.team_id for s in table[:qualifiers_per_group])
    return qualified
