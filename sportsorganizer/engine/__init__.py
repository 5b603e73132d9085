"""
Tournament engine.

Pure generators for group assignment, round-robin and knockout schedules,
and the standings calculator.
"""

from .groups import assign_groups, generate_teams, group_teams
from .round_robin import round_robin, generate_group_matches, generate_matches, pair_first_round
from .knockout import build_knockout, calculate_bracket_size, calculate_total_rounds
from .standings import calculate_standings, group_standings, qualified_team_ids

__all__ = [
    'assign_groups',
    'generate_teams',
    'group_teams',
    'round_robin',
    'generate_group_matches',
    'generate_matches',
    'pair_first_round',
    'build_knockout',
    'calculate_bracket_size',
    'calculate_total_rounds',
    'calculate_standings',
    'group_standings',
    'qualified_team_ids',
]
