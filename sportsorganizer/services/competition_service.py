"""
Competition Service - Organizer and competitor flows.

Wires the tournament engine to the repository: creating a competition and
its teams, confirming the team list (group draw plus schedule generation),
generating the knockout stage of a combined tournament from the group
standings, and assembling the competitor standings view.
"""

import logging
import random
from typing import Any, Dict, List, Optional

from .. import config
from ..engine import (
    assign_groups,
    build_knockout,
    generate_matches,
    generate_teams,
    group_standings,
    qualified_team_ids,
)
from ..models import Competition, Match, Team
from ..models.competition import COMBINED, KNOCKOUT, GROUP_STAGE_MODE, SCORING_POINTS
from ..storage import CompetitionRepository, NotFoundError, get_repository
from .referee_service import order_for_display
from .result import Result, run_remote

logger = logging.getLogger(__name__)


class CompetitionService:
    """
    Service layer for organizing competitions.

    Callers must serialize generation calls per competition; nothing here
    prevents two concurrent generations from both writing matches.
    """

    def __init__(
        self,
        repository: Optional[CompetitionRepository] = None,
        rng: Optional[random.Random] = None
    ):
        self.repository = repository or get_repository()
        self.rng = rng or config.get_rng()

    def _require_competition(self, competition_id: int) -> Competition:
        competition = self.repository.get_competition(competition_id)
        if competition is None:
            raise NotFoundError(f"Competition {competition_id} not found")
        return competition

    @staticmethod
    def _field_count(competition: Competition) -> int:
        return max(1, competition.field_count or config.DEFAULT_FIELD_COUNT)

    # =========================================================================
    # SETUP
    # =========================================================================

    def create_competition(self, competition: Competition) -> Competition:
        """Persist a new competition."""
        created = self.repository.create_competition(competition)
        logger.info(f"Created competition {created.id} ({created.competition_name})")
        return created

    def get_competition(self, competition_id: int) -> Competition:
        """Get a competition or raise NotFoundError."""
        return self._require_competition(competition_id)

    def setup_teams(self, competition_id: int, number_of_teams: int) -> List[Team]:
        """
        Create the default "Team 1".."Team n" entries of a competition.

        Returns:
            The persisted teams with their ids
        """
        self._require_competition(competition_id)
        teams = generate_teams(competition_id, number_of_teams)
        return self.repository.create_teams(teams)

    def confirm_teams(
        self,
        competition_id: int,
        teams: List[Team],
        config_value: Optional[int] = None
    ) -> int:
        """
        Save the team list and generate the schedule.

        Teams are drawn into groups when the competition has more than one
        and the scoring value is saved (winning score for points scoring,
        game duration otherwise). A knockout competition then gets a linked
        bracket while the other modes get their group-stage round robin.

        Args:
            competition_id: Competition being set up
            teams: Named teams with their ids
            config_value: Winning score or game duration, None to keep the stored one

        Returns:
            Number of matches created
        """
        competition = self._require_competition(competition_id)
        number_of_groups = competition.number_of_groups or 1
        field_count = self._field_count(competition)

        assigned = assign_groups(teams, number_of_groups, self.rng)
        self.repository.update_teams(assigned)

        if config_value is not None:
            competition = self._apply_config_value(competition, config_value)
            self.repository.update_competition(competition)

        if competition.tournament_mode == KNOCKOUT:
            created = build_knockout(
                self.repository, competition_id, assigned, field_count, self.rng
            )
            return len(created)

        matches = generate_matches(
            competition_id=competition_id,
            teams=assigned,
            tournament_mode=competition.tournament_mode or GROUP_STAGE_MODE,
            field_count=field_count,
            number_of_groups=number_of_groups
        )
        self.repository.create_matches(matches)
        return len(matches)

    @staticmethod
    def _apply_config_value(competition: Competition, value: int) -> Competition:
        if competition.scoring_type == SCORING_POINTS:
            return competition.model_copy(update={'winning_score': value})
        return competition.model_copy(update={'game_duration': value})

    # =========================================================================
    # KNOCKOUT STAGE
    # =========================================================================

    def generate_knockout_stage(self, competition_id: int) -> int:
        """
        Build the knockout bracket of a combined tournament.

        The top `qualifiers_per_group` teams of every group qualify.

        Returns:
            Number of matches created, -1 if knockout matches already
            exist, 0 if the competition is unknown, not combined or nobody qualified
        """
        competition = self.repository.get_competition(competition_id)
        if competition is None:
            return 0
        if competition.tournament_mode != COMBINED:
            logger.info(f"Competition {competition_id} has no knockout stage to generate")
            return 0

        teams = self.repository.get_teams_for_competition(competition_id)
        matches = self.repository.get_matches_for_competition(competition_id)

        if any(match.is_knockout() for match in matches):
            logger.info(f"Knockout matches already exist for competition {competition_id}")
            return -1

        qualifiers = competition.qualifiers_per_group or config.DEFAULT_QUALIFIERS_PER_GROUP
        qualified_ids = set(qualified_team_ids(
            teams,
            matches,
            qualifiers,
            competition.points_per_win,
            competition.points_per_draw
        ))
        qualified = [team for team in teams if team.id in qualified_ids]
        logger.info(f"{len(qualified)} teams qualified for the knockout stage")

        if not qualified:
            return 0

        created = build_knockout(
            self.repository,
            competition_id,
            qualified,
            self._field_count(competition),
            self.rng
        )
        return len(created)

    # =========================================================================
    # COMPETITOR VIEW
    # =========================================================================

    def competitor_view(self, competition_id: int) -> Dict[str, Any]:
        """
        Assemble what a competitor sees: standings per group, playable
        matches in display order, and team names by id.
        """
        competition = self._require_competition(competition_id)
        teams = self.repository.get_teams_for_competition(competition_id)
        matches = self.repository.get_matches_for_competition(competition_id)

        standings = group_standings(
            teams,
            matches,
            competition.points_per_win,
            competition.points_per_draw
        )

        return {
            'competition': competition,
            'standings': standings,
            'matches': order_for_display(matches),
            'team_names': {team.id: team.team_name for team in teams},
        }

    def load_competitor_view(self, competition_id: int) -> 'Result[Dict[str, Any]]':
        """competitor_view wrapped as Success/Error."""
        return run_remote(self.competitor_view, competition_id)

    def load_matches(self, competition_id: int) -> 'Result[List[Match]]':
        """All matches of a competition wrapped as Success/Error."""
        return run_remote(self.repository.get_matches_for_competition, competition_id)
