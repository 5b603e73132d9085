"""
Referee Service - Live scoring of matches on a field.

Covers the refereeing flow: listing the matches of one field, updating
scores and status, and moving the winner of a finished knockout match into
the match it feeds. The tournament engine never advances winners itself.
"""

import logging
from typing import List, Optional

from ..models import Match
from ..models.match import FINISHED, IN_PROGRESS, MATCH_STATUSES, SCHEDULED
from ..storage import CompetitionRepository, NotFoundError, get_repository

logger = logging.getLogger(__name__)

_STATUS_ORDER = {IN_PROGRESS: 0, SCHEDULED: 1}


def order_for_display(matches: List[Match]) -> List[Match]:
    """
    Drop matches with no team assigned yet and order the rest.

    In-progress matches come first, then scheduled, then everything else
    (paused, finished), each by id.
    """
    active = [m for m in matches if m.has_teams]
    return sorted(active, key=lambda m: (_STATUS_ORDER.get(m.status, 2), m.id or 0))


class RefereeService:
    """Updates match results on behalf of a referee."""

    def __init__(self, repository: Optional[CompetitionRepository] = None):
        self.repository = repository or get_repository()

    def matches_for_field(self, competition_id: int, field_number: int) -> List[Match]:
        """Get the playable matches of one field, in referee order."""
        matches = self.repository.get_matches_for_field(competition_id, field_number)
        return order_for_display(matches)

    def _get_match(self, match_id: int) -> Match:
        match = self.repository.get_match(match_id)
        if match is None:
            raise NotFoundError(f"Match {match_id} not found")
        return match

    def update_score(self, match_id: int, score1: int, score2: int) -> Match:
        """
        Set the score of a match.

        Raises:
            NotFoundError: If the match does not exist
            ValueError: If a score is negative
        """
        if score1 < 0 or score2 < 0:
            raise ValueError("Scores cannot be negative")

        match = self._get_match(match_id)
        updated = match.model_copy(update={'score1': score1, 'score2': score2})
        self.repository.update_match(updated)
        return updated

    def update_status(self, match_id: int, status: str) -> Match:
        """
        Change the status of a match.

        Finishing a knockout match advances its winner.

        Raises:
            NotFoundError: If the match does not exist
            ValueError: If the status is unknown
        """
        if status not in MATCH_STATUSES:
            raise ValueError(f"Unknown match status: {status}")

        match = self._get_match(match_id)
        updated = match.model_copy(update={'status': status})
        self.repository.update_match(updated)
        logger.info(f"Match {match_id} is now {status}")

        if status == FINISHED and updated.next_match_id is not None:
            self.advance_winner(updated)

        return updated

    def advance_winner(self, match: Match) -> Optional[Match]:
        """
        Write the winner of a match into the first free slot of the next match.

        Draws advance nobody and a next match whose slots are both taken is
        left unchanged.

        Returns:
            The updated next match, or None when nothing changed
        """
        winner_id = match.winner_id()
        if winner_id is None or match.next_match_id is None:
            return None

        next_match = self.repository.get_match(match.next_match_id)
        if next_match is None:
            logger.warning(f"Next match {match.next_match_id} of match {match.id} not found")
            return None

        if next_match.team1_id is None:
            updated = next_match.model_copy(update={'team1_id': winner_id})
        elif next_match.team2_id is None:
            updated = next_match.model_copy(update={'team2_id': winner_id})
        else:
            return None

        self.repository.update_match(updated)
        logger.info(f"Team {winner_id} advanced to match {next_match.id}")
        return updated
