"""
Abstract base class defining the repository interface.

All storage backends must inherit from this class and implement all
abstract methods. The tournament engine only ever talks to this interface,
so tests can substitute a fake or a temporary SQLite database.
"""

from abc import ABC, abstractmethod
from typing import Optional, List

from ..models import Competition, Match, Team


class CompetitionRepository(ABC):
    """
    Abstract interface for competition, team and match storage.

    All methods must be implemented by concrete repository classes.
    Failures are raised as subclasses of DatabaseError.
    """

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @abstractmethod
    def initialize(self) -> None:
        """
        Initialize the connection and schema.

        Called once when the repository is first created.
        Should be idempotent (safe to call multiple times).
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close connections and clean up resources."""
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """
        Check if the backend is reachable.

        Returns:
            True if storage is accessible, False otherwise
        """
        pass

    # =========================================================================
    # COMPETITIONS
    # =========================================================================

    @abstractmethod
    def create_competition(self, competition: Competition) -> Competition:
        """
        Persist a new competition.

        Returns:
            The competition with its assigned id
        """
        pass

    @abstractmethod
    def get_competition(self, competition_id: int) -> Optional[Competition]:
        """
        Fetch a competition by id.

        Returns:
            The competition, or None if it does not exist
        """
        pass

    @abstractmethod
    def update_competition(self, competition: Competition) -> None:
        """Persist the configuration of an existing competition."""
        pass

    @abstractmethod
    def delete_competition(self, competition_id: int) -> None:
        """Delete a competition together with its matches and teams."""
        pass

    # =========================================================================
    # TEAMS
    # =========================================================================

    @abstractmethod
    def create_teams(self, teams: List[Team]) -> List[Team]:
        """
        Persist unsaved teams.

        Returns:
            The teams with their assigned ids, in input order
        """
        pass

    @abstractmethod
    def update_teams(self, teams: List[Team]) -> None:
        """
        Persist the name and group of already-identified teams.

        A team without a group keeps its stored group.
        """
        pass

    @abstractmethod
    def get_teams_for_competition(self, competition_id: int) -> List[Team]:
        """Fetch all teams of a competition, ordered by id."""
        pass

    @abstractmethod
    def delete_teams_for_competition(self, competition_id: int) -> None:
        """Delete all teams of a competition."""
        pass

    # =========================================================================
    # MATCHES
    # =========================================================================

    @abstractmethod
    def create_match(self, match: Match) -> Match:
        """
        Persist one match.

        Returns:
            The match with its assigned id. Knockout generation relies on
            this id to link earlier rounds through next_match_id.
        """
        pass

    @abstractmethod
    def create_matches(self, matches: List[Match]) -> None:
        """Bulk-persist matches without returning their ids."""
        pass

    @abstractmethod
    def get_match(self, match_id: int) -> Optional[Match]:
        """
        Fetch a match by id.

        Returns:
            The match, or None if it does not exist
        """
        pass

    @abstractmethod
    def update_match(self, match: Match) -> None:
        """
        Persist score, status, stage, team slots and next match of a match.

        Unset (None) team slots, stage and next match leave the stored
        values untouched.
        """
        pass

    @abstractmethod
    def get_matches_for_competition(self, competition_id: int) -> List[Match]:
        """Fetch all matches of a competition, ordered by id."""
        pass

    @abstractmethod
    def get_matches_for_field(self, competition_id: int, field_number: int) -> List[Match]:
        """Fetch the matches of a competition assigned to one field."""
        pass

    @abstractmethod
    def delete_matches_for_competition(self, competition_id: int) -> None:
        """Delete all matches of a competition."""
        pass
