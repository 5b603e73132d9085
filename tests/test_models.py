"""Tests for data models."""

import pytest
from pydantic import ValidationError

from sportsorganizer.models import Competition, Match, Team
from sportsorganizer.models.competition import MAX_GROUPS, TOURNAMENT_MODES


class TestCompetition:
    """Tests for the Competition model."""

    def test_aliases_and_defaults(self):
        """camelCase input populates snake_case fields."""
        competition = Competition(competitionName="Cup", numberOfGroups=4)
        assert competition.competition_name == "Cup"
        assert competition.number_of_groups == 4
        assert competition.points_per_win == 3
        assert competition.points_per_draw == 1

    def test_known_modes_accepted(self):
        """Every tournament mode validates."""
        for mode in TOURNAMENT_MODES:
            assert Competition(competition_name="Cup", tournament_mode=mode).tournament_mode == mode

    def test_unknown_mode_rejected(self):
        """Unknown tournament modes fail validation."""
        with pytest.raises(ValidationError):
            Competition(competition_name="Cup", tournament_mode="Swiss")

    def test_group_limit(self):
        """At most 26 groups can be labelled."""
        assert Competition(competition_name="Cup", number_of_groups=MAX_GROUPS).number_of_groups == 26
        with pytest.raises(ValidationError):
            Competition(competition_name="Cup", number_of_groups=MAX_GROUPS + 1)

    def test_to_row_omits_unsaved_id(self):
        """Unsaved competitions have no id column."""
        assert "id" not in Competition(competition_name="Cup").to_row()
        assert Competition(id=5, competition_name="Cup").to_row()["id"] == 5


class TestMatch:
    """Tests for the Match model."""

    def test_winner(self):
        """The strict winner is reported, draws have none."""
        assert Match(competition_id=1, team1_id=1, team2_id=2, score1=2).winner_id() == 1
        assert Match(competition_id=1, team1_id=1, team2_id=2, score2=2).winner_id() == 2
        assert Match(competition_id=1, team1_id=1, team2_id=2).winner_id() is None

    def test_is_knockout(self):
        """Knockout stages are recognised by name."""
        for stage in ("Round 1", "Semi-Final", "Final"):
            assert Match(competition_id=1, stage=stage).is_knockout()
        for stage in ("Group A", "Group Stage", None):
            assert not Match(competition_id=1, stage=stage).is_knockout()


class TestTeam:
    """Tests for the Team model."""

    def test_placeholder_ids(self):
        """Teams without a real id are not saved."""
        assert not Team(competition_id=1, team_name="A").is_saved
        assert not Team(id=0, competition_id=1, team_name="A").is_saved
        assert Team(id=3, competition_id=1, team_name="A").is_saved
