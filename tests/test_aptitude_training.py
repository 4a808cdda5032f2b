"""Tests for sport aptitude ranking, training selection and goals."""

from __future__ import annotations

from fitdiag.core.types import AgeBracket, Grade, MetricKey, RawMeasurement, ScoreVector
from fitdiag.diagnosis.aptitude import SPORT_CATALOG, rank_sports, split_aptitude
from fitdiag.diagnosis.training import TrainingItem, monthly_goals, select_trainings


class TestRankSports:
    """Tests for sport aptitude ranking."""

    def test_catalog_has_sixteen_sports(self) -> None:
        assert len(SPORT_CATALOG) == 16

    def test_uniform_scores_keep_catalog_order(self, average_scores: ScoreVector) -> None:
        """Equal aptitudes should preserve catalog order."""
        ranked = rank_sports(average_scores)

        assert [a.sport.name for a in ranked] == [s.name for s in SPORT_CATALOG]
        assert all(a.aptitude == 5.0 for a in ranked)

    def test_strong_metrics_favor_matching_sports(self) -> None:
        """Grip and squat strength should rank grip/squat sports first."""
        scores = ScoreVector({MetricKey.GRIP: 10, MetricKey.SQUAT: 10})
        split = split_aptitude(rank_sports(scores))

        assert [a.sport.name for a in split.high] == ["Swimming", "Judo", "Kendo"]
        assert split.moderate[0].sport.name == "Rugby"

    def test_split_sizes(self, average_scores: ScoreVector) -> None:
        """Should split into three high and three moderate sports."""
        split = split_aptitude(rank_sports(average_scores))

        assert len(split.high) == 3
        assert len(split.moderate) == 3
        assert split.moderate[0].sport.name == SPORT_CATALOG[3].name


class TestSelectTrainings:
    """Tests for remedial training selection."""

    def test_weakest_abilities_in_order(self, training_catalog: list[TrainingItem]) -> None:
        """Should pick items for the two weakest abilities, sorted by sort order."""
        scores = ScoreVector({MetricKey.GRIP: 2, MetricKey.SQUAT: 3})
        picks = select_trainings(scores, Grade.G1, training_catalog)

        assert [p.name for p in picks] == ["Monkey bars", "Hanging", "Frog jumps"]
        assert [p.category for p in picks] == ["strength", "strength", "endurance"]

    def test_only_first_item_is_high_priority(
        self, training_catalog: list[TrainingItem]
    ) -> None:
        """The first item of the weakest ability should be the only high priority."""
        scores = ScoreVector({MetricKey.GRIP: 2, MetricKey.SQUAT: 3})
        picks = select_trainings(scores, Grade.G1, training_catalog)

        assert [p.priority for p in picks] == ["high", "medium", "medium"]

    def test_age_bracket_filters_items(self, training_catalog: list[TrainingItem]) -> None:
        """Older grades should only receive items for the older bracket."""
        scores = ScoreVector({MetricKey.GRIP: 2, MetricKey.SQUAT: 3})
        picks = select_trainings(scores, Grade.G4, training_catalog)

        assert [p.name for p in picks] == ["Dead hang", "Wall sit"]

    def test_empty_catalog(self) -> None:
        assert select_trainings(ScoreVector(), Grade.G3, []) == []

    def test_item_from_dict(self) -> None:
        """Catalog records should parse into typed items."""
        item = TrainingItem.from_dict(
            {"ability_key": "dash", "age_group": "old", "name": "Hill sprints", "sort_order": "2"}
        )

        assert item.ability_key is MetricKey.DASH
        assert item.age_group is AgeBracket.OLD
        assert item.sort_order == 2
        assert item.description == ""


class TestMonthlyGoals:
    """Tests for one-month goals."""

    def test_goals(self) -> None:
        """Grip +5%, jump +3% and dash -3%."""
        measurement = RawMeasurement(
            grade="4", gender="male", grip_right=20.0, grip_left=20.0, jump=150.0, dash=3.0
        )
        goals = monthly_goals(measurement)

        assert goals.grip == 21.0
        assert goals.jump == 155.0
        assert goals.dash == 2.91
