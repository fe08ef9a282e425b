"""Tests for explanation sentences and the text digest."""

import pytest

from training_consistency.core.engine import calculate_consistency_score
from training_consistency.core.models import (
    ConsistencyMetrics,
    ConsistencyScoreResult,
    DailySessionCount,
    ExplanationKind,
    ScoreBreakdown,
)
from training_consistency.insights.generator import ExplanationGenerator


def make_metrics(days=9, gap=4, ratio=1.0, weekdays=4):
    return ConsistencyMetrics(
        days_with_activity=days,
        longest_gap_days=gap,
        average_sessions_per_active_day=ratio,
        weekly_distribution=[1] * weekdays + [0] * (7 - weekdays),
        total_sessions=round(days * ratio),
    )


@pytest.fixture
def generator():
    return ExplanationGenerator()


class TestActivitySentence:
    def test_always_first(self, generator):
        assert generator.generate(make_metrics(days=9))[0] == "You trained on 9 out of 28 days"

    def test_zero_activity(self, generator):
        explanations = generator.generate(make_metrics(days=0, gap=28, ratio=0.0, weekdays=0))
        assert explanations == ["You trained on 0 out of 28 days", "Longest break: 28 days"]


class TestGapSentence:
    def test_no_gaps(self, generator):
        assert generator.generate(make_metrics(gap=0))[1] == "Amazing! No gaps in your training"

    def test_singular_day(self, generator):
        assert generator.generate(make_metrics(gap=1))[1] == "Longest break: 1 day"

    def test_plural_days(self, generator):
        assert generator.generate(make_metrics(gap=5))[1] == "Longest break: 5 days"


class TestSpreadSentence:
    @pytest.mark.parametrize("weekdays", [6, 7])
    def test_great_variety(self, generator, weekdays):
        text = generator.generate(make_metrics(weekdays=weekdays))[2]
        assert text == "Great variety! You trained on 6+ different weekdays"

    @pytest.mark.parametrize("weekdays", [4, 5])
    def test_good_spread(self, generator, weekdays):
        text = generator.generate(make_metrics(weekdays=weekdays))[2]
        assert text == f"Good spread across {weekdays} different weekdays"

    @pytest.mark.parametrize("weekdays", [1, 2, 3])
    def test_focused(self, generator, weekdays):
        text = generator.generate(make_metrics(weekdays=weekdays))[2]
        assert text == f"Training focused on {weekdays} weekdays"


class TestIntensitySentence:
    def test_included_at_threshold(self, generator):
        explanations = generator.generate(make_metrics(days=5, ratio=7 / 5))
        assert explanations[-1] == "High intensity: 1.4 sessions per active day"

    def test_omitted_below_threshold(self, generator):
        explanations = generator.generate(make_metrics(ratio=1.39))
        assert len(explanations) == 3
        assert not any("intensity" in e.lower() for e in explanations)

    def test_rounded_to_one_decimal(self, generator):
        explanations = generator.generate(make_metrics(days=3, ratio=7 / 3))
        assert explanations[-1] == "High intensity: 2.3 sessions per active day"


class TestExplain:
    def test_kinds_in_fixed_order(self, generator):
        kinds = [e.kind for e in generator.explain(make_metrics(ratio=2.0))]
        assert kinds == [
            ExplanationKind.ACTIVITY,
            ExplanationKind.GAP,
            ExplanationKind.SPREAD,
            ExplanationKind.INTENSITY,
        ]

    def test_intensity_follows_gap_when_no_spread(self, generator):
        kinds = [e.kind for e in generator.explain(make_metrics(ratio=2.0, weekdays=0))]
        assert kinds == [ExplanationKind.ACTIVITY, ExplanationKind.GAP, ExplanationKind.INTENSITY]


class TestFormatDigest:
    @pytest.fixture
    def result(self):
        return ConsistencyScoreResult(
            score=48,
            explanations=["You trained on 1 out of 28 days", "Longest break: 27 days"],
            chart_data=[DailySessionCount(date="2024-02-11", count=2)],
            period_start="2024-01-19",
            period_end="2024-02-15",
            breakdown=ScoreBreakdown(frequency=1.79, gap=0.0, distribution=2.14, intensity=10.0),
        )

    def test_contains_score_and_explanations(self, generator, result):
        text = generator.format_digest(result, user_id="alice")
        assert "alice" in text
        assert "48/100" in text
        assert "  - Longest break: 27 days" in text
        assert "2024-02-11 Sun  ## 2" in text
        assert "Breakdown" not in text

    def test_breakdown_optional(self, generator, result):
        text = generator.format_digest(result, show_breakdown=True)
        assert "Breakdown" in text
        assert "10.0 / 10" in text

    def test_score_bar(self, generator):
        assert generator._score_bar(50) == "[##########..........]"

    @pytest.mark.parametrize("days,total,expected", [
        (4, 9, "2.3"),
        (4, 13, "3.3"),
        (20, 29, "1.4"),
    ])
    def test_ties_round_up(self, generator, days, total, expected):
        explanations = generator.generate(make_metrics(days=days, ratio=total / days))
        assert explanations[-1] == f"High intensity: {expected} sessions per active day"

    def test_from_scored_sessions(self, sessions_on_days, reference_date):
        sessions = sessions_on_days([1, 8, 15, 22], per_day=2, extra={22: 1})
        result = calculate_consistency_score(sessions, reference_date)
        assert result.metrics.average_sessions_per_active_day == 2.25
        assert result.explanations[-1] == "High intensity: 2.3 sessions per active day"
