"""
Score Composer

Combines four independently bounded, monotonic subscores into the final
0-100 consistency score:
- Frequency (50 pts): share of window days with any session
- Gap (25 pts): full credit up to a 3-day break, none from 14 days
- Distribution (15 pts): distinct weekdays trained across the whole window
- Intensity (10 pts): sessions per active day, scaled between 1 and 2
"""

from training_consistency.config.defaults import (
    DAYS_PER_WEEK,
    DISTRIBUTION_POINTS,
    FREQUENCY_POINTS,
    GAP_FULL_CREDIT_DAYS,
    GAP_POINTS,
    GAP_ZERO_CREDIT_DAYS,
    INTENSITY_CEILING_RATIO,
    INTENSITY_FLOOR_RATIO,
    INTENSITY_POINTS,
)
from training_consistency.core.models import ConsistencyMetrics, ScoreBreakdown
from training_consistency.core.scoring import (
    clamp,
    inverse_linear_clamp,
    linear_clamp,
    round_half_up,
)


class ScoreComposer:
    """Weighted composition of the consistency subscores."""

    def compose(self, metrics: ConsistencyMetrics) -> ScoreBreakdown:
        return ScoreBreakdown(
            frequency=self.frequency_score(metrics),
            gap=self.gap_score(metrics),
            distribution=self.distribution_score(metrics),
            intensity=self.intensity_score(metrics),
        )

    def score(self, metrics: ConsistencyMetrics) -> int:
        """Rounded (half up) and clamped total of all four components."""
        return int(clamp(round_half_up(self.compose(metrics).total), 0, 100))

    def frequency_score(self, metrics: ConsistencyMetrics) -> float:
        return linear_clamp(metrics.days_with_activity, 0, metrics.total_days) * FREQUENCY_POINTS

    def gap_score(self, metrics: ConsistencyMetrics) -> float:
        return inverse_linear_clamp(
            metrics.longest_gap_days, GAP_FULL_CREDIT_DAYS, GAP_ZERO_CREDIT_DAYS
        ) * GAP_POINTS

    def distribution_score(self, metrics: ConsistencyMetrics) -> float:
        if metrics.days_with_activity == 0:
            return 0.0
        return linear_clamp(metrics.distinct_weekdays, 0, DAYS_PER_WEEK) * DISTRIBUTION_POINTS

    def intensity_score(self, metrics: ConsistencyMetrics) -> float:
        if metrics.days_with_activity == 0:
            return 0.0
        return linear_clamp(
            metrics.average_sessions_per_active_day,
            INTENSITY_FLOOR_RATIO,
            INTENSITY_CEILING_RATIO,
        ) * INTENSITY_POINTS
