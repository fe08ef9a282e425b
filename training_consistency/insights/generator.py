"""
Explanation Generator

Turns consistency metrics into short human-readable sentences. The order of
the list is a stable contract: consumers read index 0 as the activity
summary, so sentences are appended in a fixed sequence and optional ones
are simply left out.
"""

from datetime import date
from typing import List

from training_consistency.config.defaults import (
    GOOD_SPREAD_WEEKDAYS,
    GREAT_VARIETY_WEEKDAYS,
    HIGH_INTENSITY_RATIO,
)
from training_consistency.core.models import (
    ConsistencyMetrics,
    ConsistencyScoreResult,
    Explanation,
    ExplanationKind,
)
from training_consistency.core.scoring import format_half_up
from training_consistency.insights.templates import (
    BREAKDOWN_TEMPLATE,
    DIGEST_TEMPLATE,
    WEEKDAY_LABELS,
)


class ExplanationGenerator:
    """Generates the ordered explanation sentences for a score."""

    def explain(self, metrics: ConsistencyMetrics) -> List[Explanation]:
        """Tagged explanations in display order."""
        explanations = [
            Explanation(
                ExplanationKind.ACTIVITY,
                f"You trained on {metrics.days_with_activity} out of {metrics.total_days} days",
            ),
            Explanation(ExplanationKind.GAP, self._gap_sentence(metrics.longest_gap_days)),
        ]

        spread = self._spread_sentence(metrics.distinct_weekdays)
        if spread:
            explanations.append(Explanation(ExplanationKind.SPREAD, spread))

        ratio = metrics.average_sessions_per_active_day
        if ratio >= HIGH_INTENSITY_RATIO:
            explanations.append(Explanation(
                ExplanationKind.INTENSITY,
                f"High intensity: {format_half_up(ratio)} sessions per active day",
            ))

        return explanations

    def generate(self, metrics: ConsistencyMetrics) -> List[str]:
        return [e.text for e in self.explain(metrics)]

    def format_digest(self, result: ConsistencyScoreResult, user_id: str = "",
                      show_breakdown: bool = False) -> str:
        """Format a result as a terminal digest."""
        explanations_lines = [f"  - {text}" for text in result.explanations]

        chart_lines = []
        for point in result.chart_data:
            weekday = WEEKDAY_LABELS[date.fromisoformat(point.date).isoweekday() % 7]
            chart_lines.append(f"  {point.date} {weekday}  {'#' * point.count} {point.count}")

        breakdown_section = ""
        if show_breakdown and result.breakdown:
            breakdown_section = BREAKDOWN_TEMPLATE.format(**result.breakdown.to_dict()) + "\n"

        return DIGEST_TEMPLATE.format(
            user_id=user_id or "anonymous",
            period_start=result.period_start,
            period_end=result.period_end,
            score_bar=self._score_bar(result.score),
            score=result.score,
            breakdown_section=breakdown_section,
            explanations_section="\n".join(explanations_lines),
            chart_section="\n".join(chart_lines),
        )

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _gap_sentence(self, longest_gap: int) -> str:
        if longest_gap == 0:
            return "Amazing! No gaps in your training"
        if longest_gap == 1:
            return "Longest break: 1 day"
        return f"Longest break: {longest_gap} days"

    def _spread_sentence(self, weekdays: int) -> str:
        if weekdays >= GREAT_VARIETY_WEEKDAYS:
            return f"Great variety! You trained on {GREAT_VARIETY_WEEKDAYS}+ different weekdays"
        if weekdays >= GOOD_SPREAD_WEEKDAYS:
            return f"Good spread across {weekdays} different weekdays"
        if weekdays > 0:
            return f"Training focused on {weekdays} weekdays"
        return ""

    def _score_bar(self, score: float, width: int = 20) -> str:
        """Generate a text-based score bar."""
        filled = int(score / 100 * width)
        return "[" + "#" * filled + "." * (width - filled) + "]"
