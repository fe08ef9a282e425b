"""
Consistency Engine

Main orchestrator: window -> buckets -> metrics -> score, explanations and
chart series. The scoring pipeline itself is a pure function of
(sessions, reference_date); only the engine's reader performs I/O.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from training_consistency.analyzers.gap_analyzer import GapAnalyzer
from training_consistency.config.schema import ConsistencyConfig
from training_consistency.core.buckets import bucketize
from training_consistency.core.composer import ScoreComposer
from training_consistency.core.errors import InvalidInput
from training_consistency.core.models import (
    ConsistencyMetrics,
    ConsistencyScoreResult,
    DayBuckets,
    SessionRecord,
    Window,
)
from training_consistency.core.validation import validate
from training_consistency.core.window import compute_window
from training_consistency.insights.chart import ChartSeriesBuilder
from training_consistency.insights.generator import ExplanationGenerator
from training_consistency.readers.base_reader import BaseReader

logger = logging.getLogger(__name__)


def build_metrics(buckets: DayBuckets, window: Window) -> ConsistencyMetrics:
    """Derive the scoring metrics from one window's buckets."""
    days = buckets.days_with_activity
    total = buckets.total_sessions
    return ConsistencyMetrics(
        days_with_activity=days,
        longest_gap_days=GapAnalyzer().analyze(buckets, window),
        average_sessions_per_active_day=total / days if days > 0 else 0.0,
        weekly_distribution=list(buckets.weekly),
        total_sessions=total,
    )


def calculate_consistency_score(
    sessions: Iterable[SessionRecord],
    reference_date: Optional[datetime] = None,
) -> ConsistencyScoreResult:
    """
    Score a user's training consistency over the 28 days ending on the
    reference date.

    Args:
        sessions: Candidate sessions in any order; out-of-window ones are ignored.
        reference_date: Anchor instant. None = now.

    Returns:
        ConsistencyScoreResult with score, explanations and a 28-day series.
    """
    window = compute_window(reference_date)
    buckets = bucketize(sessions, window)
    metrics = build_metrics(buckets, window)

    composer = ScoreComposer()
    breakdown = composer.compose(metrics)
    score = composer.score(metrics)

    logger.debug("Metrics: %s", metrics.to_dict())
    logger.debug("Breakdown: %s -> %d", breakdown.to_dict(), score)

    return ConsistencyScoreResult(
        score=score,
        explanations=ExplanationGenerator().generate(metrics),
        chart_data=ChartSeriesBuilder().build(buckets, window),
        period_start=window.start_date.isoformat(),
        period_end=window.end_date.isoformat(),
        metrics=metrics,
        breakdown=breakdown,
    )


class ConsistencyEngine:
    """Ties a session reader to the scoring pipeline."""

    def __init__(
        self,
        reader: Optional[BaseReader] = None,
        config: Optional[ConsistencyConfig] = None,
    ):
        self.reader = reader
        self.config = config or ConsistencyConfig()

    # =========================================================================
    # Public API
    # =========================================================================

    def calculate(
        self,
        sessions: Iterable[SessionRecord],
        reference_date: Optional[datetime] = None,
    ) -> ConsistencyScoreResult:
        return calculate_consistency_score(sessions, reference_date)

    def score_user(
        self,
        user_id: str,
        reference_date: Optional[datetime] = None,
    ) -> ConsistencyScoreResult:
        """
        Fetch a user's sessions for the window and score them.

        Raises:
            StorageUnavailable: If the reader cannot deliver sessions.
            RuntimeError: If the engine has no reader.
        """
        if self.reader is None:
            raise RuntimeError("No session reader configured")

        window = compute_window(reference_date)
        logger.info(
            "Scoring %s for %s to %s",
            user_id, window.start_date.isoformat(), window.end_date.isoformat(),
        )
        sessions = self.reader.read_sessions(user_id, since=window.start, until=window.end)
        logger.info("Read %d sessions for %s", len(sessions), user_id)

        result = self.calculate(sessions, window.end)
        logger.info("Consistency score for %s: %d", user_id, result.score)
        return result

    def score_request(
        self,
        user_id: Optional[str],
        reference_date: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ConsistencyScoreResult:
        """
        Validate raw request values, then score the user.

        Raises:
            InvalidInput: If validation fails; carries the error list.
            StorageUnavailable: If the reader cannot deliver sessions.
        """
        validation = validate(user_id, reference_date, now=now, config=self.config)
        if not validation.valid:
            logger.info("Rejected request: %s", "; ".join(validation.errors))
            raise InvalidInput(validation.errors)
        return self.score_user(validation.user_id, validation.reference_date or now)
