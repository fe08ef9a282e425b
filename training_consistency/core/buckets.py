"""
Day Bucketizer

Filters sessions into the scoring window and counts them per UTC calendar
date and per UTC weekday. Only start_time is considered.
"""

import logging
from collections import Counter
from typing import Iterable

from training_consistency.config.defaults import DAYS_PER_WEEK
from training_consistency.core.models import DayBuckets, SessionRecord, Window
from training_consistency.core.window import to_utc, utc_date, utc_weekday

logger = logging.getLogger(__name__)


def bucketize(sessions: Iterable[SessionRecord], window: Window) -> DayBuckets:
    """Group in-window sessions by UTC date and weekday.

    Bounds are inclusive on both ends. Every session counts, including
    several on the same date. Input order does not affect the result.
    """
    counts: Counter = Counter()
    weekly = [0] * DAYS_PER_WEEK
    skipped = 0

    for session in sessions:
        start = to_utc(session.start_time)
        if not window.contains(start):
            skipped += 1
            continue
        counts[utc_date(start).isoformat()] += 1
        weekly[utc_weekday(start)] += 1

    if skipped:
        logger.debug("Ignored %d sessions outside the window", skipped)

    return DayBuckets(by_date=dict(sorted(counts.items())), weekly=weekly)
