"""
Chart Series Builder

Expands the sparse per-date bucket map into a dense daily series covering
every day of the window, zero-filled.
"""

from datetime import date, timedelta
from typing import List

from training_consistency.config.defaults import WINDOW_DAYS
from training_consistency.core.models import DailySessionCount, DayBuckets, Window


class ChartSeriesBuilder:
    """Builds the 28-point daily series shown next to the score."""

    def build(self, buckets: DayBuckets, window: Window) -> List[DailySessionCount]:
        start = window.start_date

        # Slot i holds the count for start + i days
        counts = [0] * WINDOW_DAYS
        for key, count in buckets.by_date.items():
            offset = (date.fromisoformat(key) - start).days
            if 0 <= offset < WINDOW_DAYS:
                counts[offset] = count

        return [
            DailySessionCount(date=(start + timedelta(days=i)).isoformat(), count=count)
            for i, count in enumerate(counts)
        ]
