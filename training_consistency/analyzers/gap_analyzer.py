"""
Gap Analyzer

Finds idle streaks inside the scoring window, measured in whole UTC calendar
days. Three kinds of gap are considered:
- Leading: inactive days from the window's first day up to the first active day
- Interior: inactive days between two consecutive active days
- Trailing: inactive days after the last active day up to the window's last day

Dates are compared after truncating to the calendar day, so sessions logged at
arbitrary times of day never produce fractional gaps.
"""

from datetime import date
from typing import List

from training_consistency.config.defaults import WINDOW_DAYS
from training_consistency.core.models import DayBuckets, Window


class GapAnalyzer:
    """Computes the longest run of inactive days in a window."""

    def analyze(self, buckets: DayBuckets, window: Window) -> int:
        """Longest gap in days. A window with no activity is one full gap."""
        if not buckets.by_date:
            return WINDOW_DAYS
        return max(self.gap_lengths(buckets, window))

    def gap_lengths(self, buckets: DayBuckets, window: Window) -> List[int]:
        """Leading, interior and trailing gap lengths, in window order.

        Returns an empty list when there is no activity.
        """
        active = self._active_dates(buckets)
        if not active:
            return []

        gaps = [(active[0] - window.start_date).days]
        for prev, curr in zip(active, active[1:]):
            gaps.append((curr - prev).days - 1)
        gaps.append((window.end_date - active[-1]).days)
        return gaps

    def _active_dates(self, buckets: DayBuckets) -> List[date]:
        return sorted(date.fromisoformat(key) for key in buckets.by_date)
