"""Tests for the dense daily chart series."""

from datetime import date, timedelta

from training_consistency.core.buckets import bucketize
from training_consistency.core.models import DayBuckets
from training_consistency.core.window import compute_window
from training_consistency.insights.chart import ChartSeriesBuilder


class TestChartSeriesBuilder:
    def test_empty_buckets_give_28_zeros(self, reference_date):
        series = ChartSeriesBuilder().build(DayBuckets(), compute_window(reference_date))
        assert len(series) == 28
        assert all(point.count == 0 for point in series)

    def test_consecutive_ascending_dates(self, reference_date):
        series = ChartSeriesBuilder().build(DayBuckets(), compute_window(reference_date))
        dates = [date.fromisoformat(point.date) for point in series]
        assert dates[0] == date(2024, 1, 19)
        assert dates[-1] == date(2024, 2, 15)
        for prev, curr in zip(dates, dates[1:]):
            assert curr - prev == timedelta(days=1)

    def test_counts_come_from_buckets(self, reference_date, walkthrough_sessions):
        window = compute_window(reference_date)
        buckets = bucketize(walkthrough_sessions, window)
        series = ChartSeriesBuilder().build(buckets, window)
        by_date = {point.date: point.count for point in series}
        assert by_date["2024-01-28"] == 2
        assert by_date["2024-01-19"] == 1
        assert by_date["2024-01-20"] == 0
        assert sum(by_date.values()) == 10

    def test_keys_outside_window_ignored(self, reference_date):
        buckets = DayBuckets(by_date={"2024-01-18": 3, "2024-02-16": 1, "2024-02-01": 2})
        series = ChartSeriesBuilder().build(buckets, compute_window(reference_date))
        assert sum(point.count for point in series) == 2

    def test_to_dict(self, reference_date):
        series = ChartSeriesBuilder().build(DayBuckets(), compute_window(reference_date))
        assert series[0].to_dict() == {"date": "2024-01-19", "count": 0}
