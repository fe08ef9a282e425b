"""Shared test fixtures for Training Consistency."""

import itertools
from datetime import datetime, time, timedelta, timezone

import pytest

from training_consistency.core.models import SessionRecord


@pytest.fixture
def reference_date():
    return datetime(2024, 2, 15, 23, 59, 59, tzinfo=timezone.utc)


@pytest.fixture
def make_session(reference_date):
    """Factory for SessionRecord objects placed relative to the reference date."""
    ids = itertools.count(1)

    def _make(
        days_ago=0,
        hour=10,
        minute=0,
        reference=None,
        start_time=None,
        duration_minutes=45,
        user_id="test-user",
        session_id=None,
    ):
        if start_time is None:
            day = (reference or reference_date).date() - timedelta(days=days_ago)
            start_time = datetime.combine(day, time(hour, minute), tzinfo=timezone.utc)
        return SessionRecord(
            session_id=session_id or f"session-{next(ids):03d}",
            user_id=user_id,
            start_time=start_time,
            end_time=start_time + timedelta(minutes=duration_minutes),
        )

    return _make


@pytest.fixture
def sessions_on_days(make_session):
    """Sessions on 1-based window days (day 1 = first day, day 28 = reference date)."""

    def _make(days, per_day=1, extra=None):
        sessions = []
        for day in days:
            count = per_day + (extra or {}).get(day, 0)
            for i in range(count):
                sessions.append(make_session(days_ago=28 - day, hour=8 + i))
        return sessions

    return _make


@pytest.fixture
def walkthrough_sessions(sessions_on_days):
    """9 active days, 10 sessions, longest gap 4, 4 distinct weekdays."""
    return sessions_on_days([1, 5, 8, 10, 15, 17, 22, 24, 27], extra={10: 1})
