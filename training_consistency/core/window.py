"""
Window Calculator

Derives the 28-day UTC scoring window from a reference instant. All calendar
arithmetic in the engine goes through UTC-normalized dates from here.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from training_consistency.config.defaults import WINDOW_DAYS
from training_consistency.core.models import Window

END_OF_DAY = time(23, 59, 59, 999000)


def to_utc(instant: datetime) -> datetime:
    """Return an aware UTC datetime. Naive values are taken to be UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def utc_date(instant: datetime) -> date:
    return to_utc(instant).date()


def utc_weekday(instant: datetime) -> int:
    """Weekday of the UTC date, 0 = Sunday ... 6 = Saturday."""
    return to_utc(instant).isoweekday() % 7


def compute_window(reference_date: Optional[datetime] = None) -> Window:
    """Window of WINDOW_DAYS UTC calendar days ending on the reference date.

    Args:
        reference_date: Anchor instant. None = now. Its time of day is
            ignored; both bounds snap to UTC day boundaries.
    """
    if reference_date is None:
        reference_date = datetime.now(timezone.utc)
    reference = to_utc(reference_date)
    end_day = reference.date()
    start_day = end_day - timedelta(days=WINDOW_DAYS - 1)
    return Window(
        start=datetime.combine(start_day, time.min, tzinfo=timezone.utc),
        end=datetime.combine(end_day, END_OF_DAY, tzinfo=timezone.utc),
    )
