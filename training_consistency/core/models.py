"""
Training Consistency Data Models

Core dataclasses and enums for the consistency scoring engine.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from training_consistency.config.defaults import WINDOW_DAYS


# =============================================================================
# Enums
# =============================================================================

class ExplanationKind(str, Enum):
    """Which metric an explanation sentence reports on."""
    ACTIVITY = "activity"
    GAP = "gap"
    SPREAD = "spread"
    INTENSITY = "intensity"


# =============================================================================
# Input Models
# =============================================================================

@dataclass(frozen=True)
class SessionRecord:
    """A completed exercise session as delivered by the session store."""
    session_id: str
    user_id: str
    start_time: datetime
    end_time: Optional[datetime] = None  # informational only

    @property
    def duration_minutes(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds() / 60


# =============================================================================
# Working Models
# =============================================================================

@dataclass(frozen=True)
class Window:
    """The 28-day UTC scoring window: [start, end] inclusive."""
    start: datetime  # UTC midnight of the first day
    end: datetime  # UTC 23:59:59.999 of the last day

    @property
    def start_date(self) -> date:
        return self.start.date()

    @property
    def end_date(self) -> date:
        return self.end.date()

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


@dataclass
class DayBuckets:
    """Per-date session counts plus the weekday histogram (0 = Sunday)."""
    by_date: Dict[str, int] = field(default_factory=dict)
    weekly: List[int] = field(default_factory=lambda: [0] * 7)

    @property
    def days_with_activity(self) -> int:
        return len(self.by_date)

    @property
    def total_sessions(self) -> int:
        return sum(self.by_date.values())

    @property
    def distinct_weekdays(self) -> int:
        return sum(1 for count in self.weekly if count > 0)


@dataclass
class ConsistencyMetrics:
    """Metrics derived from one window of sessions."""
    days_with_activity: int
    longest_gap_days: int
    average_sessions_per_active_day: float
    weekly_distribution: List[int]
    total_sessions: int
    total_days: int = WINDOW_DAYS

    @property
    def distinct_weekdays(self) -> int:
        return sum(1 for count in self.weekly_distribution if count > 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_days": self.total_days,
            "days_with_activity": self.days_with_activity,
            "longest_gap_days": self.longest_gap_days,
            "average_sessions_per_active_day": round(self.average_sessions_per_active_day, 2),
            "weekly_distribution": list(self.weekly_distribution),
            "total_sessions": self.total_sessions,
        }


@dataclass
class ScoreBreakdown:
    """The four weighted subscores before rounding."""
    frequency: float
    gap: float
    distribution: float
    intensity: float

    @property
    def total(self) -> float:
        return self.frequency + self.gap + self.distribution + self.intensity

    def to_dict(self) -> Dict[str, float]:
        return {
            "frequency": round(self.frequency, 2),
            "gap": round(self.gap, 2),
            "distribution": round(self.distribution, 2),
            "intensity": round(self.intensity, 2),
        }


@dataclass
class Explanation:
    """One explanation sentence tagged with the metric it describes."""
    kind: ExplanationKind
    text: str


# =============================================================================
# Output Models
# =============================================================================

@dataclass
class DailySessionCount:
    """One point of the daily chart series."""
    date: str  # YYYY-MM-DD (UTC)
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "count": self.count}


@dataclass
class ConsistencyScoreResult:
    """Final scoring result for one user and reference date."""
    score: int  # 0-100
    explanations: List[str]
    chart_data: List[DailySessionCount]
    period_start: str  # YYYY-MM-DD
    period_end: str  # YYYY-MM-DD
    metrics: Optional[ConsistencyMetrics] = None
    breakdown: Optional[ScoreBreakdown] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "explanations": list(self.explanations),
            "chartData": [point.to_dict() for point in self.chart_data],
            "periodStart": self.period_start,
            "periodEnd": self.period_end,
        }


@dataclass
class ValidationResult:
    """Outcome of validating raw request parameters."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    user_id: Optional[str] = None
    reference_date: Optional[datetime] = None
