"""
Domain models for the scoring engine.

These dataclasses describe the records the engine computes, reads and
persists. They carry no storage logic so repositories, services and the
API layer can all share them.
"""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Literal

from .errors import InvalidInput

Trend = Literal["high", "medium", "low"]
PredictionStatus = Literal["resolved", "overdue", "taking_longer", "on_track"]

JOB_ADDED = "job_added"
INTERVIEW_SCHEDULED = "interview_scheduled"
TIME_TRACKED = "time_tracked"
MATERIAL_UPDATED = "material_updated"


@dataclass(frozen=True, slots=True)
class ScoreInput:
    """A named sub-score. ``value is None`` means the signal is absent."""

    name: str
    value: float | None
    weight: float

    @property
    def is_present(self) -> bool:
        return self.value is not None


@dataclass(frozen=True, slots=True)
class CompositeScore:
    overall: int
    components: tuple[ScoreInput, ...]
    computed_at: datetime

    def component(self, name: str) -> ScoreInput | None:
        return next((c for c in self.components if c.name == name), None)


@dataclass(frozen=True, slots=True)
class BenchmarkContext:
    industry: str
    company_size: str | None = None
    level: str | None = None


@dataclass(frozen=True, slots=True)
class Benchmark:
    context: BenchmarkContext
    sample_size: int
    min_days: float
    avg_days: float
    max_days: float
    is_default: bool = False


@dataclass(frozen=True, slots=True)
class DayRange:
    min_days: float
    avg_days: float
    max_days: float


@dataclass(frozen=True, slots=True)
class SeasonalFactors:
    month_factor: float
    day_of_week_factor: float


@dataclass(slots=True)
class Prediction:
    """Response-time prediction for one subject (a tracked job)."""

    user_id: str
    subject_id: str
    min_days: int
    max_days: int
    avg_days: int
    confidence: int
    factors: dict[str, float | str]
    suggested_follow_up_date: date
    is_overdue: bool = False
    applied_on: date | None = None
    id: str | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None
    actual_days: int | None = None
    accuracy: float | None = None

    @property
    def is_resolved(self) -> bool:
        return self.resolved_at is not None


@dataclass(frozen=True, slots=True)
class PredictionAccuracySummary:
    resolved_count: int
    mean_accuracy: float | None
    within_tolerance_rate: int | None


@dataclass(frozen=True, slots=True)
class PercentileRank:
    percentile: int | None
    mean: float | None
    max: float | None


@dataclass(frozen=True, slots=True)
class ActivityEvent:
    kind: str
    occurred_at: datetime
    quantity: float = 1.0


@dataclass(slots=True)
class ActivityWindow:
    """Events inside a trailing window ending at ``end``. Derived, never persisted."""

    start: datetime
    end: datetime
    window_days: int
    events: list[ActivityEvent] = field(default_factory=list)
    goal_progress: list[float] = field(default_factory=list)

    def __post_init__(self):
        if self.window_days <= 0:
            raise InvalidInput(f"Window must span at least one day, got {self.window_days}")

    def _count(self, kind: str) -> int:
        return sum(1 for event in self.events if event.kind == kind)

    @property
    def jobs_added(self) -> int:
        return self._count(JOB_ADDED)

    @property
    def interviews_scheduled(self) -> int:
        return self._count(INTERVIEW_SCHEDULED)

    @property
    def materials_updated(self) -> int:
        return self._count(MATERIAL_UPDATED)

    @property
    def minutes_tracked(self) -> float:
        return sum(event.quantity for event in self.events if event.kind == TIME_TRACKED)

    @property
    def active_days(self) -> set[date]:
        return {event.occurred_at.astimezone(UTC).date() for event in self.events}

    @property
    def last_activity_at(self) -> datetime | None:
        if not self.events:
            return None
        return max(event.occurred_at for event in self.events)


@dataclass(frozen=True, slots=True)
class EngagementScore:
    engagement: int
    activity_frequency: int
    trend: Trend


@dataclass(frozen=True, slots=True)
class EngagementReport:
    """Engagement score plus the supporting activity metrics shown to mentors."""

    score: EngagementScore
    jobs_added: int
    interviews_scheduled: int
    minutes_tracked: float
    materials_updated: int
    active_goals: int
    avg_goal_progress: int
    days_since_last_activity: int


@dataclass(frozen=True, slots=True)
class QualityAssessment:
    composite: CompositeScore
    rank: PercentileRank
    meets_threshold: bool
    threshold: int
    change_note: str | None = None


@dataclass(frozen=True, slots=True)
class CompetitivenessAssessment:
    composite: CompositeScore
    rank: PercentileRank
    interview_likelihood: Trend
