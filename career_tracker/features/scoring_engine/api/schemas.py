# career_tracker/features/scoring_engine/api/schemas.py
"""
Request/response models for the scoring engine routes.

Value ranges are deliberately not constrained here: the engine itself rejects
out-of-range sub-scores with InvalidInput so every caller gets the same rule.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from ..domain.models import (
    CompetitivenessAssessment,
    CompositeScore,
    EngagementReport,
    PercentileRank,
    Prediction,
    PredictionAccuracySummary,
    QualityAssessment,
    ScoreInput,
)


class ScoreInputModel(BaseModel):
    name: str
    value: float | None = None
    weight: float

    def to_domain(self) -> ScoreInput:
        return ScoreInput(name=self.name, value=self.value, weight=self.weight)


class CombineRequest(BaseModel):
    inputs: list[ScoreInputModel] = Field(..., min_length=1)


class CompositeScoreResponse(BaseModel):
    overall: int
    components: list[ScoreInputModel]
    computed_at: datetime

    @classmethod
    def from_domain(cls, composite: CompositeScore) -> "CompositeScoreResponse":
        return cls(
            overall=composite.overall,
            components=[
                ScoreInputModel(name=c.name, value=c.value, weight=c.weight)
                for c in composite.components
            ],
            computed_at=composite.computed_at,
        )


class PercentileRequest(BaseModel):
    population: list[float] = Field(default_factory=list)
    value: float


class PercentileResponse(BaseModel):
    percentile: int | None
    mean: float | None
    max: float | None

    @classmethod
    def from_domain(cls, rank: PercentileRank) -> "PercentileResponse":
        return cls(percentile=rank.percentile, mean=rank.mean, max=rank.max)


class PredictionCreateRequest(BaseModel):
    industry: str = Field(..., min_length=1)
    company_size: str | None = None
    level: str | None = None
    applied_on: date | None = None
    status: str | None = Field(None, description="Current job status; terminal statuses are rejected")


class ResolveRequest(BaseModel):
    actual_days: int = Field(..., ge=0)


class PredictionResponse(BaseModel):
    subject_id: str
    min_days: int
    avg_days: int
    max_days: int
    confidence: int
    factors: dict[str, float | str]
    suggested_follow_up_date: date
    is_overdue: bool
    applied_on: date | None
    status: Literal["resolved", "overdue", "taking_longer", "on_track"]
    created_at: datetime | None = None
    resolved_at: datetime | None = None
    actual_days: int | None = None
    accuracy: float | None = None

    @classmethod
    def from_domain(cls, prediction: Prediction, status: str) -> "PredictionResponse":
        return cls(
            subject_id=prediction.subject_id,
            min_days=prediction.min_days,
            avg_days=prediction.avg_days,
            max_days=prediction.max_days,
            confidence=prediction.confidence,
            factors=prediction.factors,
            suggested_follow_up_date=prediction.suggested_follow_up_date,
            is_overdue=prediction.is_overdue,
            applied_on=prediction.applied_on,
            status=status,
            created_at=prediction.created_at,
            resolved_at=prediction.resolved_at,
            actual_days=prediction.actual_days,
            accuracy=prediction.accuracy,
        )


class AccuracySummaryResponse(BaseModel):
    resolved_count: int
    mean_accuracy: float | None
    within_tolerance_rate: int | None

    @classmethod
    def from_domain(cls, summary: PredictionAccuracySummary) -> "AccuracySummaryResponse":
        return cls(
            resolved_count=summary.resolved_count,
            mean_accuracy=summary.mean_accuracy,
            within_tolerance_rate=summary.within_tolerance_rate,
        )


class SubScoresRequest(BaseModel):
    """Analyzer output keyed by component name; null marks an absent component."""

    scores: dict[str, float | None] = Field(..., min_length=1)


class QualityResponse(BaseModel):
    composite: CompositeScoreResponse
    rank: PercentileResponse
    meets_threshold: bool
    threshold: int
    change_note: str | None

    @classmethod
    def from_domain(cls, assessment: QualityAssessment) -> "QualityResponse":
        return cls(
            composite=CompositeScoreResponse.from_domain(assessment.composite),
            rank=PercentileResponse.from_domain(assessment.rank),
            meets_threshold=assessment.meets_threshold,
            threshold=assessment.threshold,
            change_note=assessment.change_note,
        )


class QualityHistoryEntry(BaseModel):
    overall_score: int
    score_percentile: int | None
    meets_threshold: bool
    change_note: str | None
    computed_at: datetime


class CompetitivenessResponse(BaseModel):
    composite: CompositeScoreResponse
    rank: PercentileResponse
    interview_likelihood: Literal["high", "medium", "low"]

    @classmethod
    def from_domain(cls, assessment: CompetitivenessAssessment) -> "CompetitivenessResponse":
        return cls(
            composite=CompositeScoreResponse.from_domain(assessment.composite),
            rank=PercentileResponse.from_domain(assessment.rank),
            interview_likelihood=assessment.interview_likelihood,
        )


class EngagementResponse(BaseModel):
    engagement: int
    activity_frequency: int
    trend: Literal["high", "medium", "low"]
    jobs_added: int
    interviews_scheduled: int
    minutes_tracked: float
    materials_updated: int
    active_goals: int
    avg_goal_progress: int
    days_since_last_activity: int

    @classmethod
    def from_domain(cls, report: EngagementReport) -> "EngagementResponse":
        return cls(
            engagement=report.score.engagement,
            activity_frequency=report.score.activity_frequency,
            trend=report.score.trend,
            jobs_added=report.jobs_added,
            interviews_scheduled=report.interviews_scheduled,
            minutes_tracked=report.minutes_tracked,
            materials_updated=report.materials_updated,
            active_goals=report.active_goals,
            avg_goal_progress=report.avg_goal_progress,
            days_since_last_activity=report.days_since_last_activity,
        )
