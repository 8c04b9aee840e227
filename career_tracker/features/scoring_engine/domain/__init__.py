"""
Domain subpackage for the scoring engine.
"""

from .constants import DEFAULT_CONSTANTS, TERMINAL_STATUSES, ScoringConstants
from .errors import (
    AlreadyResolved,
    InsufficientData,
    InvalidInput,
    PersistenceFailed,
    ScoringEngineError,
    SubjectNotFound,
)
from .models import (
    ActivityEvent,
    ActivityWindow,
    Benchmark,
    BenchmarkContext,
    CompetitivenessAssessment,
    CompositeScore,
    DayRange,
    EngagementReport,
    EngagementScore,
    PercentileRank,
    Prediction,
    PredictionAccuracySummary,
    QualityAssessment,
    ScoreInput,
    SeasonalFactors,
)

__all__ = [
    "DEFAULT_CONSTANTS",
    "TERMINAL_STATUSES",
    "ActivityEvent",
    "ActivityWindow",
    "AlreadyResolved",
    "Benchmark",
    "BenchmarkContext",
    "CompetitivenessAssessment",
    "CompositeScore",
    "DayRange",
    "EngagementReport",
    "EngagementScore",
    "InsufficientData",
    "InvalidInput",
    "PercentileRank",
    "PersistenceFailed",
    "Prediction",
    "PredictionAccuracySummary",
    "QualityAssessment",
    "ScoreInput",
    "ScoringConstants",
    "ScoringEngineError",
    "SeasonalFactors",
    "SubjectNotFound",
]
