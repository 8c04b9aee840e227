"""
Scoring & prediction engine feature package.

One shared, parameterised engine replaces the per-screen copies of the
weighting, ranking and prediction logic. Pure math lives in ``pipeline``;
storage-backed lifecycles (benchmarks, predictions, quality history,
engagement) live in their own subpackages; ``api`` is the HTTP surface.
"""

from .api.router import router as scoring_router  # noqa: F401
from .benchmarks.resolver import BenchmarkResolver, benchmark_resolver  # noqa: F401
from .domain.errors import (  # noqa: F401
    AlreadyResolved,
    InsufficientData,
    InvalidInput,
    PersistenceFailed,
    ScoringEngineError,
    SubjectNotFound,
)
from .pipeline import (  # noqa: F401
    EngagementScorer,
    PercentileRanker,
    SeasonalAdjuster,
    WeightedScoreCombiner,
)
from .predictions.service import PredictionTracker, prediction_tracker  # noqa: F401
