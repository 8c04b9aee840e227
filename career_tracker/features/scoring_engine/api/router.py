"""
Scoring engine routes.

Thin HTTP surface over the engine: every endpoint resolves the caller from
the bearer token, delegates to a service, and maps engine errors to HTTP
status codes. No scoring logic lives here.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from career_tracker.auth.verify import current_user_id
from career_tracker.infrastructure.observability.logging import get_logger

from ..competitiveness.service import job_competitiveness_service
from ..domain.errors import (
    AlreadyResolved,
    InsufficientData,
    InvalidInput,
    PersistenceFailed,
    ScoringEngineError,
    SubjectNotFound,
)
from ..domain.models import BenchmarkContext
from ..engagement.service import mentee_engagement_service
from ..pipeline.combiner import weighted_score_combiner
from ..pipeline.percentile import percentile_ranker
from ..predictions.service import prediction_tracker
from ..quality.service import application_quality_service
from .schemas import (
    AccuracySummaryResponse,
    CombineRequest,
    CompetitivenessResponse,
    CompositeScoreResponse,
    EngagementResponse,
    PercentileRequest,
    PercentileResponse,
    PredictionCreateRequest,
    PredictionResponse,
    QualityHistoryEntry,
    QualityResponse,
    ResolveRequest,
    SubScoresRequest,
)

router = APIRouter(prefix="/engine", tags=["scoring-engine"])
logger = get_logger(__name__)

_STATUS_BY_ERROR = {
    InvalidInput: status.HTTP_422_UNPROCESSABLE_CONTENT,
    InsufficientData: status.HTTP_422_UNPROCESSABLE_CONTENT,
    AlreadyResolved: status.HTTP_409_CONFLICT,
    SubjectNotFound: status.HTTP_404_NOT_FOUND,
    PersistenceFailed: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _to_http_error(error: ScoringEngineError) -> HTTPException:
    status_code = _STATUS_BY_ERROR.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTTPException(
        status_code=status_code,
        detail={"code": error.code, "message": str(error)},
    )


@router.post("/combine", response_model=CompositeScoreResponse)
async def combine_scores(request: CombineRequest, user_id: str = Depends(current_user_id)):
    """Combine labeled sub-scores into one 0-100 composite."""
    try:
        composite = weighted_score_combiner.combine(i.to_domain() for i in request.inputs)
    except ScoringEngineError as e:
        raise _to_http_error(e) from e
    return CompositeScoreResponse.from_domain(composite)


@router.post("/percentile", response_model=PercentileResponse)
async def rank_score(request: PercentileRequest, user_id: str = Depends(current_user_id)):
    """Rank a value against a population; empty populations yield nulls."""
    return PercentileResponse.from_domain(percentile_ranker.rank(request.population, request.value))


@router.get("/predictions/accuracy", response_model=AccuracySummaryResponse)
async def get_prediction_accuracy(user_id: str = Depends(current_user_id)):
    summary = await prediction_tracker.accuracy_summary(user_id)
    return AccuracySummaryResponse.from_domain(summary)


@router.post("/predictions/{subject_id}", response_model=PredictionResponse)
async def create_prediction(
    subject_id: str,
    request: PredictionCreateRequest,
    user_id: str = Depends(current_user_id),
):
    """
    Generate (or regenerate) the response-time prediction for a job.

    Raises:
        409: prediction already resolved
        422: terminal job status
        503: prediction could not be saved
    """
    context = BenchmarkContext(
        industry=request.industry,
        company_size=request.company_size,
        level=request.level,
    )
    try:
        prediction = await prediction_tracker.create(
            user_id,
            subject_id,
            context,
            applied_on=request.applied_on,
            status=request.status,
        )
    except ScoringEngineError as e:
        logger.warning(
            "Prediction generation rejected",
            user_id=user_id,
            subject_id=subject_id,
            code=e.code,
        )
        raise _to_http_error(e) from e

    return PredictionResponse.from_domain(prediction, prediction_tracker.status_of(prediction))


@router.get("/predictions/{subject_id}", response_model=PredictionResponse)
async def get_prediction(subject_id: str, user_id: str = Depends(current_user_id)):
    """Fetch a prediction, flagging it overdue first if its window has passed."""
    try:
        prediction = await prediction_tracker.mark_overdue(user_id, subject_id)
    except ScoringEngineError as e:
        raise _to_http_error(e) from e

    if prediction is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prediction not found")
    return PredictionResponse.from_domain(prediction, prediction_tracker.status_of(prediction))


@router.post("/predictions/{subject_id}/resolve", response_model=PredictionResponse)
async def resolve_prediction(
    subject_id: str,
    request: ResolveRequest,
    user_id: str = Depends(current_user_id),
):
    try:
        prediction = await prediction_tracker.resolve(user_id, subject_id, request.actual_days)
    except ScoringEngineError as e:
        raise _to_http_error(e) from e
    return PredictionResponse.from_domain(prediction, prediction_tracker.status_of(prediction))


@router.post("/quality/{subject_id}", response_model=QualityResponse)
async def score_application_quality(
    subject_id: str,
    request: SubScoresRequest,
    user_id: str = Depends(current_user_id),
):
    try:
        assessment = await application_quality_service.score_application(
            user_id, subject_id, request.scores
        )
    except ScoringEngineError as e:
        raise _to_http_error(e) from e
    return QualityResponse.from_domain(assessment)


@router.get("/quality/{subject_id}", response_model=list[QualityHistoryEntry])
async def get_application_quality_history(subject_id: str, user_id: str = Depends(current_user_id)):
    rows = await application_quality_service.history(user_id, subject_id)
    return [QualityHistoryEntry(**row) for row in rows]


@router.post("/competitiveness/{subject_id}", response_model=CompetitivenessResponse)
async def score_job_competitiveness(
    subject_id: str,
    request: SubScoresRequest,
    user_id: str = Depends(current_user_id),
):
    try:
        assessment = await job_competitiveness_service.score_job(
            user_id, subject_id, request.scores
        )
    except ScoringEngineError as e:
        raise _to_http_error(e) from e
    return CompetitivenessResponse.from_domain(assessment)


@router.get("/engagement/{mentee_id}", response_model=EngagementResponse)
async def get_engagement(mentee_id: str, user_id: str = Depends(current_user_id)):
    """Trailing-window engagement for the caller or one of their active mentees."""
    if not await mentee_engagement_service.can_view(user_id, mentee_id):
        logger.warning("Engagement access denied", user_id=user_id, mentee_id=mentee_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a mentor of this user")

    report = await mentee_engagement_service.engagement_for(mentee_id)
    return EngagementResponse.from_domain(report)
