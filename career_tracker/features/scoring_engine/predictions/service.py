"""
Prediction tracker - creates, flags and resolves response-time predictions.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta

from career_tracker.db.helpers import DatabaseError
from career_tracker.infrastructure.observability.logging import get_logger

from ..benchmarks.resolver import BenchmarkResolver, benchmark_resolver
from ..domain.constants import DEFAULT_CONSTANTS, TERMINAL_STATUSES, ScoringConstants
from ..domain.errors import AlreadyResolved, InvalidInput, PersistenceFailed, SubjectNotFound
from ..domain.models import (
    Benchmark,
    BenchmarkContext,
    DayRange,
    Prediction,
    PredictionAccuracySummary,
    PredictionStatus,
)
from ..pipeline.rounding import round_half_up
from ..pipeline.seasonal import SeasonalAdjuster, seasonal_adjuster
from .repository import PredictionRepository

logger = get_logger(__name__)

# Resolved predictions at or above this accuracy landed within +/-20% of the outcome.
TOLERANCE_ACCURACY = 80.0


def is_terminal_status(status: str | None) -> bool:
    return bool(status) and status.strip().lower() in TERMINAL_STATUSES


def compute_accuracy(predicted_avg_days: float, actual_days: float) -> float:
    """``max(0, 100 - |actual - avg| / avg * 100)``."""
    if predicted_avg_days <= 0:
        return 100.0 if actual_days == 0 else 0.0
    error_pct = abs(actual_days - predicted_avg_days) / predicted_avg_days * 100
    return max(0.0, 100.0 - error_pct)


class PredictionTracker:
    """
    Lifecycle of a per-subject response-time prediction: Open -> Resolved.

    ``is_overdue`` is a sub-flag of Open. Resolved is terminal and reachable
    only through ``resolve``. At most one prediction exists per subject;
    regenerating an open one replaces its estimates in place.
    """

    def __init__(
        self,
        resolver: BenchmarkResolver = benchmark_resolver,
        adjuster: SeasonalAdjuster = seasonal_adjuster,
        constants: ScoringConstants = DEFAULT_CONSTANTS,
        clock: Callable[[], datetime] | None = None,
    ):
        self.resolver = resolver
        self.adjuster = adjuster
        self.constants = constants
        self._clock = clock or (lambda: datetime.now(UTC))

    async def create(
        self,
        user_id: str,
        subject_id: str,
        context: BenchmarkContext | None = None,
        *,
        benchmark: Benchmark | None = None,
        applied_on: date | None = None,
        status: str | None = None,
    ) -> Prediction:
        """
        Build and upsert the open prediction for a subject.

        Args:
            user_id: Owner of the subject
            subject_id: Tracked job the prediction is about
            context: Benchmark lookup context, used when ``benchmark`` is not given
            benchmark: Pre-resolved benchmark
            applied_on: Application date; drives seasonality and the overdue flag
            status: Current subject status; terminal statuses are rejected

        Raises:
            InvalidInput: terminal subject status, or neither context nor benchmark
            AlreadyResolved: the subject's prediction already has an outcome
            SubjectNotFound: another user owns the subject's prediction
            PersistenceFailed: the upsert failed
        """
        if is_terminal_status(status):
            raise InvalidInput(
                f"Predictions are not generated for subjects with status '{status}'",
                subject_id=subject_id,
                status=status,
            )

        if benchmark is None:
            if context is None:
                raise InvalidInput("A benchmark or a benchmark context is required")
            benchmark = await self.resolver.resolve(context)

        prediction = self.build(user_id, subject_id, benchmark, applied_on=applied_on)

        try:
            row = await PredictionRepository.upsert_open(prediction)
        except DatabaseError as e:
            logger.error(
                "Failed to persist prediction",
                user_id=user_id,
                subject_id=subject_id,
                error=str(e),
            )
            raise PersistenceFailed(f"Could not save prediction: {e}", subject_id=subject_id) from e

        if row is None:
            # The upsert skips rows that are resolved or owned by another user.
            if await PredictionRepository.fetch_by_subject(user_id, subject_id) is None:
                raise SubjectNotFound(
                    f"Subject {subject_id} is not tracked by this user", subject_id=subject_id
                )
            raise AlreadyResolved(
                f"Prediction for subject {subject_id} is already resolved", subject_id=subject_id
            )

        logger.info(
            "Prediction generated",
            user_id=user_id,
            subject_id=subject_id,
            min_days=prediction.min_days,
            avg_days=prediction.avg_days,
            max_days=prediction.max_days,
            confidence=prediction.confidence,
        )
        return self._row_to_prediction(row)

    def build(
        self,
        user_id: str,
        subject_id: str,
        benchmark: Benchmark,
        *,
        applied_on: date | None = None,
    ) -> Prediction:
        """Compute a prediction without touching storage."""
        today = self._today()
        anchor = applied_on or today
        # Seasonality reflects when the estimate is made; the application
        # date only anchors the follow-up date and the overdue check.
        baseline = DayRange(benchmark.min_days, benchmark.avg_days, benchmark.max_days)
        adjusted = self.adjuster.adjust(baseline, today)
        factors = self.adjuster.factors(today)

        avg_days = int(adjusted.avg_days)
        max_days = int(adjusted.max_days)
        is_overdue = applied_on is not None and (today - applied_on).days > max_days

        return Prediction(
            user_id=user_id,
            subject_id=subject_id,
            min_days=int(adjusted.min_days),
            avg_days=avg_days,
            max_days=max_days,
            confidence=self.resolver.confidence_for(benchmark),
            factors={
                "industry": benchmark.context.industry,
                "company_size": benchmark.context.company_size or "any",
                "level": benchmark.context.level or "any",
                "seasonality_factor": factors.month_factor,
                "day_of_week_factor": factors.day_of_week_factor,
                "applied_on": anchor.isoformat(),
                "sample_size": benchmark.sample_size,
                "base_benchmark": (
                    "Default estimate"
                    if benchmark.is_default
                    else f"{benchmark.avg_days:g} days avg"
                ),
            },
            suggested_follow_up_date=anchor
            + timedelta(days=avg_days + self.constants.follow_up_grace_days),
            is_overdue=is_overdue,
            applied_on=applied_on,
        )

    async def get(self, user_id: str, subject_id: str) -> Prediction | None:
        row = await PredictionRepository.fetch_by_subject(user_id, subject_id)
        return self._row_to_prediction(row) if row else None

    async def mark_overdue(self, user_id: str, subject_id: str) -> Prediction | None:
        """
        Flag an open prediction as overdue once elapsed days exceed ``max_days``.

        Idempotent and one-way: the flag is never cleared here.
        """
        prediction = await self.get(user_id, subject_id)
        if prediction is None or prediction.is_resolved or prediction.is_overdue:
            return prediction
        if prediction.applied_on is None:
            return prediction

        elapsed = (self._today() - prediction.applied_on).days
        if elapsed <= prediction.max_days:
            return prediction

        try:
            row = await PredictionRepository.mark_overdue(user_id, subject_id)
        except DatabaseError as e:
            raise PersistenceFailed(
                f"Could not flag prediction overdue: {e}", subject_id=subject_id
            ) from e

        logger.info(
            "Prediction marked overdue",
            user_id=user_id,
            subject_id=subject_id,
            elapsed_days=elapsed,
            max_days=prediction.max_days,
        )
        return self._row_to_prediction(row) if row else prediction

    async def resolve(self, user_id: str, subject_id: str, actual_days: int) -> Prediction:
        """
        Record the observed response time and compute accuracy, exactly once.

        Raises:
            InvalidInput: negative ``actual_days``
            SubjectNotFound: no prediction exists for the subject
            AlreadyResolved: an outcome was already recorded
            PersistenceFailed: the update failed
        """
        if isinstance(actual_days, bool) or not isinstance(actual_days, int) or actual_days < 0:
            raise InvalidInput(
                f"actual_days must be a non-negative integer, got {actual_days!r}",
                subject_id=subject_id,
            )

        prediction = await self.get(user_id, subject_id)
        if prediction is None:
            raise SubjectNotFound(
                f"No prediction exists for subject {subject_id}", subject_id=subject_id
            )
        if prediction.is_resolved:
            raise AlreadyResolved(
                f"Prediction for subject {subject_id} is already resolved", subject_id=subject_id
            )

        accuracy = compute_accuracy(prediction.avg_days, actual_days)
        resolved_at = self._clock()

        try:
            row = await PredictionRepository.resolve(
                user_id, subject_id, actual_days, accuracy, resolved_at
            )
        except DatabaseError as e:
            raise PersistenceFailed(
                f"Could not record outcome: {e}", subject_id=subject_id
            ) from e

        if row is None:
            # Lost the race against another resolve for the same subject.
            raise AlreadyResolved(
                f"Prediction for subject {subject_id} is already resolved", subject_id=subject_id
            )

        logger.info(
            "Prediction resolved",
            user_id=user_id,
            subject_id=subject_id,
            predicted_avg_days=prediction.avg_days,
            actual_days=actual_days,
            accuracy=round(accuracy, 1),
        )
        return self._row_to_prediction(row)

    def status_of(self, prediction: Prediction, today: date | None = None) -> PredictionStatus:
        if prediction.is_resolved:
            return "resolved"
        if prediction.is_overdue:
            return "overdue"
        if prediction.applied_on is not None:
            elapsed = ((today or self._today()) - prediction.applied_on).days
            if elapsed > prediction.avg_days:
                return "taking_longer"
        return "on_track"

    async def accuracy_summary(self, user_id: str) -> PredictionAccuracySummary:
        rows = await PredictionRepository.fetch_resolved_for_user(user_id)
        accuracies = [
            float(row["prediction_accuracy"])
            for row in rows
            if row.get("prediction_accuracy") is not None
        ]
        if not accuracies:
            return PredictionAccuracySummary(
                resolved_count=0, mean_accuracy=None, within_tolerance_rate=None
            )

        within = sum(1 for accuracy in accuracies if accuracy >= TOLERANCE_ACCURACY)
        return PredictionAccuracySummary(
            resolved_count=len(accuracies),
            mean_accuracy=round(sum(accuracies) / len(accuracies), 2),
            within_tolerance_rate=round_half_up(within / len(accuracies) * 100),
        )

    def _today(self) -> date:
        return self._clock().date()

    @staticmethod
    def _row_to_prediction(row: dict) -> Prediction:
        accuracy = row.get("prediction_accuracy")
        return Prediction(
            id=str(row["id"]) if row.get("id") is not None else None,
            user_id=row["user_id"],
            subject_id=row["subject_id"],
            min_days=row["predicted_min_days"],
            avg_days=row["predicted_avg_days"],
            max_days=row["predicted_max_days"],
            confidence=row["confidence_level"],
            factors=row.get("factors_used") or {},
            suggested_follow_up_date=row["suggested_follow_up_date"],
            is_overdue=bool(row.get("is_overdue")),
            applied_on=row.get("applied_on"),
            created_at=row.get("created_at"),
            resolved_at=row.get("resolved_at"),
            actual_days=row.get("actual_response_days"),
            accuracy=float(accuracy) if accuracy is not None else None,
        )


prediction_tracker = PredictionTracker()
