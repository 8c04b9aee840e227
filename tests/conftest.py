import pytest

from career_tracker.auth.verify import current_user_id


@pytest.fixture
def auth_override():
    def _override():
        return "user-123"

    return _override


@pytest.fixture
def apply_auth_override(auth_override):
    def _apply(app):
        app.dependency_overrides[current_user_id] = auth_override

    return _apply


class FakePredictionStore:
    """In-memory stand-in for response_time_predictions keyed by subject_id."""

    def __init__(self):
        self.rows: dict[str, dict] = {}
        self._next_id = 1

    async def fetch_by_subject(self, user_id, subject_id):
        row = self.rows.get(subject_id)
        if row and row["user_id"] == user_id:
            return dict(row)
        return None

    async def upsert_open(self, prediction):
        existing = self.rows.get(prediction.subject_id)
        if existing and (
            existing["resolved_at"] is not None or existing["user_id"] != prediction.user_id
        ):
            return None
        row_id = existing["id"] if existing else f"pred-{self._next_id}"
        if not existing:
            self._next_id += 1
        row = {
            "id": row_id,
            "user_id": prediction.user_id,
            "subject_id": prediction.subject_id,
            "predicted_min_days": prediction.min_days,
            "predicted_avg_days": prediction.avg_days,
            "predicted_max_days": prediction.max_days,
            "confidence_level": prediction.confidence,
            "factors_used": dict(prediction.factors),
            "suggested_follow_up_date": prediction.suggested_follow_up_date,
            "is_overdue": bool(existing and existing["is_overdue"]) or prediction.is_overdue,
            "applied_on": prediction.applied_on
            or (existing["applied_on"] if existing else None),
            "created_at": existing["created_at"] if existing else None,
            "resolved_at": None,
            "actual_response_days": None,
            "prediction_accuracy": None,
        }
        self.rows[prediction.subject_id] = row
        return dict(row)

    async def mark_overdue(self, user_id, subject_id):
        row = self.rows.get(subject_id)
        if not row or row["resolved_at"] is not None:
            return None
        row["is_overdue"] = True
        return dict(row)

    async def resolve(self, user_id, subject_id, actual_days, accuracy, resolved_at):
        row = self.rows.get(subject_id)
        if not row or row["resolved_at"] is not None:
            return None
        row.update(
            actual_response_days=actual_days,
            prediction_accuracy=accuracy,
            resolved_at=resolved_at,
        )
        return dict(row)

    async def fetch_resolved_for_user(self, user_id):
        return [
            dict(row)
            for row in self.rows.values()
            if row["user_id"] == user_id and row["resolved_at"] is not None
        ]


@pytest.fixture
def prediction_store(monkeypatch):
    from career_tracker.features.scoring_engine.predictions.repository import (
        PredictionRepository,
    )

    store = FakePredictionStore()
    for name in (
        "fetch_by_subject",
        "upsert_open",
        "mark_overdue",
        "resolve",
        "fetch_resolved_for_user",
    ):
        monkeypatch.setattr(PredictionRepository, name, getattr(store, name))
    return store
