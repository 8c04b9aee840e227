"""
Tests for the scoring engine HTTP routes.

Services are patched on their singletons; the routes only translate
requests, responses and engine errors.
"""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from career_tracker.features.scoring_engine.api.router import _STATUS_BY_ERROR
from career_tracker.features.scoring_engine.competitiveness.service import (
    job_competitiveness_service,
)
from career_tracker.features.scoring_engine.domain.errors import (
    AlreadyResolved,
    InsufficientData,
    InvalidInput,
    PersistenceFailed,
    SubjectNotFound,
)
from career_tracker.features.scoring_engine.domain.models import (
    EngagementReport,
    EngagementScore,
    Prediction,
    PredictionAccuracySummary,
)
from career_tracker.features.scoring_engine.engagement.service import mentee_engagement_service
from career_tracker.features.scoring_engine.predictions.service import prediction_tracker
from career_tracker.features.scoring_engine.quality.service import (
    ApplicationQualityService,
    application_quality_service,
)
from career_tracker.main import app


@pytest.fixture
def client(apply_auth_override):
    apply_auth_override(app)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _prediction(**overrides):
    fields = dict(
        id="pred-1",
        user_id="user-123",
        subject_id="job-1",
        min_days=7,
        avg_days=14,
        max_days=34,
        confidence=60,
        factors={"industry": "technology", "seasonality_factor": 1.3},
        suggested_follow_up_date=date(2025, 12, 2),
        applied_on=date(2025, 11, 15),
        created_at=datetime(2025, 11, 20, 9, 0, tzinfo=UTC),
    )
    fields.update(overrides)
    return Prediction(**fields)


def test_routes_require_authentication():
    response = TestClient(app).post("/engine/combine", json={"inputs": []})

    assert response.status_code in (401, 403)


def test_combine(client):
    response = client.post(
        "/engine/combine",
        json={
            "inputs": [
                {"name": "skills", "value": 80, "weight": 40},
                {"name": "experience", "value": 60, "weight": 35},
                {"name": "education", "value": 90, "weight": 25},
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["overall"] == 76
    assert [c["name"] for c in data["components"]] == ["skills", "experience", "education"]


def test_combine_out_of_range_value_is_422(client):
    response = client.post(
        "/engine/combine", json={"inputs": [{"name": "skills", "value": 101, "weight": 40}]}
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "invalid_input"


def test_combine_without_present_inputs_is_422(client):
    response = client.post(
        "/engine/combine", json={"inputs": [{"name": "skills", "value": None, "weight": 40}]}
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "insufficient_data"


def test_percentile(client):
    response = client.post(
        "/engine/percentile", json={"population": [40, 55, 70, 70, 90], "value": 70}
    )

    assert response.status_code == 200
    assert response.json() == {"percentile": 40, "mean": 65.0, "max": 90.0}


def test_percentile_empty_population(client):
    response = client.post("/engine/percentile", json={"population": [], "value": 70})

    assert response.json() == {"percentile": None, "mean": None, "max": None}


def test_create_prediction(client, monkeypatch):
    create = AsyncMock(return_value=_prediction())
    monkeypatch.setattr(prediction_tracker, "create", create)

    response = client.post(
        "/engine/predictions/job-1",
        json={"industry": "technology", "company_size": "startup", "applied_on": "2025-11-15"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["avg_days"] == 14
    assert data["suggested_follow_up_date"] == "2025-12-02"
    assert data["status"] in ("on_track", "taking_longer", "overdue")

    args, kwargs = create.await_args
    assert args[0] == "user-123"
    assert args[1] == "job-1"
    assert args[2].company_size == "startup"
    assert kwargs["applied_on"] == date(2025, 11, 15)


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (InvalidInput("terminal status"), 422),
        (AlreadyResolved("resolved"), 409),
        (SubjectNotFound("other owner"), 404),
        (PersistenceFailed("db down"), 503),
    ],
)
def test_create_prediction_error_mapping(client, monkeypatch, error, status_code):
    monkeypatch.setattr(
        prediction_tracker, "create", AsyncMock(side_effect=error)
    )

    response = client.post("/engine/predictions/job-1", json={"industry": "technology"})

    assert response.status_code == status_code
    assert response.json()["detail"]["code"] == error.code


def test_get_prediction_checks_overdue_first(client, monkeypatch):
    mark_overdue = AsyncMock(return_value=_prediction(is_overdue=True))
    monkeypatch.setattr(prediction_tracker, "mark_overdue", mark_overdue)

    response = client.get("/engine/predictions/job-1")

    assert response.status_code == 200
    assert response.json()["status"] == "overdue"
    mark_overdue.assert_awaited_once_with("user-123", "job-1")


def test_get_missing_prediction_is_404(client, monkeypatch):
    monkeypatch.setattr(
        prediction_tracker, "mark_overdue", AsyncMock(return_value=None)
    )

    response = client.get("/engine/predictions/job-404")

    assert response.status_code == 404


def test_resolve_prediction(client, monkeypatch):
    resolved = _prediction(
        resolved_at=datetime(2025, 12, 1, tzinfo=UTC), actual_days=14, accuracy=100.0
    )
    monkeypatch.setattr(
        prediction_tracker, "resolve", AsyncMock(return_value=resolved)
    )

    response = client.post("/engine/predictions/job-1/resolve", json={"actual_days": 14})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "resolved"
    assert data["accuracy"] == 100.0


def test_resolve_negative_days_rejected_by_schema(client):
    response = client.post("/engine/predictions/job-1/resolve", json={"actual_days": -2})

    assert response.status_code == 422


@pytest.mark.parametrize(
    ("error", "status_code"),
    [(SubjectNotFound("missing"), 404), (AlreadyResolved("twice"), 409)],
)
def test_resolve_error_mapping(client, monkeypatch, error, status_code):
    monkeypatch.setattr(
        prediction_tracker, "resolve", AsyncMock(side_effect=error)
    )

    response = client.post("/engine/predictions/job-1/resolve", json={"actual_days": 3})

    assert response.status_code == status_code


def test_prediction_accuracy_route_is_not_a_subject(client, monkeypatch):
    summary = PredictionAccuracySummary(
        resolved_count=4, mean_accuracy=82.5, within_tolerance_rate=75
    )
    monkeypatch.setattr(
        prediction_tracker, "accuracy_summary", AsyncMock(return_value=summary)
    )

    response = client.get("/engine/predictions/accuracy")

    assert response.status_code == 200
    assert response.json() == {
        "resolved_count": 4,
        "mean_accuracy": 82.5,
        "within_tolerance_rate": 75,
    }


def test_score_application_quality(client, monkeypatch):
    assessment = ApplicationQualityService().assess(
        {"resume": 90, "cover_letter": 70, "keyword_match": 60, "formatting": 80},
        history=[50, 90],
    )
    score = AsyncMock(return_value=assessment)
    monkeypatch.setattr(application_quality_service, "score_application", score)

    response = client.post(
        "/engine/quality/job-1",
        json={"scores": {"resume": 90, "cover_letter": 70, "keyword_match": 60, "formatting": 80}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["composite"]["overall"] == 76
    assert data["rank"]["percentile"] == 50
    assert data["meets_threshold"] is True
    assert data["change_note"] == "Initial analysis"


def test_quality_history(client, monkeypatch):
    rows = [
        {
            "overall_score": 61,
            "score_percentile": None,
            "meets_threshold": False,
            "change_note": "Initial analysis",
            "computed_at": datetime(2025, 11, 1, tzinfo=UTC),
        }
    ]
    monkeypatch.setattr(
        application_quality_service, "history", AsyncMock(return_value=rows)
    )

    response = client.get("/engine/quality/job-1")

    assert response.status_code == 200
    assert response.json()[0]["overall_score"] == 61


def test_score_job_competitiveness_persistence_failure(client, monkeypatch):
    monkeypatch.setattr(
        job_competitiveness_service,
        "score_job",
        AsyncMock(side_effect=PersistenceFailed("db down")),
    )

    response = client.post("/engine/competitiveness/job-1", json={"scores": {"skills": 70}})

    assert response.status_code == 503
    assert response.json()["detail"]["code"] == "persistence_failed"


def test_engagement_forbidden_for_non_mentor(client, monkeypatch):
    monkeypatch.setattr(
        mentee_engagement_service, "can_view", AsyncMock(return_value=False)
    )

    response = client.get("/engine/engagement/mentee-1")

    assert response.status_code == 403


def test_engagement_for_mentor(client, monkeypatch):
    report = EngagementReport(
        score=EngagementScore(engagement=47, activity_frequency=50, trend="medium"),
        jobs_added=3,
        interviews_scheduled=15,
        minutes_tracked=90.0,
        materials_updated=1,
        active_goals=2,
        avg_goal_progress=35,
        days_since_last_activity=0,
    )
    monkeypatch.setattr(
        mentee_engagement_service, "can_view", AsyncMock(return_value=True)
    )
    monkeypatch.setattr(
        mentee_engagement_service,
        "engagement_for",
        AsyncMock(return_value=report),
    )

    response = client.get("/engine/engagement/mentee-1")

    assert response.status_code == 200
    data = response.json()
    assert data["engagement"] == 47
    assert data["trend"] == "medium"
    assert data["avg_goal_progress"] == 35


def test_invalid_input_maps_to_unprocessable_content(client):
    response = client.post(
        "/engine/combine", json={"inputs": [{"name": "", "value": 50, "weight": 10}]}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT == 422
    assert _STATUS_BY_ERROR[InvalidInput] == status.HTTP_422_UNPROCESSABLE_CONTENT
    assert _STATUS_BY_ERROR[InsufficientData] == status.HTTP_422_UNPROCESSABLE_CONTENT
    assert response.json()["detail"]["code"] == "invalid_input"
