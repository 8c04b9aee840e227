from datetime import UTC, datetime, timedelta

import pytest

from career_tracker.features.scoring_engine.domain.errors import InvalidInput
from career_tracker.features.scoring_engine.domain.models import (
    INTERVIEW_SCHEDULED,
    JOB_ADDED,
    MATERIAL_UPDATED,
    TIME_TRACKED,
    ActivityEvent,
    ActivityWindow,
)
from career_tracker.features.scoring_engine.pipeline.engagement import (
    EngagementScorer,
    build_window,
)

END = datetime(2025, 11, 30, 12, 0, tzinfo=UTC)


def _event(kind, days_ago, quantity=1.0):
    return ActivityEvent(kind=kind, occurred_at=END - timedelta(days=days_ago), quantity=quantity)


def _window(events, window_days=30):
    return build_window(events, END, window_days)


@pytest.fixture
def scorer():
    return EngagementScorer()


def test_mixed_activity_scores_medium(scorer):
    events = [_event(INTERVIEW_SCHEDULED, d) for d in range(15)]
    events += [_event(JOB_ADDED, 0) for _ in range(3)]
    events += [_event(TIME_TRACKED, 0, quantity=90), _event(MATERIAL_UPDATED, 1)]

    score = scorer.score(_window(events))

    # 50 * 0.4 + 15 + 1.5 + 10 = 46.5
    assert score.activity_frequency == 50
    assert score.engagement == 47
    assert score.trend == "medium"


def test_saturated_activity_scores_100(scorer):
    events = [_event(INTERVIEW_SCHEDULED, d) for d in range(30)]
    events += [_event(JOB_ADDED, 2) for _ in range(4)]
    events += [_event(TIME_TRACKED, 3, quantity=1200)]
    events += [_event(MATERIAL_UPDATED, 4) for _ in range(2)]

    score = scorer.score(_window(events))

    assert score.activity_frequency == 100
    assert score.engagement == 100
    assert score.trend == "high"


def test_no_activity_scores_zero(scorer):
    score = scorer.score(_window([]))

    assert score.activity_frequency == 0
    assert score.engagement == 0
    assert score.trend == "low"


def test_activity_frequency_never_exceeds_100(scorer):
    # Both window edges are inclusive, so 31 distinct dates fit in 30 days.
    events = [_event(INTERVIEW_SCHEDULED, d) for d in range(31)]

    assert scorer.activity_frequency(_window(events)) == 100


def test_several_events_on_one_day_count_once_for_frequency(scorer):
    events = [_event(JOB_ADDED, 0), _event(MATERIAL_UPDATED, 0), _event(TIME_TRACKED, 0, 15)]

    # 1 / 30 * 100 = 3.33
    assert scorer.activity_frequency(_window(events)) == 3


@pytest.mark.parametrize(
    ("engagement", "expected"),
    [(0, "low"), (30, "low"), (31, "medium"), (60, "medium"), (61, "high"), (100, "high")],
)
def test_trend_boundaries(scorer, engagement, expected):
    assert scorer.trend(engagement) == expected


def test_job_bonus_saturates_after_four_jobs(scorer):
    four = scorer.score(_window([_event(JOB_ADDED, 1) for _ in range(4)]))
    ten = scorer.score(_window([_event(JOB_ADDED, 1) for _ in range(10)]))

    assert four.engagement == ten.engagement


def test_minutes_bonus_saturates_at_twenty_hours(scorer):
    capped = scorer.score(_window([_event(TIME_TRACKED, 1, quantity=1200)]))
    beyond = scorer.score(_window([_event(TIME_TRACKED, 1, quantity=5000)]))

    assert capped.engagement == beyond.engagement


@pytest.mark.parametrize("kind", [JOB_ADDED, MATERIAL_UPDATED, TIME_TRACKED])
def test_engagement_is_non_decreasing_in_each_volume_signal(scorer, kind):
    previous = -1
    for count in range(8):
        events = [_event(kind, 5, quantity=120) for _ in range(count)]
        engagement = scorer.score(_window(events)).engagement
        assert engagement >= previous
        previous = engagement


def test_engagement_is_non_decreasing_in_active_days(scorer):
    previous = -1
    for days in range(31):
        events = [_event(INTERVIEW_SCHEDULED, d) for d in range(days)]
        engagement = scorer.score(_window(events)).engagement
        assert engagement >= previous
        previous = engagement


def test_build_window_drops_events_outside_the_window():
    events = [
        _event(JOB_ADDED, 0),
        _event(JOB_ADDED, 30),
        _event(JOB_ADDED, 31),
        _event(JOB_ADDED, -1),
    ]

    window = _window(events)

    assert window.jobs_added == 2
    assert window.start == END - timedelta(days=30)


def test_build_window_rejects_empty_span():
    with pytest.raises(InvalidInput):
        build_window([], END, 0)


@pytest.mark.parametrize("window_days", [0, -7])
def test_window_built_directly_rejects_empty_span(window_days):
    with pytest.raises(InvalidInput):
        ActivityWindow(start=END, end=END, window_days=window_days)
