"""Tests for request coercion in the task and health schemas."""
from __future__ import annotations

import pytest

from app.api.schemas.dashboard import HealthMetrics, Task, parse_number
from app.api.schemas.insights import InsightRequest, SuggestionBundle


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(3, 3.0), ("4.5", 4.5), (" 7 ", 7.0), ("", 0.0), ("abc", 0.0), (None, 0.0), (True, 1.0), (float("nan"), 0.0), ([1], 0.0), (10**400, 0.0), ("1e400", 0.0)],
)
def test_parse_number(raw, expected) -> None:
    assert parse_number(raw) == expected


def test_task_ratings_clamp_into_range() -> None:
    task = Task.model_validate({"title": "x", "impact": 42, "effort": -3})

    assert (task.impact, task.effort) == (5, 1)


def test_task_defaults_and_coercion() -> None:
    task = Task.model_validate({"title": 123, "due": "  ", "done": "true", "id": None})

    assert task.title == "123"
    assert task.due is None
    assert task.done is True
    assert task.id
    assert (task.effort, task.impact) == (1, 1)


def test_health_reads_camel_case_and_clamps() -> None:
    health = HealthMetrics.model_validate(
        {"sleepHours": 30, "waterCups": -2, "steps": "60000", "breaksPerHour": "1.5", "mood": " Low "}
    )

    assert health.sleep_hours == 24
    assert health.water_cups == 0
    assert health.steps == 50000
    assert health.breaks_per_hour == 1.5
    assert health.mood == "low"
    assert health.model_dump(by_alias=True)["sleepHours"] == 24


def test_health_unknown_mood() -> None:
    assert HealthMetrics.model_validate({"mood": "meh"}).mood == "unknown"
    assert HealthMetrics().mood == "unknown"


def test_insight_request_from_payload_drops_junk() -> None:
    request = InsightRequest.from_payload({"tasks": [{"title": "ok"}, 5, None], "health": "bad"})

    assert [task.title for task in request.tasks] == ["ok"]
    assert request.health == HealthMetrics()
    assert InsightRequest.from_payload("nonsense").tasks == []


def test_suggestion_bundle_serializes_quick_wins_alias() -> None:
    bundle = SuggestionBundle(plan="p", habits=[], quick_wins=["q"], top=[])

    assert bundle.model_dump(by_alias=True)["quickWins"] == ["q"]


def test_oversized_integers_are_coerced_not_raised() -> None:
    task = Task.model_validate({"title": "x", "impact": 10**400, "effort": -(10**400)})
    health = HealthMetrics.model_validate({"steps": 10**400, "sleepHours": 10**400})

    assert (task.impact, task.effort) == (1, 1)
    assert health.steps == 0
    assert health.sleep_hours == 0
