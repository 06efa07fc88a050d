"""Tests for the in-memory dashboard session."""
from __future__ import annotations

from app.api.schemas.dashboard import HealthMetrics
from app.api.schemas.insights import SuggestionBundle
from app.services.dashboard_session import DashboardSession, suggestions_to_markdown
from app.services.fallback_suggestions import build_fallback_suggestions
from app.services.insight_service import FallbackInsight, ModelInsight


def test_add_task_trims_clamps_and_generates_ids() -> None:
    session = DashboardSession()

    first = session.add_task("  Write report  ", effort=9, impact=0, due="")
    second = session.add_task("Call bank", due="2024-07-01")

    assert first is not None and second is not None
    assert first.title == "Write report"
    assert (first.effort, first.impact, first.due, first.done) == (5, 1, None, False)
    assert (second.effort, second.impact, second.due) == (2, 3, "2024-07-01")
    assert first.id != second.id
    assert [task.title for task in session.tasks] == ["Write report", "Call bank"]


def test_blank_title_is_ignored() -> None:
    session = DashboardSession()

    assert session.add_task("   ") is None
    assert session.tasks == []


def test_toggle_done_keeps_order() -> None:
    session = DashboardSession()
    a = session.add_task("A")
    b = session.add_task("B")

    assert session.toggle_done(b.id) is True
    assert [(task.title, task.done) for task in session.tasks] == [("A", False), ("B", True)]
    assert session.toggle_done(b.id) is True
    assert session.tasks[1].done is False
    assert session.toggle_done("missing") is False
    assert session.tasks[0].id == a.id


def test_prioritized_view_does_not_touch_storage() -> None:
    session = DashboardSession()
    session.add_task("B", impact=1, effort=5)
    session.add_task("A", impact=5, effort=1, due="2024-01-01")

    assert [task.title for task in session.prioritized()] == ["A", "B"]
    assert [task.title for task in session.tasks] == ["B", "A"]


def test_update_health_accepts_names_and_aliases() -> None:
    session = DashboardSession()
    assert session.health.sleep_hours == 7 and session.health.mood == "ok"

    session.update_health(sleep_hours=5, waterCups=40, mood="HIGH")

    assert session.health.sleep_hours == 5
    assert session.health.water_cups == 30
    assert session.health.steps == 6000
    assert session.health.mood == "high"


def test_request_insights_renders_model_content() -> None:
    session = DashboardSession()
    seen = {}

    def fetcher(tasks, health):
        seen["health"] = health
        return ModelInsight(content="## Plan\n- <b>focus</b>")

    html = session.request_insights(fetcher)

    assert html == "<h2>Plan</h2><ul><li>&lt;b&gt;focus&lt;/b&gt;</li></ul>"
    assert session.insight_html == html
    assert session.error is None
    assert seen["health"] == session.health


def test_request_insights_renders_fallback_bundle() -> None:
    session = DashboardSession()
    session.add_task("Stretch", effort=1, impact=2)
    bundle = build_fallback_suggestions(session.tasks, session.health)

    html = session.request_insights(lambda tasks, health: FallbackInsight(suggestions=bundle))

    assert html.startswith("<h2>Personalized Plan</h2><br/><p>09:00–11:00 Deep Work: top priority</p>")
    assert "<h2>Habit Tweaks</h2><br/><ul><li>" in html
    assert "<li>Start: Stretch (&lt;=10m setup)</li>" in html
    assert html.count("<ul>") == 2


def test_request_insights_error_leaves_state_intact() -> None:
    session = DashboardSession()
    session.add_task("Keep me")
    session.update_health(steps=1234)
    session.insight_html = "<p>old</p>"
    tasks_before = list(session.tasks)
    health_before = session.health

    def failing(tasks, health):
        tasks.clear()
        raise RuntimeError("network down")

    assert session.request_insights(failing) is None
    assert session.error == "network down"
    assert session.insight_html is None
    assert session.tasks == tasks_before
    assert session.health == health_before


def test_request_insights_error_without_message() -> None:
    session = DashboardSession()

    def failing(tasks, health):
        raise ValueError()

    session.request_insights(failing)

    assert session.error == "Failed to get insights"


def test_suggestions_to_markdown_layout() -> None:
    bundle = SuggestionBundle(plan="p1\np2", habits=["h1"], quick_wins=["q1", "q2"], top=["t1"])

    assert suggestions_to_markdown(bundle).split("\n") == [
        "## Personalized Plan",
        "",
        "p1",
        "p2",
        "",
        "## Habit Tweaks",
        "",
        "- h1",
        "",
        "## Quick Wins",
        "",
        "- q1",
        "- q2",
    ]


def test_default_health_matches_dashboard_defaults() -> None:
    assert DashboardSession().health == HealthMetrics(
        sleep_hours=7, water_cups=6, steps=6000, breaks_per_hour=2, mood="ok"
    )


def test_empty_model_reply_shows_placeholder() -> None:
    session = DashboardSession()

    html = session.request_insights(lambda tasks, health: ModelInsight(content=""))

    assert html == "<p>No insights returned.</p>"
