"""Rule-based suggestions used whenever the language model is unavailable."""
from __future__ import annotations

from typing import List, Optional, Sequence

from app.api.schemas.dashboard import HealthMetrics, Task
from app.api.schemas.insights import SuggestionBundle
from app.services.task_scoring import prioritize_tasks

SLEEP_HOURS_TARGET = 7
WATER_CUPS_TARGET = 8
STEPS_TARGET = 8000
BREAKS_PER_HOUR_TARGET = 2

TOP_PRIORITIES_LIMIT = 5
QUICK_WINS_COUNT = 5
QUICK_WIN_MAX_EFFORT = 2
QUICK_WIN_FILLER = "Inbox sweep: archive or assign 10 emails."

DAY_PLAN = "\n".join(
    [
        "09:00–11:00 Deep Work: top priority",
        "11:00–11:10 Break + hydration",
        "11:10–12:30 Deep Work: priority #2",
        "12:30–13:15 Lunch + 10-min walk",
        "13:15–15:00 Execution: small tasks",
        "15:00–15:10 Break + mobility",
        "15:10–16:30 Execution: priority #3",
        "16:30–17:00 Wrap-up & plan tomorrow",
    ]
)


def build_fallback_suggestions(
    tasks: Sequence[Task],
    health: HealthMetrics,
    note: Optional[str] = None,
) -> SuggestionBundle:
    """Build a deterministic suggestion bundle from tasks and health metrics.

    A non-empty ``note`` (typically the upstream failure reason) is shown as the
    first habit entry.
    """
    incomplete = [task for task in tasks if not task.done]

    top = [
        f"{task.title} — do soon (impact {task.impact}, effort {task.effort})"
        for task in prioritize_tasks(incomplete)[:TOP_PRIORITIES_LIMIT]
    ]

    habits = _habit_tips(health)
    if note:
        habits.insert(0, f"(Note) {note}")

    return SuggestionBundle(
        plan=DAY_PLAN,
        habits=habits,
        quick_wins=_quick_wins(incomplete),
        top=top,
    )


def _habit_tips(health: HealthMetrics) -> List[str]:
    tips: List[str] = []
    if health.sleep_hours < SLEEP_HOURS_TARGET:
        tips.append("Aim for 7–9h tonight; set a fixed shutdown time.")
    else:
        tips.append("Protect your sleep window; no screens 1h before bed.")
    if health.water_cups < WATER_CUPS_TARGET:
        tips.append("Place a full bottle on desk; 2 cups by 10am, 4 by 2pm.")
    else:
        tips.append("Maintain hydration cadence: 1 cup per hour during work.")
    if health.steps < STEPS_TARGET:
        tips.append("Insert two 10-min walks (midday and late afternoon) to hit 8–10k steps.")
    else:
        tips.append("Keep step streak with a brisk 20-min walk post-lunch.")
    if health.breaks_per_hour < BREAKS_PER_HOUR_TARGET:
        tips.append("Use 50/10 focus cycles; micro-stretch each break.")
    else:
        tips.append("Sustain 50/10 cadence; add 2x mobility breaks (AM/PM).")
    return tips


def _quick_wins(incomplete: Sequence[Task]) -> List[str]:
    wins = [
        f"Start: {task.title} (<=10m setup)"
        for task in incomplete
        if task.effort <= QUICK_WIN_MAX_EFFORT
    ][:QUICK_WINS_COUNT]
    wins.extend([QUICK_WIN_FILLER] * (QUICK_WINS_COUNT - len(wins)))
    return wins
