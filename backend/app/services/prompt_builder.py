"""Prompt construction for the coaching model."""
from __future__ import annotations

from typing import List, Sequence

from app.api.schemas.dashboard import HealthMetrics, Task

PROMPT_TASK_LIMIT = 30

SYSTEM_PROMPT = (
    "You are an elite productivity and health coach. Be concise, actionable, and specific. "
    "Consider task priority (impact/effort/urgency), energy management, and recovery. "
    "Output structured, markdown-friendly guidance."
)

INSTRUCTIONS = [
    "1) A short day plan (time-boxed blocks).",
    "2) Top 5 task priorities with justifications (impact/effort/urgency).",
    "3) 5 habit tweaks that support today's workload (sleep, hydration, steps, breaks).",
    "4) 5 quick wins I can do in 10 minutes or less.",
    "Use markdown with headings and bullet lists. Be concrete, no fluff.",
]


def build_prompt(tasks: Sequence[Task], health: HealthMetrics) -> str:
    """Serialize tasks (insertion order, first 30 only) and health into the user prompt."""
    task_lines = [
        f"{index}. {_describe_task(task)}"
        for index, task in enumerate(tasks[:PROMPT_TASK_LIMIT], start=1)
    ]

    lines: List[str] = [
        "Here are my current tasks and health metrics.",
        "",
        "Tasks:",
        "\n".join(task_lines) or "(none)",
        "",
        "Health:",
        _describe_health(health),
        "",
        "Please produce:",
        *INSTRUCTIONS,
    ]
    return "\n".join(lines)


def _describe_task(task: Task) -> str:
    details = f"impact {task.impact}/5, effort {task.effort}/5"
    if task.due:
        details += f", due {task.due}"
    if task.done:
        details += ", marked done"
    return f"{task.title} ({details})"


def _describe_health(health: HealthMetrics) -> str:
    return (
        f"Sleep: {_format_number(health.sleep_hours)}h, "
        f"Water: {_format_number(health.water_cups)} cups, "
        f"Steps: {_format_number(health.steps)}, "
        f"Breaks/hour: {_format_number(health.breaks_per_hour)}, "
        f"Mood: {health.mood}"
    )


def _format_number(value: float | int) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)
