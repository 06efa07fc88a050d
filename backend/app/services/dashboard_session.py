"""In-memory dashboard state: the task list and health record of one user session."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

from app.api.schemas.dashboard import HealthMetrics, Task
from app.api.schemas.insights import SuggestionBundle
from app.services.insight_service import FallbackInsight, InsightResult, ModelInsight, generate_insights
from app.services.markdown_renderer import render_markdown
from app.services.task_scoring import prioritize_tasks

logger = logging.getLogger(__name__)

InsightFetcher = Callable[[Sequence[Task], HealthMetrics], InsightResult]

DEFAULT_EFFORT = 2
DEFAULT_IMPACT = 3
INSIGHT_ERROR_MESSAGE = "Failed to get insights"
EMPTY_INSIGHT_MESSAGE = "No insights returned."


def default_health() -> HealthMetrics:
    return HealthMetrics(sleep_hours=7, water_cups=6, steps=6000, breaks_per_hour=2, mood="ok")


@dataclass
class DashboardSession:
    tasks: List[Task] = field(default_factory=list)
    health: HealthMetrics = field(default_factory=default_health)
    insight_html: Optional[str] = None
    error: Optional[str] = None

    def add_task(
        self,
        title: str,
        effort: Any = DEFAULT_EFFORT,
        impact: Any = DEFAULT_IMPACT,
        due: Optional[str] = None,
    ) -> Task | None:
        """Append a new task; blank titles are ignored and return None."""
        cleaned = (title or "").strip()
        if not cleaned:
            return None
        task = Task(title=cleaned, effort=effort, impact=impact, due=due)
        self.tasks.append(task)
        return task

    def toggle_done(self, task_id: str) -> bool:
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                self.tasks[index] = task.model_copy(update={"done": not task.done})
                return True
        return False

    def update_health(self, **fields: Any) -> HealthMetrics:
        """Overwrite individual health fields by name or camelCase alias.

        Values go through the usual coercion, so out-of-range input is clamped.
        """
        aliases = {info.alias: name for name, info in HealthMetrics.model_fields.items()}
        merged = self.health.model_dump()
        for key, value in fields.items():
            merged[aliases.get(key, key)] = value
        self.health = HealthMetrics.model_validate(merged)
        return self.health

    def prioritized(self) -> List[Task]:
        return prioritize_tasks(self.tasks)

    def request_insights(self, fetcher: InsightFetcher = generate_insights) -> Optional[str]:
        """Fetch insights and render them to HTML.

        Failures are recorded on ``error`` and leave tasks and health untouched.
        """
        self.insight_html = None
        self.error = None
        try:
            result = fetcher(list(self.tasks), self.health)
            self.insight_html = render_markdown(insight_to_markdown(result))
        except Exception as exc:
            logger.warning("Insight request failed: %s", exc)
            self.error = str(exc) or INSIGHT_ERROR_MESSAGE
        return self.insight_html


def insight_to_markdown(result: InsightResult) -> str:
    if isinstance(result, ModelInsight):
        return result.content or EMPTY_INSIGHT_MESSAGE
    if isinstance(result, FallbackInsight):
        return suggestions_to_markdown(result.suggestions)
    raise TypeError(f"Unsupported insight result: {type(result).__name__}")


def suggestions_to_markdown(bundle: SuggestionBundle) -> str:
    return "\n".join(
        [
            "## Personalized Plan",
            "",
            bundle.plan,
            "",
            "## Habit Tweaks",
            "",
            *[f"- {habit}" for habit in bundle.habits],
            "",
            "## Quick Wins",
            "",
            *[f"- {win}" for win in bundle.quick_wins],
        ]
    )
