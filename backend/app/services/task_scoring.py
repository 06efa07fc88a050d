"""Priority scoring used to order tasks for display."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from app.api.schemas.dashboard import Task

IMPACT_WEIGHT = 2
DUE_DATE_BONUS = 1


@dataclass(frozen=True)
class ScoredTask:
    task: Task
    score: int


def score_task(task: Task) -> int:
    """Return impact*2 - effort, plus one when the task has a due date."""
    bonus = DUE_DATE_BONUS if task.due else 0
    return task.impact * IMPACT_WEIGHT - task.effort + bonus


def scored_tasks(tasks: Iterable[Task]) -> List[ScoredTask]:
    """Score tasks and order them by descending score.

    The sort is stable, so equal scores keep their insertion order. The input
    is never reordered in place.
    """
    scored = [ScoredTask(task=task, score=score_task(task)) for task in tasks]
    return sorted(scored, key=lambda entry: entry.score, reverse=True)


def prioritize_tasks(tasks: Iterable[Task]) -> List[Task]:
    return [entry.task for entry in scored_tasks(tasks)]
