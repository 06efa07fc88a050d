"""Schemas for tasks and daily health metrics."""
from __future__ import annotations

import math
from typing import Any, Dict, List, Literal, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

EFFORT_RANGE: Tuple[int, int] = (1, 5)
IMPACT_RANGE: Tuple[int, int] = (1, 5)

HEALTH_RANGES: Dict[str, Tuple[float, float]] = {
    "sleep_hours": (0, 24),
    "water_cups": (0, 30),
    "steps": (0, 50000),
    "breaks_per_hour": (0, 12),
}

MOODS = ("low", "ok", "high")
UNKNOWN_MOOD = "unknown"

Mood = Literal["low", "ok", "high", "unknown"]


def parse_number(value: Any) -> float:
    """Best-effort numeric parse; anything missing or unparseable becomes 0."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        value = value.strip() or 0
    elif not isinstance(value, (int, float)):
        return 0.0
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _parse_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "on"}
    return bool(value)


def new_task_id() -> str:
    return str(uuid4())


class Task(BaseModel):
    """A user-entered work item. Ratings are clamped rather than rejected."""

    id: str = Field(default_factory=new_task_id)
    title: str = ""
    effort: int = EFFORT_RANGE[0]
    impact: int = IMPACT_RANGE[0]
    due: Optional[str] = None
    done: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def ensure_id(cls, value: Any) -> str:
        if value is None or value == "":
            return new_task_id()
        return str(value)

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("effort", "impact", mode="before")
    @classmethod
    def clamp_rating(cls, value: Any, info: ValidationInfo) -> int:
        low, high = EFFORT_RANGE if info.field_name == "effort" else IMPACT_RANGE
        return int(round(clamp(parse_number(value), low, high)))

    @field_validator("due", mode="before")
    @classmethod
    def coerce_due(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("done", mode="before")
    @classmethod
    def coerce_done(cls, value: Any) -> bool:
        return _parse_flag(value)


class HealthMetrics(BaseModel):
    """Daily wellness counters, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sleep_hours: float = 0
    water_cups: float = 0
    steps: int = 0
    breaks_per_hour: float = 0
    mood: Mood = UNKNOWN_MOOD

    @field_validator("sleep_hours", "water_cups", "steps", "breaks_per_hour", mode="before")
    @classmethod
    def clamp_metric(cls, value: Any, info: ValidationInfo) -> float:
        low, high = HEALTH_RANGES[info.field_name]
        number = clamp(parse_number(value), low, high)
        if info.field_name == "steps":
            return int(round(number))
        return number

    @field_validator("mood", mode="before")
    @classmethod
    def coerce_mood(cls, value: Any) -> str:
        mood = str(value).strip().lower() if value is not None else ""
        return mood if mood in MOODS else UNKNOWN_MOOD


def coerce_task_list(value: Any) -> List[Any]:
    """Drop anything that cannot be read as a task object."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, (dict, Task))]


class ScoredTaskPayload(Task):
    score: int


class PrioritizeRequest(BaseModel):
    tasks: List[Task] = Field(default_factory=list)

    @field_validator("tasks", mode="before")
    @classmethod
    def coerce_tasks(cls, value: Any) -> List[Any]:
        return coerce_task_list(value)


class PrioritizeResponse(BaseModel):
    tasks: List[ScoredTaskPayload]
    request_id: str
