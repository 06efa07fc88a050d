"""Pydantic schemas for the insights API."""
from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.api.schemas.dashboard import HealthMetrics, Task, coerce_task_list


class SuggestionBundle(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plan: str
    habits: List[str] = Field(default_factory=list)
    quick_wins: List[str] = Field(default_factory=list, alias="quickWins")
    top: List[str] = Field(default_factory=list)


class InsightRequest(BaseModel):
    tasks: List[Task] = Field(default_factory=list)
    health: HealthMetrics = Field(default_factory=HealthMetrics)

    @field_validator("tasks", mode="before")
    @classmethod
    def coerce_tasks(cls, value: Any) -> List[Any]:
        return coerce_task_list(value)

    @field_validator("health", mode="before")
    @classmethod
    def coerce_health(cls, value: Any) -> Any:
        if isinstance(value, (dict, HealthMetrics)):
            return value
        return {}

    @classmethod
    def from_payload(cls, payload: Any) -> "InsightRequest":
        """Build a request from an arbitrary decoded JSON body."""
        body: Dict[str, Any] = payload if isinstance(payload, dict) else {}
        return cls.model_validate(body)


class ModelInsightResponse(BaseModel):
    provider: Literal["openai"] = "openai"
    content: str


class FallbackInsightResponse(BaseModel):
    provider: Literal["fallback"] = "fallback"
    suggestions: SuggestionBundle


class ErrorResponse(BaseModel):
    error: str
