"""Coaching insights from the language model, with a rule-based fallback."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import openai

from app.api.schemas.dashboard import HealthMetrics, Task
from app.api.schemas.insights import SuggestionBundle
from app.core.config import settings
from app.services.fallback_suggestions import build_fallback_suggestions
from app.services.prompt_builder import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelInsight:
    content: str


@dataclass(frozen=True)
class FallbackInsight:
    suggestions: SuggestionBundle
    reason: Optional[str] = None


InsightResult = Union[ModelInsight, FallbackInsight]


def resolve_api_key() -> Optional[str]:
    """Prefer OPENAI_API_KEY from the live environment, then the settings value."""
    return os.environ.get("OPENAI_API_KEY") or settings.openai_api_key


def request_model_insight(prompt: str, api_key: str) -> str:
    """Send a single chat completion request and return the reply text.

    Retries are disabled; any ``openai.OpenAIError`` propagates to the caller.
    """
    client = openai.OpenAI(api_key=api_key, max_retries=0)
    completion = client.chat.completions.create(
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
    )
    if not completion.choices:
        return ""
    return completion.choices[0].message.content or ""


def generate_insights(tasks: Sequence[Task], health: HealthMetrics) -> InsightResult:
    """Return model guidance when a key is configured, otherwise fallback suggestions.

    Upstream failures are folded into the fallback with an ``AI error`` note.
    Errors outside the OpenAI client propagate.
    """
    api_key = resolve_api_key()
    if not api_key:
        logger.debug("No OpenAI key configured; using fallback suggestions.")
        return FallbackInsight(suggestions=build_fallback_suggestions(tasks, health))

    prompt = build_prompt(tasks, health)
    try:
        content = request_model_insight(prompt, api_key)
    except openai.APIStatusError as exc:
        reason = f"AI error: {_error_body(exc)}"
    except openai.OpenAIError as exc:
        reason = f"AI error: {exc}"
    else:
        return ModelInsight(content=content)

    logger.warning("OpenAI request failed, falling back: %s", reason)
    return FallbackInsight(
        suggestions=build_fallback_suggestions(tasks, health, note=reason),
        reason=reason,
    )


def _error_body(exc: openai.APIStatusError) -> str:
    return exc.response.text or exc.message
