"""Insights API routes."""
from __future__ import annotations

import logging
from typing import Any, Union

from fastapi import APIRouter, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.api.schemas.insights import (
    ErrorResponse,
    FallbackInsightResponse,
    InsightRequest,
    ModelInsightResponse,
)
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services.insight_service import ModelInsight, generate_insights

logger = logging.getLogger(__name__)

router = APIRouter()

UNEXPECTED_ERROR = "Unexpected error"


@router.post(
    "/api/ai",
    response_model=Union[ModelInsightResponse, FallbackInsightResponse],
    responses={500: {"model": ErrorResponse}},
    tags=["insights"],
)
async def get_insights(http_request: Request) -> Any:
    """Return model guidance, or rule-based suggestions when the model is unavailable."""
    request_id = getattr(http_request.state, "request_id", None)
    try:
        payload = await _read_json(http_request)
        insight_request = InsightRequest.from_payload(payload)
        metadata = {"route": "/api/ai", "task_count": len(insight_request.tasks)}

        with trace("insights.generate", metadata=metadata, request_id=request_id) as span:
            result = await run_in_threadpool(generate_insights, insight_request.tasks, insight_request.health)
            provider = "openai" if isinstance(result, ModelInsight) else "fallback"
            if span:
                span.update(metadata={**metadata, "provider": provider})
    except Exception as exc:
        logger.exception("Insight generation failed")
        log_metric("insights.error", 1)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=str(exc) or UNEXPECTED_ERROR).model_dump(),
        )

    log_metric(f"insights.provider.{provider}", 1)
    if isinstance(result, ModelInsight):
        return ModelInsightResponse(content=result.content)
    return FallbackInsightResponse(suggestions=result.suggestions)


async def _read_json(http_request: Request) -> Any:
    """Decode the body, treating anything that is not valid JSON as an empty object."""
    try:
        return await http_request.json()
    except ValueError:
        return {}
