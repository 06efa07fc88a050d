"""Task prioritization API routes."""
from __future__ import annotations

from fastapi import APIRouter, Request

from app.api.schemas.dashboard import PrioritizeRequest, PrioritizeResponse, ScoredTaskPayload
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services.task_scoring import scored_tasks

router = APIRouter()


@router.post("/api/prioritize", response_model=PrioritizeResponse, tags=["tasks"])
def prioritize(request: PrioritizeRequest, http_request: Request) -> PrioritizeResponse:
    """Return the submitted tasks with their scores, highest priority first."""
    request_id = getattr(http_request.state, "request_id", None)

    with trace("tasks.prioritize", metadata={"route": "/api/prioritize", "task_count": len(request.tasks)}, request_id=request_id):
        ranked = [
            ScoredTaskPayload(**entry.task.model_dump(), score=entry.score)
            for entry in scored_tasks(request.tasks)
        ]

    log_metric("tasks.prioritize.count", len(ranked))
    return PrioritizeResponse(tasks=ranked, request_id=request_id or "")
