"""Metrics and monitoring API endpoints."""

import os

import psutil
from fastapi import APIRouter

from ..config import get_settings
from ..models.response import MetricsResponse

router = APIRouter(prefix="/api/v1", tags=["metrics"])
settings = get_settings()

# Import the global ranker instance
from ..engine_instance import ranker


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Get ranking statistics and process memory usage",
)
async def get_metrics() -> MetricsResponse:
    """
    Get performance metrics for the ranker.

    Counters accumulate since start-up or the last reset.
    """
    stats = ranker.get_stats()

    # Resident memory of this process
    memory_usage_mb = psutil.Process(os.getpid()).memory_info().rss / (1024 * 1024)

    return MetricsResponse(
        total_scans=stats["total_scans"],
        candidates_scored=stats["candidates_scored"],
        average_response_time_ms=stats["average_execution_time_ms"],
        match_rate=stats["match_rate"],
        skipped_candidates=stats["skipped"],
        cancelled_scans=stats["cancelled_scans"],
        memory_usage_mb=memory_usage_mb,
    )


@router.post(
    "/metrics/reset",
    summary="Reset metrics",
    description="Reset the ranker's accumulated statistics",
)
async def reset_metrics() -> dict:
    """Reset ranking statistics."""
    ranker.reset_stats()
    return {"status": "reset"}
