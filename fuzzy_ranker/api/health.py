"""Health check and monitoring API endpoints."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..core.exceptions import FuzzyRankerError
from ..core.matcher import get_matcher
from ..models.response import HealthResponse

router = APIRouter(prefix="/api/v1", tags=["health"])
settings = get_settings()

# Import the global ranker instance
from ..engine_instance import ranker

# Track application start time
app_start_time = time.time()


def _check_ranker() -> str:
    try:
        ranked = ranker.match_candidates(["health check"], "hlth")
    except FuzzyRankerError:
        return "unhealthy"
    return "healthy" if ranked else "degraded"


def _check_matcher() -> str:
    try:
        score = get_matcher(ranker.config).exact_match("health", "health")
    except FuzzyRankerError:
        return "unhealthy"
    return "healthy" if score is not None else "degraded"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the ranking service",
)
async def health_check() -> HealthResponse:
    """
    Perform a health check on the ranking service.

    Runs a tiny ranking and a tiny exact match to verify the core works.
    """
    dependencies = {
        "ranker": _check_ranker(),
        "matcher": _check_matcher(),
    }

    # Determine overall status
    if all(status == "healthy" for status in dependencies.values()):
        status = "healthy"
    elif any(status == "unhealthy" for status in dependencies.values()):
        status = "unhealthy"
    else:
        status = "degraded"

    return HealthResponse(
        status=status,
        version=settings.app_version,
        uptime=time.time() - app_start_time,
        dependencies=dependencies,
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding",
)
async def liveness_check() -> JSONResponse:
    """Return the current time and uptime."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "alive",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": time.time() - app_start_time,
        },
    )
