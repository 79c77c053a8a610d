"""API endpoints for the fuzzy ranker service."""

from .match import router as match_router
from .score import router as score_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "match_router",
    "score_router",
    "health_router",
    "metrics_router",
]
