"""Data models for the fuzzy ranker service."""

from .response import (
    RankedResult,
    MatchResponse,
    ScoreResponse,
    ErrorResponse,
    HealthResponse,
    MetricsResponse,
)
from .request import MatchRequest, BatchMatchRequest, ScoreRequest, ScoringOptions

__all__ = [
    "RankedResult",
    "MatchResponse",
    "ScoreResponse",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
    "MatchRequest",
    "BatchMatchRequest",
    "ScoreRequest",
    "ScoringOptions",
]
