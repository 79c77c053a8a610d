"""Response models for API endpoints."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..core.scoring import AtomKind


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RankedResult(BaseModel):
    """Individual ranked candidate."""

    index: int = Field(..., description="Position of the candidate in the request")
    text: str = Field(..., description="The candidate text")
    score: int = Field(..., description="Match score (higher is better)")
    indices: List[int] = Field(..., description="Matched character positions for highlighting")


class MatchResponse(BaseModel):
    """Response for ranking queries."""

    query: str = Field(..., description="Original query")
    execution_time_ms: float = Field(..., description="Ranking time in milliseconds")
    total_candidates: int = Field(..., description="Number of candidates received")
    total_matches: int = Field(..., description="Number of candidates that matched")
    results: List[RankedResult] = Field(..., description="Ranked results, best first")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")


class ScoreResponse(BaseModel):
    """Response for single-haystack scoring."""

    haystack: str = Field(..., description="Candidate text")
    needle: str = Field(..., description="Needle text")
    mode: AtomKind = Field(..., description="Match algorithm used")
    matched: bool = Field(..., description="Whether the needle matched")
    score: Optional[int] = Field(None, description="Score, absent when there is no match")
    indices: List[int] = Field(default_factory=list, description="Matched character positions")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Component status")


class MetricsResponse(BaseModel):
    """Performance metrics response."""

    total_scans: int = Field(..., description="Total ranking scans processed")
    candidates_scored: int = Field(..., description="Total candidates scored")
    average_response_time_ms: float = Field(..., description="Average scan time")
    match_rate: float = Field(..., description="Fraction of scored candidates that matched")
    skipped_candidates: int = Field(..., description="Candidates skipped because of errors")
    cancelled_scans: int = Field(..., description="Scans abandoned before completion")
    memory_usage_mb: float = Field(..., description="Process resident memory in MB")
    timestamp: datetime = Field(default_factory=_utcnow, description="Metrics timestamp")
