"""Request models for API endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.scoring import AtomKind, CaseMatching, Normalization


class ScoringOptions(BaseModel):
    """Per-request overrides of the service's default scoring options."""

    prefer_prefix: Optional[bool] = Field(None, description="Prefer matches near the start")
    path_aware_boundaries: Optional[bool] = Field(
        None, description="Treat path separators as strong word boundaries"
    )
    case_matching: Optional[CaseMatching] = Field(
        None, description="Case handling: ignore, respect or smart"
    )
    normalization: Optional[Normalization] = Field(
        None, description="Unicode handling: nfc or smart (accent-insensitive)"
    )

    def overrides(self) -> Dict[str, Any]:
        """Options that were explicitly set."""
        return self.model_dump(exclude_none=True)


class MatchRequest(BaseModel):
    """Request model for ranking a candidate list."""

    query: str = Field(default="", max_length=1024, description="Query text (may be empty)")
    candidates: List[str] = Field(..., description="Candidate strings, in caller order")
    limit: Optional[int] = Field(None, ge=1, description="Maximum number of results to return")
    options: ScoringOptions = Field(default_factory=ScoringOptions)


class BatchMatchRequest(BaseModel):
    """Request model for ranking one candidate list against several queries."""

    queries: List[str] = Field(..., min_length=1, max_length=100, description="Queries")
    candidates: List[str] = Field(..., description="Candidate strings, in caller order")
    limit: Optional[int] = Field(None, ge=1, description="Maximum number of results per query")
    options: ScoringOptions = Field(default_factory=ScoringOptions)


class ScoreRequest(BaseModel):
    """Request model for scoring one haystack with one algorithm."""

    haystack: str = Field(..., description="Candidate text")
    needle: str = Field(..., description="Needle text, used verbatim (no query syntax)")
    mode: AtomKind = Field(default=AtomKind.FUZZY, description="Match algorithm")
    options: ScoringOptions = Field(default_factory=ScoringOptions)

    @field_validator("needle")
    @classmethod
    def validate_needle(cls, v: str) -> str:
        """Reject needles made only of whitespace."""
        if v and not v.strip():
            raise ValueError("Needle cannot be whitespace only")
        return v
