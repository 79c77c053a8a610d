"""Ranking API endpoints."""

import time
from typing import List, Optional, Sequence

from fastapi import APIRouter, HTTPException

from ..config import get_settings
from ..core.exceptions import FuzzyRankerError
from ..core.scoring import ScoringConfig
from ..models.request import BatchMatchRequest, MatchRequest, ScoringOptions
from ..models.response import MatchResponse, RankedResult

router = APIRouter(prefix="/api/v1", tags=["match"])
settings = get_settings()

# Import the global ranker instance
from ..engine_instance import ranker


def resolve_config(options: ScoringOptions) -> Optional[ScoringConfig]:
    """Apply request overrides to the service defaults (None = use defaults)."""
    overrides = options.overrides()
    if not overrides:
        return None
    return ranker.config.with_options(**overrides)


def _validate_limits(queries: Sequence[str], candidates: Sequence[str]) -> None:
    for query in queries:
        if len(query) > settings.max_query_length:
            raise HTTPException(
                status_code=400,
                detail=f"Query too long. Maximum length is {settings.max_query_length} characters",
            )
    if len(candidates) > settings.max_candidates:
        raise HTTPException(
            status_code=400,
            detail=f"Too many candidates. Maximum is {settings.max_candidates}",
        )


def _rank(
    query: str,
    candidates: List[str],
    config: Optional[ScoringConfig],
    limit: Optional[int],
) -> MatchResponse:
    start_time = time.time()
    try:
        ranked = ranker.match_candidates(candidates, query, config=config)
    except FuzzyRankerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    total_matches = len(ranked)
    results = [
        RankedResult(
            index=match.index,
            text=candidates[match.index],
            score=match.score,
            indices=list(match.indices),
        )
        for match in ranked[: limit or settings.max_results]
    ]

    return MatchResponse(
        query=query,
        execution_time_ms=(time.time() - start_time) * 1000,
        total_candidates=len(candidates),
        total_matches=total_matches,
        results=results,
    )


@router.post(
    "/match",
    response_model=MatchResponse,
    summary="Rank candidates",
    description="Rank candidate strings against a query using fuzzy, exact, prefix and suffix atoms",
)
async def match_candidates(request: MatchRequest) -> MatchResponse:
    """
    Rank candidates against a query.

    The query supports the full atom syntax (``^prefix``, ``suffix$``,
    ``'exact``, ``!exclude``, ``a | b``). An empty query returns every
    candidate in its original order.
    """
    _validate_limits([request.query], request.candidates)
    try:
        config = resolve_config(request.options)
    except FuzzyRankerError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _rank(request.query, request.candidates, config, request.limit)


@router.post(
    "/match/batch",
    response_model=List[MatchResponse],
    summary="Batch ranking",
    description="Rank one candidate list against several queries in a single request",
)
async def batch_match(request: BatchMatchRequest) -> List[MatchResponse]:
    """
    Rank one candidate list against several queries.

    Responses are returned in query order.
    """
    _validate_limits(request.queries, request.candidates)
    try:
        config = resolve_config(request.options)
    except FuzzyRankerError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [
        _rank(query, request.candidates, config, request.limit)
        for query in request.queries
    ]
