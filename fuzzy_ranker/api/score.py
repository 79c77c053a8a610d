"""Single haystack scoring endpoint."""

from fastapi import APIRouter, HTTPException

from ..core.exceptions import FuzzyRankerError
from ..core.matcher import get_matcher
from ..models.request import ScoreRequest
from ..models.response import ScoreResponse
from .match import ranker, resolve_config

router = APIRouter(prefix="/api/v1", tags=["score"])


@router.post(
    "/score",
    response_model=ScoreResponse,
    summary="Score one haystack",
    description="Score a needle against a single haystack with an explicit algorithm",
)
async def score_haystack(request: ScoreRequest) -> ScoreResponse:
    """
    Score one haystack.

    The needle is used verbatim: query operators such as ``^`` or ``!`` are
    not interpreted here.
    """
    try:
        config = resolve_config(request.options) or ranker.config
        result = get_matcher(config).match(request.haystack, request.needle, request.mode)
    except FuzzyRankerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ScoreResponse(
        haystack=request.haystack,
        needle=request.needle,
        mode=request.mode,
        matched=result is not None,
        score=None if result is None else result.score,
        indices=[] if result is None else list(result.indices),
    )
