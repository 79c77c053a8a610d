"""Global ranker instance to avoid circular imports."""

from .core.engine import Ranker
from .config import get_settings

# Global ranker instance
settings = get_settings()
ranker = Ranker(
    config=settings.scoring_config(),
    parallel_workers=settings.parallel_workers,
    parallel_threshold=settings.parallel_threshold,
)
