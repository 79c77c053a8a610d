"""Result value produced by every matcher."""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class MatchResult:
    """Score and matched codepoint positions (ascending, one per needle codepoint)."""

    score: int
    indices: Tuple[int, ...] = field(default=())

    @property
    def first_index(self) -> int:
        return self.indices[0] if self.indices else 0


EMPTY_MATCH = MatchResult(0, ())
