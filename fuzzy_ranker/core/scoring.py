"""Scoring configuration shared read-only by every matcher."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError

# Documented defaults
SCORE_MATCH = 16
BONUS_CONSECUTIVE = 7
BONUS_FIRST_CHAR_MULTIPLIER = 2
BONUS_BOUNDARY_WHITE = 13
BONUS_BOUNDARY_DELIMITER = 11
BONUS_CAMEL = 9
MAX_PREFIX_BONUS = 3
GAP_PENALTY_START = -3
GAP_PENALTY_EXTENSION = -1
GAP_PENALTY_TRAILING = -1
MAX_TRAILING_PENALTY = 16
BONUS_ATOM_ORDER = 12
MAX_NEEDLE_LENGTH = 256
MAX_HAYSTACK_LENGTH = 8192


class CaseMatching(str, Enum):
    """How letter case is compared."""

    IGNORE = "ignore"
    RESPECT = "respect"
    SMART = "smart"


class Normalization(str, Enum):
    """How Unicode text is brought into comparison form."""

    NFC = "nfc"
    SMART = "smart"


class AtomKind(str, Enum):
    """Match algorithm applied to one needle."""

    FUZZY = "fuzzy"
    SUBSTRING = "substring"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    EQUAL = "equal"


class ScoringConfig(BaseModel):
    """
    Immutable table of weights, penalties and mode flags.

    Bonuses are non-negative, penalties are non-positive. Any violation is
    reported as a ``ConfigError`` when the config is constructed.

    Boundary bonuses are computed on the comparison text. With
    ``case_matching="ignore"`` that text is case-folded, so ``bonus_camel``
    is never earned; use ``"smart"`` or ``"respect"`` to reward camel-case
    humps such as ``FBB`` in ``FooBarBaz``.
    """

    score_match: int = Field(default=SCORE_MATCH, gt=0)
    bonus_consecutive: int = Field(default=BONUS_CONSECUTIVE, ge=0)
    bonus_first_char_multiplier: int = Field(default=BONUS_FIRST_CHAR_MULTIPLIER, ge=1)
    bonus_boundary_white: int = Field(default=BONUS_BOUNDARY_WHITE, ge=0)
    bonus_boundary_delimiter: int = Field(default=BONUS_BOUNDARY_DELIMITER, ge=0)
    bonus_camel: int = Field(default=BONUS_CAMEL, ge=0)
    max_prefix_bonus: int = Field(default=MAX_PREFIX_BONUS, ge=0)
    gap_penalty_start: int = Field(default=GAP_PENALTY_START, le=0)
    gap_penalty_extension: int = Field(default=GAP_PENALTY_EXTENSION, le=0)
    gap_penalty_trailing: int = Field(default=GAP_PENALTY_TRAILING, le=0)
    max_trailing_penalty: int = Field(default=MAX_TRAILING_PENALTY, ge=0)
    bonus_atom_order: int = Field(default=BONUS_ATOM_ORDER, ge=0)

    prefer_prefix: bool = Field(default=False)
    path_aware_boundaries: bool = Field(default=False)
    case_matching: CaseMatching = Field(default=CaseMatching.IGNORE)
    normalization: Normalization = Field(default=Normalization.NFC)

    max_needle_length: int = Field(default=MAX_NEEDLE_LENGTH, ge=1)
    max_haystack_length: int = Field(default=MAX_HAYSTACK_LENGTH, ge=1)

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid scoring configuration: {exc}") from exc

    def with_options(self, **overrides: Any) -> "ScoringConfig":
        """Return a validated copy with ``overrides`` applied (``None`` values ignored)."""
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return ScoringConfig(**data)

    def prefix_bonus(self, position: int) -> int:
        """Bonus for a match starting ``position`` codepoints into the haystack."""
        return max(self.max_prefix_bonus - position, 0)

    def leading_penalty(self, position: int) -> int:
        """Penalty for skipped leading codepoints, only when ``prefer_prefix`` is set."""
        if not self.prefer_prefix or position == 0:
            return 0
        return max(self.gap_penalty_extension * position, -self.max_trailing_penalty)

    def trailing_penalty(self, unmatched: int) -> int:
        """Penalty for ``unmatched`` codepoints after the last fuzzy match."""
        return max(self.gap_penalty_trailing * unmatched, -self.max_trailing_penalty)

    def gap_penalty(self, skipped: int) -> int:
        """Penalty for an inner gap of ``skipped`` codepoints (zero when adjacent)."""
        if skipped <= 0:
            return 0
        return self.gap_penalty_start + self.gap_penalty_extension * (skipped - 1)

    def folds_case(self, needle: str) -> bool:
        """Whether ``needle`` should be compared case-insensitively."""
        if self.case_matching is CaseMatching.IGNORE:
            return True
        if self.case_matching is CaseMatching.RESPECT:
            return False
        return not any(ch.isupper() for ch in needle)


DEFAULT_CONFIG = ScoringConfig()
