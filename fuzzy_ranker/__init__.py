"""
Fuzzy Ranker - interactive fuzzy, exact and prefix string scoring.

This package ranks candidate strings (haystacks) against a user-typed query
(needle) for command palettes, fuzzy finders and file pickers. It returns a
deterministic order together with the matched character positions for
highlighting.
"""

__version__ = "1.0.0"

from .core import (
    ConfigError,
    LengthExceeded,
    Pattern,
    RankedMatch,
    Ranker,
    ScoringConfig,
    exact_match,
    exact_match_indices,
    fuzzy_match,
    fuzzy_match_indices,
    match_candidates,
    prefix_match,
    prefix_match_indices,
)

__all__ = [
    "ConfigError",
    "LengthExceeded",
    "Pattern",
    "RankedMatch",
    "Ranker",
    "ScoringConfig",
    "exact_match",
    "exact_match_indices",
    "fuzzy_match",
    "fuzzy_match_indices",
    "match_candidates",
    "prefix_match",
    "prefix_match_indices",
]
