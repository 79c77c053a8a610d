"""Core matching and ranking functionality."""

from .char_class import CharClass, classify
from .engine import RankedMatch, Ranker, match_candidates
from .exceptions import (
    ConfigError,
    FuzzyRankerError,
    LengthExceeded,
    QuerySyntaxError,
    ScanCancelled,
)
from .fuzzy_matcher import FuzzyMatcher, ScratchArena
from .matcher import (
    Matcher,
    exact_match,
    exact_match_indices,
    fuzzy_match,
    fuzzy_match_indices,
    get_matcher,
    prefix_match,
    prefix_match_indices,
    suffix_match,
    suffix_match_indices,
)
from .normalizer import CodepointSequence, TextNormalizer
from .pattern import Atom, Pattern, PatternComposer
from .result import MatchResult
from .scoring import AtomKind, CaseMatching, Normalization, ScoringConfig
from .substring_matcher import SubstringMatcher

__all__ = [
    "Atom",
    "AtomKind",
    "CaseMatching",
    "CharClass",
    "CodepointSequence",
    "ConfigError",
    "FuzzyMatcher",
    "FuzzyRankerError",
    "LengthExceeded",
    "MatchResult",
    "Matcher",
    "Normalization",
    "Pattern",
    "PatternComposer",
    "QuerySyntaxError",
    "RankedMatch",
    "Ranker",
    "ScanCancelled",
    "ScoringConfig",
    "ScratchArena",
    "SubstringMatcher",
    "TextNormalizer",
    "classify",
    "exact_match",
    "exact_match_indices",
    "fuzzy_match",
    "fuzzy_match_indices",
    "get_matcher",
    "match_candidates",
    "prefix_match",
    "prefix_match_indices",
    "suffix_match",
    "suffix_match_indices",
]
