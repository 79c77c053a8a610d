"""Public matching entry points over raw strings."""

import threading
from typing import Dict, Optional, Tuple

from .exceptions import LengthExceeded
from .fuzzy_matcher import FuzzyMatcher
from .normalizer import CodepointSequence, TextNormalizer
from .result import EMPTY_MATCH, MatchResult
from .scoring import DEFAULT_CONFIG, AtomKind, Normalization, ScoringConfig
from .substring_matcher import SubstringMatcher

ScoredIndices = Tuple[int, Tuple[int, ...]]


class Matcher:
    """Normalizes inputs and dispatches them to the right algorithm.

    A matcher owns a fuzzy scratch arena, so one instance must not be used
    from several threads at once. ``get_matcher`` hands out one per thread.
    """

    def __init__(self, config: Optional[ScoringConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self.normalizer = TextNormalizer(
            strip_marks=self.config.normalization is Normalization.SMART
        )
        self.substring = SubstringMatcher(self.config)
        self.fuzzy = FuzzyMatcher(self.config)

    def prepare_needle(self, needle: str) -> Tuple[str, bool]:
        """
        Validate and normalize a needle.

        Returns:
            Tuple of (comparison text, whether case is folded)
        """
        if len(needle) > self.config.max_needle_length:
            raise LengthExceeded("needle", len(needle), self.config.max_needle_length)
        fold_case = self.config.folds_case(needle)
        return self.normalizer.normalize_text(needle, fold_case), fold_case

    def prepare_haystack(self, haystack: str, fold_case: bool) -> CodepointSequence:
        """Validate and normalize a haystack."""
        if len(haystack) > self.config.max_haystack_length:
            raise LengthExceeded("haystack", len(haystack), self.config.max_haystack_length)
        return self.normalizer.normalize(haystack, fold_case)

    def match_prepared(
        self,
        haystack: CodepointSequence,
        needle: str,
        kind: AtomKind = AtomKind.FUZZY,
    ) -> Optional[MatchResult]:
        """Match normalized inputs; positions are in comparison coordinates."""
        text = haystack.text
        if kind is AtomKind.FUZZY:
            return self.fuzzy.match(text, needle)
        if kind is AtomKind.SUBSTRING:
            return self.substring.exact(text, needle)
        if kind is AtomKind.PREFIX:
            return self.substring.prefix(text, needle)
        if kind is AtomKind.SUFFIX:
            return self.substring.suffix(text, needle)
        return self.substring.equal(text, needle)

    def match(
        self,
        haystack: str,
        needle: str,
        kind: AtomKind = AtomKind.FUZZY,
    ) -> Optional[MatchResult]:
        """
        Match raw strings.

        Args:
            haystack: Candidate text
            needle: Query text
            kind: Algorithm to apply

        Returns:
            MatchResult with positions in ``haystack`` coordinates, or None
        """
        needle_text, fold_case = self.prepare_needle(needle)
        sequence = self.prepare_haystack(haystack, fold_case)
        if not needle_text:
            return EMPTY_MATCH
        result = self.match_prepared(sequence, needle_text, kind)
        if result is None:
            return None
        return MatchResult(result.score, sequence.to_original(result.indices))

    def _score(self, haystack: str, needle: str, kind: AtomKind) -> Optional[int]:
        result = self.match(haystack, needle, kind)
        return None if result is None else result.score

    def _scored_indices(self, haystack: str, needle: str, kind: AtomKind) -> Optional[ScoredIndices]:
        result = self.match(haystack, needle, kind)
        return None if result is None else (result.score, result.indices)

    def exact_match(self, haystack: str, needle: str) -> Optional[int]:
        return self._score(haystack, needle, AtomKind.SUBSTRING)

    def exact_match_indices(self, haystack: str, needle: str) -> Optional[ScoredIndices]:
        return self._scored_indices(haystack, needle, AtomKind.SUBSTRING)

    def prefix_match(self, haystack: str, needle: str) -> Optional[int]:
        return self._score(haystack, needle, AtomKind.PREFIX)

    def prefix_match_indices(self, haystack: str, needle: str) -> Optional[ScoredIndices]:
        return self._scored_indices(haystack, needle, AtomKind.PREFIX)

    def suffix_match(self, haystack: str, needle: str) -> Optional[int]:
        return self._score(haystack, needle, AtomKind.SUFFIX)

    def suffix_match_indices(self, haystack: str, needle: str) -> Optional[ScoredIndices]:
        return self._scored_indices(haystack, needle, AtomKind.SUFFIX)

    def equal_match(self, haystack: str, needle: str) -> Optional[int]:
        return self._score(haystack, needle, AtomKind.EQUAL)

    def equal_match_indices(self, haystack: str, needle: str) -> Optional[ScoredIndices]:
        return self._scored_indices(haystack, needle, AtomKind.EQUAL)

    def fuzzy_match(self, haystack: str, needle: str) -> Optional[int]:
        """Best fuzzy score without recovering positions."""
        needle_text, fold_case = self.prepare_needle(needle)
        sequence = self.prepare_haystack(haystack, fold_case)
        return self.fuzzy.score(sequence.text, needle_text)

    def fuzzy_match_indices(self, haystack: str, needle: str) -> Optional[ScoredIndices]:
        return self._scored_indices(haystack, needle, AtomKind.FUZZY)


_local = threading.local()


def get_matcher(config: Optional[ScoringConfig] = None) -> Matcher:
    """Return this thread's matcher for ``config``."""
    config = config or DEFAULT_CONFIG
    matchers: Optional[Dict[ScoringConfig, Matcher]] = getattr(_local, "matchers", None)
    if matchers is None:
        matchers = _local.matchers = {}
    matcher = matchers.get(config)
    if matcher is None:
        matcher = matchers[config] = Matcher(config)
    return matcher


def exact_match(haystack: str, needle: str, config: Optional[ScoringConfig] = None) -> Optional[int]:
    """Score ``needle`` as a contiguous substring of ``haystack``."""
    return get_matcher(config).exact_match(haystack, needle)


def exact_match_indices(
    haystack: str, needle: str, config: Optional[ScoringConfig] = None
) -> Optional[ScoredIndices]:
    return get_matcher(config).exact_match_indices(haystack, needle)


def prefix_match(haystack: str, needle: str, config: Optional[ScoringConfig] = None) -> Optional[int]:
    """Score ``needle`` as a prefix of ``haystack``."""
    return get_matcher(config).prefix_match(haystack, needle)


def prefix_match_indices(
    haystack: str, needle: str, config: Optional[ScoringConfig] = None
) -> Optional[ScoredIndices]:
    return get_matcher(config).prefix_match_indices(haystack, needle)


def suffix_match(haystack: str, needle: str, config: Optional[ScoringConfig] = None) -> Optional[int]:
    """Score ``needle`` as a suffix of ``haystack``."""
    return get_matcher(config).suffix_match(haystack, needle)


def suffix_match_indices(
    haystack: str, needle: str, config: Optional[ScoringConfig] = None
) -> Optional[ScoredIndices]:
    return get_matcher(config).suffix_match_indices(haystack, needle)


def fuzzy_match(haystack: str, needle: str, config: Optional[ScoringConfig] = None) -> Optional[int]:
    """Score ``needle`` as an ordered subsequence of ``haystack``."""
    return get_matcher(config).fuzzy_match(haystack, needle)


def fuzzy_match_indices(
    haystack: str, needle: str, config: Optional[ScoringConfig] = None
) -> Optional[ScoredIndices]:
    return get_matcher(config).fuzzy_match_indices(haystack, needle)
