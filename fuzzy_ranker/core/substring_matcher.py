"""Contiguous matchers: substring, prefix, suffix and whole-string equality."""

from typing import Optional

from .char_class import bonus_at, is_boundary
from .result import EMPTY_MATCH, MatchResult
from .scoring import ScoringConfig


class SubstringMatcher:
    """Scores needles that must occur as one contiguous run in the haystack.

    Every method takes the haystack and needle already in comparison form and
    reports positions in that form.
    """

    def __init__(self, config: ScoringConfig) -> None:
        self.config = config

    def score_run(self, haystack: str, start: int, length: int) -> int:
        """
        Score a contiguous run of ``length`` codepoints beginning at ``start``.

        The first codepoint earns the first-char multiplier plus the boundary
        and prefix bonuses of ``start``; every following codepoint is
        consecutive by construction.
        """
        config = self.config
        score = (
            config.score_match * config.bonus_first_char_multiplier
            + bonus_at(haystack, start, config)
            + config.prefix_bonus(start)
        )
        return score + (length - 1) * (config.score_match + config.bonus_consecutive)

    def _result(self, haystack: str, start: int, length: int) -> MatchResult:
        return MatchResult(
            self.score_run(haystack, start, length),
            tuple(range(start, start + length)),
        )

    def exact(self, haystack: str, needle: str) -> Optional[MatchResult]:
        """Needle anywhere in the haystack; leftmost occurrence wins.

        With ``prefer_prefix`` the leftmost occurrence that starts on a word
        boundary is chosen when one exists.
        """
        if not needle:
            return EMPTY_MATCH
        start = haystack.find(needle)
        if start < 0:
            return None

        if self.config.prefer_prefix:
            path_aware = self.config.path_aware_boundaries
            candidate = start
            while candidate >= 0 and not is_boundary(haystack, candidate, path_aware):
                candidate = haystack.find(needle, candidate + 1)
            if candidate >= 0:
                start = candidate

        return self._result(haystack, start, len(needle))

    def prefix(self, haystack: str, needle: str) -> Optional[MatchResult]:
        """Needle anchored at position 0."""
        if not needle:
            return EMPTY_MATCH
        if not haystack.startswith(needle):
            return None
        return self._result(haystack, 0, len(needle))

    def suffix(self, haystack: str, needle: str) -> Optional[MatchResult]:
        """Needle anchored at the end of the haystack."""
        if not needle:
            return EMPTY_MATCH
        if not haystack.endswith(needle):
            return None
        return self._result(haystack, len(haystack) - len(needle), len(needle))

    def equal(self, haystack: str, needle: str) -> Optional[MatchResult]:
        """Needle equal to the whole haystack."""
        if not needle:
            return EMPTY_MATCH
        if haystack != needle:
            return None
        return self._result(haystack, 0, len(needle))
