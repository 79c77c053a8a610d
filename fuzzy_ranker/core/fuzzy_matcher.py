"""Optimal-alignment fuzzy (ordered subsequence) matching.

The matcher scores every alignment of the needle as a subsequence of the
haystack and keeps the best one. Scores are computed over suffixes of the
needle: ``table[i][j]`` holds the best score obtainable for ``needle[i + 1:]``
(trailing penalty included) when ``needle[i]`` is matched at haystack
position ``j``. Walking that table forward from the best first position and
always taking the leftmost position that preserves the optimum yields the
lexicographically smallest optimal index vector.
"""

import itertools
from typing import List, Optional, Sequence, Tuple

from .char_class import compute_bonuses
from .result import EMPTY_MATCH, MatchResult
from .scoring import ScoringConfig

NO_SCORE = float("-inf")

Bounds = Tuple[List[int], List[int]]


class ScratchArena:
    """Reusable DP rows, grown on demand and reset before every use.

    An arena belongs to a single matcher and must never be shared between
    concurrent workers.
    """

    def __init__(self) -> None:
        self._rows: List[List[float]] = []
        self._width = 0

    @property
    def capacity(self) -> Tuple[int, int]:
        return len(self._rows), self._width

    def acquire(self, rows: int, width: int) -> List[List[float]]:
        """Return ``rows`` rows whose first ``width`` cells are reset to ``NO_SCORE``."""
        if width > self._width:
            grow = width - self._width
            for row in self._rows:
                row.extend(itertools.repeat(NO_SCORE, grow))
            self._width = width
        while len(self._rows) < rows:
            self._rows.append([NO_SCORE] * self._width)

        tables = self._rows[:rows]
        for row in tables:
            row[:width] = itertools.repeat(NO_SCORE, width)
        return tables


def subsequence_bounds(haystack: str, needle: str) -> Optional[Bounds]:
    """
    Leftmost and rightmost feasible haystack position for each needle codepoint.

    Returns None when the needle is not a subsequence of the haystack.
    """
    lo: List[int] = []
    pos = 0
    for ch in needle:
        pos = haystack.find(ch, pos)
        if pos < 0:
            return None
        lo.append(pos)
        pos += 1

    hi = [0] * len(needle)
    pos = len(haystack)
    for i in range(len(needle) - 1, -1, -1):
        pos = haystack.rfind(needle[i], 0, pos)
        hi[i] = pos
    return lo, hi


class FuzzyMatcher:
    """Finds the highest-scoring subsequence alignment of a needle."""

    def __init__(self, config: ScoringConfig, arena: Optional[ScratchArena] = None) -> None:
        """
        Initialize the fuzzy matcher.

        Args:
            config: Scoring weights and flags
            arena: Scratch rows to reuse across calls (a private one is created
                when omitted)
        """
        self.config = config
        self.arena = arena or ScratchArena()

    def score(self, haystack: str, needle: str) -> Optional[int]:
        """Best alignment score, using two rolling rows."""
        if not needle:
            return 0
        if len(needle) > len(haystack):
            return None
        bounds = subsequence_bounds(haystack, needle)
        if bounds is None:
            return None

        bonuses = compute_bonuses(haystack, self.config)
        current, following = self.arena.acquire(2, len(haystack))
        for i in range(len(needle) - 1, -1, -1):
            self._fill_row(current, following, haystack, needle, i, bounds, bonuses)
            current, following = following, current
            if i:
                current[:len(haystack)] = itertools.repeat(NO_SCORE, len(haystack))

        total, _ = self._best_start(following, haystack, needle[0], bounds, bonuses)
        return int(total)

    def match(self, haystack: str, needle: str) -> Optional[MatchResult]:
        """Best alignment score and its matched positions."""
        if not needle:
            return EMPTY_MATCH
        if len(needle) > len(haystack):
            return None
        bounds = subsequence_bounds(haystack, needle)
        if bounds is None:
            return None

        bonuses = compute_bonuses(haystack, self.config)
        table = self.arena.acquire(len(needle), len(haystack))
        for i in range(len(needle) - 1, -1, -1):
            following = table[i + 1] if i + 1 < len(needle) else table[i]
            self._fill_row(table[i], following, haystack, needle, i, bounds, bonuses)

        total, start = self._best_start(table[0], haystack, needle[0], bounds, bonuses)
        indices = reconstruct_indices(table, haystack, needle, start, bounds, bonuses, self.config)
        return MatchResult(int(total), indices)

    def _fill_row(
        self,
        row: List[float],
        following: List[float],
        haystack: str,
        needle: str,
        i: int,
        bounds: Bounds,
        bonuses: Sequence[int],
    ) -> None:
        lo, hi = bounds
        ch = needle[i]
        config = self.config

        if i == len(needle) - 1:
            last = len(haystack) - 1
            for j in range(lo[i], hi[i] + 1):
                if haystack[j] == ch:
                    row[j] = config.trailing_penalty(last - j)
            return

        step_consecutive = config.score_match + config.bonus_consecutive
        gap_open = config.score_match + config.gap_penalty_start
        gap_extend = config.gap_penalty_extension
        hi_next = hi[i + 1]
        top = hi[i]

        # gap = best score reachable by jumping over at least one codepoint
        gap = NO_SCORE
        for j in range(hi_next - 1, lo[i] - 1, -1):
            k = j + 2
            gap += gap_extend
            if k <= hi_next:
                opened = following[k] + gap_open + bonuses[k]
                if opened > gap:
                    gap = opened
            if j <= top and haystack[j] == ch:
                best = following[j + 1] + step_consecutive
                row[j] = gap if gap > best else best

    def _best_start(
        self,
        row: List[float],
        haystack: str,
        ch: str,
        bounds: Bounds,
        bonuses: Sequence[int],
    ) -> Tuple[float, int]:
        lo, hi = bounds
        best_total = NO_SCORE
        best_start = -1
        for j in range(lo[0], hi[0] + 1):
            if haystack[j] != ch or row[j] == NO_SCORE:
                continue
            total = first_char_score(j, bonuses, self.config) + row[j]
            if total > best_total:
                best_total = total
                best_start = j
        return best_total, best_start


def first_char_score(position: int, bonuses: Sequence[int], config: ScoringConfig) -> int:
    """Score of the first needle codepoint matched at ``position``."""
    if position == 0:
        return (
            config.score_match * config.bonus_first_char_multiplier
            + bonuses[0]
            + config.prefix_bonus(0)
        )
    return (
        config.score_match
        + bonuses[position]
        + config.prefix_bonus(position)
        + config.leading_penalty(position)
    )


def reconstruct_indices(
    table: Sequence[List[float]],
    haystack: str,
    needle: str,
    start: int,
    bounds: Bounds,
    bonuses: Sequence[int],
    config: ScoringConfig,
) -> Tuple[int, ...]:
    """
    Recover the matched positions of the optimal alignment.

    Iterates forward over the stored table; at each step the leftmost position
    whose transition reproduces the remaining optimum is taken.
    """
    _, hi = bounds
    positions = [start]
    prev = start
    remaining = table[0][start]

    for i in range(1, len(needle)):
        row = table[i]
        ch = needle[i]
        for k in range(prev + 1, hi[i] + 1):
            if haystack[k] != ch or row[k] == NO_SCORE:
                continue
            if k == prev + 1:
                step = config.score_match + config.bonus_consecutive
            else:
                step = config.score_match + bonuses[k] + config.gap_penalty(k - prev - 1)
            if step + row[k] == remaining:
                break
        else:
            raise RuntimeError("fuzzy table is inconsistent with its optimum")
        positions.append(k)
        remaining = row[k]
        prev = k

    return tuple(positions)
