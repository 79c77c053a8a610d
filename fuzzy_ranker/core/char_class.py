"""Character classification and boundary bonuses."""

import unicodedata
from enum import IntEnum
from typing import List

from .scoring import ScoringConfig

PATH_SEPARATORS = frozenset("/\\")


class CharClass(IntEnum):
    """Coarse character category used to detect word boundaries."""

    WHITESPACE = 0
    NON_WORD = 1
    WORD = 2
    LOWER = 3
    UPPER = 4
    DIGIT = 5


_WORDLIKE = frozenset({CharClass.WORD, CharClass.LOWER, CharClass.UPPER, CharClass.DIGIT})
_LETTERS = frozenset({CharClass.WORD, CharClass.LOWER, CharClass.UPPER})


def _classify_slow(ch: str) -> CharClass:
    if ch.isspace():
        return CharClass.WHITESPACE
    if ch.isupper() or ch.istitle():
        return CharClass.UPPER
    if ch.islower():
        return CharClass.LOWER
    if ch.isdigit() or ch.isnumeric():
        return CharClass.DIGIT
    if ch.isalpha() or unicodedata.category(ch).startswith("M"):
        return CharClass.WORD
    return CharClass.NON_WORD


_ASCII_CLASSES = [_classify_slow(chr(code)) for code in range(128)]


def classify(ch: str) -> CharClass:
    """Return the class of a single codepoint."""
    code = ord(ch)
    if code < 128:
        return _ASCII_CLASSES[code]
    return _classify_slow(ch)


def is_boundary(text: str, index: int, path_aware: bool = False) -> bool:
    """Whether a word starts at ``index`` (camel-case transitions excluded)."""
    if classify(text[index]) not in _WORDLIKE:
        return False
    if index == 0:
        return True
    prev = text[index - 1]
    if path_aware and prev in PATH_SEPARATORS:
        return True
    return classify(prev) <= CharClass.NON_WORD


def is_camel(text: str, index: int) -> bool:
    """Whether ``index`` is a lower-to-upper or letter-to-digit transition."""
    if index == 0:
        return False
    prev = classify(text[index - 1])
    cur = classify(text[index])
    if prev is CharClass.LOWER and cur is CharClass.UPPER:
        return True
    return prev in _LETTERS and cur is CharClass.DIGIT


def _bonus(prev: CharClass, prev_char: str, cur: CharClass, config: ScoringConfig) -> int:
    if cur not in _WORDLIKE:
        return 0
    if prev is CharClass.WHITESPACE:
        return config.bonus_boundary_white
    if config.path_aware_boundaries and prev_char in PATH_SEPARATORS:
        return config.bonus_boundary_white
    if prev is CharClass.NON_WORD:
        return config.bonus_boundary_delimiter
    if prev is CharClass.LOWER and cur is CharClass.UPPER:
        return config.bonus_camel
    if prev in _LETTERS and cur is CharClass.DIGIT:
        return config.bonus_camel
    return 0


def bonus_at(text: str, index: int, config: ScoringConfig) -> int:
    """Boundary or camel-case bonus for a match at ``index``."""
    if index == 0:
        # The start of the haystack behaves like a position after whitespace
        return _bonus(CharClass.WHITESPACE, " ", classify(text[0]), config)
    prev_char = text[index - 1]
    return _bonus(classify(prev_char), prev_char, classify(text[index]), config)


def compute_bonuses(text: str, config: ScoringConfig) -> List[int]:
    """Per-position bonus table for a whole haystack."""
    bonuses = []
    prev = CharClass.WHITESPACE
    prev_char = " "
    for ch in text:
        cur = classify(ch)
        bonuses.append(_bonus(prev, prev_char, cur, config))
        prev = cur
        prev_char = ch
    return bonuses
