"""Text normalization into a comparison form that remembers original positions."""

import unicodedata
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple


@dataclass(frozen=True)
class CodepointSequence:
    """
    Comparison form of a string.

    ``text`` holds the normalized codepoints and ``offsets[i]`` is the index in
    ``original`` that produced ``text[i]``. Immutable; safe to cache per string.
    """

    text: str
    offsets: Sequence[int]
    original: str

    def __len__(self) -> int:
        return len(self.text)

    def to_original(self, indices: Sequence[int]) -> Tuple[int, ...]:
        """Map codepoint positions in ``text`` back to positions in ``original``."""
        offsets = self.offsets
        return tuple(offsets[i] for i in indices)


def _is_jamo_continuation(ch: str) -> bool:
    # Hangul medial vowels and final consonants compose onto the preceding syllable
    code = ord(ch)
    return 0x1161 <= code <= 0x1175 or 0x11A8 <= code <= 0x11C2


def _clusters(text: str) -> Iterator[Tuple[int, str]]:
    """Split ``text`` into runs that NFC may compose, yielding ``(start, run)``."""
    start = 0
    for i in range(1, len(text)):
        ch = text[i]
        if unicodedata.combining(ch) == 0 and not _is_jamo_continuation(ch):
            yield start, text[start:i]
            start = i
    if text:
        yield start, text[start:]


def _fold_char(ch: str) -> str:
    # Keep the mapping one codepoint in, one codepoint out
    folded = ch.casefold()
    if len(folded) == 1:
        return folded
    lowered = ch.lower()
    return lowered if len(lowered) == 1 else ch


class TextNormalizer:
    """Handles Unicode composition and case folding for matching."""

    def __init__(self, strip_marks: bool = False) -> None:
        """
        Initialize the normalizer.

        Args:
            strip_marks: Drop combining marks after composition so that
                accented letters compare equal to their base letter
        """
        self.strip_marks = strip_marks

    def normalize(self, text: str, fold_case: bool = True) -> CodepointSequence:
        """
        Normalize text for matching.

        ASCII text skips Unicode normalization entirely, and is only copied
        when case folding actually changes it.

        Args:
            text: Input text
            fold_case: Case-fold every codepoint (simple, one-to-one folding)

        Returns:
            CodepointSequence with offsets into ``text``
        """
        if text.isascii():
            folded = text.lower() if fold_case and not text.islower() else text
            return CodepointSequence(folded, range(len(text)), text)

        chars: List[str] = []
        offsets: List[int] = []
        for start, run in _clusters(text):
            composed = self._compose(run)
            if len(composed) > len(run):
                # Composition exclusions expand under NFC; keep them as written
                composed = run
            last = len(run) - 1
            for k, ch in enumerate(composed):
                chars.append(_fold_char(ch) if fold_case else ch)
                offsets.append(start + min(k, last))

        return CodepointSequence("".join(chars), tuple(offsets), text)

    def normalize_text(self, text: str, fold_case: bool = True) -> str:
        """Normalize ``text`` and return only the comparison string."""
        return self.normalize(text, fold_case).text

    def _compose(self, run: str) -> str:
        composed = unicodedata.normalize("NFC", run)
        if not self.strip_marks:
            return composed
        decomposed = unicodedata.normalize("NFD", composed)
        stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
        return unicodedata.normalize("NFC", stripped)
