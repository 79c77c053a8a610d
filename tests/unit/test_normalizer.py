"""Unit tests for text normalization."""

import pytest
from fuzzy_ranker.core.normalizer import CodepointSequence, TextNormalizer


class TestTextNormalizer:
    """Test cases for the TextNormalizer class."""

    @pytest.fixture
    def normalizer(self):
        """Create a normalizer instance for testing."""
        return TextNormalizer()

    def test_ascii_fast_path(self, normalizer):
        """ASCII text is lowercased with identity offsets."""
        seq = normalizer.normalize("Hello World")

        assert seq.text == "hello world"
        assert list(seq.offsets) == list(range(11))
        assert seq.original == "Hello World"
        assert len(seq) == 11

    def test_ascii_without_uppercase_is_unchanged(self, normalizer):
        """Lowercase ASCII text passes straight through."""
        seq = normalizer.normalize("src/main.rs")
        assert seq.text == "src/main.rs"

    def test_case_preserved_when_not_folding(self, normalizer):
        """Case folding can be switched off."""
        seq = normalizer.normalize("FooBar", fold_case=False)
        assert seq.text == "FooBar"

    def test_non_ascii_case_folding(self, normalizer):
        """Non-ASCII uppercase letters are folded."""
        seq = normalizer.normalize("ÉCOLE")

        assert seq.text == "école"
        assert tuple(seq.offsets) == (0, 1, 2, 3, 4)

    def test_composition_keeps_original_offsets(self, normalizer):
        """Decomposed accents are composed and offsets point at the base letter."""
        seq = normalizer.normalize("e\u0301te")

        assert seq.text == "\u00e9te"
        assert tuple(seq.offsets) == (0, 2, 3)

    def test_hangul_jamo_compose(self, normalizer):
        """Conjoining jamo compose into one syllable."""
        seq = normalizer.normalize("\u1100\u1161")

        assert seq.text == "\uac00"
        assert tuple(seq.offsets) == (0,)

    def test_final_sigma_folds_like_sigma(self, normalizer):
        """Case folding maps both lowercase sigmas and the capital to one form."""
        assert normalizer.normalize_text("\u03a3\u03c3\u03c2") == "\u03c3\u03c3\u03c3"

    def test_composition_exclusion_keeps_one_offset_per_codepoint(self, normalizer):
        """Codepoints that NFC would expand are kept as written."""
        seq = normalizer.normalize("a\u0958b")

        assert seq.text == "a\u0958b"
        assert tuple(seq.offsets) == (0, 1, 2)
        assert normalizer.normalize_text(seq.text) == seq.text

    def test_one_to_many_lowercase_is_kept(self, normalizer):
        """Codepoints whose lowercase form is longer are left as is."""
        seq = normalizer.normalize("İ")
        assert len(seq) == 1

    @pytest.mark.parametrize(
        "text",
        ["Hello", "e\u0301te", "ÉCOLE", "Cafe\u0301 Cre\u0300me", "\u1100\u1161", ""],
    )
    def test_idempotent(self, normalizer, text):
        """Normalizing normalized text changes nothing."""
        once = normalizer.normalize_text(text)
        assert normalizer.normalize_text(once) == once

    def test_strip_marks(self):
        """Smart normalization drops accents."""
        normalizer = TextNormalizer(strip_marks=True)

        assert normalizer.normalize_text("Café") == "cafe"

        seq = normalizer.normalize("Cafe\u0301")
        assert seq.text == "cafe"
        assert tuple(seq.offsets) == (0, 1, 2, 3)

    def test_to_original(self, normalizer):
        """Positions map back to the original string."""
        seq = normalizer.normalize("Cafe\u0301 Cre\u0300me")

        assert seq.text == "café crème"
        assert seq.to_original([0, 4, 5]) == (0, 5, 6)

    def test_empty_text(self, normalizer):
        """Empty input gives an empty sequence."""
        seq = normalizer.normalize("")

        assert isinstance(seq, CodepointSequence)
        assert seq.text == ""
        assert len(seq) == 0
