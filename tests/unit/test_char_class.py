"""Unit tests for character classification and boundary bonuses."""

import pytest
from fuzzy_ranker.core.char_class import (
    CharClass,
    bonus_at,
    classify,
    compute_bonuses,
    is_boundary,
    is_camel,
)
from fuzzy_ranker.core.scoring import ScoringConfig


class TestClassify:
    """Test cases for classify()."""

    @pytest.mark.parametrize(
        "ch, expected",
        [
            ("a", CharClass.LOWER),
            ("A", CharClass.UPPER),
            ("5", CharClass.DIGIT),
            (" ", CharClass.WHITESPACE),
            ("\t", CharClass.WHITESPACE),
            ("_", CharClass.NON_WORD),
            ("/", CharClass.NON_WORD),
            ("-", CharClass.NON_WORD),
            ("中", CharClass.WORD),
            ("é", CharClass.LOWER),
            ("É", CharClass.UPPER),
            ("٣", CharClass.DIGIT),
            ("　", CharClass.WHITESPACE),
        ],
    )
    def test_classes(self, ch, expected):
        """Each codepoint maps to its class."""
        assert classify(ch) is expected


class TestBoundaries:
    """Test cases for boundary and camel-case detection."""

    def test_start_is_boundary(self):
        assert is_boundary("foo", 0)

    def test_after_whitespace(self):
        assert is_boundary("foo bar", 4)
        assert not is_boundary("foo bar", 1)

    def test_after_delimiter(self):
        assert is_boundary("foo_bar", 4)
        assert is_boundary("src/main", 4)

    def test_separator_itself_is_not_boundary(self):
        assert not is_boundary("a b", 1)

    def test_camel(self):
        assert is_camel("fooBar", 3)
        assert is_camel("file2", 4)
        assert not is_camel("FOO", 1)
        assert not is_camel("foo", 0)


class TestBonuses:
    """Test cases for the per-position bonus table."""

    @pytest.fixture
    def config(self):
        return ScoringConfig()

    def test_whitespace_boundaries(self, config):
        assert compute_bonuses("foo bar", config) == [13, 0, 0, 0, 13, 0, 0]

    def test_delimiter_boundary(self, config):
        assert compute_bonuses("a/b", config) == [13, 0, 11]

    def test_path_aware_boundary(self):
        config = ScoringConfig(path_aware_boundaries=True)
        assert compute_bonuses("a/b", config) == [13, 0, 13]
        assert compute_bonuses("a\\b", config) == [13, 0, 13]

    def test_camel_bonus(self, config):
        assert compute_bonuses("fooBar", config) == [13, 0, 0, 9, 0, 0]

    def test_digit_after_letter(self, config):
        assert compute_bonuses("v2", config) == [13, 9]

    def test_matched_separator_has_no_bonus(self, config):
        assert compute_bonuses(" a", config) == [0, 13]

    @pytest.mark.parametrize("text", ["foo bar", "fooBar_baz", "src/main.rs", "a  b-c"])
    def test_bonus_at_agrees_with_table(self, config, text):
        table = compute_bonuses(text, config)
        assert [bonus_at(text, i, config) for i in range(len(text))] == table
