"""Unit tests for the scoring configuration."""

import pytest
from pydantic import ValidationError

from fuzzy_ranker.core.exceptions import ConfigError
from fuzzy_ranker.core.scoring import CaseMatching, Normalization, ScoringConfig


class TestScoringConfig:
    """Test cases for ScoringConfig validation and helpers."""

    @pytest.fixture
    def config(self):
        return ScoringConfig()

    def test_defaults(self, config):
        """Test the default weights."""
        assert config.score_match == 16
        assert config.bonus_consecutive == 7
        assert config.bonus_first_char_multiplier == 2
        assert config.bonus_boundary_white == 13
        assert config.bonus_boundary_delimiter == 11
        assert config.bonus_camel == 9
        assert config.max_prefix_bonus == 3
        assert config.gap_penalty_start == -3
        assert config.gap_penalty_extension == -1
        assert config.bonus_atom_order == 12
        assert config.prefer_prefix is False
        assert config.path_aware_boundaries is False
        assert config.case_matching is CaseMatching.IGNORE
        assert config.normalization is Normalization.NFC

    @pytest.mark.parametrize(
        "overrides",
        [
            {"score_match": 0},
            {"score_match": -16},
            {"bonus_camel": -1},
            {"gap_penalty_start": 3},
            {"gap_penalty_trailing": 1},
            {"bonus_first_char_multiplier": 0},
            {"max_needle_length": 0},
            {"case_matching": "sometimes"},
            {"unknown_weight": 1},
        ],
    )
    def test_invalid_values_raise_config_error(self, overrides):
        """Test that bad weights are rejected at construction."""
        with pytest.raises(ConfigError):
            ScoringConfig(**overrides)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            ScoringConfig(score_match=-1)

    def test_frozen(self, config):
        with pytest.raises(ValidationError):
            config.score_match = 20

    def test_hashable(self):
        assert hash(ScoringConfig()) == hash(ScoringConfig())
        assert ScoringConfig(prefer_prefix=True) != ScoringConfig()

    def test_enum_values_from_strings(self):
        config = ScoringConfig(case_matching="smart", normalization="smart")
        assert config.case_matching is CaseMatching.SMART
        assert config.normalization is Normalization.SMART

    def test_with_options(self, config):
        """Test that overrides produce a new config and leave the original alone."""
        updated = config.with_options(prefer_prefix=True, case_matching=None)

        assert updated.prefer_prefix is True
        assert updated.case_matching is CaseMatching.IGNORE
        assert config.prefer_prefix is False

    def test_with_options_validates(self, config):
        with pytest.raises(ConfigError):
            config.with_options(score_match=-1)

    def test_prefix_bonus_decays(self, config):
        assert [config.prefix_bonus(i) for i in range(5)] == [3, 2, 1, 0, 0]

    def test_trailing_penalty_is_capped(self, config):
        assert config.trailing_penalty(0) == 0
        assert config.trailing_penalty(6) == -6
        assert config.trailing_penalty(40) == -16

    def test_gap_penalty(self, config):
        assert config.gap_penalty(0) == 0
        assert config.gap_penalty(1) == -3
        assert config.gap_penalty(3) == -5

    def test_leading_penalty_only_with_prefer_prefix(self, config):
        assert config.leading_penalty(5) == 0

        prefer = config.with_options(prefer_prefix=True)
        assert prefer.leading_penalty(0) == 0
        assert prefer.leading_penalty(1) == -1
        assert prefer.leading_penalty(100) == -16

    def test_folds_case(self, config):
        assert config.folds_case("aBc")
        assert not config.with_options(case_matching="respect").folds_case("abc")

        smart = config.with_options(case_matching="smart")
        assert smart.folds_case("abc")
        assert not smart.folds_case("aBc")
