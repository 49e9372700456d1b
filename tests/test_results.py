"""
Tests for score rounding, formatting and the results container.
"""

import dataclasses

import pytest

from simdist.core.results import ResultsSet, format_score, round_score


class TestRoundScore:
    """Test half-away-from-zero rounding."""

    def test_midpoint_rounds_up(self):
        assert round_score(0.2195, 3) == 0.22
        assert round_score(0.0005, 3) == 0.001
        assert round_score(0.5, 0) == 1.0
        assert round_score(2.5, 0) == 3.0

    def test_below_midpoint(self):
        assert round_score(0.12345, 2) == 0.12
        assert round_score(0.2194, 3) == 0.219

    def test_repeating_fractions(self):
        assert round_score(1 / 3) == 0.333
        assert round_score(2 / 3) == 0.667

    def test_negative_values_round_away_from_zero(self):
        assert round_score(-0.2195, 3) == -0.22

    def test_already_rounded(self):
        assert round_score(0.5) == 0.5
        assert round_score(0.0) == 0.0
        assert round_score(1.0) == 1.0


class TestFormatScore:
    """Test score text."""

    @pytest.mark.parametrize("value,text", [
        (0.0, "0"),
        (1.0, "1"),
        (0.5, "0.5"),
        (0.22, "0.22"),
        (0.215, "0.215"),
    ])
    def test_format(self, value, text):
        assert format_score(value) == text

    @pytest.mark.parametrize("value,precision,text", [
        (0.00004, 5, "0.00004"),
        (0.0001, 5, "0.0001"),
        (0.5, 0, "0"),
        (1.0, 9, "1"),
    ])
    def test_small_values_stay_fixed_point(self, value, precision, text):
        assert format_score(round_score(value, precision), precision) == text


class TestResultsSet:
    """Test the finalized results container."""

    def test_count(self):
        results = ResultsSet(scores=(0.1, 0.2), mean=0.15, min=0.0, max=0.2)
        assert results.count == 2
        assert results.precision == 3

    def test_degenerate(self):
        assert ResultsSet(scores=(0.0,), mean=0.0, min=0.0, max=0.0).is_degenerate
        assert not ResultsSet(scores=(0.5,), mean=0.5, min=0.0, max=0.5).is_degenerate

    def test_immutable(self):
        results = ResultsSet(scores=(0.1,), mean=0.1, min=0.0, max=0.1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            results.mean = 0.2

    def test_to_dict(self):
        results = ResultsSet(scores=(0.1, 0.3), mean=0.2, min=0.0, max=0.3, precision=2)
        assert results.to_dict() == {"count": 2, "mean": 0.2, "min": 0.0, "max": 0.3, "precision": 2}
