"""
Tests for forgiving numeric parsing of live-typed fields.

Run with: python -m pytest tests/test_parsing.py -v
"""

import pytest

from neuronlab.neuron.errors import InvalidNumericInput, NeuronLabError
from neuronlab.neuron.parsing import clamp, parse_bounded, parse_number, to_float


class TestToFloat:
    """Tests for strict conversion."""

    @pytest.mark.parametrize("raw, expected", [
        ("2", 2.0),
        (" -0.5 ", -0.5),
        ("1e3", 1000.0),
        (3, 3.0),
        (2.25, 2.25),
    ])
    def test_valid_values(self, raw, expected):
        assert to_float(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "-", "1e", "abc", None, True, "nan", "inf", float("nan")])
    def test_invalid_values_raise(self, raw):
        with pytest.raises(InvalidNumericInput):
            to_float(raw)

    def test_error_is_a_value_error(self):
        """Callers that only know ValueError can still catch it."""
        with pytest.raises(ValueError):
            to_float("x")
        with pytest.raises(NeuronLabError):
            to_float("x")


class TestParseNumber:
    """Tests for the forgiving parse used by value/weight/bias fields."""

    def test_unparsable_falls_back_to_zero(self):
        assert parse_number("") == 0.0
        assert parse_number("-") == 0.0
        assert parse_number(None) == 0.0

    def test_custom_default(self):
        assert parse_number("oops", default=7.0) == 7.0

    def test_parses_when_possible(self):
        assert parse_number("4.5") == 4.5


class TestBounded:
    """Tests for clamp and parse_bounded."""

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0
        assert clamp(2, 0, 3) == 2
        assert clamp(100, 1) == 100

    def test_unparsable_resolves_to_lower_boundary(self):
        assert parse_bounded("", 1.0, 20.0) == 1.0
        assert parse_bounded("abc", 1.0) == 1.0

    def test_out_of_range_is_clamped(self):
        assert parse_bounded("50", 1.0, 20.0) == 20.0
        assert parse_bounded("0.5", 1.0, 20.0) == 1.0
        assert parse_bounded("7", 1.0, 20.0) == 7.0
