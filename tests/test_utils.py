"""Tests for utility functions."""

import numpy as np

from catacc.utils import NOT_AVAILABLE, format_cell, format_number, signif


class TestSignif:
    """Tests for signif."""

    def test_three_digits(self):
        """Should keep three significant digits by default."""
        assert signif(2 / 3) == 0.667
        assert signif(0.0012345) == 0.00123
        assert signif(123456) == 123000.0

    def test_exact_values_unchanged(self):
        """Values with few digits should pass through."""
        assert signif(1.0) == 1.0
        assert signif(0.5) == 0.5

    def test_zero(self):
        """Zero should stay zero."""
        assert signif(0) == 0.0

    def test_custom_digits(self):
        """Should honor the requested number of digits."""
        assert signif(2 / 3, digits=1) == 0.7


class TestFormatNumber:
    """Tests for format_number."""

    def test_integers(self):
        """Python and numpy integers should print plainly."""
        assert format_number(3) == "3"
        assert format_number(np.int64(-2)) == "-2"

    def test_integer_valued_floats(self):
        """Integer-valued floats should drop the decimal part."""
        assert format_number(1.0) == "1"
        assert format_number(np.float64(10.0)) == "10"

    def test_fractions(self):
        """Fractional values should use their shortest representation."""
        assert format_number(1.5) == "1.5"
        assert format_number(0.667) == "0.667"


class TestFormatCell:
    """Tests for format_cell."""

    def test_none_is_sentinel(self):
        """None should render as the "n/a" sentinel."""
        assert format_cell(None) == NOT_AVAILABLE == "n/a"

    def test_strings_pass_through(self):
        """Strings should be returned unchanged."""
        assert format_cell("7") == "7"

    def test_numbers(self):
        """Numbers should be formatted for display."""
        assert format_cell(0.25) == "0.25"
        assert format_cell(12) == "12"
