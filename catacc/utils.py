"""Utility functions for catacc."""

from typing import Optional, Union

import numpy as np

NOT_AVAILABLE = "n/a"

Number = Union[int, float, np.integer, np.floating]


def signif(value: Number, digits: int = 3) -> float:
    """
    Round a value to a number of significant digits.

    Args:
        value: Value to round
        digits: Number of significant digits to keep

    Returns:
        Rounded value as float. Zero and non-finite values are returned as-is.
    """
    value = float(value)
    if value == 0 or not np.isfinite(value):
        return value
    return float(f"{value:.{digits}g}")


def format_number(value: Number) -> str:
    """
    Format a number for display.

    Integers and integer-valued floats are printed without a decimal part,
    so a class coded as 1.0 displays as "1".
    """
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    return np.format_float_positional(float(value), trim="-")


def format_cell(value: Optional[Union[Number, str]]) -> str:
    """Format a report cell, mapping missing values to the "n/a" sentinel."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, str):
        return value
    return format_number(value)
