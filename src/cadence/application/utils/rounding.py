"""Rounding helpers shared by the scheduling components."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero for positive values.

    Python's built-in round() uses banker's rounding (round(14.5) == 14),
    which would shorten some intervals by a day.
    """
    return math.floor(value + 0.5)
