"""Numeric helpers shared by the scoring modules."""

import math

SCORE_MIN = 0
SCORE_MAX = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def clamp_score(value: float) -> int:
    """Round a raw score and clamp it to [0, 100]."""
    return max(SCORE_MIN, min(SCORE_MAX, round_half_up(value)))


def bool_score(passed: bool) -> int:
    """Map a pass/fail check onto the 0/100 score scale."""
    return SCORE_MAX if passed else SCORE_MIN


def percentage(part: int, whole: int) -> int:
    """Share of ``part`` in ``whole`` as a rounded percentage (0 when empty)."""
    if whole <= 0:
        return 0
    return clamp_score(part / whole * 100)
