"""
Numeric helpers shared by the scoring modules.

``round_half_up`` is used for every user-visible integer score.  Python's
built-in ``round()`` rounds half to even (``round(72.5) == 72``), which would
shift scores that sit exactly on a .5 boundary and, through the grade and
recommendation thresholds, change verdicts.
"""

from __future__ import annotations

import math


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding towards +inf."""
    return int(math.floor(value + 0.5))
