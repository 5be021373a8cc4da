"""
Shared risk-band helpers
────────────────────────
Every analyzer owns its own keyword tables; only the severity ordering and
the score → band lookup live here.
"""

from typing import Sequence, Tuple

# Ascending severity
RISK_LEVELS = ("safe", "low", "medium", "high", "critical")


def band_for(score: int, bands: Sequence[Tuple[int, str]]) -> str:
    """Return the first band whose minimum is <= score.

    `bands` is ordered from the highest breakpoint down; the last entry is
    the floor band and is returned for anything below every breakpoint.
    """
    for minimum, name in bands:
        if score >= minimum:
            return name
    return bands[-1][1]


def clamp_percentage(score: int) -> int:
    return max(0, min(100, score))
