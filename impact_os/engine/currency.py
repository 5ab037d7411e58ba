"""
impact_os.engine.currency — Pure ledger arithmetic
===================================================

Arithmetic shared by the currency service and the API, kept free of DB I/O
so it can be unit-tested directly.
"""

from __future__ import annotations

import math

__all__ = ["decay_amount", "display_triad", "round_half_up"]

_DISPLAY_CAP = 100


def decay_amount(balance: int, rate: float) -> int:
    """Momentum to remove for one decay period.

    Uses ceiling rounding, so any positive balance loses at least 1
    (balance 1 at rate 0.1 decays by 1).  Non-positive balances decay by 0.
    """
    if balance <= 0:
        return 0
    return math.ceil(balance * rate)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up.

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``);
    scores shown to participants round 2.5 up to 3.
    """
    return math.floor(value + 0.5)


def display_triad(skill_xp: int, arena_points: int) -> dict:
    """Simplified triad for the participant currency page.

    Derived from ledger balances only, and intentionally NOT the intake
    scorer in :mod:`impact_os.engine.triad`: technical and soft both show
    one third of Skill XP (scaled by 1/10), commercial shows Arena Points
    scaled by 1/10, each capped at 100.
    """
    total_xp = skill_xp or 1
    per_axis = min(_DISPLAY_CAP, round_half_up(total_xp / 3 / 10))
    return {
        "technical": per_axis,
        "soft": per_axis,
        "commercial": min(_DISPLAY_CAP, round_half_up(arena_points / 10)),
        "total_xp": skill_xp,
        "arena_points": arena_points,
        "is_balanced": True,
        "threshold_met": {
            "technical": False,
            "soft": False,
            "commercial": False,
        },
    }
