"""
impact_os.engine.triad — Skill Triad Scorer
============================================

Pure scoring stage.  No DB I/O: the orchestrator hands in an
:class:`ApplicantSignals` snapshot and gets a :class:`SkillTriad` back.

Each axis is an additive sum of weighted signals and flat bonuses, clamped
to ``[0, 100]`` independently.  The axes are not normalised against each
other, so they do not sum to any constant.
"""

from __future__ import annotations

from dataclasses import dataclass

from impact_os.constants import PROBE_DETAIL_CHARS, TRIAD_MAX, TRIAD_MIN
from impact_os.database.models import SkillDomain

__all__ = [
    "ApplicantSignals",
    "SkillTriad",
    "compute_triad",
    "select_primary_focus",
]

# ---------------------------------------------------------------------------
# Weights
# ---------------------------------------------------------------------------
_READINESS_WEIGHT = 20
_ACTION_WEIGHT = 25
_COMMITMENT_WEIGHT = 15
_MARKET_WEIGHT = 25

_TRIED_LEARNING_BONUS = 15
_TRIED_EARNING_BONUS = 20
_HAS_INCOME_BONUS = 25
_TECHNICAL_PROBE_BONUS = 10
_COMMERCIAL_PROBE_BONUS = 10
_COMMITMENT_PROBE_BONUS = 10
_EXPOSURE_PROBE_BONUS = 5  # credited to soft AND commercial


@dataclass(frozen=True, slots=True)
class ApplicantSignals:
    """Everything the rules engine reads from an applicant.

    All fields are optional; a missing value contributes nothing.
    """

    readiness_score: float | None = None
    action_orientation: float | None = None
    market_awareness: float | None = None
    commitment_signal: float | None = None
    tried_learning_skill: bool = False
    tried_online_earning: bool = False
    current_monthly_income: float | None = None
    current_status: str | None = None
    technical_probe: str | None = None
    commercial_probe: str | None = None
    commitment_probe: str | None = None
    exposure_probe: str | None = None

    @property
    def has_income(self) -> bool:
        return (self.current_monthly_income or 0) > 0


@dataclass(frozen=True, slots=True)
class SkillTriad:
    """Technical / soft / commercial scores, each in ``[0, 100]``."""

    technical: float
    soft: float
    commercial: float

    def to_dict(self) -> dict[str, float]:
        return {
            "technical": self.technical,
            "soft": self.soft,
            "commercial": self.commercial,
        }


def _clamp(value: float) -> float:
    return max(TRIAD_MIN, min(TRIAD_MAX, value))


def _is_detailed(probe: str | None) -> bool:
    return bool(probe) and len(probe) > PROBE_DETAIL_CHARS


def compute_triad(signals: ApplicantSignals) -> SkillTriad:
    """Score *signals* into a :class:`SkillTriad`.

    This is a PURE, total function: there are no error cases, and negative
    or oversized inputs are absorbed by the per-axis clamp.
    """
    technical = 0.0
    soft = 0.0
    commercial = 0.0

    # Weighted intake signals
    technical += (signals.readiness_score or 0) * _READINESS_WEIGHT
    soft += (signals.action_orientation or 0) * _ACTION_WEIGHT
    soft += (signals.commitment_signal or 0) * _COMMITMENT_WEIGHT
    commercial += (signals.market_awareness or 0) * _MARKET_WEIGHT

    # Behavioural bonuses
    if signals.tried_learning_skill:
        technical += _TRIED_LEARNING_BONUS
    if signals.tried_online_earning:
        commercial += _TRIED_EARNING_BONUS
    if signals.has_income:
        commercial += _HAS_INCOME_BONUS

    # Probe depth
    if _is_detailed(signals.technical_probe):
        technical += _TECHNICAL_PROBE_BONUS
    if _is_detailed(signals.commercial_probe):
        commercial += _COMMERCIAL_PROBE_BONUS
    if _is_detailed(signals.commitment_probe):
        soft += _COMMITMENT_PROBE_BONUS
    if _is_detailed(signals.exposure_probe):
        soft += _EXPOSURE_PROBE_BONUS
        commercial += _EXPOSURE_PROBE_BONUS

    return SkillTriad(
        technical=_clamp(technical),
        soft=_clamp(soft),
        commercial=_clamp(commercial),
    )


def select_primary_focus(triad: SkillTriad) -> SkillDomain:
    """Return the weakest axis.

    Ties resolve in the fixed order COMMERCIAL, TECHNICAL, SOFT: a three-way
    tie yields COMMERCIAL and a technical/soft tie yields TECHNICAL.
    """
    lowest = min(triad.technical, triad.soft, triad.commercial)
    if lowest == triad.commercial:
        return SkillDomain.COMMERCIAL
    if lowest == triad.technical:
        return SkillDomain.TECHNICAL
    return SkillDomain.SOFT
