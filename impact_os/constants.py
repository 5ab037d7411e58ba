"""
impact_os.constants — Program Policy Constants
===============================================

Single source of truth for the assessment policy tables.  Everything here is
immutable: lookup tables are ``MappingProxyType`` views and status sets are
``frozenset``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from types import MappingProxyType

from impact_os.database.models import CurrentStatus, OfferType

# ---------------------------------------------------------------------------
# Triad scoring thresholds
# ---------------------------------------------------------------------------
TRIAD_MIN = 0
TRIAD_MAX = 100

# A probe answer longer than this counts as a considered response.
PROBE_DETAIL_CHARS = 100

# ---------------------------------------------------------------------------
# Offer classification brackets (lower bound inclusive)
# ---------------------------------------------------------------------------
ADVANCED_TECHNICAL = 70
INTERMEDIATE_TECHNICAL = 40

# ---------------------------------------------------------------------------
# Stipend policy
# ---------------------------------------------------------------------------
STIPEND_QUALIFYING_STATUSES: frozenset[str] = frozenset({
    CurrentStatus.UNEMPLOYED,
    CurrentStatus.UNDEREMPLOYED,
    CurrentStatus.CAREGIVER,
    CurrentStatus.STUDENT,
})


# ---------------------------------------------------------------------------
# KPI targets per offer
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class KPITarget:
    """Weekly and graduation targets for one offer type.

    ``income_target`` is in NGN.  ``None`` means the target is optional for
    that offer.
    """

    weekly_xp: int | None
    weekly_arena: int
    income_target: int | None
    graduation_day: int

    def to_dict(self) -> dict:
        """Camel-cased JSON shape stored on ``applicants.kpi_targets``."""
        d = asdict(self)
        return {
            "weeklyXp": d["weekly_xp"],
            "weeklyArena": d["weekly_arena"],
            "incomeTarget": d["income_target"],
            "graduationDay": d["graduation_day"],
        }


KPI_TARGETS: MappingProxyType[OfferType, KPITarget] = MappingProxyType({
    OfferType.FULL_SUPPORT: KPITarget(
        weekly_xp=100, weekly_arena=20, income_target=10_000, graduation_day=90,
    ),
    OfferType.SKILLS_ONLY: KPITarget(
        weekly_xp=150, weekly_arena=30, income_target=None, graduation_day=90,
    ),
    OfferType.ACCELERATOR: KPITarget(
        weekly_xp=50, weekly_arena=50, income_target=10_000, graduation_day=60,  # first client
    ),
    OfferType.CATALYST_TRACK: KPITarget(
        weekly_xp=None, weekly_arena=50, income_target=30_000, graduation_day=45,  # 3+ clients
    ),
})

# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------
DEFAULT_DECAY_RATE = 0.1
DEFAULT_HISTORY_LIMIT = 50
DECAY_REASON = "Momentum decay (inactivity)"
