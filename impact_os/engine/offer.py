"""
impact_os.engine.offer — Offer, Stipend & KPI Rules
====================================================

Pure decision stages that run after the triad scorer:

  has_income + technical → Offer → Stipend eligibility → KPI targets

Only the technical axis feeds the offer decision.
"""

from __future__ import annotations

from impact_os.constants import (
    ADVANCED_TECHNICAL,
    INTERMEDIATE_TECHNICAL,
    KPI_TARGETS,
    STIPEND_QUALIFYING_STATUSES,
    KPITarget,
)
from impact_os.database.models import OfferType

__all__ = ["classify_offer", "is_stipend_eligible", "resolve_kpi_targets"]


def classify_offer(has_income: bool, technical: float) -> OfferType:
    """Map income status and technical score to an :class:`OfferType`.

    ============  ===========  ==============
    has_income    technical    offer
    ============  ===========  ==============
    False         < 70         FULL_SUPPORT
    False         >= 70        ACCELERATOR
    True          < 40         SKILLS_ONLY
    True          40 – 69      ACCELERATOR
    True          >= 70        CATALYST_TRACK
    ============  ===========  ==============

    Boundary values fall into the upper bracket.
    """
    if not has_income:
        if technical < ADVANCED_TECHNICAL:
            return OfferType.FULL_SUPPORT
        return OfferType.ACCELERATOR

    if technical < INTERMEDIATE_TECHNICAL:
        return OfferType.SKILLS_ONLY
    if technical < ADVANCED_TECHNICAL:
        return OfferType.ACCELERATOR
    return OfferType.CATALYST_TRACK


def is_stipend_eligible(
    offer: OfferType, has_income: bool, status: str | None
) -> bool:
    """True only for FULL_SUPPORT applicants with no income and a qualifying status."""
    if offer != OfferType.FULL_SUPPORT:
        return False
    if has_income:
        return False
    return status is not None and status in STIPEND_QUALIFYING_STATUSES


def resolve_kpi_targets(offer: OfferType) -> KPITarget:
    # Every OfferType has an entry; a KeyError here is a programming error.
    return KPI_TARGETS[offer]
