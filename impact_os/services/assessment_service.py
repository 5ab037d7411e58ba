"""
impact_os.services.assessment_service — Assessment Orchestrator
================================================================

Loads an applicant, runs the pure rules pipeline, and writes the derived
fields back in a single transaction:

  load → compute_triad → classify_offer → is_stipend_eligible
       → select_primary_focus → resolve_kpi_targets → save

Persistence sits behind :class:`ApplicantRepository` so :func:`assess` can
run against an in-memory fake.  :func:`assess_applicant` is the
SQLAlchemy-backed entry point used by the API.

Re-running an assessment overwrites the previous result; nothing
accumulates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

from sqlalchemy.orm import Session

from impact_os.constants import KPITarget
from impact_os.database.engine import get_session
from impact_os.database.models import Applicant, OfferType, SkillDomain
from impact_os.engine.currency import round_half_up
from impact_os.engine.offer import (
    classify_offer,
    is_stipend_eligible,
    resolve_kpi_targets,
)
from impact_os.engine.triad import (
    ApplicantSignals,
    SkillTriad,
    compute_triad,
    select_primary_focus,
)

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


class ApplicantNotFoundError(LookupError):
    """Raised when an assessment targets an applicant id that doesn't exist."""

    def __init__(self, applicant_id: str) -> None:
        super().__init__(f"Applicant {applicant_id} not found")
        self.applicant_id = applicant_id


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class AssessmentResult:
    """Everything the assessment derives for one applicant."""

    triad: SkillTriad
    offer_type: OfferType
    receives_stipend: bool
    primary_focus: SkillDomain
    kpi_targets: KPITarget

    def to_dict(self) -> dict:
        return {
            "triad": self.triad.to_dict(),
            "offer_type": self.offer_type.value,
            "receives_stipend": self.receives_stipend,
            "primary_focus": self.primary_focus.value,
            "kpi_targets": self.kpi_targets.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class AssessmentSummary:
    """Stored assessment plus strongest/weakest axis, for the offer email."""

    first_name: str
    triad: dict[str, float]
    highest_axis: str
    highest_score: int
    lowest_axis: str
    lowest_score: int
    offer_type: str | None
    receives_stipend: bool
    primary_focus: str | None
    kpi_targets: dict | None
    skill_track: str | None

    def to_dict(self) -> dict:
        return {
            "first_name": self.first_name,
            "triad": self.triad,
            "highest_axis": self.highest_axis,
            "highest_score": self.highest_score,
            "lowest_axis": self.lowest_axis,
            "lowest_score": self.lowest_score,
            "offer_type": self.offer_type,
            "receives_stipend": self.receives_stipend,
            "primary_focus": self.primary_focus,
            "kpi_targets": self.kpi_targets,
            "skill_track": self.skill_track,
        }


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------
class ApplicantRepository(Protocol):
    """Storage seam for the orchestrator."""

    def load_applicant(self, applicant_id: str) -> ApplicantSignals | None: ...

    def save_assessment(self, applicant_id: str, result: AssessmentResult) -> None: ...


def signals_from_row(row: Applicant) -> ApplicantSignals:
    """Snapshot the scoring inputs of an ORM row."""
    return ApplicantSignals(
        readiness_score=row.readiness_score,
        action_orientation=row.action_orientation,
        market_awareness=row.market_awareness,
        commitment_signal=row.commitment_signal,
        tried_learning_skill=bool(row.tried_learning_skill),
        tried_online_earning=bool(row.tried_online_earning),
        current_monthly_income=row.current_monthly_income,
        current_status=row.current_status,
        technical_probe=row.technical_probe,
        commercial_probe=row.commercial_probe,
        commitment_probe=row.commitment_probe,
        exposure_probe=row.exposure_probe,
    )


class SqlApplicantRepository:
    """:class:`ApplicantRepository` over an open SQLAlchemy session.

    The caller owns the session and therefore the commit.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def load_applicant(self, applicant_id: str) -> ApplicantSignals | None:
        row = self.session.get(Applicant, applicant_id)
        if row is None:
            return None
        return signals_from_row(row)

    def save_assessment(self, applicant_id: str, result: AssessmentResult) -> None:
        row = self.session.get(Applicant, applicant_id)
        if row is None:
            raise ApplicantNotFoundError(applicant_id)

        row.triad_technical = result.triad.technical
        row.triad_soft = result.triad.soft
        row.triad_commercial = result.triad.commercial
        row.offer_type = result.offer_type.value
        row.receives_stipend = result.receives_stipend
        row.primary_focus = result.primary_focus.value
        row.kpi_targets = result.kpi_targets.to_dict()
        row.assessed_at = datetime.now(UTC)
        self.session.flush()


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------
def assess(repository: ApplicantRepository, applicant_id: str) -> AssessmentResult:
    """Run the full pipeline for one applicant against *repository*.

    All five values are computed in memory before the single
    ``save_assessment`` call.

    Raises
    ------
    ApplicantNotFoundError
        If the repository has no applicant with *applicant_id*.
    """
    signals = repository.load_applicant(applicant_id)
    if signals is None:
        raise ApplicantNotFoundError(applicant_id)

    triad = compute_triad(signals)
    offer = classify_offer(signals.has_income, triad.technical)
    stipend = is_stipend_eligible(offer, signals.has_income, signals.current_status)
    focus = select_primary_focus(triad)
    targets = resolve_kpi_targets(offer)

    result = AssessmentResult(
        triad=triad,
        offer_type=offer,
        receives_stipend=stipend,
        primary_focus=focus,
        kpi_targets=targets,
    )
    repository.save_assessment(applicant_id, result)
    return result


def assess_applicant(engine: Engine, applicant_id: str) -> AssessmentResult:
    """Assess *applicant_id* and persist the result in one transaction."""
    with get_session(engine) as session:
        result = assess(SqlApplicantRepository(session), applicant_id)

    logger.info(
        "Assessed applicant %s: %s, stipend=%s",
        applicant_id, result.offer_type.value, result.receives_stipend,
    )
    return result


def get_assessment_summary(engine: Engine, applicant_id: str) -> AssessmentSummary:
    """Read the stored assessment and rank its axes.

    Unassessed axes read as 0.  Axes are ranked by score, descending; equal
    scores keep the order technical, soft, commercial.
    """
    with Session(engine) as session:
        row = session.get(Applicant, applicant_id)
        if row is None:
            raise ApplicantNotFoundError(applicant_id)

        triad = {
            "technical": row.triad_technical or 0,
            "soft": row.triad_soft or 0,
            "commercial": row.triad_commercial or 0,
        }
        ranked = sorted(triad.items(), key=lambda axis: axis[1], reverse=True)
        (highest_axis, highest), (lowest_axis, lowest) = ranked[0], ranked[-1]

        return AssessmentSummary(
            first_name=row.first_name,
            triad=triad,
            highest_axis=highest_axis,
            highest_score=round_half_up(highest),
            lowest_axis=lowest_axis,
            lowest_score=round_half_up(lowest),
            offer_type=row.offer_type,
            receives_stipend=bool(row.receives_stipend),
            primary_focus=row.primary_focus,
            kpi_targets=row.kpi_targets,
            skill_track=row.skill_track,
        )
