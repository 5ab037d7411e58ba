"""
impact_os.api.routes.assessment — Run and read applicant assessments
=====================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from impact_os.api.deps import get_current_staff, get_engine
from impact_os.services import assessment_service
from impact_os.services.assessment_service import ApplicantNotFoundError

router = APIRouter(prefix="/assessment", tags=["assessment"])


@router.post("/{applicant_id}/assess")
def assess_applicant(
    applicant_id: str,
    staff: dict = Depends(get_current_staff),
    engine=Depends(get_engine),
):
    """Score the applicant and store triad, offer, stipend, focus and KPIs."""
    try:
        result = assessment_service.assess_applicant(engine, applicant_id)
    except ApplicantNotFoundError as exc:
        raise HTTPException(404, str(exc))
    return result.to_dict()


@router.get("/{applicant_id}/summary")
def get_assessment_summary(applicant_id: str, engine=Depends(get_engine)):
    try:
        summary = assessment_service.get_assessment_summary(engine, applicant_id)
    except ApplicantNotFoundError as exc:
        raise HTTPException(404, str(exc))
    return summary.to_dict()
