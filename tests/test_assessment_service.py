"""
tests/test_assessment_service.py — Assessment Orchestrator Tests
=================================================================
Covers the repository-level pipeline with an in-memory fake, and the
SQLAlchemy-backed ``assess_applicant`` / ``get_assessment_summary`` paths
against the shared SQLite fixtures.
"""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from impact_os.database.models import Applicant, CurrentStatus, OfferType, SkillDomain
from impact_os.engine.triad import ApplicantSignals, SkillTriad
from impact_os.services import assessment_service
from impact_os.services.assessment_service import (
    ApplicantNotFoundError,
    AssessmentResult,
    assess,
)


class FakeRepository:
    """In-memory ApplicantRepository."""

    def __init__(self, applicants: dict[str, ApplicantSignals] | None = None):
        self.applicants = applicants or {}
        self.saved: list[tuple[str, AssessmentResult]] = []

    def load_applicant(self, applicant_id):
        return self.applicants.get(applicant_id)

    def save_assessment(self, applicant_id, result):
        self.saved.append((applicant_id, result))


def _seed_applicant(engine, **fields) -> str:
    with Session(engine) as session:
        applicant = Applicant(first_name=fields.pop("first_name", "Ada"), **fields)
        session.add(applicant)
        session.commit()
        return applicant.id


# ---------------------------------------------------------------------------
# assess() — pure composition over a repository
# ---------------------------------------------------------------------------
class TestAssess:
    def test_unknown_applicant_raises_with_id(self):
        repo = FakeRepository()
        with pytest.raises(ApplicantNotFoundError) as exc_info:
            assess(repo, "missing-id")
        assert exc_info.value.applicant_id == "missing-id"
        assert "missing-id" in str(exc_info.value)
        assert repo.saved == []

    def test_full_support_with_stipend(self):
        repo = FakeRepository({
            "a1": ApplicantSignals(
                readiness_score=2,
                tried_learning_skill=True,
                action_orientation=1,
                market_awareness=1,
                current_status=CurrentStatus.UNEMPLOYED,
            ),
        })
        result = assess(repo, "a1")

        assert result.triad == SkillTriad(technical=55, soft=25, commercial=25)
        assert result.offer_type == OfferType.FULL_SUPPORT
        assert result.receives_stipend is True
        assert result.primary_focus == SkillDomain.COMMERCIAL
        assert result.kpi_targets.graduation_day == 90

    def test_saves_exactly_once(self):
        repo = FakeRepository({"a1": ApplicantSignals(readiness_score=1)})
        result = assess(repo, "a1")
        assert repo.saved == [("a1", result)]

    def test_income_blocks_stipend_and_changes_offer(self):
        repo = FakeRepository({
            "a2": ApplicantSignals(
                readiness_score=1,
                current_monthly_income=15_000,
                current_status=CurrentStatus.UNEMPLOYED,
            ),
        })
        result = assess(repo, "a2")
        assert result.offer_type == OfferType.SKILLS_ONLY
        assert result.receives_stipend is False

    def test_to_dict_shape(self):
        repo = FakeRepository({"a3": ApplicantSignals(readiness_score=4)})
        body = assess(repo, "a3").to_dict()
        assert body["offer_type"] == "ACCELERATOR"
        assert body["primary_focus"] == "COMMERCIAL"
        assert body["triad"] == {"technical": 80, "soft": 0, "commercial": 0}
        assert body["kpi_targets"]["graduationDay"] == 60


# ---------------------------------------------------------------------------
# assess_applicant() — SQLAlchemy-backed
# ---------------------------------------------------------------------------
class TestAssessApplicant:
    def test_persists_all_derived_fields(self, db_engine):
        applicant_id = _seed_applicant(
            db_engine,
            readiness_score=2,
            tried_learning_skill=True,
            action_orientation=1,
            market_awareness=1,
            current_status=CurrentStatus.STUDENT.value,
        )

        result = assessment_service.assess_applicant(db_engine, applicant_id)

        with Session(db_engine) as session:
            row = session.get(Applicant, applicant_id)
            assert row.triad_technical == 55
            assert row.triad_soft == 25
            assert row.triad_commercial == 25
            assert row.offer_type == OfferType.FULL_SUPPORT.value
            assert row.receives_stipend is True
            assert row.primary_focus == SkillDomain.COMMERCIAL.value
            assert row.kpi_targets == result.kpi_targets.to_dict()
            assert row.assessed_at is not None

    def test_optional_kpi_values_stored_as_null(self, db_engine):
        applicant_id = _seed_applicant(
            db_engine, readiness_score=3.5, current_monthly_income=5000,
        )
        result = assessment_service.assess_applicant(db_engine, applicant_id)
        assert result.offer_type == OfferType.CATALYST_TRACK

        with Session(db_engine) as session:
            row = session.get(Applicant, applicant_id)
            assert row.kpi_targets["weeklyXp"] is None
            assert row.kpi_targets["incomeTarget"] == 30_000

    def test_rerun_overwrites_previous_result(self, db_engine):
        applicant_id = _seed_applicant(
            db_engine, readiness_score=1,
            current_status=CurrentStatus.UNEMPLOYED.value,
        )
        first = assessment_service.assess_applicant(db_engine, applicant_id)
        assert first.offer_type == OfferType.FULL_SUPPORT

        with Session(db_engine) as session:
            session.get(Applicant, applicant_id).readiness_score = 4
            session.commit()

        second = assessment_service.assess_applicant(db_engine, applicant_id)
        assert second.offer_type == OfferType.ACCELERATOR

        with Session(db_engine) as session:
            row = session.get(Applicant, applicant_id)
            assert row.triad_technical == 80
            assert row.offer_type == OfferType.ACCELERATOR.value
            assert row.receives_stipend is False

    def test_repeated_runs_are_stable(self, db_engine):
        applicant_id = _seed_applicant(db_engine, readiness_score=2)
        first = assessment_service.assess_applicant(db_engine, applicant_id)
        second = assessment_service.assess_applicant(db_engine, applicant_id)
        assert first == second

    def test_unknown_applicant(self, db_engine):
        with pytest.raises(ApplicantNotFoundError):
            assessment_service.assess_applicant(db_engine, "nope")


# ---------------------------------------------------------------------------
# get_assessment_summary()
# ---------------------------------------------------------------------------
class TestAssessmentSummary:
    def test_highest_and_lowest_axis(self, db_engine):
        applicant_id = _seed_applicant(
            db_engine,
            first_name="Chioma",
            skill_track="web",
            triad_technical=72.2,
            triad_soft=40.4,
            triad_commercial=89.5,
            offer_type=OfferType.ACCELERATOR.value,
            primary_focus=SkillDomain.SOFT.value,
        )
        summary = assessment_service.get_assessment_summary(db_engine, applicant_id)

        assert summary.first_name == "Chioma"
        assert summary.highest_axis == "commercial"
        assert summary.highest_score == 90
        assert summary.lowest_axis == "soft"
        assert summary.lowest_score == 40
        assert summary.offer_type == "ACCELERATOR"
        assert summary.skill_track == "web"

    def test_unassessed_axes_read_as_zero(self, db_engine):
        applicant_id = _seed_applicant(db_engine)
        summary = assessment_service.get_assessment_summary(db_engine, applicant_id)

        assert summary.triad == {"technical": 0, "soft": 0, "commercial": 0}
        # Ties keep technical, soft, commercial order
        assert summary.highest_axis == "technical"
        assert summary.lowest_axis == "commercial"
        assert summary.offer_type is None
        assert summary.receives_stipend is False

    def test_summary_after_assessment(self, db_engine):
        applicant_id = _seed_applicant(
            db_engine, readiness_score=2, action_orientation=3, market_awareness=1,
        )
        assessment_service.assess_applicant(db_engine, applicant_id)
        body = assessment_service.get_assessment_summary(db_engine, applicant_id).to_dict()

        assert body["highest_axis"] == "soft"
        assert body["highest_score"] == 75
        assert body["lowest_axis"] == "commercial"
        assert body["kpi_targets"]["weeklyArena"] == 20

    def test_unknown_applicant(self, db_engine):
        with pytest.raises(ApplicantNotFoundError):
            assessment_service.get_assessment_summary(db_engine, "nope")
