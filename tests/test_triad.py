"""
tests/test_triad.py — Unit Tests for the Skill Triad Scorer
============================================================

Pure calculation tests (no I/O, no database).
"""

from __future__ import annotations

import pytest

from impact_os.database.models import SkillDomain
from impact_os.engine.triad import (
    ApplicantSignals,
    SkillTriad,
    compute_triad,
    select_primary_focus,
)

_LONG = "x" * 101
_EXACTLY_100 = "x" * 100


# ---------------------------------------------------------------------------
# compute_triad
# ---------------------------------------------------------------------------
class TestComputeTriad:
    def test_empty_signals_score_zero(self):
        assert compute_triad(ApplicantSignals()) == SkillTriad(0, 0, 0)

    def test_weighted_signals(self):
        triad = compute_triad(ApplicantSignals(
            readiness_score=2,
            action_orientation=1,
            commitment_signal=2,
            market_awareness=1,
        ))
        assert triad.technical == 40
        assert triad.soft == 25 + 30
        assert triad.commercial == 25

    def test_behavioural_bonuses(self):
        triad = compute_triad(ApplicantSignals(
            tried_learning_skill=True,
            tried_online_earning=True,
            current_monthly_income=5000,
        ))
        assert triad.technical == 15
        assert triad.soft == 0
        assert triad.commercial == 20 + 25

    def test_zero_income_gives_no_commercial_bonus(self):
        assert compute_triad(ApplicantSignals(current_monthly_income=0)).commercial == 0
        assert compute_triad(ApplicantSignals(current_monthly_income=None)).commercial == 0

    def test_probe_bonus_requires_more_than_100_chars(self):
        short = compute_triad(ApplicantSignals(
            technical_probe=_EXACTLY_100,
            commercial_probe=_EXACTLY_100,
            commitment_probe=_EXACTLY_100,
            exposure_probe=_EXACTLY_100,
        ))
        assert short == SkillTriad(0, 0, 0)

        detailed = compute_triad(ApplicantSignals(
            technical_probe=_LONG,
            commercial_probe=_LONG,
            commitment_probe=_LONG,
            exposure_probe=_LONG,
        ))
        assert detailed.technical == 10
        assert detailed.soft == 10 + 5
        assert detailed.commercial == 10 + 5

    def test_exposure_probe_feeds_soft_and_commercial(self):
        triad = compute_triad(ApplicantSignals(exposure_probe=_LONG))
        assert triad == SkillTriad(technical=0, soft=5, commercial=5)

    def test_axes_clamped_at_100(self):
        triad = compute_triad(ApplicantSignals(
            readiness_score=10,
            action_orientation=10,
            market_awareness=10,
            tried_learning_skill=True,
        ))
        assert triad == SkillTriad(100, 100, 100)

    def test_negative_signals_clamped_at_zero(self):
        triad = compute_triad(ApplicantSignals(
            readiness_score=-5,
            action_orientation=-3,
            commitment_signal=-3,
            market_awareness=-4,
            tried_online_earning=True,
        ))
        assert triad == SkillTriad(0, 0, 0)

    @pytest.mark.parametrize("value", [-1e9, -1, 0, 0.5, 3, 4.99, 1e9])
    def test_every_axis_in_range(self, value):
        triad = compute_triad(ApplicantSignals(
            readiness_score=value,
            action_orientation=value,
            commitment_signal=value,
            market_awareness=value,
            tried_learning_skill=True,
            tried_online_earning=True,
            current_monthly_income=value,
            exposure_probe=_LONG,
        ))
        for axis in (triad.technical, triad.soft, triad.commercial):
            assert 0 <= axis <= 100

    def test_axes_are_not_normalised_to_each_other(self):
        triad = compute_triad(ApplicantSignals(readiness_score=3))
        assert (triad.technical, triad.soft, triad.commercial) == (60, 0, 0)

    def test_has_income(self):
        assert ApplicantSignals(current_monthly_income=1).has_income
        assert not ApplicantSignals(current_monthly_income=0).has_income
        assert not ApplicantSignals().has_income


# ---------------------------------------------------------------------------
# select_primary_focus
# ---------------------------------------------------------------------------
class TestPrimaryFocus:
    def test_lowest_axis_wins(self):
        assert select_primary_focus(SkillTriad(80, 20, 60)) == SkillDomain.SOFT
        assert select_primary_focus(SkillTriad(10, 20, 60)) == SkillDomain.TECHNICAL
        assert select_primary_focus(SkillTriad(80, 90, 5)) == SkillDomain.COMMERCIAL

    def test_three_way_tie_is_commercial(self):
        assert select_primary_focus(SkillTriad(50, 50, 50)) == SkillDomain.COMMERCIAL

    def test_technical_soft_tie_is_technical(self):
        assert select_primary_focus(SkillTriad(30, 30, 90)) == SkillDomain.TECHNICAL

    def test_commercial_ties_beat_other_axes(self):
        assert select_primary_focus(SkillTriad(20, 70, 20)) == SkillDomain.COMMERCIAL
        assert select_primary_focus(SkillTriad(70, 20, 20)) == SkillDomain.COMMERCIAL
