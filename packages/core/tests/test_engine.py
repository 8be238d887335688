"""Tests for the eligibility engine."""

from dataclasses import replace
from decimal import Decimal

import pytest

from aidmatch_core import (
    EligibilityEngine,
    EligibilityReport,
    ProgramCatalog,
    ProgramVerdict,
    evaluate,
)
from aidmatch_core.catalog import DEFAULT_PROGRAMS
from aidmatch_core.engine import order_verdicts
from aidmatch_core.exceptions import ValidationError
from aidmatch_core.models import INSUFFICIENT_DATA_REASON
from aidmatch_core.programs import INELIGIBLE_LIKELIHOOD_CEILING


def _verdict(program_id: str, eligible: bool, likelihood: int) -> ProgramVerdict:
    return ProgramVerdict(
        program_id=program_id,
        program_name=program_id.upper(),
        category="Test",
        eligible=eligible,
        reason="test",
        processing_days=10,
        approval_likelihood_percent=likelihood,
    )


@pytest.fixture
def engine(policy) -> EligibilityEngine:
    return EligibilityEngine(policy)


class TestVerdictOrdering:
    """Eligible first, then descending likelihood, ties in catalog order."""

    def test_mixed_report(self):
        verdicts = [
            _verdict("a", True, 90),
            _verdict("d", False, 50),
            _verdict("b", True, 40),
            _verdict("c", True, 90),
            _verdict("e", False, 50),
        ]
        ordered = [v.program_id for v in order_verdicts(verdicts)]
        assert ordered == ["a", "c", "b", "d", "e"]

    def test_ineligible_sorted_by_likelihood(self):
        verdicts = [_verdict("x", False, 10), _verdict("y", False, 30)]
        assert [v.program_id for v in order_verdicts(verdicts)] == ["y", "x"]


class TestEligibilityEngine:
    """Test suite for EligibilityEngine.evaluate."""

    def test_one_verdict_per_program(self, engine, assessor, rent_burdened_single):
        report = engine.evaluate(rent_burdened_single, assessor.assess(rent_burdened_single))

        assert isinstance(report, EligibilityReport)
        assert sorted(v.program_id for v in report.verdicts) == sorted(engine.catalog.program_ids)
        assert report.partial is False
        assert report.catalog_version == "2025.1"

    def test_rent_burden_scenario(self, engine, assessor, rent_burdened_single):
        report = engine.evaluate(rent_burdened_single, assessor.assess(rent_burdened_single))

        snap = report.get("snap")
        assert snap.eligible
        assert snap.estimated_monthly_benefit == Decimal("23")
        assert snap.approval_likelihood_percent == 77

        hcv = report.get("hcv")
        assert hcv.eligible
        assert hcv.benefit_note == "Varies"
        assert hcv.format_benefit() == "Varies"

        assert report.get("medicaid").eligible
        for program_id in ("wic", "liheap", "tanf", "eitc", "ctc"):
            assert not report.get(program_id).eligible

    def test_zero_income_scenario(self, engine, assessor, zero_income_family):
        report = engine.evaluate(zero_income_family, assessor.assess(zero_income_family))

        snap = report.get("snap")
        tanf = report.get("tanf")
        assert snap.eligible and snap.approval_likelihood_percent >= 80
        assert tanf.eligible and tanf.approval_likelihood_percent >= 80
        assert snap.estimated_monthly_benefit == Decimal("975")
        assert tanf.estimated_monthly_benefit == Decimal("540")
        assert report.get("ctc").estimated_annual_benefit == Decimal("4400")

    def test_zero_income_ordering(self, engine, assessor, zero_income_family):
        report = engine.evaluate(zero_income_family, assessor.assess(zero_income_family))

        assert [v.program_id for v in report.verdicts] == [
            "snap", "medicaid", "tanf", "ctc", "wic", "hcv", "liheap", "eitc",
        ]

    def test_report_summary(self, engine, assessor, zero_income_family):
        report = engine.evaluate(zero_income_family, assessor.assess(zero_income_family))

        assert report.eligible_count == 6
        assert report.total_estimated_monthly_benefit == Decimal("975") + Decimal("540") + Decimal("55")
        assert report.total_estimated_annual_benefit == Decimal("4400")
        assert report.eligible_categories[0] == "Food"

    def test_ineligible_programs_have_no_benefit(self, engine, assessor, rent_burdened_single):
        report = engine.evaluate(rent_burdened_single, assessor.assess(rent_burdened_single))

        for verdict in report.ineligible_verdicts:
            assert verdict.format_benefit() is None
            assert not verdict.can_apply

    def test_idempotent(self, engine, assessor, zero_income_family):
        assessment = assessor.assess(zero_income_family)

        first = engine.evaluate(zero_income_family, assessment)
        second = engine.evaluate(zero_income_family, assessment)

        assert first.model_dump_json() == second.model_dump_json()

    def test_mismatched_assessment_rejected(self, engine, assessor, rent_burdened_single, zero_income_family):
        with pytest.raises(ValidationError):
            engine.evaluate(rent_burdened_single, assessor.assess(zero_income_family))

    def test_module_level_evaluate(self, policy, assessor, rent_burdened_single):
        report = evaluate(rent_burdened_single, assessor.assess(rent_burdened_single), policy=policy)
        assert report.get("snap").eligible

    def test_empty_catalog_argument(self, engine, assessor, rent_burdened_single):
        report = engine.evaluate(rent_burdened_single, assessor.assess(rent_burdened_single), ProgramCatalog(()))

        assert report.verdicts == ()
        assert report.eligible_count == 0
        assert report.partial is False

    def test_empty_catalog_on_engine(self, policy, assessor, rent_burdened_single):
        engine = EligibilityEngine(policy, ProgramCatalog((), version="empty"))

        report = engine.evaluate(rent_burdened_single, assessor.assess(rent_burdened_single))

        assert report.verdicts == ()
        assert report.catalog_version == "empty"

    def test_ineligible_scores_stay_below_ceiling(self, engine, assessor, zero_income_family):
        """Programs failing a non-income criterion report a capped informational score."""
        report = engine.evaluate(zero_income_family, assessor.assess(zero_income_family))

        assert report.get("eitc").approval_likelihood_percent == INELIGIBLE_LIKELIHOOD_CEILING
        assert report.get("liheap").approval_likelihood_percent == INELIGIBLE_LIKELIHOOD_CEILING
        lowest_eligible = min(v.approval_likelihood_percent for v in report.eligible_verdicts)
        assert all(
            v.approval_likelihood_percent <= lowest_eligible for v in report.ineligible_verdicts
        )


class TestFaultIsolation:
    """A failing rule downgrades only its own program."""

    @pytest.fixture
    def faulty_catalog(self) -> ProgramCatalog:
        def broken_rule(profile, assessment, policy):
            raise RuntimeError("rule service unavailable")

        definitions = tuple(
            replace(d, eligibility_rule=broken_rule) if d.id == "snap" else d
            for d in DEFAULT_PROGRAMS
        )
        return ProgramCatalog(definitions)

    def test_failed_program_is_indeterminate(self, engine, assessor, zero_income_family, faulty_catalog):
        report = engine.evaluate(zero_income_family, assessor.assess(zero_income_family), faulty_catalog)

        snap = report.get("snap")
        assert snap.eligible is False
        assert snap.reason == INSUFFICIENT_DATA_REASON
        assert snap.indeterminate
        assert not snap.can_apply
        assert report.partial is True
        assert report.indeterminate_program_ids == ["snap"]
        assert report.warnings == ("Could not determine eligibility for Supplemental Nutrition Assistance Program (SNAP)",)

    def test_other_programs_unaffected(self, engine, assessor, zero_income_family, faulty_catalog):
        assessment = assessor.assess(zero_income_family)
        healthy = engine.evaluate(zero_income_family, assessment)
        degraded = engine.evaluate(zero_income_family, assessment, faulty_catalog)

        for verdict in healthy.verdicts:
            if verdict.program_id != "snap":
                assert degraded.get(verdict.program_id) == verdict
