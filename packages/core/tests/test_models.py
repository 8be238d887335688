"""Tests for core data models."""

from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from aidmatch_core import (
    EligibilityReport,
    HardshipType,
    HouseholdProfile,
    MonthlyExpenses,
    ProgramVerdict,
)


def _verdict(**overrides) -> ProgramVerdict:
    fields = dict(
        program_id="snap",
        program_name="SNAP",
        category="Food",
        eligible=True,
        reason="within limit",
        processing_days=30,
        approval_likelihood_percent=80,
    )
    fields.update(overrides)
    return ProgramVerdict(**fields)


class TestHouseholdProfile:
    """Test suite for HouseholdProfile."""

    def test_expense_total(self):
        expenses = MonthlyExpenses(
            rent_or_mortgage=Decimal("900"),
            food=Decimal("300"),
            utilities=Decimal("100"),
            medical=Decimal("50"),
            transportation=Decimal("80"),
            debt_payments=Decimal("40"),
            other=Decimal("30"),
        )
        assert expenses.total == Decimal("1500")

    def test_negative_expense_rejected(self):
        with pytest.raises(PydanticValidationError):
            MonthlyExpenses(food=Decimal("-1"))

    def test_annual_income(self):
        profile = HouseholdProfile(monthly_income=Decimal("1250"), household_size=1, zip_code="60617")
        assert profile.annual_income == Decimal("15000")

    def test_household_size_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            HouseholdProfile(monthly_income=Decimal("0"), household_size=0, zip_code="60617")

    def test_profile_is_frozen(self):
        profile = HouseholdProfile(monthly_income=Decimal("0"), household_size=1, zip_code="60617")
        with pytest.raises(PydanticValidationError):
            profile.household_size = 2

    def test_hardships_from_labels(self):
        profile = HouseholdProfile(
            monthly_income=Decimal("0"),
            household_size=1,
            zip_code="60617",
            selected_hardships=["Food Insecurity", "Medical Debt"],
        )
        assert profile.selected_hardships == frozenset(
            {HardshipType.FOOD_INSECURITY, HardshipType.MEDICAL_DEBT}
        )

    def test_has_vulnerability_is_case_insensitive(self):
        profile = HouseholdProfile(
            monthly_income=Decimal("0"),
            household_size=2,
            dependents=1,
            zip_code="60617",
            vulnerabilities=["Newborn in household"],
        )
        assert profile.has_vulnerability("newborn")
        assert not profile.has_vulnerability("disab")


class TestProgramVerdict:
    """Test suite for ProgramVerdict."""

    def test_monthly_and_annual_are_exclusive(self):
        with pytest.raises(PydanticValidationError):
            _verdict(estimated_monthly_benefit=Decimal("10"), estimated_annual_benefit=Decimal("120"))

    def test_indeterminate_cannot_be_eligible(self):
        with pytest.raises(PydanticValidationError):
            _verdict(indeterminate=True)

    def test_likelihood_bounds(self):
        with pytest.raises(PydanticValidationError):
            _verdict(approval_likelihood_percent=101)

    @pytest.mark.parametrize(
        "overrides,expected",
        [
            ({"estimated_monthly_benefit": Decimal("975")}, "$975/mo"),
            ({"estimated_annual_benefit": Decimal("4400")}, "$4,400/yr"),
            ({"benefit_note": "Coverage"}, "Coverage"),
            ({}, None),
        ],
    )
    def test_format_benefit(self, overrides, expected):
        assert _verdict(**overrides).format_benefit() == expected

    def test_can_apply_serialized(self):
        dumped = _verdict().model_dump()
        assert dumped["can_apply"] is True
        assert _verdict(eligible=False).can_apply is False


class TestEligibilityReport:
    """Test suite for EligibilityReport summaries."""

    def test_totals_only_count_eligible(self):
        report = EligibilityReport(
            verdicts=(
                _verdict(estimated_monthly_benefit=Decimal("200")),
                _verdict(program_id="tanf", category="Cash Assistance", estimated_monthly_benefit=Decimal("450")),
                _verdict(program_id="eitc", category="Tax Credit", estimated_annual_benefit=Decimal("3000")),
                _verdict(program_id="wic", eligible=False, estimated_monthly_benefit=Decimal("55")),
            ),
            catalog_version="test",
            poverty_level_percent=80,
        )

        assert report.eligible_count == 3
        assert report.total_estimated_monthly_benefit == Decimal("650")
        assert report.total_estimated_annual_benefit == Decimal("3000")
        assert report.eligible_categories == ["Food", "Cash Assistance", "Tax Credit"]
        assert report.get("wic").eligible is False
        assert report.get("missing") is None
