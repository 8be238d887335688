"""Shared fixtures for aidmatch-core tests."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from aidmatch_core import (
    EligibilityPolicy,
    EmploymentStatus,
    HouseholdProfile,
    MonthlyExpenses,
    PovertyAssessor,
)


@pytest.fixture
def policy() -> EligibilityPolicy:
    """Policy with the published defaults."""
    return EligibilityPolicy()


@pytest.fixture
def assessor(policy: EligibilityPolicy) -> PovertyAssessor:
    return PovertyAssessor(policy)


@pytest.fixture
def make_profile():
    """Factory for household profiles with sensible defaults."""

    def _make(
        monthly_income="1200",
        household_size=1,
        dependents=0,
        rent="0",
        food="0",
        utilities="0",
        employment_status=EmploymentStatus.EMPLOYED,
        **kwargs,
    ) -> HouseholdProfile:
        return HouseholdProfile(
            monthly_income=Decimal(monthly_income),
            monthly_expenses=MonthlyExpenses(
                rent_or_mortgage=Decimal(rent),
                food=Decimal(food),
                utilities=Decimal(utilities),
            ),
            household_size=household_size,
            dependents=dependents,
            employment_status=employment_status,
            zip_code=kwargs.pop("zip_code", "10001"),
            **kwargs,
        )

    return _make


@pytest.fixture
def rent_burdened_single(make_profile) -> HouseholdProfile:
    """$1,200/mo income, $900 rent, one person, no dependents."""
    return make_profile(monthly_income="1200", rent="900", food="350", utilities="150")


@pytest.fixture
def zero_income_family(make_profile) -> HouseholdProfile:
    """No income, four people, two children, unemployed."""
    return make_profile(
        monthly_income="0",
        household_size=4,
        dependents=2,
        rent="1000",
        food="400",
        employment_status=EmploymentStatus.UNEMPLOYED,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
