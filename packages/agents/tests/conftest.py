"""Shared fixtures for aidmatch-agents tests."""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from aidmatch_core import EmploymentStatus, HouseholdProfile, MonthlyExpenses
from aidmatch_core.config import EligibilityPolicy

from aidmatch_agents.config import AidMatchConfig, OracleConfig, PipelineConfig
from aidmatch_agents.persistence import InMemoryStore


class StubOracle:
    """Oracle returning a canned response, or raising, or hanging."""

    name = "stub"

    def __init__(self, response=None, error=None, delay=None):
        self.response = response if response is not None else []
        self.error = error
        self.delay = delay
        self.calls = 0

    async def score_programs(self, profile, assessment, catalog):
        self.calls += 1
        if self.delay is not None:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def config() -> AidMatchConfig:
    return AidMatchConfig(
        env="test",
        oracle=OracleConfig(timeout=1.0),
        pipeline=PipelineConfig(persist_results=True),
        policy=EligibilityPolicy(),
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def stub_oracle():
    """Factory for StubOracle instances."""
    return StubOracle


@pytest.fixture
def family_profile() -> HouseholdProfile:
    """No income, four people, two children, unemployed, paying rent."""
    return HouseholdProfile(
        monthly_income=Decimal("0"),
        monthly_expenses=MonthlyExpenses(rent_or_mortgage=Decimal("1000"), food=Decimal("400")),
        household_size=4,
        dependents=2,
        employment_status=EmploymentStatus.UNEMPLOYED,
        zip_code="60617",
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
