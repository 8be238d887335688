"""Tests for the eligibility policy configuration."""

from decimal import Decimal

import pytest

from aidmatch_core import EligibilityPolicy


class TestEligibilityPolicy:
    """Test suite for EligibilityPolicy."""

    def test_default_values(self):
        policy = EligibilityPolicy()

        assert policy.guidelines_year == 2024
        assert policy.snap_fpl_percent == Decimal("130")
        assert policy.wic_fpl_percent == Decimal("185")
        assert policy.liheap_fpl_percent == Decimal("150")
        assert policy.medicaid_fpl_percent == Decimal("138")
        assert policy.housing_fpl_multiplier_percent == Decimal("200")
        assert policy.cash_assistance_fpl_percent == Decimal("50")
        assert policy.housing_burden_ratio == Decimal("0.30")
        assert policy.child_age_cutoff == 17
        assert policy.guidelines_version == "HHS-2024"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("AIDMATCH_POLICY_SNAP_FPL_PERCENT", "140")
        monkeypatch.setenv("AIDMATCH_POLICY_GUIDELINES_YEAR", "2025")

        policy = EligibilityPolicy()

        assert policy.snap_fpl_percent == Decimal("140")
        assert policy.guidelines_year == 2025

    def test_unknown_guidelines_year(self):
        with pytest.raises(ValueError):
            EligibilityPolicy(guidelines_year=1999)

    def test_burden_ratio_bounds(self):
        with pytest.raises(ValueError):
            EligibilityPolicy(housing_burden_ratio=Decimal("1.5"))

    def test_fpl_overrides(self):
        policy = EligibilityPolicy(fpl_base_override=Decimal("20000"))

        assert policy.federal_poverty_line(2) == Decimal("25380")
        assert policy.guidelines_version == "HHS-2024-custom"

    def test_policy_is_frozen(self):
        policy = EligibilityPolicy()
        with pytest.raises(ValueError):
            policy.snap_fpl_percent = Decimal("200")
