"""Tests for poverty guideline tables and classification."""

from decimal import Decimal

import pytest

from aidmatch_core.exceptions import ConfigurationError
from aidmatch_core.models import PovertyClassification
from aidmatch_core.poverty_guidelines import (
    classify_poverty,
    get_federal_poverty_line,
    get_poverty_guidelines_version,
    income_percent_of_fpl,
    round_percent,
)


class TestFederalPovertyLine:
    """Test suite for the linear FPL model."""

    def test_single_person_uses_base(self):
        assert get_federal_poverty_line(1) == Decimal("15060")

    def test_adds_increment_per_additional_person(self):
        """FPL = base + (size - 1) * increment."""
        assert get_federal_poverty_line(4) == Decimal("31200")
        assert get_federal_poverty_line(8) == Decimal("52720")

    def test_other_year(self):
        assert get_federal_poverty_line(4, 2025) == Decimal("32150")

    def test_overrides_replace_table(self):
        fpl = get_federal_poverty_line(
            2, base=Decimal("20000"), per_additional_person=Decimal("1000")
        )
        assert fpl == Decimal("21000")

    def test_unknown_year_raises(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_federal_poverty_line(1, 1999)
        assert exc_info.value.config_key == "guidelines_year"
        assert exc_info.value.recoverable is False

    def test_version_label(self):
        assert get_poverty_guidelines_version(2024) == "HHS-2024"


class TestPercentOfFpl:
    """Test suite for percent computation and rounding."""

    def test_percent_is_exact(self):
        assert income_percent_of_fpl(Decimal("19578"), Decimal("15060")) == Decimal("130")

    def test_zero_income(self):
        assert income_percent_of_fpl(Decimal("0"), Decimal("31200")) == 0

    @pytest.mark.parametrize(
        "percent,expected",
        [
            (Decimal("79.5"), 80),
            (Decimal("79.49"), 79),
            (Decimal("100"), 100),
            (Decimal("0"), 0),
        ],
    )
    def test_round_half_up(self, percent, expected):
        assert round_percent(percent) == expected


class TestClassification:
    """Bands are inclusive on their upper bound."""

    @pytest.mark.parametrize(
        "percent,expected",
        [
            (Decimal("0"), PovertyClassification.VERY_LOW),
            (Decimal("50"), PovertyClassification.VERY_LOW),
            (Decimal("50.01"), PovertyClassification.LOW),
            (Decimal("100"), PovertyClassification.LOW),
            (Decimal("100.01"), PovertyClassification.MODERATE),
            (Decimal("150"), PovertyClassification.MODERATE),
            (Decimal("150.01"), PovertyClassification.OKAY),
            (Decimal("400"), PovertyClassification.OKAY),
        ],
    )
    def test_boundaries(self, percent, expected):
        assert classify_poverty(percent) == expected

    def test_severity_decreases_with_band(self):
        severities = [c.severity for c in PovertyClassification]
        assert severities == sorted(severities, reverse=True)
