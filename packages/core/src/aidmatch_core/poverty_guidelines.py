"""HHS poverty guidelines used to compute the Federal Poverty Line (FPL).

The guideline for a household is linear in its size:

    FPL = BASE + (household_size - 1) * PER_ADDITIONAL_PERSON

Sources:
- 2024: https://aspe.hhs.gov/topics/poverty-economic-mobility/poverty-guidelines/prior-hhs-poverty-guidelines-federal-register-references/2024-poverty-guidelines
- 2025: https://aspe.hhs.gov/topics/poverty-economic-mobility/poverty-guidelines

Figures are for the 48 contiguous states and DC. Alaska and Hawaii publish
higher guidelines and are not modelled here.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple, Optional

from .exceptions import ConfigurationError
from .models.assessment import PovertyClassification


# =============================================================================
# VERSION TRACKING
# =============================================================================

class GuidelineTable(NamedTuple):
    """Annual poverty guideline parameters for one year."""
    base: Decimal
    per_additional_person: Decimal


POVERTY_GUIDELINES: dict[int, GuidelineTable] = {
    2024: GuidelineTable(base=Decimal("15060"), per_additional_person=Decimal("5380")),
    2025: GuidelineTable(base=Decimal("15650"), per_additional_person=Decimal("5500")),
}

DEFAULT_GUIDELINES_YEAR = 2024


def get_poverty_guidelines_version(year: int = DEFAULT_GUIDELINES_YEAR) -> str:
    """Return the version label for a guidelines year, e.g. ``HHS-2024``."""
    get_guideline_table(year)
    return f"HHS-{year}"


def get_guideline_table(year: int) -> GuidelineTable:
    """Look up the published guidelines for a year.

    Raises:
        ConfigurationError: If no table is published for the year.
    """
    try:
        return POVERTY_GUIDELINES[year]
    except KeyError:
        raise ConfigurationError(
            f"No poverty guidelines for {year}",
            config_key="guidelines_year",
            expected=f"one of {sorted(POVERTY_GUIDELINES)}",
            actual=year,
        ) from None


# =============================================================================
# FEDERAL POVERTY LINE
# =============================================================================

def get_federal_poverty_line(
    household_size: int,
    year: int = DEFAULT_GUIDELINES_YEAR,
    *,
    base: Optional[Decimal] = None,
    per_additional_person: Optional[Decimal] = None,
) -> Decimal:
    """Get the annual FPL for a household.

    Args:
        household_size: Total number of people in household (>= 1)
        year: Guidelines year
        base: Override for the one-person guideline
        per_additional_person: Override for the per-person increment

    Returns:
        Annual poverty line in dollars
    """
    table = get_guideline_table(year)
    base = table.base if base is None else base
    increment = table.per_additional_person if per_additional_person is None else per_additional_person
    return base + (household_size - 1) * increment


def income_percent_of_fpl(annual_income: Decimal, fpl: Decimal) -> Decimal:
    """Annual income as an unrounded percentage of the poverty line."""
    return annual_income * 100 / fpl


def round_percent(percent: Decimal) -> int:
    """Round a percentage to a whole number, halves away from zero."""
    return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# =============================================================================
# CLASSIFICATION
# =============================================================================

# Inclusive upper bounds, most severe first
CLASSIFICATION_THRESHOLDS: tuple[tuple[Decimal, PovertyClassification], ...] = (
    (Decimal("50"), PovertyClassification.VERY_LOW),
    (Decimal("100"), PovertyClassification.LOW),
    (Decimal("150"), PovertyClassification.MODERATE),
)


def classify_poverty(percent: Decimal) -> PovertyClassification:
    """Map an unrounded percent of FPL onto its poverty band.

    Bounds are inclusive, so exactly 100% is LOW and 100.01% is MODERATE.
    """
    for upper_bound, classification in CLASSIFICATION_THRESHOLDS:
        if percent <= upper_bound:
            return classification
    return PovertyClassification.OKAY
