"""Poverty and hardship assessment derived from a household profile."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .audit import AuditEntry
from .household import EmploymentStatus

DISPLAY_PERCENT_CEILING = Decimal("200")


class PovertyClassification(str, Enum):
    """Poverty bands relative to the Federal Poverty Line.

    Upper bounds are inclusive: exactly 100% of FPL is ``LOW``.
    """
    VERY_LOW = "very_low"    # <= 50%
    LOW = "low"              # 51-100%
    MODERATE = "moderate"    # 101-150%
    OKAY = "okay"            # > 150%

    @property
    def severity(self) -> int:
        """Higher is more severe; used to compare bands."""
        return {
            PovertyClassification.VERY_LOW: 3,
            PovertyClassification.LOW: 2,
            PovertyClassification.MODERATE: 1,
            PovertyClassification.OKAY: 0,
        }[self]


class Assessment(BaseModel):
    """Result of the poverty and hardship assessment.

    ``poverty_ratio_percent`` is the exact, unclamped percentage used by
    eligibility rules. ``poverty_level_percent`` is its rounded form and
    ``display_poverty_percent`` additionally clamps it for charts.
    """

    model_config = ConfigDict(frozen=True)

    federal_poverty_line: Decimal = Field(description="Annual FPL for the household size")
    annual_income: Decimal
    poverty_ratio_percent: Decimal = Field(description="Unrounded income as a percent of FPL")
    poverty_level_percent: int
    poverty_classification: PovertyClassification
    total_monthly_expenses: Decimal
    monthly_deficit: Decimal = Field(description="Expenses minus income; positive is a shortfall")
    primary_hardships: tuple[str, ...] = ()
    family_vulnerabilities: tuple[str, ...] = ()

    # Household context echoed for the results dashboard
    household_size: int
    dependents: int
    is_single_parent: bool
    working_status: EmploymentStatus
    estimated_eligibility_categories: tuple[str, ...] = ()

    guidelines_version: str
    audit_log: tuple[AuditEntry, ...] = ()

    @computed_field
    @property
    def display_poverty_percent(self) -> int:
        """Poverty percent clamped to [0, 200] for display."""
        return int(min(max(self.poverty_level_percent, 0), DISPLAY_PERCENT_CEILING))

    @property
    def is_in_deficit(self) -> bool:
        """True when expenses exceed income."""
        return self.monthly_deficit > 0

    def has_hardship(self, tag: str) -> bool:
        return tag in self.primary_hardships
