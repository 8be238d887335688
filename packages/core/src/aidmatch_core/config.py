"""Tunable eligibility policy thresholds.

Thresholds that track published guidance are configuration, so they can be
updated without code changes. Environment variables use the prefix
AIDMATCH_POLICY_.

Usage:
    from aidmatch_core.config import EligibilityPolicy

    policy = EligibilityPolicy()                       # environment + .env
    policy = EligibilityPolicy(guidelines_year=2025)   # explicit override
"""

from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .poverty_guidelines import (
    DEFAULT_GUIDELINES_YEAR,
    POVERTY_GUIDELINES,
    get_federal_poverty_line,
    get_poverty_guidelines_version,
)


class EligibilityPolicy(BaseSettings):
    """Eligibility thresholds and program constants.

    Environment Variables:
        AIDMATCH_POLICY_GUIDELINES_YEAR: HHS poverty guidelines year
        AIDMATCH_POLICY_FPL_BASE_OVERRIDE: One-person FPL override
        AIDMATCH_POLICY_FPL_PER_PERSON_OVERRIDE: Per-additional-person override
        AIDMATCH_POLICY_HOUSING_BURDEN_RATIO: Rent-to-income affordability ratio
        AIDMATCH_POLICY_SNAP_FPL_PERCENT: Food assistance income limit
        AIDMATCH_POLICY_WIC_FPL_PERCENT: Nutrition for women/children limit
        AIDMATCH_POLICY_LIHEAP_FPL_PERCENT: Energy assistance limit
        AIDMATCH_POLICY_MEDICAID_FPL_PERCENT: Healthcare coverage limit
        AIDMATCH_POLICY_HOUSING_FPL_MULTIPLIER_PERCENT: FPL stand-in for 80% AMI
        AIDMATCH_POLICY_CASH_ASSISTANCE_FPL_PERCENT: State-like cash limit
        AIDMATCH_POLICY_CHILD_AGE_CUTOFF: Child credit age cutoff
        AIDMATCH_POLICY_WIC_MONTHLY_VOUCHER: Fixed WIC voucher value
    """

    model_config = SettingsConfigDict(
        env_prefix="AIDMATCH_POLICY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    guidelines_year: int = Field(default=DEFAULT_GUIDELINES_YEAR)
    fpl_base_override: Optional[Decimal] = Field(default=None, gt=0)
    fpl_per_person_override: Optional[Decimal] = Field(default=None, ge=0)

    housing_burden_ratio: Decimal = Field(default=Decimal("0.30"), gt=0, lt=1)

    snap_fpl_percent: Decimal = Field(default=Decimal("130"), gt=0)
    wic_fpl_percent: Decimal = Field(default=Decimal("185"), gt=0)
    liheap_fpl_percent: Decimal = Field(default=Decimal("150"), gt=0)
    medicaid_fpl_percent: Decimal = Field(default=Decimal("138"), gt=0)
    housing_fpl_multiplier_percent: Decimal = Field(
        default=Decimal("200"),
        gt=0,
        description="Percent of FPL used in place of 80% of area median income",
    )
    cash_assistance_fpl_percent: Decimal = Field(default=Decimal("50"), gt=0)

    child_age_cutoff: int = Field(default=17, ge=1, le=18)
    wic_monthly_voucher: Decimal = Field(default=Decimal("55"), ge=0)

    @field_validator("guidelines_year")
    @classmethod
    def validate_guidelines_year(cls, v: int) -> int:
        """Only years with a published table are accepted."""
        if v not in POVERTY_GUIDELINES:
            raise ValueError(
                f"Unknown guidelines year: {v}. Must be one of: {sorted(POVERTY_GUIDELINES)}"
            )
        return v

    @property
    def guidelines_version(self) -> str:
        """Version label, marked when overrides replace the published table."""
        version = get_poverty_guidelines_version(self.guidelines_year)
        if self.fpl_base_override is not None or self.fpl_per_person_override is not None:
            return f"{version}-custom"
        return version

    def federal_poverty_line(self, household_size: int) -> Decimal:
        """Annual FPL for a household under this policy."""
        return get_federal_poverty_line(
            household_size,
            self.guidelines_year,
            base=self.fpl_base_override,
            per_additional_person=self.fpl_per_person_override,
        )
