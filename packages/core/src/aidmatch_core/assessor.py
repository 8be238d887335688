"""Poverty and hardship assessment.

Turns a household profile into its poverty level, classification, monthly
deficit and hardship tags. The computation is pure: no I/O, no clock, no
randomness. Every step is appended to an audit log and emitted through
structlog for traceability.
"""

from decimal import Decimal
from typing import Optional

import structlog

from .config import EligibilityPolicy
from .exceptions import ValidationError
from .models import (
    Assessment,
    AuditEntry,
    EmploymentStatus,
    HardshipType,
    HouseholdProfile,
)
from .poverty_guidelines import (
    classify_poverty,
    income_percent_of_fpl,
    round_percent,
)

logger = structlog.get_logger()

HOUSING_COST_BURDEN_TAG = HardshipType.HOUSING_COST_BURDEN.tag

# (policy threshold attribute, category), in catalog order
INCOME_TESTED_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("snap_fpl_percent", "Food"),
    ("wic_fpl_percent", "Food/Health"),
    ("liheap_fpl_percent", "Utilities"),
    ("housing_fpl_multiplier_percent", "Housing"),
    ("cash_assistance_fpl_percent", "Cash Assistance"),
    ("medicaid_fpl_percent", "Healthcare"),
)


def housing_cost_ratio(profile: HouseholdProfile) -> Optional[Decimal]:
    """Rent or mortgage as a share of income.

    Returns None when there is no income; callers treat any housing cost
    against zero income as a burden.
    """
    if profile.monthly_income == 0:
        return None
    return profile.monthly_expenses.rent_or_mortgage / profile.monthly_income


def is_housing_cost_burdened(profile: HouseholdProfile, threshold: Decimal) -> bool:
    """True when housing costs exceed the affordability threshold."""
    ratio = housing_cost_ratio(profile)
    if ratio is None:
        return profile.monthly_expenses.rent_or_mortgage > 0
    return ratio > threshold


def validate_profile(profile: HouseholdProfile) -> None:
    """Re-check structural invariants before computing anything.

    Raises:
        ValidationError: On the first violated invariant.
    """
    if profile.household_size < 1:
        raise ValidationError(
            "Household size must be at least 1",
            field="household_size",
            value=profile.household_size,
            constraint="household_size >= 1",
        )
    if profile.dependents < 0 or profile.dependents >= profile.household_size:
        raise ValidationError(
            "Dependents must be fewer than household size",
            field="dependents",
            value=profile.dependents,
            constraint=f"0 <= dependents < household_size ({profile.household_size})",
        )
    if profile.monthly_income < 0:
        raise ValidationError(
            "Monthly income cannot be negative",
            field="monthly_income",
            value=str(profile.monthly_income),
            constraint="monthly_income >= 0",
        )
    expenses = profile.monthly_expenses
    for name in type(expenses).model_fields:
        if getattr(expenses, name) < 0:
            raise ValidationError(
                f"Expense '{name}' cannot be negative",
                field=f"monthly_expenses.{name}",
                value=str(getattr(expenses, name)),
                constraint=">= 0",
            )


def _log_step(
    audit_log: list[AuditEntry],
    step: str,
    input_value: str,
    output_value: str,
    source: str,
    notes: Optional[str] = None,
) -> None:
    """Add an entry to the audit log and emit it."""
    audit_log.append(AuditEntry(
        step=step,
        input_value=input_value,
        output_value=output_value,
        source=source,
        notes=notes,
    ))
    logger.info(
        "assessment_step",
        step=step,
        input=input_value,
        output=output_value,
        source=source,
    )


class PovertyAssessor:
    """
    Compute poverty level, deficit and hardships for a household.

    The FPL is linear in household size and comes from the configured
    HHS guidelines year (or its overrides).
    """

    def __init__(self, policy: Optional[EligibilityPolicy] = None):
        """
        Initialize assessor with an eligibility policy.

        Args:
            policy: Thresholds and guidelines year (default: from environment)
        """
        self.policy = policy or EligibilityPolicy()

    def _derive_hardships(
        self,
        profile: HouseholdProfile,
        audit_log: list[AuditEntry],
    ) -> tuple[str, ...]:
        """Selected hardships plus any housing cost burden the numbers show."""
        tags = [h.tag for h in HardshipType if h in profile.selected_hardships]

        threshold = self.policy.housing_burden_ratio
        ratio = housing_cost_ratio(profile)
        if HOUSING_COST_BURDEN_TAG not in tags and is_housing_cost_burdened(profile, threshold):
            tags.append(HOUSING_COST_BURDEN_TAG)
            _log_step(
                audit_log,
                step="housing_cost_burden_detected",
                input_value=(
                    f"rent={profile.monthly_expenses.rent_or_mortgage}, "
                    f"income={profile.monthly_income}"
                ),
                output_value=f"ratio={'n/a' if ratio is None else round(ratio, 4)} > {threshold}",
                source="Housing affordability threshold",
                notes="Flagged although not selected by the user",
            )

        _log_step(
            audit_log,
            step="primary_hardships",
            input_value=f"{len(profile.selected_hardships)} selected",
            output_value=",".join(tags) or "none",
            source="User provided + derived",
        )
        return tuple(tags)

    def _estimate_categories(self, profile: HouseholdProfile, percent: Decimal) -> tuple[str, ...]:
        """Program categories whose income test the household passes."""
        categories = [
            category
            for attribute, category in INCOME_TESTED_CATEGORIES
            if percent <= getattr(self.policy, attribute)
        ]
        if profile.employment_status == EmploymentStatus.EMPLOYED and profile.dependents > 0:
            categories.append("Tax Credit")
        return tuple(categories)

    def assess(self, profile: HouseholdProfile) -> Assessment:
        """
        Assess a household's poverty level and financial strain.

        Args:
            profile: Household profile from the intake layer

        Returns:
            Assessment with audit trail

        Raises:
            ValidationError: If the profile is malformed
        """
        validate_profile(profile)
        audit_log: list[AuditEntry] = []

        # Step 1: Federal Poverty Line
        fpl = self.policy.federal_poverty_line(profile.household_size)
        _log_step(
            audit_log,
            step="federal_poverty_line",
            input_value=f"household_size={profile.household_size}",
            output_value=str(fpl),
            source=f"Poverty guidelines {self.policy.guidelines_version}",
        )

        # Step 2: Income as a percentage of FPL
        annual_income = profile.annual_income
        percent = income_percent_of_fpl(annual_income, fpl)
        rounded = round_percent(percent)
        _log_step(
            audit_log,
            step="poverty_level_percent",
            input_value=f"100 * {annual_income} / {fpl}",
            output_value=str(rounded),
            source="Annualized monthly income",
        )

        # Step 3: Classification on the unrounded percent
        classification = classify_poverty(percent)
        _log_step(
            audit_log,
            step="poverty_classification",
            input_value=str(percent),
            output_value=classification.value,
            source="Fixed thresholds 50/100/150",
        )

        # Step 4: Monthly deficit
        total_expenses = profile.monthly_expenses.total
        deficit = total_expenses - profile.monthly_income
        _log_step(
            audit_log,
            step="monthly_deficit",
            input_value=f"{total_expenses} - {profile.monthly_income}",
            output_value=str(deficit),
            source="Budget identity",
        )

        # Step 5: Hardships
        hardships = self._derive_hardships(profile, audit_log)

        return Assessment(
            federal_poverty_line=fpl,
            annual_income=annual_income,
            poverty_ratio_percent=percent,
            poverty_level_percent=rounded,
            poverty_classification=classification,
            total_monthly_expenses=total_expenses,
            monthly_deficit=deficit,
            primary_hardships=hardships,
            family_vulnerabilities=profile.vulnerabilities,
            household_size=profile.household_size,
            dependents=profile.dependents,
            is_single_parent=profile.is_single_parent,
            working_status=profile.employment_status,
            estimated_eligibility_categories=self._estimate_categories(profile, percent),
            guidelines_version=self.policy.guidelines_version,
            audit_log=tuple(audit_log),
        )


def assess(profile: HouseholdProfile, policy: Optional[EligibilityPolicy] = None) -> Assessment:
    """Assess a profile with a fresh assessor."""
    return PovertyAssessor(policy).assess(profile)
