"""Eligibility rules, benefit estimators and confidence models per program.

Each program is described by three plain functions taking
``(profile, assessment, policy)``:

- a rule returning a RuleOutcome (eligible flag, reason naming the deciding
  threshold or criterion, and the margin by which the income test was met)
- a benefit estimator returning a BenefitEstimate
- a confidence model mapping the outcome to an approval likelihood

Income tests compare the unrounded percent of FPL and are inclusive on the
qualifying side.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .assessor import is_housing_cost_burdened
from .config import EligibilityPolicy
from .models import Assessment, EmploymentStatus, HardshipType, HouseholdProfile
from .program_standards import (
    calculate_ctc,
    calculate_eitc,
    calculate_liheap_benefit,
    calculate_snap_benefit,
    get_cash_assistance_benefit,
    get_eitc_income_limit,
)

WIC_KEYWORDS = (
    "pregnan", "postpartum", "nursing", "breastfeed", "infant",
    "newborn", "baby", "toddler", "under 5", "under five",
)
PREGNANCY_KEYWORDS = ("pregnan", "postpartum")
DISABILITY_KEYWORDS = ("disab",)

# Ceiling on the informational score reported for ineligible programs
INELIGIBLE_LIKELIHOOD_CEILING = 25


@dataclass(frozen=True)
class RuleOutcome:
    """Result of one program's eligibility rule."""
    eligible: bool
    reason: str
    margin_points: Optional[Decimal] = None  # qualifying threshold minus household percent
    categorical: bool = False                # qualified on a non-income criterion


@dataclass(frozen=True)
class BenefitEstimate:
    """Estimated benefit; at most one of monthly/annual is set."""
    monthly: Optional[Decimal] = None
    annual: Optional[Decimal] = None
    note: Optional[str] = None

    def __post_init__(self) -> None:
        if self.monthly is not None and self.annual is not None:
            raise ValueError("BenefitEstimate takes a monthly or an annual amount, not both")


def format_percent(percent: Decimal) -> str:
    """Render a percent with at most two decimals, e.g. ``130`` or ``130.01``."""
    quantized = percent.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return format(quantized.normalize(), "f")


def margin_likelihood(
    margin_points: Decimal,
    *,
    base: int,
    slope: Decimal,
    ceiling: int,
) -> int:
    """Approval likelihood that grows with the margin under a threshold.

    ``base`` is the score exactly at the threshold; each percentage point
    further below adds ``slope``. Clamped to [0, ceiling].
    """
    score = Decimal(base) + margin_points * slope
    score = min(max(score, Decimal("0")), Decimal(ceiling))
    return int(score.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def income_test(
    assessment: Assessment,
    threshold: Decimal,
    label: str,
) -> RuleOutcome:
    """Compare household percent of FPL with an inclusive threshold."""
    percent = assessment.poverty_ratio_percent
    margin = threshold - percent
    shown = format_percent(percent)
    if percent <= threshold:
        return RuleOutcome(
            eligible=True,
            reason=f"Household income is {shown}% of FPL, within the {format_percent(threshold)}% {label} limit",
            margin_points=margin,
        )
    return RuleOutcome(
        eligible=False,
        reason=f"Household income is {shown}% of FPL, above the {format_percent(threshold)}% {label} limit",
        margin_points=margin,
    )


def _with_reason(outcome: RuleOutcome, *, eligible: bool, reason: str, categorical: bool = False) -> RuleOutcome:
    return RuleOutcome(
        eligible=eligible,
        reason=reason,
        margin_points=outcome.margin_points,
        categorical=categorical,
    )


# =============================================================================
# FOOD ASSISTANCE (SNAP)
# =============================================================================

def snap_rule(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> RuleOutcome:
    """Income at or below 130% FPL; categorical checks reduced to the income test."""
    return income_test(assessment, policy.snap_fpl_percent, "gross income")


def snap_benefit(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> BenefitEstimate:
    return BenefitEstimate(monthly=calculate_snap_benefit(profile.household_size, profile.monthly_income))


def snap_confidence(outcome: RuleOutcome, profile: HouseholdProfile, assessment: Assessment) -> int:
    return margin_likelihood(outcome.margin_points, base=60, slope=Decimal("0.5"), ceiling=95)


# =============================================================================
# NUTRITION FOR WOMEN, INFANTS AND CHILDREN (WIC)
# =============================================================================

def _wic_signal(profile: HouseholdProfile) -> Optional[str]:
    if profile.has_vulnerability(*WIC_KEYWORDS):
        return "vulnerability"
    if profile.dependents > 0:
        return "dependents"
    return None


def wic_rule(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> RuleOutcome:
    """Income at or below 185% FPL and a young-child or pregnancy signal."""
    income = income_test(assessment, policy.wic_fpl_percent, "WIC income")
    if not income.eligible:
        return income

    signal = _wic_signal(profile)
    if signal == "vulnerability":
        return _with_reason(
            income,
            eligible=True,
            reason=f"{income.reason}; household reports pregnancy, postpartum or a child under 5",
        )
    if signal == "dependents":
        return _with_reason(
            income,
            eligible=True,
            reason=(
                f"{income.reason}; {profile.dependents} dependent(s) may include a child "
                "under 5 (ages not collected)"
            ),
        )
    return _with_reason(
        income,
        eligible=False,
        reason=(
            f"{income.reason}, but no child under 5 or pregnancy/postpartum "
            "member is indicated"
        ),
    )


def wic_benefit(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> BenefitEstimate:
    return BenefitEstimate(monthly=policy.wic_monthly_voucher)


def wic_confidence(outcome: RuleOutcome, profile: HouseholdProfile, assessment: Assessment) -> int:
    score = margin_likelihood(outcome.margin_points, base=55, slope=Decimal("0.4"), ceiling=90)
    if _wic_signal(profile) != "vulnerability":
        score = max(score - 20, 0)
    return score


# =============================================================================
# ENERGY ASSISTANCE (LIHEAP)
# =============================================================================

UTILITIES_TAG = HardshipType.UTILITIES_ARREARS.tag


def liheap_rule(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> RuleOutcome:
    """Income at or below 150% FPL and a utilities hardship."""
    income = income_test(assessment, policy.liheap_fpl_percent, "energy assistance")
    if not income.eligible:
        return income
    if assessment.has_hardship(UTILITIES_TAG):
        return _with_reason(income, eligible=True, reason=f"{income.reason}; utilities hardship reported")
    return _with_reason(
        income,
        eligible=False,
        reason=f"{income.reason}, but no utilities hardship was reported",
    )


def liheap_benefit(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> BenefitEstimate:
    return BenefitEstimate(annual=calculate_liheap_benefit(profile.monthly_expenses.utilities))


def liheap_confidence(outcome: RuleOutcome, profile: HouseholdProfile, assessment: Assessment) -> int:
    return margin_likelihood(outcome.margin_points, base=55, slope=Decimal("0.5"), ceiling=90)


# =============================================================================
# HOUSING CHOICE VOUCHER (Section 8)
# =============================================================================

def housing_rule(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> RuleOutcome:
    """Income under the AMI stand-in and rent above 30% of income."""
    income = income_test(assessment, policy.housing_fpl_multiplier_percent, "area-median-income proxy")
    if not income.eligible:
        return income
    ratio = policy.housing_burden_ratio
    if is_housing_cost_burdened(profile, ratio):
        return _with_reason(
            income,
            eligible=True,
            reason=f"{income.reason}; housing costs exceed {format_percent(ratio * 100)}% of income",
        )
    return _with_reason(
        income,
        eligible=False,
        reason=f"{income.reason}, but housing costs are within {format_percent(ratio * 100)}% of income",
    )


def housing_benefit(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> BenefitEstimate:
    return BenefitEstimate(note="Varies")


def housing_confidence(outcome: RuleOutcome, profile: HouseholdProfile, assessment: Assessment) -> int:
    # Vouchers are frequently waitlisted, so the curve stays low
    return margin_likelihood(outcome.margin_points, base=30, slope=Decimal("0.2"), ceiling=60)


# =============================================================================
# CASH ASSISTANCE (TANF)
# =============================================================================

CASH_ASSISTANCE_STATUSES = (EmploymentStatus.UNEMPLOYED, EmploymentStatus.DISABLED)


def cash_assistance_rule(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> RuleOutcome:
    """Income under the state-like limit and not working (unemployed or disabled)."""
    income = income_test(assessment, policy.cash_assistance_fpl_percent, "cash assistance")
    if not income.eligible:
        return income
    if profile.employment_status in CASH_ASSISTANCE_STATUSES:
        return _with_reason(
            income,
            eligible=True,
            reason=f"{income.reason}; applicant is {profile.employment_status.value}",
        )
    return _with_reason(
        income,
        eligible=False,
        reason=(
            f"{income.reason}, but applicant is {profile.employment_status.value} "
            "(requires unemployed or disabled)"
        ),
    )


def cash_assistance_benefit(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> BenefitEstimate:
    return BenefitEstimate(monthly=get_cash_assistance_benefit(profile.household_size))


def cash_assistance_confidence(outcome: RuleOutcome, profile: HouseholdProfile, assessment: Assessment) -> int:
    return margin_likelihood(outcome.margin_points, base=55, slope=Decimal("0.6"), ceiling=90)


# =============================================================================
# EARNED INCOME TAX CREDIT
# =============================================================================

def _eitc_margin(profile: HouseholdProfile) -> Decimal:
    """Percent of the phase-out limit still below it."""
    limit = get_eitc_income_limit(profile.dependents)
    return (limit - profile.annual_income) * 100 / limit


def eitc_rule(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> RuleOutcome:
    """Employed with at least one dependent."""
    margin = _eitc_margin(profile)
    if profile.employment_status != EmploymentStatus.EMPLOYED:
        return RuleOutcome(
            eligible=False,
            reason=f"Requires earned income; applicant is {profile.employment_status.value}",
            margin_points=margin,
        )
    if profile.dependents == 0:
        return RuleOutcome(
            eligible=False,
            reason="Requires at least one dependent child; household reports none",
            margin_points=margin,
        )
    return RuleOutcome(
        eligible=True,
        reason=f"Applicant is employed with {profile.dependents} dependent(s)",
        margin_points=margin,
        categorical=True,
    )


def eitc_benefit(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> BenefitEstimate:
    return BenefitEstimate(annual=calculate_eitc(profile.annual_income, profile.dependents))


def eitc_confidence(outcome: RuleOutcome, profile: HouseholdProfile, assessment: Assessment) -> int:
    return margin_likelihood(outcome.margin_points, base=50, slope=Decimal("0.5"), ceiling=95)


# =============================================================================
# CHILD TAX CREDIT
# =============================================================================

def child_credit_rule(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> RuleOutcome:
    """At least one dependent under the age cutoff.

    Ages are not collected, so every dependent is assumed to be under it.
    """
    if profile.dependents == 0:
        return RuleOutcome(
            eligible=False,
            reason=f"Requires a dependent under {policy.child_age_cutoff}; household reports none",
        )
    return RuleOutcome(
        eligible=True,
        reason=(
            f"{profile.dependents} dependent(s) assumed under {policy.child_age_cutoff} "
            "(ages not collected)"
        ),
        categorical=True,
    )


def child_credit_benefit(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> BenefitEstimate:
    return BenefitEstimate(annual=calculate_ctc(profile.dependents))


def child_credit_confidence(outcome: RuleOutcome, profile: HouseholdProfile, assessment: Assessment) -> int:
    return 85 if outcome.eligible else 5


# =============================================================================
# HEALTHCARE COVERAGE (Medicaid / CHIP)
# =============================================================================

def _medicaid_category(profile: HouseholdProfile) -> Optional[str]:
    if profile.employment_status == EmploymentStatus.DISABLED or profile.has_vulnerability(*DISABILITY_KEYWORDS):
        return "disability"
    if profile.has_vulnerability(*PREGNANCY_KEYWORDS):
        return "pregnancy"
    return None


def medicaid_rule(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> RuleOutcome:
    """Income at or below 138% FPL, or categorically via pregnancy or disability."""
    income = income_test(assessment, policy.medicaid_fpl_percent, "Medicaid expansion")
    if income.eligible:
        return income
    category = _medicaid_category(profile)
    if category:
        return _with_reason(
            income,
            eligible=True,
            reason=f"{income.reason}, but qualifies categorically through {category}",
            categorical=True,
        )
    return income


def medicaid_benefit(profile: HouseholdProfile, assessment: Assessment, policy: EligibilityPolicy) -> BenefitEstimate:
    return BenefitEstimate(note="Coverage")


def medicaid_confidence(outcome: RuleOutcome, profile: HouseholdProfile, assessment: Assessment) -> int:
    if outcome.categorical:
        return 70
    return margin_likelihood(outcome.margin_points, base=60, slope=Decimal("0.5"), ceiling=95)
