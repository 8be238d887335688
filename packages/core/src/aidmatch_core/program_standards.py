"""Published program parameters used by the benefit estimators.

Sources:
- SNAP: USDA FNS FY2025 allotments, 7 CFR 273.9 (deductions), 7 USC 2017(a)
- EITC: 26 USC 32(b)(1), Rev. Proc. 2024-40 (TY2025)
- CTC: 26 USC 24 (TY2025)
- Cash assistance, LIHEAP and processing times are illustrative national
  figures; states set their own.

Updated: FY2025
"""

from decimal import ROUND_HALF_UP, Decimal

PROGRAM_STANDARDS_VERSION = "FY2025"


def get_program_standards_version() -> str:
    """Return current program standards version."""
    return PROGRAM_STANDARDS_VERSION


def whole_dollars(amount: Decimal) -> Decimal:
    """Round to the nearest whole dollar, halves up."""
    return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


# =============================================================================
# SNAP - FOOD ASSISTANCE
# =============================================================================

SNAP_MAX_ALLOTMENT = {
    1: Decimal("292"),
    2: Decimal("536"),
    3: Decimal("768"),
    4: Decimal("975"),
    5: Decimal("1158"),
    6: Decimal("1390"),
    7: Decimal("1536"),
    8: Decimal("1756"),
    # For each additional person over 8, add $220
}
SNAP_ADDITIONAL_PERSON_ALLOTMENT = Decimal("220")

SNAP_STANDARD_DEDUCTION = {
    1: Decimal("198"),
    2: Decimal("198"),
    3: Decimal("198"),
    4: Decimal("208"),
    5: Decimal("244"),
    6: Decimal("279"),
}

SNAP_BENEFIT_REDUCTION_RATE = Decimal("0.30")
SNAP_MINIMUM_BENEFIT = Decimal("23")  # 1-2 person households


def get_snap_max_allotment(household_size: int) -> Decimal:
    """Maximum monthly SNAP allotment for a household size."""
    if household_size <= 8:
        return SNAP_MAX_ALLOTMENT[household_size]
    return SNAP_MAX_ALLOTMENT[8] + SNAP_ADDITIONAL_PERSON_ALLOTMENT * (household_size - 8)


def get_snap_standard_deduction(household_size: int) -> Decimal:
    """Standard deduction; sizes above 6 use the 6+ amount."""
    return SNAP_STANDARD_DEDUCTION[min(household_size, 6)]


def calculate_snap_benefit(household_size: int, monthly_income: Decimal) -> Decimal:
    """Estimate the monthly SNAP benefit.

    Benefit = max allotment - 30% of net income, where net income is gross
    income less the standard deduction. Small households get the minimum.
    """
    net_income = max(Decimal("0"), monthly_income - get_snap_standard_deduction(household_size))
    benefit = max(Decimal("0"), get_snap_max_allotment(household_size) - net_income * SNAP_BENEFIT_REDUCTION_RATE)
    if household_size <= 2:
        benefit = max(benefit, SNAP_MINIMUM_BENEFIT)
    return whole_dollars(benefit)


# =============================================================================
# EITC - EARNED INCOME TAX CREDIT (single filer)
# =============================================================================

# Keyed by qualifying children, capped at 3
EITC_CREDIT_RATE = {1: Decimal("0.34"), 2: Decimal("0.40"), 3: Decimal("0.45")}
EITC_PHASEOUT_RATE = {1: Decimal("0.1598"), 2: Decimal("0.2106"), 3: Decimal("0.2106")}
EITC_EARNED_INCOME_AMOUNT = {1: Decimal("12729"), 2: Decimal("17880"), 3: Decimal("17880")}
EITC_PHASEOUT_START = Decimal("23350")


def calculate_eitc(annual_earned_income: Decimal, qualifying_children: int) -> Decimal:
    """Estimate the annual EITC for a single filer with children."""
    if qualifying_children <= 0:
        return Decimal("0")
    n = min(qualifying_children, 3)
    credit = EITC_CREDIT_RATE[n] * min(annual_earned_income, EITC_EARNED_INCOME_AMOUNT[n])
    excess = max(Decimal("0"), annual_earned_income - EITC_PHASEOUT_START)
    return whole_dollars(max(Decimal("0"), credit - EITC_PHASEOUT_RATE[n] * excess))


def get_eitc_income_limit(qualifying_children: int) -> Decimal:
    """Annual income at which the credit phases out entirely."""
    n = min(max(qualifying_children, 1), 3)
    max_credit = EITC_CREDIT_RATE[n] * EITC_EARNED_INCOME_AMOUNT[n]
    return EITC_PHASEOUT_START + max_credit / EITC_PHASEOUT_RATE[n]


# =============================================================================
# CTC - CHILD TAX CREDIT
# =============================================================================

CTC_CREDIT_PER_CHILD = Decimal("2200")


def calculate_ctc(qualifying_children: int) -> Decimal:
    """Annual child tax credit; fixed per qualifying child."""
    return CTC_CREDIT_PER_CHILD * max(qualifying_children, 0)


# =============================================================================
# CASH ASSISTANCE (TANF-like)
# =============================================================================

CASH_ASSISTANCE_BY_HOUSEHOLD = {
    1: Decimal("250"),
    2: Decimal("350"),
    3: Decimal("450"),
    4: Decimal("540"),
    # For each additional person over 4, add $80
}
CASH_ASSISTANCE_ADDITIONAL_PERSON = Decimal("80")


def get_cash_assistance_benefit(household_size: int) -> Decimal:
    """Monthly cash assistance tier for a household size."""
    if household_size <= 4:
        return CASH_ASSISTANCE_BY_HOUSEHOLD[household_size]
    return CASH_ASSISTANCE_BY_HOUSEHOLD[4] + CASH_ASSISTANCE_ADDITIONAL_PERSON * (household_size - 4)


# =============================================================================
# LIHEAP - ENERGY ASSISTANCE
# =============================================================================

LIHEAP_COVERAGE_RATE = Decimal("0.50")  # share of annual utility spend
LIHEAP_MINIMUM_BENEFIT = Decimal("200")
LIHEAP_MAXIMUM_BENEFIT = Decimal("1500")


def calculate_liheap_benefit(monthly_utilities: Decimal) -> Decimal:
    """One-time annual energy assistance based on utility spend."""
    benefit = monthly_utilities * 12 * LIHEAP_COVERAGE_RATE
    return whole_dollars(min(max(benefit, LIHEAP_MINIMUM_BENEFIT), LIHEAP_MAXIMUM_BENEFIT))


# =============================================================================
# PROCESSING TIMES (days)
# =============================================================================

PROCESSING_DAYS = {
    "snap": 30,
    "wic": 14,
    "liheap": 15,
    "hcv": 180,
    "tanf": 30,
    "eitc": 21,
    "ctc": 21,
    "medicaid": 45,
}
