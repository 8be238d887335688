"""Household profile models supplied by the intake layer.

A HouseholdProfile is the single input to the assessment pipeline. It is
frozen once built: the assessor and eligibility engine only read it.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class EmploymentStatus(str, Enum):
    """Working status of the primary applicant."""
    EMPLOYED = "employed"
    UNEMPLOYED = "unemployed"
    DISABLED = "disabled"
    RETIRED = "retired"


class HardshipType(str, Enum):
    """Hardships a user can select on the intake form."""
    FOOD_INSECURITY = "Food Insecurity"
    HOUSING_COST_BURDEN = "Housing Cost Burden"
    MEDICAL_DEBT = "Medical Debt"
    UTILITIES_ARREARS = "Utilities Arrears"
    TRANSPORTATION_ISSUES = "Transportation Issues"
    CHILDCARE_COST = "Childcare Cost"

    @property
    def tag(self) -> str:
        """Snake-case tag used in assessments, e.g. ``food_insecurity``."""
        return self.name.lower()


class MonthlyExpenses(BaseModel):
    """Monthly household spending by category."""

    model_config = ConfigDict(frozen=True)

    rent_or_mortgage: Decimal = Field(default=Decimal("0"), ge=0)
    food: Decimal = Field(default=Decimal("0"), ge=0)
    utilities: Decimal = Field(default=Decimal("0"), ge=0)
    medical: Decimal = Field(default=Decimal("0"), ge=0)
    transportation: Decimal = Field(default=Decimal("0"), ge=0)
    debt_payments: Decimal = Field(default=Decimal("0"), ge=0)
    other: Decimal = Field(default=Decimal("0"), ge=0)

    @computed_field
    @property
    def total(self) -> Decimal:
        """Sum of every expense category."""
        return (
            self.rent_or_mortgage
            + self.food
            + self.utilities
            + self.medical
            + self.transportation
            + self.debt_payments
            + self.other
        )


class HouseholdProfile(BaseModel):
    """Financial profile of a household, as collected by the intake form.

    Example:
        >>> HouseholdProfile(
        ...     monthly_income=Decimal("1200"),
        ...     monthly_expenses=MonthlyExpenses(rent_or_mortgage=Decimal("900")),
        ...     household_size=1,
        ...     zip_code="94110",
        ... )
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "monthly_income": "1850",
                    "monthly_expenses": {
                        "rent_or_mortgage": "1100",
                        "food": "450",
                        "utilities": "180",
                    },
                    "household_size": 3,
                    "dependents": 2,
                    "is_single_parent": True,
                    "employment_status": "employed",
                    "selected_hardships": ["Food Insecurity"],
                    "vulnerabilities": ["Child under 5"],
                    "zip_code": "60617",
                }
            ]
        },
    )

    monthly_income: Decimal = Field(ge=0, description="Total monthly household income")
    monthly_expenses: MonthlyExpenses = Field(default_factory=MonthlyExpenses)
    household_size: int = Field(ge=1, description="Number of people in the household")
    dependents: int = Field(default=0, ge=0)
    is_single_parent: bool = False
    employment_status: EmploymentStatus = EmploymentStatus.EMPLOYED
    selected_hardships: frozenset[HardshipType] = Field(default_factory=frozenset)
    vulnerabilities: tuple[str, ...] = Field(
        default=(),
        description="Free-text vulnerability labels, in the order the user entered them",
    )
    zip_code: str = Field(pattern=r"^\d{5}$")

    @field_validator("vulnerabilities", mode="before")
    @classmethod
    def strip_vulnerabilities(cls, v):
        """Drop blank labels while preserving entry order."""
        if v is None:
            return ()
        return tuple(label.strip() for label in v if label and label.strip())

    @model_validator(mode="after")
    def check_dependents(self) -> "HouseholdProfile":
        """Dependents must be fewer than the household size."""
        if self.dependents >= self.household_size:
            raise ValueError(
                f"dependents ({self.dependents}) must be fewer than "
                f"household_size ({self.household_size})"
            )
        return self

    @property
    def annual_income(self) -> Decimal:
        """Monthly income annualized."""
        return self.monthly_income * 12

    def has_vulnerability(self, *keywords: str) -> bool:
        """True if any vulnerability label contains one of the keywords."""
        lowered = [label.lower() for label in self.vulnerabilities]
        return any(keyword in label for label in lowered for keyword in keywords)
