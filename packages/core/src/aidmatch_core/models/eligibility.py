"""Per-program eligibility verdicts and the report that groups them."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from .audit import AuditEntry

INSUFFICIENT_DATA_REASON = "insufficient data"


class ProgramVerdict(BaseModel):
    """Eligibility determination for one program.

    At most one of ``estimated_monthly_benefit`` and
    ``estimated_annual_benefit`` is set. For ineligible programs the
    approval likelihood is informational only and never enables applying.
    """

    model_config = ConfigDict(frozen=True)

    program_id: str
    program_name: str
    category: str
    eligible: bool
    reason: str
    estimated_monthly_benefit: Optional[Decimal] = Field(default=None, ge=0)
    estimated_annual_benefit: Optional[Decimal] = Field(default=None, ge=0)
    benefit_note: Optional[str] = Field(
        default=None,
        description="Shown instead of an amount, e.g. 'Varies' for housing vouchers",
    )
    processing_days: int = Field(ge=0)
    approval_likelihood_percent: int = Field(ge=0, le=100)
    indeterminate: bool = False

    @model_validator(mode="after")
    def check_single_benefit_period(self) -> "ProgramVerdict":
        """Monthly and annual estimates are mutually exclusive."""
        if self.estimated_monthly_benefit is not None and self.estimated_annual_benefit is not None:
            raise ValueError("A verdict carries a monthly or an annual benefit, not both")
        if self.indeterminate and self.eligible:
            raise ValueError("An indeterminate verdict cannot be eligible")
        return self

    @computed_field
    @property
    def can_apply(self) -> bool:
        """Whether the presentation layer may offer an 'apply' action."""
        return self.eligible and not self.indeterminate

    def format_benefit(self) -> Optional[str]:
        """Human-readable benefit, e.g. ``$292/mo``."""
        if self.estimated_monthly_benefit is not None:
            return f"${self.estimated_monthly_benefit:,.0f}/mo"
        if self.estimated_annual_benefit is not None:
            return f"${self.estimated_annual_benefit:,.0f}/yr"
        return self.benefit_note


class EligibilityReport(BaseModel):
    """Ordered verdicts for every catalog program.

    Verdicts are ordered eligible first, then by descending approval
    likelihood, ties kept in catalog order. ``partial`` is set when any
    verdict could not be determined.
    """

    model_config = ConfigDict(frozen=True)

    verdicts: tuple[ProgramVerdict, ...]
    partial: bool = False
    catalog_version: str
    poverty_level_percent: int
    audit_log: tuple[AuditEntry, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def eligible_verdicts(self) -> list[ProgramVerdict]:
        return [v for v in self.verdicts if v.eligible]

    @property
    def ineligible_verdicts(self) -> list[ProgramVerdict]:
        return [v for v in self.verdicts if not v.eligible]

    @computed_field
    @property
    def eligible_count(self) -> int:
        """Number of programs the household likely qualifies for."""
        return len(self.eligible_verdicts)

    @computed_field
    @property
    def total_estimated_monthly_benefit(self) -> Decimal:
        """Sum of monthly estimates across eligible programs."""
        return sum(
            (v.estimated_monthly_benefit for v in self.eligible_verdicts
             if v.estimated_monthly_benefit is not None),
            Decimal("0"),
        )

    @computed_field
    @property
    def total_estimated_annual_benefit(self) -> Decimal:
        """Sum of annual estimates across eligible programs."""
        return sum(
            (v.estimated_annual_benefit for v in self.eligible_verdicts
             if v.estimated_annual_benefit is not None),
            Decimal("0"),
        )

    @property
    def indeterminate_program_ids(self) -> list[str]:
        return [v.program_id for v in self.verdicts if v.indeterminate]

    @property
    def eligible_categories(self) -> list[str]:
        """Distinct categories of eligible programs, in report order."""
        seen: list[str] = []
        for verdict in self.eligible_verdicts:
            if verdict.category not in seen:
                seen.append(verdict.category)
        return seen

    def get(self, program_id: str) -> Optional[ProgramVerdict]:
        """Look up a verdict by its stable program id."""
        for verdict in self.verdicts:
            if verdict.program_id == program_id:
                return verdict
        return None
