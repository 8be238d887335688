"""Wire types exchanged with the scoring oracle.

An external oracle returns a JSON array of per-program objects. Each entry
is parsed into an OracleVerdictPayload before it is trusted; the field
names follow the oracle's JSON schema, not the core models.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from aidmatch_core.catalog import ProgramDefinition
from aidmatch_core.models import ProgramVerdict


class OracleVerdictPayload(BaseModel):
    """One program entry as returned by the scoring oracle."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    program_id: str = Field(min_length=1)
    program_name: str = Field(min_length=1)
    category: Optional[str] = None
    eligible: bool
    confidence_score: Optional[float] = Field(
        default=None, description="Oracle's self-reported confidence; informational"
    )
    reason_eligible: str = Field(min_length=1)
    estimated_monthly_benefit: Optional[Decimal] = Field(default=None, ge=0)
    estimated_annual_benefit: Optional[Decimal] = Field(default=None, ge=0)
    benefit_note: Optional[str] = None
    processing_days: Optional[int] = Field(default=None, ge=0)
    approval_likelihood_percent: Decimal = Field(ge=0, le=100)

    @field_validator("program_id")
    @classmethod
    def normalize_program_id(cls, v: str) -> str:
        return v.strip().lower()

    @model_validator(mode="after")
    def check_single_benefit_period(self) -> "OracleVerdictPayload":
        if self.estimated_monthly_benefit is not None and self.estimated_annual_benefit is not None:
            raise ValueError("Payload carries both a monthly and an annual benefit")
        return self

    def to_verdict(self, definition: ProgramDefinition) -> ProgramVerdict:
        """Convert to a core verdict; catalog identity fields win over the payload's."""
        likelihood = int(self.approval_likelihood_percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return ProgramVerdict(
            program_id=definition.id,
            program_name=definition.name,
            category=definition.category,
            eligible=self.eligible,
            reason=self.reason_eligible,
            estimated_monthly_benefit=self.estimated_monthly_benefit,
            estimated_annual_benefit=self.estimated_annual_benefit,
            benefit_note=self.benefit_note,
            processing_days=(
                definition.processing_days if self.processing_days is None else self.processing_days
            ),
            approval_likelihood_percent=likelihood,
        )

    @classmethod
    def from_verdict(cls, verdict: ProgramVerdict) -> "OracleVerdictPayload":
        """Render a core verdict in the oracle's wire shape."""
        return cls(
            program_id=verdict.program_id,
            program_name=verdict.program_name,
            category=verdict.category,
            eligible=verdict.eligible,
            reason_eligible=verdict.reason,
            estimated_monthly_benefit=verdict.estimated_monthly_benefit,
            estimated_annual_benefit=verdict.estimated_annual_benefit,
            benefit_note=verdict.benefit_note,
            processing_days=verdict.processing_days,
            approval_likelihood_percent=Decimal(verdict.approval_likelihood_percent),
        )
