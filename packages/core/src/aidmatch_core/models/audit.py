"""Audit trail entries for assessment and eligibility calculations."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AuditEntry(BaseModel):
    """Audit log entry for calculation transparency.

    Entries carry no timestamp, so evaluating the same profile twice
    produces identical output.
    """

    model_config = ConfigDict(frozen=True)

    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None
