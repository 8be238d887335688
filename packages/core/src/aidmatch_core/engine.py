"""Program eligibility engine.

Evaluates every catalog program against a household profile and its
assessment, producing an ordered EligibilityReport. Evaluation is
deterministic and side-effect free apart from logging, so it can be
re-run at any time and called from any thread.

A rule that raises does not abort the report: that program's verdict is
downgraded to indeterminate and the report is marked partial.
"""

from collections.abc import Iterable
from typing import Optional

import structlog

from .catalog import ProgramCatalog, ProgramDefinition, default_catalog
from .config import EligibilityPolicy
from .exceptions import ValidationError
from .models import (
    INSUFFICIENT_DATA_REASON,
    Assessment,
    AuditEntry,
    EligibilityReport,
    HouseholdProfile,
    ProgramVerdict,
)
from .programs import INELIGIBLE_LIKELIHOOD_CEILING, BenefitEstimate, RuleOutcome

logger = structlog.get_logger()


def indeterminate_verdict(definition: ProgramDefinition) -> ProgramVerdict:
    """Verdict used when a program could not be evaluated."""
    return ProgramVerdict(
        program_id=definition.id,
        program_name=definition.name,
        category=definition.category,
        eligible=False,
        reason=INSUFFICIENT_DATA_REASON,
        processing_days=definition.processing_days,
        approval_likelihood_percent=0,
        indeterminate=True,
    )


def order_verdicts(verdicts: Iterable[ProgramVerdict]) -> list[ProgramVerdict]:
    """Eligible first, then descending likelihood; ties keep input order."""
    return sorted(verdicts, key=lambda v: (not v.eligible, -v.approval_likelihood_percent))


def build_verdict(
    definition: ProgramDefinition,
    outcome: RuleOutcome,
    estimate: Optional[BenefitEstimate],
    likelihood: int,
) -> ProgramVerdict:
    """Assemble a verdict from a rule outcome and its estimates."""
    estimate = estimate or BenefitEstimate()
    if not outcome.eligible:
        likelihood = min(likelihood, INELIGIBLE_LIKELIHOOD_CEILING)
    return ProgramVerdict(
        program_id=definition.id,
        program_name=definition.name,
        category=definition.category,
        eligible=outcome.eligible,
        reason=outcome.reason,
        estimated_monthly_benefit=estimate.monthly,
        estimated_annual_benefit=estimate.annual,
        benefit_note=estimate.note,
        processing_days=definition.processing_days,
        approval_likelihood_percent=min(max(likelihood, 0), 100),
    )


class EligibilityEngine:
    """
    Match a household against every program in a catalog.

    Each program's rule, benefit estimator and confidence model are run in
    isolation; a failure in one never affects the others.
    """

    def __init__(
        self,
        policy: Optional[EligibilityPolicy] = None,
        catalog: Optional[ProgramCatalog] = None,
    ):
        """
        Initialize engine.

        Args:
            policy: Eligibility thresholds (default: from environment)
            catalog: Programs to evaluate (default: built-in catalog)
        """
        self.policy = policy or EligibilityPolicy()
        self.catalog = catalog if catalog is not None else default_catalog()

    def evaluate_program(
        self,
        definition: ProgramDefinition,
        profile: HouseholdProfile,
        assessment: Assessment,
    ) -> ProgramVerdict:
        """Evaluate one program. Exceptions from its rules propagate."""
        outcome = definition.eligibility_rule(profile, assessment, self.policy)
        estimate = (
            definition.benefit_estimator(profile, assessment, self.policy)
            if outcome.eligible
            else None
        )
        likelihood = definition.confidence_model(outcome, profile, assessment)
        return build_verdict(definition, outcome, estimate, likelihood)

    def evaluate(
        self,
        profile: HouseholdProfile,
        assessment: Assessment,
        catalog: Optional[ProgramCatalog] = None,
    ) -> EligibilityReport:
        """
        Evaluate all programs and order the verdicts for display.

        Args:
            profile: Household profile
            assessment: Assessment computed from the same profile
            catalog: Override the engine's catalog for this call

        Returns:
            EligibilityReport with one verdict per catalog program

        Raises:
            ValidationError: If the assessment was not computed from this profile
        """
        catalog = catalog if catalog is not None else self.catalog
        if (
            assessment.household_size != profile.household_size
            or assessment.annual_income != profile.annual_income
        ):
            raise ValidationError(
                "Assessment does not match the household profile",
                field="assessment",
                constraint="assessment must be computed from the same profile",
            )

        audit_log: list[AuditEntry] = []
        warnings: list[str] = []
        verdicts: list[ProgramVerdict] = []

        for definition in catalog:
            try:
                verdict = self.evaluate_program(definition, profile, assessment)
            except Exception as exc:
                logger.warning(
                    "program_evaluation_failed",
                    program_id=definition.id,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                verdict = indeterminate_verdict(definition)
                warnings.append(f"Could not determine eligibility for {definition.name}")

            audit_log.append(AuditEntry(
                step=f"program_{definition.id}",
                input_value=f"poverty_percent={assessment.poverty_level_percent}",
                output_value=(
                    f"eligible={verdict.eligible}, "
                    f"likelihood={verdict.approval_likelihood_percent}"
                ),
                source=f"Program catalog {catalog.version}",
                notes=verdict.reason,
            ))
            logger.info(
                "program_evaluated",
                program_id=definition.id,
                eligible=verdict.eligible,
                likelihood=verdict.approval_likelihood_percent,
                indeterminate=verdict.indeterminate,
            )
            verdicts.append(verdict)

        partial = any(v.indeterminate for v in verdicts)
        return EligibilityReport(
            verdicts=tuple(order_verdicts(verdicts)),
            partial=partial,
            catalog_version=catalog.version,
            poverty_level_percent=assessment.poverty_level_percent,
            audit_log=tuple(audit_log),
            warnings=tuple(warnings),
        )


def evaluate(
    profile: HouseholdProfile,
    assessment: Assessment,
    catalog: Optional[ProgramCatalog] = None,
    policy: Optional[EligibilityPolicy] = None,
) -> EligibilityReport:
    """Evaluate a profile with a fresh engine."""
    return EligibilityEngine(policy, catalog).evaluate(profile, assessment)
