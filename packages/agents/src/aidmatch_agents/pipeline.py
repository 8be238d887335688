"""Eligibility pipeline: assess, score, validate, save.

The pipeline is the only place where the pure core meets its external
collaborators. The assessment always comes from the core assessor; the
per-program verdicts come from the configured scoring oracle and are
validated before use. Oracle and storage failures degrade the result
instead of aborting it, so a valid profile always yields a report.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict

from aidmatch_core.assessor import PovertyAssessor
from aidmatch_core.catalog import ProgramCatalog, default_catalog
from aidmatch_core.exceptions import OracleFault, ValidationError
from aidmatch_core.models import (
    Assessment,
    AuditEntry,
    EligibilityReport,
    HouseholdProfile,
)

from aidmatch_agents.config import AidMatchConfig
from aidmatch_agents.interfaces.base import (
    AgentResult,
    PersistenceProtocol,
    ScoringOracleProtocol,
)
from aidmatch_agents.oracle import build_oracle, validate_oracle_verdicts

logger = structlog.get_logger()

PIPELINE_NAME = "EligibilityPipeline"


class EligibilityOutcome(BaseModel):
    """Assessment and report produced by one pipeline run."""

    model_config = ConfigDict(frozen=True)

    assessment: Assessment
    report: EligibilityReport

    @property
    def partial(self) -> bool:
        return self.report.partial


class EligibilityPipeline:
    """
    Orchestrates one eligibility check for a household.

    Steps:
        1. Assess poverty and hardships (core, synchronous)
        2. Ask the scoring oracle for per-program verdicts (async, timed out)
        3. Validate the oracle output, marking gaps indeterminate
        4. Save the assessment and report (best-effort)
    """

    def __init__(
        self,
        config: Optional[AidMatchConfig] = None,
        oracle: Optional[ScoringOracleProtocol] = None,
        store: Optional[PersistenceProtocol] = None,
        catalog: Optional[ProgramCatalog] = None,
    ):
        """
        Initialize pipeline.

        Args:
            config: Root configuration (default: from environment)
            oracle: Scoring oracle (default: built from config.oracle.provider)
            store: Persistence backend; nothing is saved when omitted
            catalog: Programs to score (default: built-in catalog)

        Raises:
            ConfigurationError: If no oracle is given and the configured
                provider has no built-in implementation
        """
        self.config = config or AidMatchConfig()
        self.assessor = PovertyAssessor(self.config.policy)
        self.oracle = oracle if oracle is not None else build_oracle(self.config.oracle, self.config.policy)
        self.store = store
        self.catalog = catalog if catalog is not None else default_catalog()

    async def _score(self, profile: HouseholdProfile, assessment: Assessment) -> tuple[object, list[str]]:
        """Call the oracle; any failure becomes an empty result plus a warning."""
        oracle_name = getattr(self.oracle, "name", type(self.oracle).__name__)

        if not self.config.oracle.enabled:
            logger.info("oracle_disabled", oracle=oracle_name)
            return [], ["Program scoring is disabled"]

        try:
            raw = await asyncio.wait_for(
                self.oracle.score_programs(profile, assessment, self.catalog),
                timeout=self.config.oracle.timeout,
            )
        except asyncio.TimeoutError:
            fault = OracleFault(
                f"Oracle '{oracle_name}' timed out after {self.config.oracle.timeout}s",
                oracle_name=oracle_name,
            )
        except Exception as exc:
            fault = OracleFault(
                f"Oracle '{oracle_name}' failed: {exc}",
                oracle_name=oracle_name,
                details={"error_type": type(exc).__name__},
            )
        else:
            return raw, []

        logger.warning("oracle_failed", oracle=oracle_name, error=str(fault), **fault.details)
        return [], [str(fault)]

    async def _save(
        self,
        profile: HouseholdProfile,
        assessment: Assessment,
        report: EligibilityReport,
    ) -> list[str]:
        if self.store is None or not self.config.pipeline.persist_results:
            return []
        try:
            await self.store.save_assessment(profile, assessment, report)
        except Exception as exc:
            logger.error(
                "persistence_failed",
                operation="save_assessment",
                store=getattr(self.store, "name", type(self.store).__name__),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return ["Results could not be saved and are available for this session only"]
        return []

    async def run(self, profile: HouseholdProfile) -> AgentResult[EligibilityOutcome]:
        """
        Run the full eligibility check.

        Args:
            profile: Household profile from the intake layer

        Returns:
            AgentResult with an EligibilityOutcome. Status is PARTIAL when any
            verdict is indeterminate and ERROR when the profile is rejected.
        """
        started_at = datetime.now(timezone.utc)

        try:
            assessment = self.assessor.assess(profile)
        except ValidationError as exc:
            logger.info("profile_rejected", error=str(exc), **exc.details)
            return AgentResult.failure(str(exc), details=exc.details, agent_name=PIPELINE_NAME)

        oracle_name = getattr(self.oracle, "name", type(self.oracle).__name__)
        raw, warnings = await self._score(profile, assessment)
        verdicts, validation_warnings = validate_oracle_verdicts(raw, self.catalog, oracle_name=oracle_name)
        warnings.extend(validation_warnings)

        audit_log = tuple(
            AuditEntry(
                step=f"program_{v.program_id}",
                input_value=f"poverty_percent={assessment.poverty_level_percent}",
                output_value=f"eligible={v.eligible}, likelihood={v.approval_likelihood_percent}",
                source=f"Oracle {oracle_name}",
                notes=v.reason,
            )
            for v in verdicts
        )
        report = EligibilityReport(
            verdicts=tuple(verdicts),
            partial=any(v.indeterminate for v in verdicts),
            catalog_version=self.catalog.version,
            poverty_level_percent=assessment.poverty_level_percent,
            audit_log=audit_log,
            warnings=tuple(warnings),
        )

        save_warnings = await self._save(profile, assessment, report)

        completed_at = datetime.now(timezone.utc)
        logger.info(
            "eligibility_check_completed",
            poverty_level_percent=assessment.poverty_level_percent,
            eligible_count=report.eligible_count,
            partial=report.partial,
            indeterminate=report.indeterminate_program_ids,
        )

        result = AgentResult.success(
            EligibilityOutcome(assessment=assessment, report=report),
            partial=report.partial,
            agent_name=PIPELINE_NAME,
            metadata={
                "oracle": oracle_name,
                "catalog_version": self.catalog.version,
                "guidelines_version": assessment.guidelines_version,
            },
            warnings=list(report.warnings) + save_warnings,
        )
        result.started_at = started_at
        result.completed_at = completed_at
        result.duration_ms = (completed_at - started_at).total_seconds() * 1000
        return result
