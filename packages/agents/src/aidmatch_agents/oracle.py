"""Scoring oracles and validation of their output.

The default oracle is the deterministic rule engine from aidmatch_core.
Whatever oracle is configured, its output is treated as untrusted: each
entry is parsed into an OracleVerdictPayload and matched to the catalog by
program id. Programs with no valid entry get an indeterminate verdict.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from aidmatch_core.catalog import ProgramCatalog
from aidmatch_core.config import EligibilityPolicy
from aidmatch_core.engine import EligibilityEngine, indeterminate_verdict, order_verdicts
from aidmatch_core.exceptions import ConfigurationError, OracleFault
from aidmatch_core.models import Assessment, HouseholdProfile, ProgramVerdict

from aidmatch_agents.config import OracleConfig, OracleProvider
from aidmatch_agents.interfaces.types import OracleVerdictPayload

logger = structlog.get_logger()


class RuleEngineOracle:
    """Oracle backed by the built-in eligibility engine.

    Programs the engine could not determine are left out of the output so
    that validation marks them indeterminate, the same as for any other
    oracle.
    """

    name = "rule-engine"

    def __init__(self, policy: Optional[EligibilityPolicy] = None):
        self.engine = EligibilityEngine(policy)

    async def score_programs(
        self,
        profile: HouseholdProfile,
        assessment: Assessment,
        catalog: ProgramCatalog,
    ) -> list[dict[str, Any]]:
        report = self.engine.evaluate(profile, assessment, catalog)
        return [
            OracleVerdictPayload.from_verdict(v).model_dump(mode="json")
            for v in report.verdicts
            if not v.indeterminate
        ]


def build_oracle(config: OracleConfig, policy: Optional[EligibilityPolicy] = None) -> RuleEngineOracle:
    """
    Create the oracle named by the configured provider.

    Only the rule engine is built in. External providers need an oracle
    instance passed to EligibilityPipeline.

    Raises:
        ConfigurationError: If the provider has no built-in implementation
    """
    if config.provider == OracleProvider.RULES:
        return RuleEngineOracle(policy)
    raise ConfigurationError(
        f"No built-in oracle for provider '{config.provider.value}'; "
        "pass an oracle implementing ScoringOracleProtocol",
        config_key="AIDMATCH_ORACLE_PROVIDER",
        expected=OracleProvider.RULES.value,
        actual=config.provider.value,
    )


def validate_oracle_verdicts(
    raw: Any,
    catalog: ProgramCatalog,
    *,
    oracle_name: str = "unknown",
) -> tuple[list[ProgramVerdict], list[str]]:
    """
    Structurally validate oracle output against the catalog.

    Entries that fail validation, name unknown programs, or repeat a
    program already seen are dropped. Every catalog program without a valid
    entry gets an indeterminate verdict.

    Args:
        raw: Whatever the oracle returned
        catalog: Programs that must each receive a verdict
        oracle_name: Used in log events and warnings

    Returns:
        (verdicts ordered for display, warnings)
    """
    warnings: list[str] = []
    accepted: dict[str, ProgramVerdict] = {}

    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        fault = OracleFault(
            f"Oracle returned {type(raw).__name__}, expected a list of verdicts",
            oracle_name=oracle_name,
        )
        logger.warning("oracle_output_invalid", oracle=oracle_name, error=str(fault))
        warnings.append(str(fault))
        raw = []

    for index, entry in enumerate(raw):
        if not isinstance(entry, Mapping):
            logger.warning("oracle_entry_invalid", oracle=oracle_name, index=index, error="not an object")
            continue
        try:
            payload = OracleVerdictPayload.model_validate(dict(entry))
        except PydanticValidationError as exc:
            logger.warning(
                "oracle_entry_invalid",
                oracle=oracle_name,
                index=index,
                program_id=entry.get("program_id"),
                error_count=exc.error_count(),
            )
            continue

        definition = catalog.get(payload.program_id)
        if definition is None:
            logger.warning("oracle_entry_unknown_program", oracle=oracle_name, program_id=payload.program_id)
            continue
        if definition.id in accepted:
            logger.warning("oracle_entry_duplicate", oracle=oracle_name, program_id=definition.id)
            continue
        try:
            accepted[definition.id] = payload.to_verdict(definition)
        except PydanticValidationError as exc:
            logger.warning(
                "oracle_entry_invalid",
                oracle=oracle_name,
                index=index,
                program_id=definition.id,
                error_count=exc.error_count(),
            )

    verdicts: list[ProgramVerdict] = []
    for definition in catalog:
        verdict = accepted.get(definition.id)
        if verdict is None:
            verdict = indeterminate_verdict(definition)
            warnings.append(f"Could not determine eligibility for {definition.name}")
        verdicts.append(verdict)

    return order_verdicts(verdicts), warnings
