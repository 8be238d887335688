"""AidMatch Agents - Collaborator boundary and session orchestration."""

from aidmatch_agents.config import (
    AidMatchConfig,
    LogFormat,
    OracleConfig,
    OracleProvider,
    PipelineConfig,
)
from aidmatch_agents.logging_config import configure_logging
from aidmatch_agents.oracle import RuleEngineOracle, build_oracle, validate_oracle_verdicts
from aidmatch_agents.persistence import InMemoryStore
from aidmatch_agents.pipeline import EligibilityOutcome, EligibilityPipeline
from aidmatch_agents.session import AssistanceSession

__version__ = "0.1.0"

__all__ = [
    "AidMatchConfig",
    "LogFormat",
    "OracleConfig",
    "OracleProvider",
    "PipelineConfig",
    "configure_logging",
    "RuleEngineOracle",
    "build_oracle",
    "validate_oracle_verdicts",
    "InMemoryStore",
    "EligibilityOutcome",
    "EligibilityPipeline",
    "AssistanceSession",
]
