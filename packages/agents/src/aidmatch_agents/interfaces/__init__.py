"""Collaborator interfaces for the AidMatch pipeline.

This package defines the protocols and result types that any scoring
oracle or persistence adapter must satisfy. These interfaces are
framework-independent - no imports from model SDKs or database drivers
are allowed.

Available Interfaces:
    ScoringOracleProtocol: Produces raw per-program verdicts
    PersistenceProtocol: Best-effort durable store for a session
    AgentResult: Standardized result wrapper for pipeline outputs
    AgentStatus: Enum for execution status codes

Wire Types:
    OracleVerdictPayload: One program entry returned by an oracle
"""

from aidmatch_agents.interfaces.base import (
    # Type variables
    ResultT,
    # Enumerations
    AgentStatus,
    # Result models
    AgentResult,
    # Protocols
    PersistenceProtocol,
    ScoringOracleProtocol,
)

from aidmatch_agents.interfaces.types import OracleVerdictPayload

__all__ = [
    # Type variables
    "ResultT",
    # Enumerations
    "AgentStatus",
    # Result models
    "AgentResult",
    # Protocols
    "PersistenceProtocol",
    "ScoringOracleProtocol",
    # Wire types
    "OracleVerdictPayload",
]
