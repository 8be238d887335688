"""Collaborator interfaces for the AidMatch pipeline.

This module defines the protocols (contracts) the pipeline needs from its
external collaborators: the scoring oracle that produces per-program
verdicts, and the persistence layer that stores results. They use Python's
structural subtyping via typing.Protocol, so any class that implements the
required methods is compatible - no explicit inheritance required.

Design Goals:
- Framework independence: no imports from model SDKs or storage drivers
- Duck typing: any class with matching method signatures is compatible
- Async-first: collaborator calls are I/O and must not block the core
- Plain values: collaborators receive and return core models or dicts

Example Usage:
    ```python
    from aidmatch_agents.interfaces.base import ScoringOracleProtocol

    class HostedModelOracle:
        '''Asks a hosted model for verdicts.'''

        name = "hosted-model"

        async def score_programs(self, profile, assessment, catalog):
            response = await self._client.generate(...)
            return response.json()["programs"]

    # HostedModelOracle is compatible with ScoringOracleProtocol
    # without needing to explicitly inherit from it
    ```
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Generic, Mapping, Optional, Protocol, Sequence, TypeVar, runtime_checkable

from pydantic import BaseModel, Field

from aidmatch_core.catalog import ProgramCatalog
from aidmatch_core.models import (
    Application,
    Assessment,
    EligibilityReport,
    HouseholdProfile,
    Notification,
)


# =============================================================================
# TYPE VARIABLES
# =============================================================================

ResultT = TypeVar("ResultT")
"""Type variable for result data types."""


# =============================================================================
# ENUMERATIONS
# =============================================================================

class AgentStatus(str, Enum):
    """Status codes for pipeline results."""

    SUCCESS = "success"
    """Completed with every program determined."""

    PARTIAL = "partial"
    """Completed, but some verdicts are indeterminate."""

    ERROR = "error"
    """The input was rejected; no result was produced."""


# =============================================================================
# RESULT MODELS
# =============================================================================

class AgentResult(BaseModel, Generic[ResultT]):
    """Standardized wrapper for pipeline results.

    Attributes:
        status: The execution status (success, partial, error)
        data: The result data
        error_message: Error message if status is ERROR, None otherwise
        error_details: Additional error context
        started_at: When processing began
        completed_at: When processing finished
        duration_ms: Processing time in milliseconds
        metadata: Additional context about the processing run
        warnings: Non-fatal issues encountered during processing
        agent_name: Name of the component that produced this result

    Example:
        ```python
        result = AgentResult.success(report, agent_name="EligibilityPipeline")
        if result.is_partial:
            show_banner("Some programs could not be assessed")
        ```
    """

    status: AgentStatus = Field(
        default=AgentStatus.SUCCESS,
        description="Execution status"
    )
    data: Optional[ResultT] = Field(
        default=None,
        description="The result data"
    )
    error_message: Optional[str] = Field(
        default=None,
        description="Error message if status is ERROR"
    )
    error_details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context and details"
    )
    started_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when processing started"
    )
    completed_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when processing completed"
    )
    duration_ms: Optional[float] = Field(
        default=None,
        ge=0,
        description="Processing duration in milliseconds"
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional metadata about the processing"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-fatal warnings from processing"
    )
    agent_name: Optional[str] = Field(
        default=None,
        description="Name of the component that produced this result"
    )

    @property
    def is_success(self) -> bool:
        """Check if every part of the result was determined."""
        return self.status == AgentStatus.SUCCESS

    @property
    def is_partial(self) -> bool:
        """Check if the result is usable but incomplete."""
        return self.status == AgentStatus.PARTIAL

    @property
    def is_error(self) -> bool:
        """Check if the result indicates an error occurred."""
        return self.status == AgentStatus.ERROR

    @property
    def has_warnings(self) -> bool:
        """Check if any warnings were generated."""
        return len(self.warnings) > 0

    @classmethod
    def success(
        cls,
        data: Any,
        *,
        partial: bool = False,
        agent_name: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
        warnings: Optional[list[str]] = None,
    ) -> AgentResult[Any]:
        """Create a result with the given data.

        Args:
            data: The result data
            partial: Mark the result PARTIAL instead of SUCCESS
            agent_name: Name of the component
            metadata: Additional metadata
            warnings: Any warnings to include

        Returns:
            An AgentResult with SUCCESS or PARTIAL status
        """
        return cls(
            status=AgentStatus.PARTIAL if partial else AgentStatus.SUCCESS,
            data=data,
            agent_name=agent_name,
            metadata=metadata or {},
            warnings=warnings or [],
        )

    @classmethod
    def failure(
        cls,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        agent_name: Optional[str] = None,
    ) -> AgentResult[Any]:
        """Create an error result with the given message.

        Args:
            message: The error message
            details: Additional error context
            agent_name: Name of the component

        Returns:
            An AgentResult with ERROR status
        """
        return cls(
            status=AgentStatus.ERROR,
            error_message=message,
            error_details=details,
            agent_name=agent_name,
        )


# =============================================================================
# SCORING ORACLE PROTOCOL
# =============================================================================

@runtime_checkable
class ScoringOracleProtocol(Protocol):
    """Protocol for the collaborator that scores programs.

    Given a profile, its assessment and the catalog, the oracle returns one
    raw verdict mapping per program. Output is untrusted: the pipeline
    validates every entry structurally and replaces missing or malformed
    entries with indeterminate verdicts.

    Notes:
        - Implementations MUST be async-compatible
        - Implementations MAY raise; the pipeline treats any exception as
          an OracleFault for every program
    """

    name: str

    async def score_programs(
        self,
        profile: HouseholdProfile,
        assessment: Assessment,
        catalog: ProgramCatalog,
    ) -> Sequence[Mapping[str, Any]]:
        """Return raw per-program verdicts shaped like OracleVerdictPayload."""
        ...


# =============================================================================
# PERSISTENCE PROTOCOL
# =============================================================================

@runtime_checkable
class PersistenceProtocol(Protocol):
    """Protocol for the durable store behind a session.

    Every write is best-effort from the caller's point of view: failures
    are raised as PersistenceFault, logged, and never block the session.
    """

    name: str

    async def save_assessment(
        self,
        profile: HouseholdProfile,
        assessment: Assessment,
        report: EligibilityReport,
    ) -> None:
        """Store an assessment together with the profile and report it came from."""
        ...

    async def save_application(self, application: Application) -> None:
        """Insert or replace an application by id."""
        ...

    async def save_notification(self, notification: Notification) -> None:
        """Insert or replace a notification by id."""
        ...

    async def mark_notifications_read(self) -> None:
        """Mark every stored notification read."""
        ...

    async def load_applications(self) -> list[Application]:
        """Stored applications, newest first."""
        ...

    async def load_notifications(self) -> list[Notification]:
        """Stored notifications, newest first."""
        ...


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    # Type variables
    "ResultT",
    # Enumerations
    "AgentStatus",
    # Result models
    "AgentResult",
    # Protocols
    "ScoringOracleProtocol",
    "PersistenceProtocol",
]
