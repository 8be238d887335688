"""Custom exceptions for the AidMatch eligibility assistant.

This module provides a hierarchy of exception classes for consistent error
handling across the assessment pipeline. All exceptions inherit from
AidMatchError, making it easy to catch all application-specific errors.

Core errors (ValidationError, StateTransitionError) are raised to the
immediate caller. Collaborator errors (OracleFault, PersistenceFault) are
caught at the boundary and degrade the result instead of aborting it.

Example:
    try:
        assessment = assess(profile)
    except ValidationError as e:
        # Re-prompt the user for the offending field
        show_form_error(e.field, e.message)
    except AidMatchError as e:
        logger.error("assessment_failed", error=str(e))
"""

from typing import Any, Optional


class AidMatchError(Exception):
    """Base exception for all AidMatch errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ValidationError(AidMatchError):
    """Error raised when a household profile is malformed.

    Raised by the assessor before any computation proceeds, for example when
    the household size is below one or dependents are not fewer than the
    household size.

    Attributes:
        field: The field that failed validation.
        value: The invalid value.
        constraint: The validation constraint that was violated.

    Example:
        >>> raise ValidationError(
        ...     "Dependents must be fewer than household size",
        ...     field="dependents",
        ...     value=3,
        ...     constraint="dependents < household_size (3)",
        ... )
        ValidationError: Dependents must be fewer than household size
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error description.
            field: The name of the field that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed by user correction.
                Defaults to True since the user can be re-prompted.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class OracleFault(AidMatchError):
    """Error raised when the scoring collaborator fails for a program.

    The scoring oracle is whatever produces per-program verdicts: the
    built-in rule engine, or an external model. A fault is isolated to the
    affected program, whose verdict is downgraded to indeterminate.

    Attributes:
        program_id: The program whose scoring failed (None for the whole call).
        oracle_name: Identifier of the collaborator that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        program_id: Optional[str] = None,
        oracle_name: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.program_id = program_id
        self.oracle_name = oracle_name

        if program_id:
            self.details["program_id"] = program_id
        if oracle_name:
            self.details["oracle_name"] = oracle_name


class PersistenceFault(AidMatchError):
    """Error raised when a storage write or read fails.

    Persistence is best-effort: this error is logged by the caller and
    never blocks the in-session report or application.

    Attributes:
        operation: The storage operation that failed (e.g. "save_application").
        store_name: Identifier of the storage backend.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        store_name: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.operation = operation
        self.store_name = store_name

        if operation:
            self.details["operation"] = operation
        if store_name:
            self.details["store_name"] = store_name


class StateTransitionError(AidMatchError):
    """Error raised when an application status change is not allowed.

    No mutation is applied when this is raised.

    Attributes:
        application_id: The application the transition was requested for.
        current_status: Status the application is in.
        requested_status: Status that was requested.

    Example:
        >>> raise StateTransitionError(
        ...     "Cannot move an approved application to waitlisted",
        ...     application_id="4b1c...",
        ...     current_status="approved",
        ...     requested_status="waitlisted",
        ... )
        StateTransitionError: Cannot move an approved application to waitlisted
    """

    def __init__(
        self,
        message: str,
        *,
        application_id: Optional[str] = None,
        current_status: Optional[str] = None,
        requested_status: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.application_id = application_id
        self.current_status = current_status
        self.requested_status = requested_status

        if application_id:
            self.details["application_id"] = application_id
        if current_status:
            self.details["current_status"] = current_status
        if requested_status is not None:
            self.details["requested_status"] = requested_status


class ConfigurationError(AidMatchError):
    """Error raised when configuration is invalid or missing.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "AidMatchError",
    "ValidationError",
    "OracleFault",
    "PersistenceFault",
    "StateTransitionError",
    "ConfigurationError",
]
