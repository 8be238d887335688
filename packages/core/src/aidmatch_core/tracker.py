"""Application lifecycle tracking.

The tracker owns a session's applications and notifications. Every
mutation goes through one of its entry points (submit, transition,
resolve_action, mark_all_read), each of which validates first and only
then changes state, emitting a notification for lifecycle events.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union
from uuid import uuid4

import structlog

from .exceptions import StateTransitionError
from .models import (
    Application,
    ApplicationStatus,
    Notification,
    NotificationType,
    ProgramVerdict,
)

logger = structlog.get_logger()

Clock = Callable[[], datetime]

ALLOWED_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.UNDER_REVIEW: frozenset({
        ApplicationStatus.UNDER_REVIEW,
        ApplicationStatus.APPROVED,
        ApplicationStatus.WAITLISTED,
        ApplicationStatus.ACTION_REQUIRED,
        ApplicationStatus.DENIED,
    }),
    ApplicationStatus.ACTION_REQUIRED: frozenset({
        ApplicationStatus.ACTION_REQUIRED,
        ApplicationStatus.UNDER_REVIEW,
        ApplicationStatus.DENIED,
    }),
    ApplicationStatus.WAITLISTED: frozenset({
        ApplicationStatus.WAITLISTED,
        ApplicationStatus.APPROVED,
        ApplicationStatus.DENIED,
    }),
    ApplicationStatus.APPROVED: frozenset(),
    ApplicationStatus.DENIED: frozenset(),
}

NOTIFICATION_TYPES: dict[ApplicationStatus, NotificationType] = {
    ApplicationStatus.APPROVED: NotificationType.SUCCESS,
    ApplicationStatus.ACTION_REQUIRED: NotificationType.ACTION,
    ApplicationStatus.WAITLISTED: NotificationType.WARNING,
}

DEFAULT_NEXT_STEPS: dict[ApplicationStatus, str] = {
    ApplicationStatus.UNDER_REVIEW: "No action needed. The agency is reviewing your application.",
    ApplicationStatus.APPROVED: "Watch for your benefit card or first payment.",
    ApplicationStatus.WAITLISTED: "Keep your contact details current to hold your waitlist position.",
    ApplicationStatus.ACTION_REQUIRED: "Upload the requested documents to continue the review.",
    ApplicationStatus.DENIED: "Review the decision letter; you may be able to appeal.",
}

STATUS_TITLES: dict[ApplicationStatus, str] = {
    ApplicationStatus.UNDER_REVIEW: "Application Under Review",
    ApplicationStatus.APPROVED: "Benefits Approved",
    ApplicationStatus.WAITLISTED: "Waitlist Update",
    ApplicationStatus.ACTION_REQUIRED: "Action Required",
    ApplicationStatus.DENIED: "Application Denied",
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_status(value: Union[ApplicationStatus, str]) -> ApplicationStatus:
    """Coerce a status value, rejecting anything outside the enum.

    Raises:
        StateTransitionError: If the value is not a known status.
    """
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise StateTransitionError(
            f"Unknown application status: {value!r}",
            requested_status=value,
            details={"allowed": [s.value for s in ApplicationStatus]},
        ) from None


class ApplicationTracker:
    """
    State machine for a session's applications and their notifications.

    Applications are keyed by ``program_id``: submitting twice for the same
    program returns the existing application.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        applications: Optional[list[Application]] = None,
        notifications: Optional[list[Notification]] = None,
    ):
        """
        Initialize tracker, optionally with previously stored records.

        Args:
            clock: Returns the current time (default: UTC now)
            applications: Existing applications, newest first
            notifications: Existing notifications, newest first
        """
        self._clock = clock or _utc_now
        self._applications: list[Application] = list(applications or [])
        self._notifications: list[Notification] = list(notifications or [])
        self._confirmation_numbers = {a.confirmation_number for a in self._applications}

    # ------------------------------------------------------------------
    # Read-only snapshots
    # ------------------------------------------------------------------

    @property
    def applications(self) -> list[Application]:
        """Copies of all applications, newest first."""
        return [a.model_copy() for a in self._applications]

    @property
    def notifications(self) -> list[Notification]:
        """Copies of all notifications, newest first."""
        return [n.model_copy() for n in self._notifications]

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.read)

    def get(self, application_id: str) -> Optional[Application]:
        app = self._find(application_id)
        return app.model_copy() if app else None

    def find_by_program(self, program_id: str) -> Optional[Application]:
        """The application for a program, joined on its stable id."""
        for app in self._applications:
            if app.program_id == program_id:
                return app.model_copy()
        return None

    def search(self, term: str) -> list[Application]:
        """Case-insensitive match on program name or confirmation number."""
        needle = term.strip().lower()
        if not needle:
            return self.applications
        return [
            a.model_copy()
            for a in self._applications
            if needle in a.program_name.lower() or needle in a.confirmation_number.lower()
        ]

    def status_counts(self) -> dict[ApplicationStatus, int]:
        counts = Counter(a.status for a in self._applications)
        return {status: counts.get(status, 0) for status in ApplicationStatus}

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def submit(self, verdict: ProgramVerdict) -> Application:
        """
        Create an application for an eligible program.

        Args:
            verdict: The verdict the user chose to apply for

        Returns:
            The new application, or the existing one for this program

        Raises:
            StateTransitionError: If the verdict does not allow applying
        """
        if not verdict.can_apply:
            raise StateTransitionError(
                f"Cannot apply to {verdict.program_name}: household is not eligible",
                requested_status=ApplicationStatus.UNDER_REVIEW.value,
                details={"program_id": verdict.program_id, "reason": verdict.reason},
            )

        existing = self.find_by_program(verdict.program_id)
        if existing is not None:
            logger.info(
                "duplicate_submission_ignored",
                program_id=verdict.program_id,
                application_id=existing.id,
            )
            return existing

        now = self._clock()
        app = Application(
            confirmation_number=self._new_confirmation_number(verdict.program_id, now),
            program_id=verdict.program_id,
            program_name=verdict.program_name,
            category=verdict.category,
            status=ApplicationStatus.UNDER_REVIEW,
            submitted_date=now,
            last_updated=now,
            estimated_decision_date=now + timedelta(days=verdict.processing_days),
            benefit_amount=verdict.format_benefit(),
            next_steps=DEFAULT_NEXT_STEPS[ApplicationStatus.UNDER_REVIEW],
        )
        self._applications.insert(0, app)
        self._notify(
            NotificationType.INFO,
            "Application Submitted",
            f"Your application for {app.program_name} has been received. "
            f"Confirmation number: {app.confirmation_number}.",
            app,
        )
        logger.info(
            "application_submitted",
            application_id=app.id,
            program_id=app.program_id,
            confirmation_number=app.confirmation_number,
            processing_days=verdict.processing_days,
        )
        return app.model_copy()

    def transition(
        self,
        application_id: str,
        new_status: Union[ApplicationStatus, str],
        details: Optional[str] = None,
    ) -> Application:
        """
        Apply an external status change to an application.

        Args:
            application_id: Application to update
            new_status: One of the ApplicationStatus values
            details: Message for the notification and the next steps

        Returns:
            The updated application

        Raises:
            StateTransitionError: If the status is unknown, the application
                does not exist, or the transition is not allowed
        """
        status = parse_status(new_status)
        app = self._find(application_id)
        if app is None:
            raise StateTransitionError(
                f"No application with id {application_id}",
                application_id=application_id,
                requested_status=status.value,
            )
        if status not in ALLOWED_TRANSITIONS[app.status]:
            raise StateTransitionError(
                f"Cannot move a {app.status.value} application to {status.value}",
                application_id=application_id,
                current_status=app.status.value,
                requested_status=status.value,
            )

        previous = app.status
        app.status = status
        app.last_updated = self._clock()
        app.next_steps = details or DEFAULT_NEXT_STEPS[status]

        message = details or f"Your {app.program_name} application is now {status.value.replace('_', ' ')}."
        self._notify(
            NOTIFICATION_TYPES.get(status, NotificationType.INFO),
            f"{STATUS_TITLES[status]}: {app.program_name}",
            message,
            app,
        )
        logger.info(
            "application_status_changed",
            application_id=app.id,
            program_id=app.program_id,
            previous_status=previous.value,
            new_status=status.value,
        )
        return app.model_copy()

    def resolve_action(self, application_id: str, details: Optional[str] = None) -> Application:
        """Return an action-required application to review once resolved."""
        app = self._find(application_id)
        if app is not None and app.status != ApplicationStatus.ACTION_REQUIRED:
            raise StateTransitionError(
                "Only action-required applications can be resolved",
                application_id=application_id,
                current_status=app.status.value,
                requested_status=ApplicationStatus.UNDER_REVIEW.value,
            )
        return self.transition(
            application_id,
            ApplicationStatus.UNDER_REVIEW,
            details or "Thanks, the requested information was received. Review has resumed.",
        )

    def mark_all_read(self) -> int:
        """Mark every notification read. Returns how many changed."""
        changed = 0
        for notification in self._notifications:
            if not notification.read:
                notification.read = True
                changed += 1
        logger.info("notifications_marked_read", changed=changed)
        return changed

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find(self, application_id: str) -> Optional[Application]:
        for app in self._applications:
            if app.id == application_id:
                return app
        return None

    def _new_confirmation_number(self, program_id: str, now: datetime) -> str:
        while True:
            candidate = f"{program_id.upper()}-{now.year}-{uuid4().hex[:8].upper()}"
            if candidate not in self._confirmation_numbers:
                self._confirmation_numbers.add(candidate)
                return candidate

    def _notify(
        self,
        kind: NotificationType,
        title: str,
        message: str,
        app: Application,
    ) -> Notification:
        notification = Notification(
            type=kind,
            title=title,
            message=message,
            date=self._clock(),
            application_id=app.id,
        )
        self._notifications.insert(0, notification)
        return notification

    @property
    def latest_notification(self) -> Optional[Notification]:
        """Most recently emitted notification."""
        return self._notifications[0].model_copy() if self._notifications else None
