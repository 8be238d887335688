"""In-memory persistence backend.

Implements PersistenceProtocol with plain dictionaries. Used as the
default store in development and tests; durable backends implement the
same protocol.
"""

from dataclasses import dataclass

import structlog

from aidmatch_core.exceptions import PersistenceFault
from aidmatch_core.models import (
    Application,
    Assessment,
    EligibilityReport,
    HouseholdProfile,
    Notification,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class StoredAssessment:
    """An assessment row together with its inputs and report."""
    profile: HouseholdProfile
    assessment: Assessment
    report: EligibilityReport


class InMemoryStore:
    """Dictionary-backed store.

    Records are stored as copies so later in-session mutations never leak
    into the store without an explicit save. Set ``fail_writes`` to make
    every write raise PersistenceFault.
    """

    name = "memory"

    def __init__(self, fail_writes: bool = False):
        self.fail_writes = fail_writes
        self.assessments: list[StoredAssessment] = []
        self._applications: dict[str, Application] = {}
        self._notifications: dict[str, Notification] = {}

    def _check_writable(self, operation: str) -> None:
        if self.fail_writes:
            raise PersistenceFault(
                f"Store '{self.name}' rejected {operation}",
                operation=operation,
                store_name=self.name,
            )

    async def save_assessment(
        self,
        profile: HouseholdProfile,
        assessment: Assessment,
        report: EligibilityReport,
    ) -> None:
        self._check_writable("save_assessment")
        self.assessments.append(StoredAssessment(profile, assessment, report))
        logger.debug("assessment_saved", store=self.name, count=len(self.assessments))

    async def save_application(self, application: Application) -> None:
        self._check_writable("save_application")
        self._applications[application.id] = application.model_copy()
        logger.debug("application_saved", store=self.name, application_id=application.id)

    async def save_notification(self, notification: Notification) -> None:
        self._check_writable("save_notification")
        self._notifications[notification.id] = notification.model_copy()
        logger.debug("notification_saved", store=self.name, notification_id=notification.id)

    async def mark_notifications_read(self) -> None:
        self._check_writable("mark_notifications_read")
        for notification in self._notifications.values():
            notification.read = True

    async def load_applications(self) -> list[Application]:
        return sorted(
            (a.model_copy() for a in reversed(list(self._applications.values()))),
            key=lambda a: a.submitted_date,
            reverse=True,
        )

    async def load_notifications(self) -> list[Notification]:
        return sorted(
            (n.model_copy() for n in reversed(list(self._notifications.values()))),
            key=lambda n: n.date,
            reverse=True,
        )
