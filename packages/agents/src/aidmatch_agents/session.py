"""Session-scoped owner of a user's applications and notifications.

AssistanceSession is the single writer for one user session. Mutations
are serialized with an asyncio.Lock so concurrent "apply" clicks (two
tabs, double submits) cannot interleave, and each change is mirrored to
the store after the in-memory state is updated. The in-memory tracker
stays authoritative when a save fails.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Optional, Union

import structlog

from aidmatch_core.models import (
    Application,
    ApplicationStatus,
    HouseholdProfile,
    Notification,
    ProgramVerdict,
)
from aidmatch_core.tracker import ApplicationTracker, Clock

from aidmatch_agents.interfaces.base import AgentResult, PersistenceProtocol
from aidmatch_agents.pipeline import EligibilityOutcome, EligibilityPipeline

logger = structlog.get_logger()


class AssistanceSession:
    """
    One user's session: latest eligibility outcome plus tracked applications.

    Example:
        session = AssistanceSession(store=InMemoryStore())
        await session.load()
        result = await session.check_eligibility(profile)
        snap = result.data.report.get("snap")
        app = await session.apply(snap)
    """

    def __init__(
        self,
        pipeline: Optional[EligibilityPipeline] = None,
        store: Optional[PersistenceProtocol] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize session.

        Args:
            pipeline: Eligibility pipeline (default: one sharing this store)
            store: Persistence backend; the session is memory-only when omitted
            clock: Time source for the tracker
        """
        self.store = store
        self.pipeline = pipeline or EligibilityPipeline(store=store)
        self._clock = clock
        self.tracker = ApplicationTracker(clock=clock)
        self.latest: Optional[EligibilityOutcome] = None
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Read-only snapshots
    # ------------------------------------------------------------------

    @property
    def applications(self) -> list[Application]:
        return self.tracker.applications

    @property
    def notifications(self) -> list[Notification]:
        return self.tracker.notifications

    @property
    def unread_count(self) -> int:
        return self.tracker.unread_count

    # ------------------------------------------------------------------
    # Persistence mirror
    # ------------------------------------------------------------------

    async def _persist(self, operation: str, write: Callable[[], Awaitable[None]]) -> bool:
        """Run a store write; failures are logged and reported as False."""
        if self.store is None:
            return False
        try:
            await write()
        except Exception as exc:
            logger.error(
                "persistence_failed",
                operation=operation,
                store=getattr(self.store, "name", type(self.store).__name__),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return False
        return True

    async def _mirror(self, application: Application) -> None:
        store = self.store
        await self._persist("save_application", lambda: store.save_application(application))
        notification = self.tracker.latest_notification
        if notification is not None:
            await self._persist("save_notification", lambda: store.save_notification(notification))

    async def load(self) -> bool:
        """
        Replace the session's records with those held by the store.

        Returns:
            True if records were loaded, False when there is no store or the
            read failed (the session then starts empty)
        """
        if self.store is None:
            return False
        async with self._lock:
            try:
                applications = await self.store.load_applications()
                notifications = await self.store.load_notifications()
            except Exception as exc:
                logger.error(
                    "persistence_failed",
                    operation="load",
                    store=getattr(self.store, "name", type(self.store).__name__),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                return False
            self.tracker = ApplicationTracker(
                clock=self._clock,
                applications=applications,
                notifications=notifications,
            )
        logger.info(
            "session_loaded",
            applications=len(applications),
            notifications=len(notifications),
        )
        return True

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    async def check_eligibility(self, profile: HouseholdProfile) -> AgentResult[EligibilityOutcome]:
        """Run the pipeline and keep the outcome as the session's latest."""
        result = await self.pipeline.run(profile)
        if result.data is not None:
            self.latest = result.data
        return result

    async def apply(self, verdict: ProgramVerdict) -> Application:
        """
        Submit an application for a verdict, at most once per program.

        Raises:
            StateTransitionError: If the verdict does not allow applying
        """
        async with self._lock:
            existing = self.tracker.find_by_program(verdict.program_id)
            application = self.tracker.submit(verdict)
            if existing is None:
                await self._mirror(application)
            return application

    async def update_status(
        self,
        application_id: str,
        status: Union[ApplicationStatus, str],
        details: Optional[str] = None,
    ) -> Application:
        """
        Apply an external status change.

        Raises:
            StateTransitionError: If the change is not allowed
        """
        async with self._lock:
            application = self.tracker.transition(application_id, status, details)
            await self._mirror(application)
            return application

    async def resolve_action(self, application_id: str, details: Optional[str] = None) -> Application:
        """Return an action-required application to review."""
        async with self._lock:
            application = self.tracker.resolve_action(application_id, details)
            await self._mirror(application)
            return application

    async def mark_all_read(self) -> int:
        """Mark every notification read. Returns how many changed."""
        async with self._lock:
            changed = self.tracker.mark_all_read()
            if changed:
                store = self.store
                await self._persist("mark_notifications_read", lambda: store.mark_notifications_read())
            return changed
