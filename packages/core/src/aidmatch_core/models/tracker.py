"""Application and notification records owned by the lifecycle tracker."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    """Return current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


class ApplicationStatus(str, Enum):
    """Lifecycle states of a submitted application."""
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    WAITLISTED = "waitlisted"
    ACTION_REQUIRED = "action_required"
    DENIED = "denied"


class NotificationType(str, Enum):
    """Visual treatment of a notification."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ACTION = "action"


class Application(BaseModel):
    """A submitted application for one assistance program.

    Status is only changed through ApplicationTracker transitions.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    confirmation_number: str
    program_id: str
    program_name: str
    category: str
    status: ApplicationStatus = ApplicationStatus.UNDER_REVIEW
    submitted_date: datetime = Field(default_factory=_utc_now)
    last_updated: datetime = Field(default_factory=_utc_now)
    estimated_decision_date: Optional[datetime] = None
    benefit_amount: Optional[str] = None
    next_steps: Optional[str] = None


class Notification(BaseModel):
    """A message shown in the notification center."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    type: NotificationType = NotificationType.INFO
    title: str
    message: str
    date: datetime = Field(default_factory=_utc_now)
    read: bool = False
    application_id: Optional[str] = None
