"""Data models for aidmatch-core.

This package provides:
- Household intake profile (household.py)
- Poverty and hardship assessment (assessment.py)
- Program verdicts and eligibility reports (eligibility.py)
- Applications and notifications (tracker.py)
- Calculation audit entries (audit.py)
"""

from aidmatch_core.models.audit import AuditEntry
from aidmatch_core.models.household import (
    EmploymentStatus,
    HardshipType,
    HouseholdProfile,
    MonthlyExpenses,
)
from aidmatch_core.models.assessment import Assessment, PovertyClassification
from aidmatch_core.models.eligibility import (
    INSUFFICIENT_DATA_REASON,
    EligibilityReport,
    ProgramVerdict,
)
from aidmatch_core.models.tracker import (
    Application,
    ApplicationStatus,
    Notification,
    NotificationType,
)

__all__ = [
    # Audit
    "AuditEntry",
    # Intake
    "EmploymentStatus",
    "HardshipType",
    "HouseholdProfile",
    "MonthlyExpenses",
    # Assessment
    "Assessment",
    "PovertyClassification",
    # Eligibility
    "INSUFFICIENT_DATA_REASON",
    "EligibilityReport",
    "ProgramVerdict",
    # Tracker
    "Application",
    "ApplicationStatus",
    "Notification",
    "NotificationType",
]
