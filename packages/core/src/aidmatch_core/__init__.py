"""AidMatch Core - Poverty assessment, program eligibility and application tracking."""

__version__ = "0.1.0"

from .assessor import PovertyAssessor, assess
from .catalog import ProgramCatalog, ProgramDefinition, default_catalog
from .config import EligibilityPolicy
from .engine import EligibilityEngine, evaluate
from .models import (
    Application,
    ApplicationStatus,
    Assessment,
    EligibilityReport,
    EmploymentStatus,
    HardshipType,
    HouseholdProfile,
    MonthlyExpenses,
    Notification,
    NotificationType,
    PovertyClassification,
    ProgramVerdict,
)
from .tracker import ApplicationTracker

__all__ = [
    "PovertyAssessor",
    "assess",
    "ProgramCatalog",
    "ProgramDefinition",
    "default_catalog",
    "EligibilityPolicy",
    "EligibilityEngine",
    "evaluate",
    "ApplicationTracker",
    "Application",
    "ApplicationStatus",
    "Assessment",
    "EligibilityReport",
    "EmploymentStatus",
    "HardshipType",
    "HouseholdProfile",
    "MonthlyExpenses",
    "Notification",
    "NotificationType",
    "PovertyClassification",
    "ProgramVerdict",
]
