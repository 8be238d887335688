"""Registry of assistance programs evaluated by the eligibility engine.

The catalog is append-only: new programs go at the end so existing ones
keep their position, and ``program_id`` is the stable identity across
catalog versions.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Callable, Optional

from .config import EligibilityPolicy
from .exceptions import ConfigurationError
from .models import Assessment, HouseholdProfile
from . import programs
from .program_standards import PROCESSING_DAYS
from .programs import BenefitEstimate, RuleOutcome

CATALOG_VERSION = "2025.1"

EligibilityRule = Callable[[HouseholdProfile, Assessment, EligibilityPolicy], RuleOutcome]
BenefitEstimator = Callable[[HouseholdProfile, Assessment, EligibilityPolicy], BenefitEstimate]
ConfidenceModel = Callable[[RuleOutcome, HouseholdProfile, Assessment], int]


@dataclass(frozen=True)
class ProgramDefinition:
    """Static description of one assistance program."""
    id: str
    name: str
    category: str
    eligibility_rule: EligibilityRule
    benefit_estimator: BenefitEstimator
    confidence_model: ConfidenceModel
    processing_days: int

    def __post_init__(self) -> None:
        if self.processing_days < 0:
            raise ConfigurationError(
                f"Program '{self.id}' has negative processing days",
                config_key=f"{self.id}.processing_days",
                expected=">= 0",
                actual=self.processing_days,
            )


class ProgramCatalog(Sequence[ProgramDefinition]):
    """Read-only, ordered collection of program definitions."""

    def __init__(self, definitions: Sequence[ProgramDefinition], version: str = CATALOG_VERSION):
        ids = [d.id for d in definitions]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ConfigurationError(
                f"Duplicate program ids in catalog: {', '.join(duplicates)}",
                config_key="catalog",
                expected="unique program ids",
                actual=duplicates,
            )
        self._definitions = tuple(definitions)
        self.version = version

    def __getitem__(self, index):
        return self._definitions[index]

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[ProgramDefinition]:
        return iter(self._definitions)

    def __repr__(self) -> str:
        return f"ProgramCatalog(version={self.version!r}, programs={self.program_ids!r})"

    @property
    def program_ids(self) -> list[str]:
        return [d.id for d in self._definitions]

    def get(self, program_id: str) -> Optional[ProgramDefinition]:
        """Look up a definition by id."""
        for definition in self._definitions:
            if definition.id == program_id:
                return definition
        return None

    def extended(self, *definitions: ProgramDefinition, version: Optional[str] = None) -> "ProgramCatalog":
        """New catalog with programs appended after the existing ones."""
        return ProgramCatalog(self._definitions + definitions, version=version or self.version)


DEFAULT_PROGRAMS: tuple[ProgramDefinition, ...] = (
    ProgramDefinition(
        id="snap",
        name="Supplemental Nutrition Assistance Program (SNAP)",
        category="Food",
        eligibility_rule=programs.snap_rule,
        benefit_estimator=programs.snap_benefit,
        confidence_model=programs.snap_confidence,
        processing_days=PROCESSING_DAYS["snap"],
    ),
    ProgramDefinition(
        id="wic",
        name="Women, Infants, and Children (WIC)",
        category="Food/Health",
        eligibility_rule=programs.wic_rule,
        benefit_estimator=programs.wic_benefit,
        confidence_model=programs.wic_confidence,
        processing_days=PROCESSING_DAYS["wic"],
    ),
    ProgramDefinition(
        id="liheap",
        name="Low Income Home Energy Assistance Program (LIHEAP)",
        category="Utilities",
        eligibility_rule=programs.liheap_rule,
        benefit_estimator=programs.liheap_benefit,
        confidence_model=programs.liheap_confidence,
        processing_days=PROCESSING_DAYS["liheap"],
    ),
    ProgramDefinition(
        id="hcv",
        name="Housing Choice Voucher Program (Section 8)",
        category="Housing",
        eligibility_rule=programs.housing_rule,
        benefit_estimator=programs.housing_benefit,
        confidence_model=programs.housing_confidence,
        processing_days=PROCESSING_DAYS["hcv"],
    ),
    ProgramDefinition(
        id="tanf",
        name="Temporary Assistance for Needy Families (TANF)",
        category="Cash Assistance",
        eligibility_rule=programs.cash_assistance_rule,
        benefit_estimator=programs.cash_assistance_benefit,
        confidence_model=programs.cash_assistance_confidence,
        processing_days=PROCESSING_DAYS["tanf"],
    ),
    ProgramDefinition(
        id="eitc",
        name="Earned Income Tax Credit (EITC)",
        category="Tax Credit",
        eligibility_rule=programs.eitc_rule,
        benefit_estimator=programs.eitc_benefit,
        confidence_model=programs.eitc_confidence,
        processing_days=PROCESSING_DAYS["eitc"],
    ),
    ProgramDefinition(
        id="ctc",
        name="Child Tax Credit",
        category="Tax Credit",
        eligibility_rule=programs.child_credit_rule,
        benefit_estimator=programs.child_credit_benefit,
        confidence_model=programs.child_credit_confidence,
        processing_days=PROCESSING_DAYS["ctc"],
    ),
    ProgramDefinition(
        id="medicaid",
        name="Medicaid / CHIP",
        category="Healthcare",
        eligibility_rule=programs.medicaid_rule,
        benefit_estimator=programs.medicaid_benefit,
        confidence_model=programs.medicaid_confidence,
        processing_days=PROCESSING_DAYS["medicaid"],
    ),
)


def default_catalog() -> ProgramCatalog:
    """The built-in program catalog."""
    return ProgramCatalog(DEFAULT_PROGRAMS)
