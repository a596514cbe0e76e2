"""Pydantic models for the advisor's inputs (wizard selection) and outputs."""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

# Re-export content enums for convenience
from content_catalog.schema import (
    GovernanceModel,
    MobilitySolution,
    PickupPreference,
    TrafficType,
)


# =============================================================================
# Wizard selection (owned by the caller, read-only here)
# =============================================================================


class BusinessParkInfo(BaseModel):
    """What the user told the wizard about the business park."""
    number_of_companies: int = 0
    number_of_employees: int = 0
    traffic_types: list[TrafficType] = Field(default_factory=list)
    employee_pickup_preference: Optional[PickupPreference] = None

    @field_validator("traffic_types", mode="before")
    @classmethod
    def _parse_traffic_types(cls, value: Any) -> list[TrafficType]:
        return TrafficType.parse_list(value)

    @field_validator("employee_pickup_preference", mode="before")
    @classmethod
    def _parse_pickup(cls, value: Any) -> Optional[PickupPreference]:
        if isinstance(value, PickupPreference) or value is None:
            return value
        return PickupPreference.from_string(value)


class WizardSelection(BaseModel):
    """The choices a user made in the wizard so far."""
    selected_reasons: list[str] = Field(default_factory=list)
    selected_solutions: list[str] = Field(default_factory=list)
    # Chosen variation id per solution id (None when not chosen yet)
    selected_variants: dict[str, Optional[str]] = Field(default_factory=dict)
    current_governance_model_id: Optional[str] = None
    selected_governance_model: Optional[str] = None
    business_park_name: str = ""
    business_park_info: BusinessParkInfo = Field(default_factory=BusinessParkInfo)


# =============================================================================
# Solution ranking output
# =============================================================================


class ScoredSolution(BaseModel):
    """A solution with its ranking keys and per-reason breakdown."""
    solution: MobilitySolution
    score: float = 0.0
    traffic_match: int = 0
    pickup_match: bool = True
    contributing_reasons: dict[str, float] = Field(default_factory=dict)

    @property
    def solution_id(self) -> str:
        return self.solution.id


class SolutionRanking(BaseModel):
    """Ordered solutions plus their grouping by category."""
    ordered: list[ScoredSolution] = Field(default_factory=list)
    grouped: dict[str, list[ScoredSolution]] = Field(default_factory=dict)
    active_reason_ids: list[str] = Field(default_factory=list)
    # True when the reason filter left nothing and all solutions are shown
    used_fallback: bool = False

    @property
    def solution_ids(self) -> list[str]:
        return [item.solution.id for item in self.ordered]


# =============================================================================
# Governance classification output
# =============================================================================


class GovernanceClassification(BaseModel):
    """Governance models partitioned into four tiers.

    ``recommended``, ``conditional``, ``unsuitable`` and ``other`` together
    hold every catalog model exactly once, in catalog order. The current
    model is part of that partition; use ``display_buckets`` for lists that
    leave it out because it is shown separately.
    """
    recommended: list[GovernanceModel] = Field(default_factory=list)
    conditional: list[GovernanceModel] = Field(default_factory=list)
    unsuitable: list[GovernanceModel] = Field(default_factory=list)
    other: list[GovernanceModel] = Field(default_factory=list)

    current_model: Optional[GovernanceModel] = None
    current_model_is_recommended: bool = False

    active_variation_id: Optional[str] = None
    # Governance model id -> explanation text from the active variation
    variant_notes: dict[str, str] = Field(default_factory=dict)
    # Referenced ids missing from the catalog
    dangling_references: list[str] = Field(default_factory=list)

    def tier_of(self, model_id: str) -> Optional[str]:
        """Name of the tier a model landed in (None if not in the catalog)."""
        for tier in ("recommended", "conditional", "unsuitable", "other"):
            if any(m.id == model_id for m in getattr(self, tier)):
                return tier
        return None

    def display_buckets(self) -> dict[str, list[GovernanceModel]]:
        """Tier lists without the current model."""
        current_id = self.current_model.id if self.current_model else None
        return {
            tier: [m for m in getattr(self, tier) if m.id != current_id]
            for tier in ("recommended", "conditional", "unsuitable", "other")
        }
