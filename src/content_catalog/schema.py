"""Pydantic models for the wizard content entities.

Field names follow the CMS content model (camelCase aliases) while the
Python attributes use snake_case. Unknown fields are kept, since solutions
carry their scoring attributes as dynamic fields keyed by reason identifier
and variations carry one text field per governance model.
"""

import math
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class TrafficType(str, Enum):
    """Travel categories a business park can declare."""
    COMMUTER = "woon-werkverkeer"
    BUSINESS = "zakelijk verkeer"
    VISITOR = "bezoekers verkeer"

    @classmethod
    def from_string(cls, value: str) -> Optional["TrafficType"]:
        """Parse a traffic type from free content text (None if unknown)."""
        if not isinstance(value, str):
            return None
        normalized = value.lower().strip()
        if "woon" in normalized or "commuter" in normalized:
            return cls.COMMUTER
        if "zakelijk" in normalized or "business" in normalized:
            return cls.BUSINESS
        if "bezoeker" in normalized or "visitor" in normalized:
            return cls.VISITOR
        return None

    @classmethod
    def parse_list(cls, value: Any) -> list["TrafficType"]:
        """Parse a content field holding one or more traffic types.

        A list is parsed item by item; a single string may mention several
        types. Unrecognized values are dropped.
        """
        if not value:
            return []
        if isinstance(value, cls):
            return [value]
        if isinstance(value, (list, tuple)):
            parsed = []
            for item in value:
                if isinstance(item, cls):
                    parsed.append(item)
                    continue
                traffic_type = cls.from_string(item)
                if traffic_type is not None:
                    parsed.append(traffic_type)
            return parsed
        if isinstance(value, str):
            normalized = value.lower()
            found = []
            if "woon" in normalized or "commuter" in normalized:
                found.append(cls.COMMUTER)
            if "zakelijk" in normalized or "business" in normalized:
                found.append(cls.BUSINESS)
            if "bezoeker" in normalized or "visitor" in normalized:
                found.append(cls.VISITOR)
            return found
        return []


class PickupPreference(str, Enum):
    """Which part of the commute employees want covered."""
    THUIS = "thuis"  # pickup at home, whole trip
    LOCATIE = "locatie"  # from a hub (OV-knooppunt, P+R) to the park
    OV = "ov"  # connection to public transport

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["PickupPreference"]:
        """Parse a pickup preference (None when empty or unknown)."""
        if not value:
            return None
        try:
            return cls(value.lower().strip())
        except ValueError:
            return None


def numeric_value(value: Any) -> float:
    """Return value as a float when it is a real finite number, else 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if isinstance(value, float) and not math.isfinite(value):
        return 0.0
    return float(value)


# =============================================================================
# References
# =============================================================================


class LinkSys(BaseModel):
    """The ``sys`` part of a CMS entry link."""
    id: str

    class Config:
        extra = "allow"


class EntryLink(BaseModel):
    """Reference to another entry: ``{"sys": {"id": ...}}``."""
    sys: LinkSys

    class Config:
        extra = "allow"

    @property
    def id(self) -> str:
        return self.sys.id

    @classmethod
    def to(cls, entry_id: str) -> "EntryLink":
        return cls(sys=LinkSys(id=entry_id))


def coerce_links(value: Any) -> list[dict]:
    """Normalize a reference list, dropping malformed entries.

    Accepts link dicts, ``EntryLink`` instances and bare id strings.
    """
    if not isinstance(value, (list, tuple)):
        return []
    links = []
    for ref in value:
        if isinstance(ref, EntryLink):
            links.append({"sys": {"id": ref.id}})
        elif isinstance(ref, str) and ref:
            links.append({"sys": {"id": ref}})
        elif isinstance(ref, dict):
            sys_part = ref.get("sys")
            if isinstance(sys_part, dict) and isinstance(sys_part.get("id"), str):
                links.append({"sys": {"id": sys_part["id"]}})
    return links


def link_ids(links: list[EntryLink]) -> list[str]:
    """Resolve links to ids, first occurrence wins."""
    seen: list[str] = []
    for link in links:
        if link.id and link.id not in seen:
            seen.append(link.id)
    return seen


# =============================================================================
# Entities
# =============================================================================


class BusinessParkReason(BaseModel):
    """A motivating factor ("aanleiding") a business park can select."""
    id: str
    title: str
    description: str = ""
    summary: Optional[str] = None
    icon: Optional[str] = None
    category: Optional[str] = None
    identifier: Optional[str] = None  # name of a scoring field on MobilitySolution
    weight: Optional[float] = None
    order: Optional[int] = None

    class Config:
        extra = "allow"


class MobilitySolution(BaseModel):
    """A collective transport offering.

    Scoring fields (e.g. ``parkeer_bereikbaarheidsproblemen``) are dynamic
    and live in the model extras; read them through ``attribute``.
    """
    id: str
    title: str
    description: str = ""
    summary: Optional[str] = None
    category: Optional[str] = None
    icon: Optional[str] = None
    benefits: list[str] = Field(default_factory=list)
    challenges: list[str] = Field(default_factory=list)
    implementation_time: Optional[str] = Field(None, alias="implementationTime")
    costs: Optional[str] = None
    type_vervoer: list[TrafficType] = Field(default_factory=list, alias="typeVervoer")
    ophalen: list[str] = Field(default_factory=list)
    # Legacy: governance models referenced directly from the solution
    governance_models: list[EntryLink] = Field(default_factory=list, alias="governanceModels")

    class Config:
        extra = "allow"
        populate_by_name = True

    @field_validator("type_vervoer", mode="before")
    @classmethod
    def _parse_traffic_types(cls, value: Any) -> list[TrafficType]:
        return TrafficType.parse_list(value)

    @field_validator("ophalen", mode="before")
    @classmethod
    def _string_items(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [value]
        if not isinstance(value, (list, tuple)):
            return []
        return [item for item in value if isinstance(item, str)]

    @field_validator("governance_models", mode="before")
    @classmethod
    def _links(cls, value: Any) -> list[dict]:
        return coerce_links(value)

    def attribute(self, name: str) -> Any:
        """Look up a content attribute by its content name (None if absent)."""
        extra = self.model_extra or {}
        if name in extra:
            return extra[name]
        if name in type(self).model_fields:
            return getattr(self, name)
        return None

    def numeric_attributes(self) -> dict[str, float]:
        """Dynamic numeric attributes, i.e. the candidate scoring fields."""
        extra = self.model_extra or {}
        return {
            key: float(value)
            for key, value in extra.items()
            if not isinstance(value, bool) and isinstance(value, (int, float))
        }

    @property
    def governance_model_ids(self) -> list[str]:
        return link_ids(self.governance_models)


class GovernanceModel(BaseModel):
    """A legal/organizational structure for running a solution."""
    id: str
    title: str
    description: Optional[str] = None
    summary: Optional[str] = None
    advantages: list[str] = Field(default_factory=list)
    disadvantages: list[str] = Field(default_factory=list)
    applicable_scenarios: list[str] = Field(default_factory=list, alias="applicableScenarios")
    organizational_structure: Optional[str] = Field(None, alias="organizationalStructure")
    legal_form: Optional[str] = Field(None, alias="legalForm")
    stakeholders: list[str] = Field(default_factory=list)

    class Config:
        extra = "allow"
        populate_by_name = True


class ImplementationVariation(BaseModel):
    """A procurement/operating model for exactly one mobility solution.

    Carries the three governance classification lists. A governance model id
    may legally appear in more than one list.
    """
    id: str
    title: str = "Unnamed Variation"
    mobiliteitsdienst_variant_id: Optional[str] = Field(None, alias="mobiliteitsdienstVariantId")
    samenvatting: Optional[str] = None
    investering: Optional[str] = None
    realisatieplan: Optional[str] = None
    governance_models: list[EntryLink] = Field(default_factory=list, alias="governanceModels")
    governance_models_mits: list[EntryLink] = Field(default_factory=list, alias="governanceModelsMits")
    governance_models_nietgeschikt: list[EntryLink] = Field(
        default_factory=list, alias="governanceModelsNietgeschikt"
    )

    class Config:
        extra = "allow"
        populate_by_name = True

    @model_validator(mode="before")
    @classmethod
    def _resolve_solution_link(cls, data: Any) -> Any:
        # The CMS delivers the owning solution as a link; flatten it to an id
        if isinstance(data, dict) and not data.get("mobiliteitsdienstVariantId"):
            link = data.get("mobiliteitsdienstVariant")
            if isinstance(link, dict) and isinstance(link.get("sys"), dict):
                data = dict(data)
                data["mobiliteitsdienstVariantId"] = link["sys"].get("id")
        return data

    @field_validator(
        "governance_models",
        "governance_models_mits",
        "governance_models_nietgeschikt",
        mode="before",
    )
    @classmethod
    def _links(cls, value: Any) -> list[dict]:
        return coerce_links(value)

    def text_field(self, name: str) -> Optional[str]:
        """Return a free-text content field, trimmed, or None when blank."""
        extra = self.model_extra or {}
        value = extra.get(name)
        if value is None and name in type(self).model_fields:
            value = getattr(self, name)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None


class ContentSnapshot(BaseModel):
    """All content entities the wizard works with, as one read-only snapshot."""
    version: str = "1.0.0"
    source: str = "unknown"
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    reasons: list[BusinessParkReason] = Field(default_factory=list)
    solutions: list[MobilitySolution] = Field(default_factory=list)
    governance_models: list[GovernanceModel] = Field(default_factory=list, alias="governanceModels")
    implementation_variations: list[ImplementationVariation] = Field(
        default_factory=list, alias="implementationVariations"
    )

    class Config:
        populate_by_name = True

    def get_reason(self, reason_id: str) -> Optional[BusinessParkReason]:
        return next((r for r in self.reasons if r.id == reason_id), None)

    def get_solution(self, solution_id: str) -> Optional[MobilitySolution]:
        return next((s for s in self.solutions if s.id == solution_id), None)

    def get_governance_model(self, model_id: str) -> Optional[GovernanceModel]:
        return next((m for m in self.governance_models if m.id == model_id), None)

    def get_variation(self, variation_id: str) -> Optional[ImplementationVariation]:
        return next((v for v in self.implementation_variations if v.id == variation_id), None)

    def variations_for_solution(self, solution_id: str) -> list[ImplementationVariation]:
        """All implementation variations that belong to a solution."""
        return [
            v for v in self.implementation_variations
            if v.mobiliteitsdienst_variant_id == solution_id
        ]
