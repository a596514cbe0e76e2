"""Explicit field registries for content-driven attribute lookups.

Reason identifiers name scoring fields on solutions, and governance model
titles name text fields on implementation variations. Both mappings are
built here from the content itself instead of being resolved ad hoc at read
time, so unknown names are reported once when the registry is built.
"""

import logging
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Callable, Optional

from .schema import (
    BusinessParkReason,
    GovernanceModel,
    ImplementationVariation,
    MobilitySolution,
    numeric_value,
)

logger = logging.getLogger(__name__)

ScoreAccessor = Callable[[MobilitySolution], float]


def _attribute_accessor(name: str) -> ScoreAccessor:
    lowered = name.lower()

    def accessor(solution: MobilitySolution) -> float:
        value = solution.attribute(name)
        if value is None and lowered != name:
            # Content editors are not consistent about casing
            value = solution.attribute(lowered)
        return numeric_value(value)
    return accessor


@dataclass
class ScoreFieldRegistry:
    """Maps reason identifiers to score accessors on MobilitySolution.

    Lookups read the named field, falling back to its lowercase spelling,
    and do not depend on how the registry was built. Solutions passed to
    ``build`` only decide which identifiers are reported in
    ``unknown_identifiers``; those read as 0 on solutions lacking the field.
    """
    accessors: dict[str, ScoreAccessor] = field(default_factory=dict)
    unknown_identifiers: list[str] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        reasons: list[BusinessParkReason],
        solutions: Optional[list[MobilitySolution]] = None,
    ) -> "ScoreFieldRegistry":
        """Build the registry from the reason catalog.

        Args:
            reasons: Full reason catalog
            solutions: Solutions used to report identifiers that match no
                numeric field. When omitted nothing is reported.
        """
        known_fields: Optional[set[str]] = None
        if solutions is not None:
            known_fields = set()
            for solution in solutions:
                known_fields.update(solution.numeric_attributes())

        registry = cls()
        for reason in reasons:
            identifier = reason.identifier
            if not identifier or identifier in registry.accessors:
                continue
            registry.accessors[identifier] = _attribute_accessor(identifier)
            if known_fields is not None and identifier not in known_fields \
                    and identifier.lower() not in known_fields:
                registry.unknown_identifiers.append(identifier)
                logger.warning(
                    "Reason %s has identifier %r which no solution carries as a score field",
                    reason.id,
                    identifier,
                )
        return registry

    def value(self, solution: MobilitySolution, identifier: Optional[str]) -> float:
        """Raw score of a solution for an identifier (0 when unknown)."""
        if not identifier:
            return 0.0
        accessor = self.accessors.get(identifier)
        if accessor is None:
            accessor = _attribute_accessor(identifier)
        return accessor(solution)

    def is_known(self, identifier: Optional[str]) -> bool:
        return bool(identifier) and identifier in self.accessors and identifier not in self.unknown_identifiers


def governance_field_name(title: Optional[str]) -> Optional[str]:
    """Map a governance model title to the variation field holding its text.

    Examples:
        "Vereniging" -> "vereniging"
        "Ondernemers BIZ" -> "ondernemersBiz"
        "Coöperatie U.A." -> "cooperatieUa"
        "Geen rechtsvorm" -> "geenRechtsvorm"
    """
    if not title:
        return None
    folded = unicodedata.normalize("NFKD", title)
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch))
    folded = folded.replace(".", "")
    words = [w for w in re.split(r"[^0-9A-Za-z]+", folded) if w]
    if not words:
        return None
    head, *tail = (w.lower() for w in words)
    return head + "".join(w.capitalize() for w in tail)


def variant_note(variation: ImplementationVariation, model: GovernanceModel) -> Optional[str]:
    """The variation's explanation for one governance model, if any."""
    name = governance_field_name(model.title)
    if not name:
        return None
    return variation.text_field(name)
