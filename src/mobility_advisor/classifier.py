"""Governance Classifier - sorts governance models into recommendation tiers.

An implementation variation lists governance models as recommended
(``governanceModels``), recommended with conditions (``governanceModelsMits``)
and unsuitable (``governanceModelsNietgeschikt``). The lists may overlap;
overlaps are resolved by tier precedence, highest first:

    unsuitable > conditional > recommended

Every catalog model not claimed by any tier ends up in ``other``.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from content_catalog.fields import variant_note
from content_catalog.schema import (
    GovernanceModel,
    ImplementationVariation,
    MobilitySolution,
    link_ids,
)

from .config import AdvisorConfig, get_config
from .schema import GovernanceClassification

logger = logging.getLogger(__name__)

UNSUITABLE = "unsuitable"
CONDITIONAL = "conditional"
RECOMMENDED = "recommended"
OTHER = "other"


@dataclass(frozen=True)
class Tier:
    """One precedence tier.

    ``suppressed_by`` names the tiers whose raw ids remove ids from this one.
    """
    name: str
    suppressed_by: tuple[str, ...] = ()


# Highest precedence first. Recommended is suppressed by the raw conditional
# list, so an id listed as both never counts as plainly recommended.
PRECEDENCE = (
    Tier(UNSUITABLE),
    Tier(CONDITIONAL, suppressed_by=(UNSUITABLE,)),
    Tier(RECOMMENDED, suppressed_by=(UNSUITABLE, CONDITIONAL)),
)


def resolve_precedence(raw: dict[str, list[str]]) -> dict[str, list[str]]:
    """Resolve overlapping tier lists into disjoint ones.

    Args:
        raw: Tier name -> ids as listed in the content (may overlap, may
            contain repeats)

    Returns:
        Tier name -> ids, disjoint across tiers, in listed order
    """
    raw_sets = {name: set(ids) for name, ids in raw.items()}
    resolved: dict[str, list[str]] = {}
    for tier in PRECEDENCE:
        blocked: set[str] = set()
        for higher in tier.suppressed_by:
            blocked |= raw_sets.get(higher, set())
        ids = []
        for model_id in raw.get(tier.name, []):
            if model_id and model_id not in blocked and model_id not in ids:
                ids.append(model_id)
        resolved[tier.name] = ids
    return resolved


def select_active_variation(
    selected_solutions: list[str],
    selected_variants: dict[str, Optional[str]],
    relevant_variations: list[ImplementationVariation],
) -> Optional[ImplementationVariation]:
    """Pick the variation that drives the classification.

    The variant chosen for the first selected solution (in selection order)
    that has one wins. Without any chosen variant the first relevant
    variation is used.
    """
    primary_variant_id = next(
        (selected_variants[sid] for sid in selected_solutions if selected_variants.get(sid)),
        None,
    )
    if primary_variant_id:
        return next((v for v in relevant_variations if v.id == primary_variant_id), None)
    return relevant_variations[0] if relevant_variations else None


class GovernanceClassifier:
    """Partitions the governance catalog for a variation or solution.

    Classification never fails on content gaps: references to models that
    are not in the catalog are skipped (and reported), empty lists simply
    put the whole catalog in ``other``.
    """

    def __init__(self, config: Optional[AdvisorConfig] = None):
        self.config = config or get_config()

    def classify(
        self,
        catalog: list[GovernanceModel],
        variation: Optional[ImplementationVariation],
        current_model_id: Optional[str] = None,
    ) -> GovernanceClassification:
        """Classify the catalog against an implementation variation.

        Args:
            catalog: All governance models
            variation: The active variation (None classifies nothing)
            current_model_id: The park's existing governance model, if any
        """
        if variation is None:
            raw = {UNSUITABLE: [], CONDITIONAL: [], RECOMMENDED: []}
        else:
            raw = {
                UNSUITABLE: link_ids(variation.governance_models_nietgeschikt),
                CONDITIONAL: link_ids(variation.governance_models_mits),
                RECOMMENDED: link_ids(variation.governance_models),
            }

        classification = self._build(catalog, raw, current_model_id)
        if variation is not None:
            classification.active_variation_id = variation.id
            classification.variant_notes = self._variant_notes(catalog, variation)
        return classification

    def classify_ids(
        self,
        catalog: list[GovernanceModel],
        recommended_ids: list[str],
        conditional_ids: Optional[list[str]] = None,
        unsuitable_ids: Optional[list[str]] = None,
        current_model_id: Optional[str] = None,
    ) -> GovernanceClassification:
        """Classify the catalog from plain id lists."""
        raw = {
            UNSUITABLE: list(unsuitable_ids or []),
            CONDITIONAL: list(conditional_ids or []),
            RECOMMENDED: list(recommended_ids or []),
        }
        return self._build(catalog, raw, current_model_id)

    def classify_for_solution(
        self,
        catalog: list[GovernanceModel],
        solution: MobilitySolution,
        current_model_id: Optional[str] = None,
    ) -> GovernanceClassification:
        """Legacy path: classify from the solution's own reference list.

        Only the recommended tier exists here; every other model is
        ``other``.
        """
        return self.classify_ids(
            catalog,
            recommended_ids=solution.governance_model_ids,
            current_model_id=current_model_id,
        )

    def _build(
        self,
        catalog: list[GovernanceModel],
        raw: dict[str, list[str]],
        current_model_id: Optional[str],
    ) -> GovernanceClassification:
        catalog_ids = {model.id for model in catalog}

        dangling = []
        for ids in raw.values():
            for model_id in ids:
                if model_id and model_id not in catalog_ids and model_id not in dangling:
                    dangling.append(model_id)
        if dangling and self.config.governance.warn_on_dangling_references:
            logger.warning("Ignoring references to unknown governance models: %s", ", ".join(dangling))

        resolved = resolve_precedence(raw)
        tier_by_id: dict[str, str] = {}
        for tier in PRECEDENCE:
            for model_id in resolved[tier.name]:
                tier_by_id[model_id] = tier.name

        buckets: dict[str, list[GovernanceModel]] = {
            RECOMMENDED: [], CONDITIONAL: [], UNSUITABLE: [], OTHER: [],
        }
        for model in catalog:
            buckets[tier_by_id.get(model.id, OTHER)].append(model)

        current_model = None
        if current_model_id:
            current_model = next((m for m in catalog if m.id == current_model_id), None)

        return GovernanceClassification(
            recommended=buckets[RECOMMENDED],
            conditional=buckets[CONDITIONAL],
            unsuitable=buckets[UNSUITABLE],
            other=buckets[OTHER],
            current_model=current_model,
            current_model_is_recommended=(
                current_model is not None and current_model.id in resolved[RECOMMENDED]
            ),
            dangling_references=dangling,
        )

    @staticmethod
    def _variant_notes(
        catalog: list[GovernanceModel],
        variation: ImplementationVariation,
    ) -> dict[str, str]:
        notes = {}
        for model in catalog:
            note = variant_note(variation, model)
            if note:
                notes[model.id] = note
        return notes
