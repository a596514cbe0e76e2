"""Advisor engine - runs the wizard's decision steps over a content repository.

Steps for the solutions page:
1. Eligibility filter on the selected reasons
2. Scoring and ordering (with fallback to all solutions if nothing is left)
3. Grouping by category

Steps for the governance page:
1. Resolve the chosen variations for the selected solutions
2. Pick the active variation
3. Classify the governance catalog against it
"""

import logging
from pathlib import Path
from typing import Optional, Union

from content_catalog.fields import ScoreFieldRegistry
from content_catalog.loader import find_reference_issues
from content_catalog.repository import ContentRepository

from .classifier import GovernanceClassifier, select_active_variation
from .config import AdvisorConfig, get_config
from .eligibility_filter import EligibilityFilter
from .schema import GovernanceClassification, SolutionRanking, WizardSelection
from .scorer import SolutionScorer, group_by_category

logger = logging.getLogger(__name__)


class AdvisorEngine:
    """Facade over the filter, scorer and classifier for one content snapshot."""

    def __init__(
        self,
        repository: Optional[ContentRepository] = None,
        config: Optional[AdvisorConfig] = None,
    ):
        self.repository = repository or ContentRepository.from_source(None)
        self.config = config or get_config()
        # Derived from the snapshot; rebuilt with the engine, never shared
        self.registry = ScoreFieldRegistry.build(
            self.repository.reasons,
            self.repository.solutions,
        )

    @classmethod
    def from_source(
        cls,
        source: Optional[Union[str, Path]] = None,
        config: Optional[AdvisorConfig] = None,
    ) -> "AdvisorEngine":
        """Create an engine for a snapshot file, URL, or the mock content."""
        return cls(ContentRepository.from_source(source), config)

    def rank_solutions(self, selection: WizardSelection) -> SolutionRanking:
        """Rank the solutions for the reasons and park info in a selection."""
        reasons = self.repository.reasons
        solutions = self.repository.solutions
        info = selection.business_park_info
        active_reason_ids = list(selection.selected_reasons)

        scorer = SolutionScorer(reasons, self.config, self.registry)
        eligibility = EligibilityFilter(reasons, self.registry)

        candidates = eligibility.filter(solutions, active_reason_ids)
        ordered = scorer.score(
            candidates,
            active_reason_ids,
            info.traffic_types,
            info.employee_pickup_preference,
        )

        used_fallback = False
        if not ordered and solutions and self.config.scoring.fallback_to_all_solutions:
            logger.info(
                "No solution matches reasons %s, showing all solutions unweighted",
                active_reason_ids,
            )
            ordered = scorer.score(
                solutions,
                [],
                info.traffic_types,
                info.employee_pickup_preference,
            )
            used_fallback = True
            active_reason_ids = []

        return SolutionRanking(
            ordered=ordered,
            grouped=group_by_category(ordered, self.config.scoring.unknown_category_label),
            active_reason_ids=active_reason_ids,
            used_fallback=used_fallback,
        )

    def classify_governance(self, selection: WizardSelection) -> GovernanceClassification:
        """Classify governance models for the variants chosen in a selection."""
        variant_ids = [
            variant_id for variant_id in selection.selected_variants.values()
            if variant_id is not None
        ]
        relevant = self.repository.get_variations_by_ids(variant_ids)
        active = select_active_variation(
            selection.selected_solutions,
            selection.selected_variants,
            relevant,
        )
        if active is None:
            logger.info("No active implementation variation for the selection")

        classifier = GovernanceClassifier(self.config)
        return classifier.classify(
            self.repository.governance_models,
            active,
            selection.current_governance_model_id,
        )

    def classify_for_solution(
        self,
        solution_id: str,
        current_model_id: Optional[str] = None,
    ) -> GovernanceClassification:
        """Legacy classification from a solution's own governance references.

        Raises:
            EntityNotFoundError: When the solution does not exist.
        """
        solution = self.repository.require_solution(solution_id)
        classifier = GovernanceClassifier(self.config)
        return classifier.classify_for_solution(
            self.repository.governance_models,
            solution,
            current_model_id,
        )

    def content_issues(self) -> list[str]:
        """Referential problems in the loaded content."""
        return find_reference_issues(self.repository.snapshot)
