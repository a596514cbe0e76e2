"""Scorer - ranks mobility solutions for the wizard.

Each solution gets three ranking keys:

1. pickup match - does the solution cover the part of the commute the
   employees want (vacuously true without a preference or pickup data)
2. traffic match - how many of the park's traffic types it serves, with a
   dominating bonus when it serves all of them
3. score - weighted sum of the solution's ratings for the active reasons

Solutions are ordered by those keys in that order; remaining ties keep the
input order.
"""

import logging
from typing import Optional, Union

from content_catalog.fields import ScoreFieldRegistry
from content_catalog.schema import (
    BusinessParkReason,
    MobilitySolution,
    PickupPreference,
    TrafficType,
)

from .config import AdvisorConfig, get_config
from .schema import ScoredSolution

logger = logging.getLogger(__name__)

PickupInput = Optional[Union[PickupPreference, str]]


class SolutionScorer:
    """Scores and orders mobility solutions.

    Scoring principles:
    - Missing or non-numeric ratings count as 0, never as an error
    - A reason without identifier contributes 0
    - Serving every selected traffic type outranks any reason score
    - Solutions without pickup data are not penalized

    The scorer holds no state beyond the reason catalog and configuration
    it was built with, so calls are independent of each other.
    """

    def __init__(
        self,
        reasons: list[BusinessParkReason],
        config: Optional[AdvisorConfig] = None,
        registry: Optional[ScoreFieldRegistry] = None,
    ):
        self.config = config or get_config()
        self.reasons_by_id = {reason.id: reason for reason in reasons}
        self.registry = registry or ScoreFieldRegistry.build(reasons)

    def score(
        self,
        solutions: list[MobilitySolution],
        active_reason_ids: list[str],
        active_traffic_types: list[Union[TrafficType, str]],
        pickup_preference: PickupInput = None,
    ) -> list[ScoredSolution]:
        """Score candidate solutions and return them in ranking order.

        Args:
            solutions: Candidate solutions (already filtered on the reasons)
            active_reason_ids: Reason ids toggled as filters
            active_traffic_types: The business park's traffic types
            pickup_preference: Employee pickup preference, if any

        Returns:
            Scored solutions, best first
        """
        reason_ids = _unique(active_reason_ids)
        traffic_types = _unique(TrafficType.parse_list(list(active_traffic_types or [])))

        scored = [
            self.score_solution(solution, reason_ids, traffic_types, pickup_preference)
            for solution in solutions
        ]
        return rank(scored)

    def score_solution(
        self,
        solution: MobilitySolution,
        active_reason_ids: list[str],
        active_traffic_types: list[Union[TrafficType, str]],
        pickup_preference: PickupInput = None,
    ) -> ScoredSolution:
        """Score a single solution."""
        contributions = self.reason_contributions(solution, active_reason_ids)
        return ScoredSolution(
            solution=solution,
            score=sum(contributions.values()),
            traffic_match=self.traffic_match_score(solution, active_traffic_types),
            pickup_match=self.pickup_preference_match(solution, pickup_preference),
            contributing_reasons=contributions,
        )

    def reason_contributions(
        self,
        solution: MobilitySolution,
        active_reason_ids: list[str],
    ) -> dict[str, float]:
        """Weighted rating per active reason id.

        Reason ids that are not in the catalog are skipped.
        """
        contributions: dict[str, float] = {}
        for reason_id in active_reason_ids:
            if reason_id in contributions:
                continue
            reason = self.reasons_by_id.get(reason_id)
            if reason is None:
                logger.debug("Skipping unknown reason id %s", reason_id)
                continue
            if not reason.identifier:
                contributions[reason_id] = 0.0
                continue
            raw = self.registry.value(solution, reason.identifier)
            weight = reason.weight or self.config.scoring.default_reason_weight
            contributions[reason_id] = raw * weight
        return contributions

    def traffic_match_score(
        self,
        solution: MobilitySolution,
        active_traffic_types: list[Union[TrafficType, str]],
    ) -> int:
        """Number of the park's traffic types the solution serves.

        Serving all of them adds the full match bonus.
        """
        active = _unique(TrafficType.parse_list(list(active_traffic_types or [])))
        if not active or not solution.type_vervoer:
            return 0
        served = set(solution.type_vervoer)
        matches = sum(1 for traffic_type in active if traffic_type in served)
        if matches == len(active):
            return self.config.scoring.traffic_full_match_bonus + matches
        return matches

    def pickup_preference_match(
        self,
        solution: MobilitySolution,
        pickup_preference: PickupInput,
    ) -> bool:
        """Whether the solution's pickup options fit the preference."""
        key = _pickup_key(pickup_preference)
        if not key:
            return True
        options = [option for option in solution.ophalen if option]
        if not options:
            return True

        match_terms = self.config.pickup.match_terms
        if key not in match_terms:
            logger.debug("No pickup match terms for preference %r", key)
            return False
        groups = [group for group in map(_term_group, match_terms[key]) if group]
        if not groups:
            return True
        return any(
            all(term in option.lower() for term in group)
            for option in options
            for group in groups
        )


def rank(scored: list[ScoredSolution]) -> list[ScoredSolution]:
    """Order scored solutions: pickup match, then traffic match, then score.

    Python's sort is stable, so equal items keep their input order.
    """
    return sorted(
        scored,
        key=lambda item: (not item.pickup_match, -item.traffic_match, -item.score),
    )


def group_by_category(
    scored: list[ScoredSolution],
    unknown_label: Optional[str] = None,
) -> dict[str, list[ScoredSolution]]:
    """Group ranked solutions by category.

    Groups appear in order of first occurrence and keep the ranking order
    inside each group.
    """
    label = unknown_label if unknown_label is not None else get_config().scoring.unknown_category_label
    grouped: dict[str, list[ScoredSolution]] = {}
    for item in scored:
        category = item.solution.category or label
        grouped.setdefault(category, []).append(item)
    return grouped


def _pickup_key(preference: PickupInput) -> Optional[str]:
    if preference is None:
        return None
    if isinstance(preference, PickupPreference):
        return preference.value
    if isinstance(preference, str):
        return preference.lower().strip() or None
    return None


def _term_group(entry: Union[str, list[str]]) -> list[str]:
    """Lowercased parts of a pickup term; a plain string is a group of one."""
    parts = [entry] if isinstance(entry, str) else entry
    return [part.lower() for part in parts if part]


def _unique(items: list) -> list:
    """Drop repeated items, first occurrence wins."""
    seen = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen
