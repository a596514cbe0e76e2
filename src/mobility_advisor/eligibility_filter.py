"""Eligibility Filter - candidate selection before scoring.

With active reasons, only solutions that score strictly positive on at
least one of them are candidates. Without active reasons every solution is
a candidate.
"""

import logging
from typing import Optional

from content_catalog.fields import ScoreFieldRegistry
from content_catalog.schema import BusinessParkReason, MobilitySolution

logger = logging.getLogger(__name__)


class EligibilityFilter:
    """Restricts the candidate solutions to those relevant for the reasons.

    The reason lookup is derived from the reasons passed in; nothing is
    cached between instances.
    """

    def __init__(
        self,
        reasons: list[BusinessParkReason],
        registry: Optional[ScoreFieldRegistry] = None,
    ):
        self.reasons_by_id = {reason.id: reason for reason in reasons}
        self.registry = registry or ScoreFieldRegistry.build(reasons)

    def filter(
        self,
        solutions: list[MobilitySolution],
        active_reason_ids: list[str],
    ) -> list[MobilitySolution]:
        """Return the candidate solutions, keeping input order.

        Args:
            solutions: All solutions
            active_reason_ids: Reason ids currently toggled as filters

        Returns:
            Solutions with a positive raw score for at least one active
            reason, or all solutions when no reason is active.
        """
        if not active_reason_ids:
            return list(solutions)

        identifiers = []
        for reason_id in active_reason_ids:
            reason = self.reasons_by_id.get(reason_id)
            if reason is None:
                logger.debug("Active reason %s is not in the catalog", reason_id)
                continue
            if reason.identifier:
                identifiers.append(reason.identifier)

        eligible = [
            solution for solution in solutions
            if any(self.registry.value(solution, identifier) > 0 for identifier in identifiers)
        ]
        logger.debug(
            "%d of %d solutions match reasons %s",
            len(eligible),
            len(solutions),
            active_reason_ids,
        )
        return eligible
