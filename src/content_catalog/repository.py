"""Source-agnostic access to the wizard content entities."""

import logging
from pathlib import Path
from typing import Optional, Union

from .exceptions import EntityNotFoundError
from .loader import fetch_remote_snapshot, load_snapshot
from .mock_data import mock_snapshot
from .schema import (
    BusinessParkReason,
    ContentSnapshot,
    GovernanceModel,
    ImplementationVariation,
    MobilitySolution,
)

logger = logging.getLogger(__name__)


class ContentRepository:
    """Read-only entity lookups over one content snapshot.

    The snapshot is fully resolved when the repository is built, so every
    consumer sees the same, complete view of the content.
    """

    def __init__(self, snapshot: ContentSnapshot):
        self.snapshot = snapshot

    @classmethod
    def from_source(cls, source: Optional[Union[str, Path]] = None) -> "ContentRepository":
        """Build a repository from a file path or HTTPS URL.

        Falls back to the bundled mock content when no source is given.
        """
        if source is None or source == "":
            logger.info("No content source configured, using mock content")
            return cls(mock_snapshot())

        source_str = str(source)
        if source_str.startswith("https://") or source_str.startswith("http://"):
            return cls(fetch_remote_snapshot(source_str))
        return cls(load_snapshot(source_str))

    @property
    def reasons(self) -> list[BusinessParkReason]:
        return self.snapshot.reasons

    @property
    def solutions(self) -> list[MobilitySolution]:
        return self.snapshot.solutions

    @property
    def governance_models(self) -> list[GovernanceModel]:
        return self.snapshot.governance_models

    @property
    def implementation_variations(self) -> list[ImplementationVariation]:
        return self.snapshot.implementation_variations

    def get_reason_by_id(self, reason_id: str) -> Optional[BusinessParkReason]:
        return self.snapshot.get_reason(reason_id)

    def get_solution_by_id(self, solution_id: str) -> Optional[MobilitySolution]:
        return self.snapshot.get_solution(solution_id)

    def get_governance_model_by_id(self, model_id: str) -> Optional[GovernanceModel]:
        return self.snapshot.get_governance_model(model_id)

    def get_variation_by_id(self, variation_id: str) -> Optional[ImplementationVariation]:
        return self.snapshot.get_variation(variation_id)

    def require_solution(self, solution_id: str) -> MobilitySolution:
        solution = self.get_solution_by_id(solution_id)
        if solution is None:
            raise EntityNotFoundError("MobilitySolution", solution_id)
        return solution

    def require_variation(self, variation_id: str) -> ImplementationVariation:
        variation = self.get_variation_by_id(variation_id)
        if variation is None:
            raise EntityNotFoundError("ImplementationVariation", variation_id)
        return variation

    def get_variations_by_ids(self, variation_ids: list[Optional[str]]) -> list[ImplementationVariation]:
        """Resolve a batch of variation ids, keeping request order.

        Empty and unknown ids are skipped.
        """
        resolved = []
        for variation_id in variation_ids:
            if not variation_id:
                continue
            variation = self.get_variation_by_id(variation_id)
            if variation is None:
                logger.warning("Implementation variation %s not found", variation_id)
                continue
            resolved.append(variation)
        return resolved

    def get_variations_for_solution(self, solution_id: str) -> list[ImplementationVariation]:
        return self.snapshot.variations_for_solution(solution_id)
