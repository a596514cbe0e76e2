"""Shared fixtures for the mobility advisor tests."""

import pytest

from content_catalog.mock_data import mock_snapshot
from content_catalog.repository import ContentRepository
from content_catalog.schema import (
    BusinessParkReason,
    EntryLink,
    GovernanceModel,
    ImplementationVariation,
    MobilitySolution,
)
from mobility_advisor.config import AdvisorConfig, reset_config


@pytest.fixture(autouse=True)
def _default_config():
    """Every test starts from the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config() -> AdvisorConfig:
    return AdvisorConfig()


@pytest.fixture
def repository() -> ContentRepository:
    return ContentRepository(mock_snapshot())


@pytest.fixture
def catalog() -> list[GovernanceModel]:
    """Three governance models g1..g3."""
    return [GovernanceModel(id=f"g{i}", title=f"Model {i}") for i in range(1, 4)]


def make_reason(reason_id: str, identifier=None, weight=None, **extra) -> BusinessParkReason:
    return BusinessParkReason(id=reason_id, title=reason_id, identifier=identifier, weight=weight, **extra)


def make_solution(solution_id: str, **fields) -> MobilitySolution:
    return MobilitySolution(id=solution_id, title=solution_id, **fields)


def make_variation(
    variation_id: str = "v1",
    recommended=(),
    mits=(),
    nietgeschikt=(),
    solution_id: str = "s1",
    **extra,
) -> ImplementationVariation:
    return ImplementationVariation(
        id=variation_id,
        mobiliteitsdienst_variant_id=solution_id,
        governance_models=[EntryLink.to(i) for i in recommended],
        governance_models_mits=[EntryLink.to(i) for i in mits],
        governance_models_nietgeschikt=[EntryLink.to(i) for i in nietgeschikt],
        **extra,
    )
