"""Content catalog: entity schema, snapshot loading and field registries."""

from content_catalog.exceptions import (
    ContentCatalogError,
    EntityNotFoundError,
    SnapshotLoadError,
)
from content_catalog.repository import ContentRepository
from content_catalog.schema import (
    BusinessParkReason,
    ContentSnapshot,
    EntryLink,
    GovernanceModel,
    ImplementationVariation,
    MobilitySolution,
    PickupPreference,
    TrafficType,
)

__all__ = [
    "BusinessParkReason",
    "ContentCatalogError",
    "ContentRepository",
    "ContentSnapshot",
    "EntityNotFoundError",
    "EntryLink",
    "GovernanceModel",
    "ImplementationVariation",
    "MobilitySolution",
    "PickupPreference",
    "SnapshotLoadError",
    "TrafficType",
]
