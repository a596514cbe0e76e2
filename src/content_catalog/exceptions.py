"""Exceptions raised while acquiring content."""


class ContentCatalogError(Exception):
    """Base exception for content catalog failures."""


class SnapshotLoadError(ContentCatalogError):
    """Raised when a content snapshot cannot be loaded or validated."""


class EntityNotFoundError(ContentCatalogError):
    """Raised when a required entity is missing from the snapshot."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found: {entity_id}")
