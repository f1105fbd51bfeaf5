"""Typed reference to a permission-able entity."""

from dataclasses import dataclass
from uuid import UUID

from grantkeeper.domain.exceptions import ValidationError
from grantkeeper.domain.value_objects.entity_type import EntityType


@dataclass(frozen=True)
class EntityRef:
    """Entity identified by (entity_type, entity_id).

    Entities live in their own tables, so there is no foreign key behind a
    reference; the type tag selects which table answers ownership questions.
    """

    entity_type: EntityType
    entity_id: UUID

    @classmethod
    def track(cls, entity_id: UUID) -> "EntityRef":
        return cls(EntityType.TRACK, entity_id)

    @classmethod
    def subtrack(cls, entity_id: UUID) -> "EntityRef":
        return cls(EntityType.SUBTRACK, entity_id)

    @classmethod
    def tracker(cls, entity_id: UUID) -> "EntityRef":
        return cls(EntityType.TRACKER, entity_id)

    @classmethod
    def parse(cls, entity_type: str, entity_id: str | UUID) -> "EntityRef":
        """Build reference from raw values, raising ValidationError on bad input."""
        try:
            etype = EntityType(entity_type)
        except ValueError:
            raise ValidationError(f"Unknown entity type: {entity_type}") from None
        if isinstance(entity_id, UUID):
            return cls(etype, entity_id)
        try:
            return cls(etype, UUID(str(entity_id)))
        except ValueError:
            raise ValidationError(f"Invalid entity ID: {entity_id}") from None

    def __str__(self) -> str:
        return f"{self.entity_type.value}:{self.entity_id}"
