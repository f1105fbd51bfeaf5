"""Collaborator ports - identity, entity ownership and team membership lookups.

These tables belong to other parts of the application. The service reads
them but never writes them.
"""

from typing import Protocol
from uuid import UUID

from grantkeeper.domain.value_objects import EntityType


class ProfileDirectory(Protocol):
    """Maps external auth identities to internal profile identities."""

    async def get_profile_id(self, auth_id: str) -> UUID | None: ...

    async def exists(self, profile_id: UUID) -> bool: ...


class EntityOwnership(Protocol):
    """Ownership capability of one entity type."""

    async def is_owned_by(self, entity_id: UUID, profile_id: UUID) -> bool:
        """Direct owner column comparison on the entity row."""
        ...

    async def is_archived(self, entity_id: UUID) -> bool | None:
        """Archived flag, or None if the entity does not exist."""
        ...


class EntityRegistry(Protocol):
    """Dispatches entity types to their ownership capability."""

    def for_type(self, entity_type: EntityType) -> EntityOwnership: ...


class TeamDirectory(Protocol):
    """Team membership lookup."""

    async def get_member_role(self, team_id: UUID, profile_id: UUID) -> str | None:
        """Role ('owner', 'admin', 'member') of an active team member, else None."""
        ...
