"""Access checker port - entity-level authorization."""

from typing import Protocol

from grantkeeper.application.dto.access_dto import ResolvedAccess
from grantkeeper.domain.value_objects import EntityRef, PermissionRole


class AccessChecker(Protocol):
    """Port for checking a user's role on an entity."""

    async def has_access(
        self, auth_id: str, entity: EntityRef, required_role: PermissionRole
    ) -> bool: ...

    async def resolve(self, auth_id: str, entity: EntityRef) -> ResolvedAccess: ...
