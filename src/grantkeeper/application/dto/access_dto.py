"""Access resolution DTOs."""

from dataclasses import dataclass, field
from uuid import UUID

from grantkeeper.domain.value_objects import EntityRef, PermissionRole


@dataclass
class AccessSource:
    """Where an effective role came from."""

    is_owner: bool = False
    archived: bool = False
    direct_role: PermissionRole | None = None
    group_roles: list[tuple[UUID, PermissionRole]] = field(default_factory=list)
    highest_grant_role: PermissionRole | None = None


@dataclass
class ResolvedAccess:
    """Effective role of a user on an entity, with capability flags."""

    entity: EntityRef
    role: PermissionRole | None
    source: AccessSource

    @property
    def can_view(self) -> bool:
        return self._at_least(PermissionRole.VIEWER)

    @property
    def can_comment(self) -> bool:
        return self._at_least(PermissionRole.COMMENTER)

    @property
    def can_edit(self) -> bool:
        return self._at_least(PermissionRole.EDITOR)

    @property
    def can_manage(self) -> bool:
        return self._at_least(PermissionRole.OWNER)

    def _at_least(self, required: PermissionRole) -> bool:
        return self.role is not None and self.role.satisfies(required)

    @classmethod
    def denied(cls, entity: EntityRef, source: AccessSource | None = None) -> "ResolvedAccess":
        return cls(entity=entity, role=None, source=source or AccessSource())
