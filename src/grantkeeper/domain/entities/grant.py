"""Grant entity - a role held by a subject on an entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID, uuid4

from grantkeeper.domain.exceptions import InvalidRole
from grantkeeper.domain.value_objects import EntityRef, EntityType, PermissionRole, SubjectType


@dataclass
class Grant:
    """Grant - subject holds permission_role on (entity_type, entity_id).

    Grants are never deleted. Revocation is a conditional update in the
    grant repository and is terminal; a role change is a revoke followed by a
    new grant.
    """

    id: UUID
    entity_type: EntityType
    entity_id: UUID
    subject_type: SubjectType
    subject_id: UUID
    permission_role: PermissionRole
    granted_by: UUID | None
    granted_at: datetime
    revoked_at: datetime | None = None
    revoked_by: UUID | None = None

    @classmethod
    def issue(
        cls,
        entity: EntityRef,
        subject_type: SubjectType,
        subject_id: UUID,
        role: PermissionRole,
        granted_by: UUID | None,
        granted_at: datetime,
    ) -> "Grant":
        """Create a new active grant, validating the role for the entity type."""
        if role not in entity.entity_type.grantable_roles:
            raise InvalidRole(
                f"Role '{role.value}' cannot be granted on {entity.entity_type.value}"
            )
        return cls(
            id=uuid4(),
            entity_type=entity.entity_type,
            entity_id=entity.entity_id,
            subject_type=subject_type,
            subject_id=subject_id,
            permission_role=role,
            granted_by=granted_by,
            granted_at=granted_at,
        )

    @property
    def entity(self) -> EntityRef:
        return EntityRef(self.entity_type, self.entity_id)

    @property
    def is_active(self) -> bool:
        return self.revoked_at is None
