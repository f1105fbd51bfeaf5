"""PostgreSQL grant repository implementation."""

from collections.abc import Sequence
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from grantkeeper.domain.entities import Grant
from grantkeeper.domain.exceptions import DuplicateGrant
from grantkeeper.domain.value_objects import EntityRef, EntityType, PermissionRole, SubjectType

_COLUMNS = (
    "id, entity_type, entity_id, subject_type, subject_id, permission_role, "
    "granted_by, granted_at, revoked_at, revoked_by"
)


def _to_grant(r: tuple) -> Grant:
    return Grant(
        id=r[0],
        entity_type=EntityType(r[1]),
        entity_id=r[2],
        subject_type=SubjectType(r[3]),
        subject_id=r[4],
        permission_role=PermissionRole(r[5]),
        granted_by=r[6],
        granted_at=r[7],
        revoked_at=r[8],
        revoked_by=r[9],
    )


class PostgresGrantRepository:
    """Grant repository over entity_permission_grants."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, grant_id: UUID) -> Grant | None:
        """Get grant by id, active or revoked."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM entity_permission_grants WHERE id = %s",
            (grant_id,),
        )
        r = await cur.fetchone()
        return _to_grant(r) if r else None

    async def get_active(
        self, entity: EntityRef, subject_type: SubjectType, subject_id: UUID
    ) -> Grant | None:
        """Get the active grant for (entity, subject)."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM entity_permission_grants "
            "WHERE entity_type = %s AND entity_id = %s AND subject_type = %s "
            "AND subject_id = %s AND revoked_at IS NULL",
            (entity.entity_type.value, entity.entity_id, subject_type.value, subject_id),
        )
        r = await cur.fetchone()
        return _to_grant(r) if r else None

    async def list_active_for_entity(self, entity: EntityRef) -> list[Grant]:
        """List active grants on entity, any subject type."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM entity_permission_grants "
            "WHERE entity_type = %s AND entity_id = %s AND revoked_at IS NULL "
            "ORDER BY granted_at",
            (entity.entity_type.value, entity.entity_id),
        )
        return [_to_grant(r) for r in await cur.fetchall()]

    async def list_active_for_subject(
        self, subject_type: SubjectType, subject_id: UUID
    ) -> list[Grant]:
        """List active grants held by subject across entities."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM entity_permission_grants "
            "WHERE subject_type = %s AND subject_id = %s AND revoked_at IS NULL "
            "ORDER BY granted_at",
            (subject_type.value, subject_id),
        )
        return [_to_grant(r) for r in await cur.fetchall()]

    async def list_active_for_subjects(
        self, entity: EntityRef, subject_type: SubjectType, subject_ids: Sequence[UUID]
    ) -> list[Grant]:
        """List active grants on entity held by any of subject_ids."""
        if not subject_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM entity_permission_grants "
            "WHERE entity_type = %s AND entity_id = %s AND subject_type = %s "
            "AND subject_id = ANY(%s) AND revoked_at IS NULL",
            (entity.entity_type.value, entity.entity_id, subject_type.value, list(subject_ids)),
        )
        return [_to_grant(r) for r in await cur.fetchall()]

    async def create(self, grant: Grant) -> Grant:
        """Insert grant. The partial unique index serializes concurrent grants."""
        try:
            await self._conn.execute(
                f"INSERT INTO entity_permission_grants ({_COLUMNS}) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    grant.id,
                    grant.entity_type.value,
                    grant.entity_id,
                    grant.subject_type.value,
                    grant.subject_id,
                    grant.permission_role.value,
                    grant.granted_by,
                    grant.granted_at,
                    grant.revoked_at,
                    grant.revoked_by,
                ),
            )
        except UniqueViolation as e:
            raise DuplicateGrant(
                f"Active grant exists for {grant.subject_type.value} {grant.subject_id} "
                f"on {grant.entity}"
            ) from e
        return grant

    async def mark_revoked(self, grant_id: UUID, revoked_by: UUID | None) -> Grant | None:
        """Set revoked_at if the grant is still active."""
        cur = await self._conn.execute(
            "UPDATE entity_permission_grants SET revoked_at = NOW(), revoked_by = %s "
            f"WHERE id = %s AND revoked_at IS NULL RETURNING {_COLUMNS}",
            (revoked_by, grant_id),
        )
        r = await cur.fetchone()
        return _to_grant(r) if r else None
