"""PostgreSQL group membership repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from grantkeeper.domain.entities import GroupMembership
from grantkeeper.domain.exceptions import AlreadyMember


class PostgresGroupMemberRepository:
    """Membership repository over team_group_members."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, group_id: UUID, user_id: UUID) -> GroupMembership | None:
        """Get membership of user in group."""
        cur = await self._conn.execute(
            "SELECT id, group_id, user_id, added_by, created_at "
            "FROM team_group_members WHERE group_id = %s AND user_id = %s",
            (group_id, user_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return GroupMembership(id=r[0], group_id=r[1], user_id=r[2], added_by=r[3], created_at=r[4])

    async def list_by_group(self, group_id: UUID) -> list[GroupMembership]:
        """List memberships of a group in the order they were added."""
        cur = await self._conn.execute(
            "SELECT id, group_id, user_id, added_by, created_at "
            "FROM team_group_members WHERE group_id = %s ORDER BY created_at",
            (group_id,),
        )
        rows = await cur.fetchall()
        return [
            GroupMembership(id=r[0], group_id=r[1], user_id=r[2], added_by=r[3], created_at=r[4])
            for r in rows
        ]

    async def list_active_group_ids_for_user(self, user_id: UUID) -> list[UUID]:
        """Ids of non-archived groups the user belongs to."""
        cur = await self._conn.execute(
            "SELECT m.group_id FROM team_group_members m "
            "JOIN team_groups g ON g.id = m.group_id "
            "WHERE m.user_id = %s AND g.archived_at IS NULL",
            (user_id,),
        )
        return [r[0] for r in await cur.fetchall()]

    async def add(self, membership: GroupMembership) -> GroupMembership:
        """Insert membership."""
        try:
            await self._conn.execute(
                "INSERT INTO team_group_members (id, group_id, user_id, added_by, created_at) "
                "VALUES (%s, %s, %s, %s, %s)",
                (
                    membership.id,
                    membership.group_id,
                    membership.user_id,
                    membership.added_by,
                    membership.created_at,
                ),
            )
        except UniqueViolation as e:
            raise AlreadyMember(
                f"User {membership.user_id} is already a member of group {membership.group_id}"
            ) from e
        return membership

    async def remove(self, group_id: UUID, user_id: UUID) -> bool:
        """Hard delete membership row."""
        cur = await self._conn.execute(
            "DELETE FROM team_group_members WHERE group_id = %s AND user_id = %s",
            (group_id, user_id),
        )
        return cur.rowcount > 0
