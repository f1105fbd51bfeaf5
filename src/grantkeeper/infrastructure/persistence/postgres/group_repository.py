"""PostgreSQL group repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from grantkeeper.domain.entities import Group
from grantkeeper.domain.exceptions import DuplicateGroupName

_COLUMNS = "id, team_id, name, description, created_by, created_at, updated_at, archived_at"


def _to_group(r: tuple) -> Group:
    return Group(
        id=r[0],
        team_id=r[1],
        name=r[2],
        description=r[3],
        created_by=r[4],
        created_at=r[5],
        updated_at=r[6],
        archived_at=r[7],
    )


class PostgresGroupRepository:
    """Group repository over team_groups."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, group_id: UUID, include_archived: bool = False) -> Group | None:
        """Get group by id."""
        q = f"SELECT {_COLUMNS} FROM team_groups WHERE id = %s"
        if not include_archived:
            q += " AND archived_at IS NULL"
        cur = await self._conn.execute(q, (group_id,))
        r = await cur.fetchone()
        return _to_group(r) if r else None

    async def get_active_by_name(self, team_id: UUID, name: str) -> Group | None:
        """Get active group in team by name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM team_groups "
            "WHERE team_id = %s AND name = %s AND archived_at IS NULL",
            (team_id, name),
        )
        r = await cur.fetchone()
        return _to_group(r) if r else None

    async def list_by_team(self, team_id: UUID, include_archived: bool = False) -> list[Group]:
        """List groups of a team ordered by name."""
        q = f"SELECT {_COLUMNS} FROM team_groups WHERE team_id = %s"
        if not include_archived:
            q += " AND archived_at IS NULL"
        q += " ORDER BY name"
        cur = await self._conn.execute(q, (team_id,))
        return [_to_group(r) for r in await cur.fetchall()]

    async def create(self, group: Group) -> Group:
        """Create group."""
        try:
            await self._conn.execute(
                f"INSERT INTO team_groups ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    group.id,
                    group.team_id,
                    group.name,
                    group.description,
                    group.created_by,
                    group.created_at,
                    group.updated_at,
                    group.archived_at,
                ),
            )
        except UniqueViolation as e:
            raise DuplicateGroupName(f"Group '{group.name}' already exists in team") from e
        return group

    async def update(self, group: Group) -> None:
        """Update name and description."""
        try:
            await self._conn.execute(
                "UPDATE team_groups SET name=%s, description=%s, updated_at=%s WHERE id=%s",
                (group.name, group.description, group.updated_at, group.id),
            )
        except UniqueViolation as e:
            raise DuplicateGroupName(f"Group '{group.name}' already exists in team") from e

    async def archive(self, group_id: UUID) -> None:
        """Soft delete group. Memberships are kept."""
        await self._conn.execute(
            "UPDATE team_groups SET archived_at = NOW(), updated_at = NOW() "
            "WHERE id = %s AND archived_at IS NULL",
            (group_id,),
        )
