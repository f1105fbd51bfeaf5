"""PostgreSQL adapters for collaborator tables (profiles, entities, team members).

Read-only. The tables are owned by other parts of the application.
"""

from uuid import UUID

from psycopg import AsyncConnection, sql

from grantkeeper.domain.exceptions import ValidationError
from grantkeeper.domain.value_objects import EntityType

# entity type -> (table, owner column)
ENTITY_TABLES: dict[EntityType, tuple[str, str]] = {
    EntityType.TRACK: ("tracks", "owner_id"),
    EntityType.SUBTRACK: ("subtracks", "owner_id"),
    EntityType.TRACKER: ("trackers", "owner_id"),
}


class PostgresProfileDirectory:
    """auth id -> profile id via profiles.user_id."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_profile_id(self, auth_id: str) -> UUID | None:
        """Get profile id for an auth identity."""
        try:
            auth_uuid = UUID(auth_id)
        except (TypeError, ValueError):
            return None
        cur = await self._conn.execute(
            "SELECT id FROM profiles WHERE user_id = %s",
            (auth_uuid,),
        )
        r = await cur.fetchone()
        return r[0] if r else None

    async def exists(self, profile_id: UUID) -> bool:
        cur = await self._conn.execute("SELECT 1 FROM profiles WHERE id = %s", (profile_id,))
        return await cur.fetchone() is not None


class PostgresEntityOwnership:
    """Ownership and archived status read straight from one entity table."""

    def __init__(self, conn: AsyncConnection, table: str, owner_column: str) -> None:
        self._conn = conn
        self._table = sql.Identifier(table)
        self._owner_column = sql.Identifier(owner_column)

    async def is_owned_by(self, entity_id: UUID, profile_id: UUID) -> bool:
        """Owner column comparison."""
        q = sql.SQL("SELECT 1 FROM {} WHERE id = %s AND {} = %s").format(
            self._table, self._owner_column
        )
        cur = await self._conn.execute(q, (entity_id, profile_id))
        return await cur.fetchone() is not None

    async def is_archived(self, entity_id: UUID) -> bool | None:
        """Archived flag, None if the row does not exist."""
        q = sql.SQL("SELECT archived_at IS NOT NULL FROM {} WHERE id = %s").format(self._table)
        cur = await self._conn.execute(q, (entity_id,))
        r = await cur.fetchone()
        return bool(r[0]) if r else None


class PostgresEntityRegistry:
    """Entity type -> ownership capability."""

    def __init__(
        self,
        conn: AsyncConnection,
        tables: dict[EntityType, tuple[str, str]] | None = None,
    ) -> None:
        self._by_type = {
            etype: PostgresEntityOwnership(conn, table, owner_column)
            for etype, (table, owner_column) in (tables or ENTITY_TABLES).items()
        }

    def for_type(self, entity_type: EntityType) -> PostgresEntityOwnership:
        try:
            return self._by_type[entity_type]
        except KeyError:
            raise ValidationError(f"No ownership table for entity type: {entity_type}") from None


class PostgresTeamDirectory:
    """Active team member roles via team_members."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_member_role(self, team_id: UUID, profile_id: UUID) -> str | None:
        """Get role of active team member."""
        cur = await self._conn.execute(
            "SELECT role FROM team_members WHERE team_id = %s AND user_id = %s AND status = 'active'",
            (team_id, profile_id),
        )
        r = await cur.fetchone()
        return r[0] if r else None
