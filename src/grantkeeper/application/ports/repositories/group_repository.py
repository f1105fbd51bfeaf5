"""Group repository port."""

from typing import Protocol
from uuid import UUID

from grantkeeper.domain.entities import Group


class GroupRepository(Protocol):
    """Port for group persistence."""

    async def get_by_id(self, group_id: UUID, include_archived: bool = False) -> Group | None: ...

    async def get_active_by_name(self, team_id: UUID, name: str) -> Group | None: ...

    async def list_by_team(self, team_id: UUID, include_archived: bool = False) -> list[Group]: ...

    async def create(self, group: Group) -> Group:
        """Insert group. Raises DuplicateGroupName on an active name clash."""
        ...

    async def update(self, group: Group) -> None:
        """Persist name/description changes. Raises DuplicateGroupName on clash."""
        ...

    async def archive(self, group_id: UUID) -> None: ...
