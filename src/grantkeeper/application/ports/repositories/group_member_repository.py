"""Group membership repository port."""

from typing import Protocol
from uuid import UUID

from grantkeeper.domain.entities import GroupMembership


class GroupMemberRepository(Protocol):
    """Port for group membership persistence."""

    async def get(self, group_id: UUID, user_id: UUID) -> GroupMembership | None: ...

    async def list_by_group(self, group_id: UUID) -> list[GroupMembership]: ...

    async def list_active_group_ids_for_user(self, user_id: UUID) -> list[UUID]:
        """Groups the user belongs to, excluding archived groups."""
        ...

    async def add(self, membership: GroupMembership) -> GroupMembership:
        """Insert membership. Raises AlreadyMember if the user is in the group."""
        ...

    async def remove(self, group_id: UUID, user_id: UUID) -> bool:
        """Delete membership row. Returns False if there was none."""
        ...
