"""Group membership use cases."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

import structlog

from grantkeeper.application.use_cases.identity import (
    require_profile,
    require_team_manager,
    require_team_member,
)
from grantkeeper.domain.entities import Group, GroupMembership
from grantkeeper.domain.exceptions import AlreadyMember, NotFound

logger = structlog.get_logger()


async def _get_active_group(uow, group_id: UUID) -> Group:
    group = await uow.groups.get_by_id(group_id)
    if not group:
        raise NotFound("Group", str(group_id))
    return group


class AddGroupMemberUseCase:
    """Add a user to a group.

    Team membership of the added user is not checked here; groups and team
    rosters may drift apart and the service layer decides what that means.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, group_id: UUID, user_id: UUID) -> GroupMembership:
        async with self._uow_factory() as uow:
            added_by = await require_profile(uow, actor_id)
            group = await _get_active_group(uow, group_id)
            await require_team_manager(uow, group.team_id, added_by)

            if not await uow.profiles.exists(user_id):
                raise NotFound("Profile", str(user_id))
            if await uow.group_members.get(group_id, user_id):
                raise AlreadyMember(f"User {user_id} is already a member of group {group_id}")

            membership = GroupMembership(
                id=uuid4(),
                group_id=group_id,
                user_id=user_id,
                added_by=added_by,
                created_at=datetime.now(UTC),
            )
            await uow.group_members.add(membership)

        logger.info(
            "group_member_added",
            group_id=str(group_id),
            user_id=str(user_id),
            added_by=str(added_by),
        )
        return membership


class RemoveGroupMemberUseCase:
    """Remove a user from a group (hard delete of the membership row)."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, group_id: UUID, user_id: UUID) -> None:
        async with self._uow_factory() as uow:
            profile_id = await require_profile(uow, actor_id)
            group = await _get_active_group(uow, group_id)
            await require_team_manager(uow, group.team_id, profile_id)

            removed = await uow.group_members.remove(group_id, user_id)
            if not removed:
                raise NotFound("GroupMembership", f"{group_id}/{user_id}")

        logger.info("group_member_removed", group_id=str(group_id), user_id=str(user_id))


class ListGroupMembersUseCase:
    """List current members of a group. Actor must be an active team member."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, group_id: UUID) -> list[GroupMembership]:
        async with self._uow_factory() as uow:
            profile_id = await require_profile(uow, actor_id)
            group = await _get_active_group(uow, group_id)
            await require_team_member(uow, group.team_id, profile_id)
            return await uow.group_members.list_by_group(group_id)


class ListTeamGroupsUseCase:
    """List active groups of a team. Actor must be an active team member."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, team_id: UUID) -> list[Group]:
        async with self._uow_factory() as uow:
            profile_id = await require_profile(uow, actor_id)
            await require_team_member(uow, team_id, profile_id)
            return await uow.groups.list_by_team(team_id)
