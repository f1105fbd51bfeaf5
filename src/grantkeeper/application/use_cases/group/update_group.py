"""Update and archive group use cases."""

from datetime import UTC, datetime
from uuid import UUID

import structlog

from grantkeeper.application.use_cases.identity import require_profile, require_team_manager
from grantkeeper.domain.entities import Group
from grantkeeper.domain.exceptions import DuplicateGroupName, NotFound

logger = structlog.get_logger()


class UpdateGroupUseCase:
    """Rename a group or change its description."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor_id: str,
        group_id: UUID,
        name: str | None = None,
        description: str | None = None,
    ) -> Group:
        async with self._uow_factory() as uow:
            profile_id = await require_profile(uow, actor_id)
            group = await uow.groups.get_by_id(group_id)
            if not group:
                raise NotFound("Group", str(group_id))
            await require_team_manager(uow, group.team_id, profile_id)

            old_name = group.name
            group.rename(name, description, datetime.now(UTC))
            if group.name != old_name:
                clash = await uow.groups.get_active_by_name(group.team_id, group.name)
                if clash and clash.id != group.id:
                    raise DuplicateGroupName(f"Group '{group.name}' already exists in team")
            await uow.groups.update(group)

        logger.info("group_updated", group_id=str(group_id), name=group.name)
        return group


class ArchiveGroupUseCase:
    """Soft-delete a group. Memberships are kept but no longer confer grants."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, group_id: UUID) -> None:
        async with self._uow_factory() as uow:
            profile_id = await require_profile(uow, actor_id)
            group = await uow.groups.get_by_id(group_id)
            if not group:
                raise NotFound("Group", str(group_id))
            await require_team_manager(uow, group.team_id, profile_id)
            await uow.groups.archive(group_id)

        logger.info("group_archived", group_id=str(group_id), archived_by=str(profile_id))
