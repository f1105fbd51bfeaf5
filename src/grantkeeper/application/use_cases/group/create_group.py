"""Create group use case."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

import structlog

from grantkeeper.application.use_cases.identity import require_profile, require_team_manager
from grantkeeper.domain.entities import Group, normalize_group_description, normalize_group_name
from grantkeeper.domain.exceptions import DuplicateGroupName

logger = structlog.get_logger()


class CreateGroupUseCase:
    """Create a group in a team. Actor must be a team owner or admin."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor_id: str,
        team_id: UUID,
        name: str,
        description: str | None = None,
    ) -> Group:
        """Create group. Raises DuplicateGroupName if an active group has the name."""
        clean_name = normalize_group_name(name)
        clean_description = normalize_group_description(description)

        async with self._uow_factory() as uow:
            created_by = await require_profile(uow, actor_id)
            await require_team_manager(uow, team_id, created_by)

            if await uow.groups.get_active_by_name(team_id, clean_name):
                raise DuplicateGroupName(f"Group '{clean_name}' already exists in team")

            now = datetime.now(UTC)
            group = Group(
                id=uuid4(),
                team_id=team_id,
                name=clean_name,
                description=clean_description,
                created_by=created_by,
                created_at=now,
                updated_at=now,
            )
            await uow.groups.create(group)

        logger.info(
            "group_created",
            group_id=str(group.id),
            team_id=str(team_id),
            name=group.name,
            created_by=str(created_by),
        )
        return group
