"""List grants use cases."""

from uuid import UUID

from grantkeeper.application.ports import AccessChecker
from grantkeeper.application.use_cases.identity import require_profile, require_team_member
from grantkeeper.domain.entities import Grant
from grantkeeper.domain.exceptions import NotFound, Unauthorized
from grantkeeper.domain.value_objects import EntityRef, PermissionRole, SubjectType


class ListEntityGrantsUseCase:
    """List active grants on an entity. Actor needs viewer access."""

    def __init__(
        self,
        unit_of_work_factory: type,
        access_checker: AccessChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(self, actor_id: str, entity: EntityRef) -> list[Grant]:
        async with self._uow_factory() as uow:
            await require_profile(uow, actor_id)

        can_view = await self._access_checker.has_access(actor_id, entity, PermissionRole.VIEWER)
        if not can_view:
            raise Unauthorized("User does not have access to entity")

        async with self._uow_factory() as uow:
            return await uow.grants.list_active_for_entity(entity)


class ListSubjectGrantsUseCase:
    """List active grants held by a subject across entities.

    Users see their own grants; a group's grants are visible to active
    members of the group's team.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, actor_id: str, subject_type: SubjectType, subject_id: UUID
    ) -> list[Grant]:
        async with self._uow_factory() as uow:
            profile_id = await require_profile(uow, actor_id)

            if subject_type is SubjectType.USER:
                if subject_id != profile_id:
                    raise Unauthorized("Users can only list their own grants")
            else:
                group = await uow.groups.get_by_id(subject_id)
                if not group:
                    raise NotFound("Group", str(subject_id))
                await require_team_member(uow, group.team_id, profile_id)

            return await uow.grants.list_active_for_subject(subject_type, subject_id)
