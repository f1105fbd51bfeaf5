"""Access check use cases."""

from grantkeeper.application.dto.access_dto import ResolvedAccess
from grantkeeper.application.ports import AccessChecker
from grantkeeper.application.use_cases.identity import require_profile
from grantkeeper.domain.value_objects import EntityRef, PermissionRole


class CheckAccessUseCase:
    """Answer whether the actor holds at least a role on an entity."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(
        self, actor_id: str, entity: EntityRef, required_role: PermissionRole
    ) -> bool:
        async with self._uow_factory() as uow:
            await require_profile(uow, actor_id)
        return await self._access_checker.has_access(actor_id, entity, required_role)


class ResolveAccessUseCase:
    """Effective role of the actor on an entity, with its sources."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(self, actor_id: str, entity: EntityRef) -> ResolvedAccess:
        async with self._uow_factory() as uow:
            await require_profile(uow, actor_id)
        return await self._access_checker.resolve(actor_id, entity)
