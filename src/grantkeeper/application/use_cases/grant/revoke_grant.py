"""Revoke grant use case."""

from uuid import UUID

import structlog

from grantkeeper.application.ports import AccessChecker
from grantkeeper.application.use_cases.identity import require_profile
from grantkeeper.domain.entities import Grant
from grantkeeper.domain.exceptions import AlreadyRevoked, NotFound, Unauthorized
from grantkeeper.domain.value_objects import PermissionRole

logger = structlog.get_logger()


class RevokeGrantUseCase:
    """Soft-revoke a grant. Actor must own the granted entity."""

    def __init__(
        self,
        unit_of_work_factory: type,
        access_checker: AccessChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(self, actor_id: str, grant_id: UUID) -> Grant:
        """Revoke grant. Raises AlreadyRevoked if it is no longer active."""
        async with self._uow_factory() as uow:
            revoked_by = await require_profile(uow, actor_id)
            grant = await uow.grants.get_by_id(grant_id)
            if not grant:
                raise NotFound("Grant", str(grant_id))

        is_owner = await self._access_checker.has_access(
            actor_id, grant.entity, PermissionRole.OWNER
        )
        if not is_owner:
            raise Unauthorized("User cannot revoke grants on this entity")

        async with self._uow_factory() as uow:
            revoked = await uow.grants.mark_revoked(grant_id, revoked_by)
            if revoked is None:
                raise AlreadyRevoked(f"Grant {grant_id} is already revoked")

        logger.info(
            "grant_revoked",
            grant_id=str(grant_id),
            entity=str(revoked.entity),
            subject_type=revoked.subject_type.value,
            subject_id=str(revoked.subject_id),
            revoked_by=str(revoked_by),
        )
        return revoked
