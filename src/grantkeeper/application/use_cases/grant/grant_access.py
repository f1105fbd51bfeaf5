"""Grant access use case."""

from datetime import UTC, datetime
from uuid import UUID

import structlog

from grantkeeper.application.ports import AccessChecker
from grantkeeper.application.use_cases.identity import require_profile
from grantkeeper.domain.entities import Grant
from grantkeeper.domain.exceptions import DuplicateGrant, NotFound, Unauthorized
from grantkeeper.domain.value_objects import EntityRef, PermissionRole, SubjectType

logger = structlog.get_logger()


class GrantAccessUseCase:
    """Grant a role on an entity to a user or group. Actor must own the entity."""

    def __init__(
        self,
        unit_of_work_factory: type,
        access_checker: AccessChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(
        self,
        actor_id: str,
        entity: EntityRef,
        subject_type: SubjectType,
        subject_id: UUID,
        role: PermissionRole,
    ) -> Grant:
        """Create an active grant.

        An existing active grant for the same subject is never replaced;
        changing a role means revoking first.
        """
        async with self._uow_factory() as uow:
            granted_by = await require_profile(uow, actor_id)

        is_owner = await self._access_checker.has_access(actor_id, entity, PermissionRole.OWNER)
        if not is_owner:
            raise Unauthorized("User cannot share this entity")

        async with self._uow_factory() as uow:
            grant = Grant.issue(
                entity,
                subject_type,
                subject_id,
                role,
                granted_by=granted_by,
                granted_at=datetime.now(UTC),
            )

            if subject_type is SubjectType.USER:
                if not await uow.profiles.exists(subject_id):
                    raise NotFound("Profile", str(subject_id))
            else:
                group = await uow.groups.get_by_id(subject_id)
                if not group:
                    raise NotFound("Group", str(subject_id))

            existing = await uow.grants.get_active(entity, subject_type, subject_id)
            if existing:
                raise DuplicateGrant(
                    f"{subject_type.value} {subject_id} already holds "
                    f"'{existing.permission_role.value}' on {entity}"
                )
            await uow.grants.create(grant)

        logger.info(
            "grant_created",
            grant_id=str(grant.id),
            entity=str(entity),
            subject_type=subject_type.value,
            subject_id=str(subject_id),
            role=role.value,
            granted_by=str(granted_by),
        )
        return grant
