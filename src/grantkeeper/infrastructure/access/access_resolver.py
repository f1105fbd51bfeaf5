"""Entity access resolver - ownership, direct grants, group grants.

Ownership and grant evaluation are two separate lookup paths. Ownership is a
direct column comparison on the entity row through the EntityRegistry; grant
evaluation goes through GrantRoleLookup, which reads only the grant and
membership tables. Neither path asks for access to the row being checked.
"""

from uuid import UUID

import structlog

from grantkeeper.application.dto.access_dto import AccessSource, ResolvedAccess
from grantkeeper.application.ports.repositories import GrantRepository, GroupMemberRepository
from grantkeeper.domain.value_objects import EntityRef, PermissionRole, SubjectType, highest_role

logger = structlog.get_logger()


class GrantRoleLookup:
    """Roles granted to a profile on an entity, directly or through groups."""

    def __init__(self, grants: GrantRepository, group_members: GroupMemberRepository) -> None:
        self._grants = grants
        self._group_members = group_members

    async def direct_role(self, entity: EntityRef, profile_id: UUID) -> PermissionRole | None:
        grant = await self._grants.get_active(entity, SubjectType.USER, profile_id)
        return grant.permission_role if grant else None

    async def group_roles(
        self, entity: EntityRef, profile_id: UUID
    ) -> list[tuple[UUID, PermissionRole]]:
        group_ids = await self._group_members.list_active_group_ids_for_user(profile_id)
        if not group_ids:
            return []
        grants = await self._grants.list_active_for_subjects(
            entity, SubjectType.GROUP, group_ids
        )
        return [(g.subject_id, g.permission_role) for g in grants]


class EntityAccessResolver:
    """Decides whether an identity holds at least a role on an entity.

    Order: ownership, then direct user grant, then group grants. Owners pass
    every check, archived or not. Grant-based access ends when the entity is
    archived. Denial is a False result, never an exception.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def has_access(
        self, auth_id: str, entity: EntityRef, required_role: PermissionRole
    ) -> bool:
        """Check if auth_id has at least required_role on entity."""
        async with self._uow_factory() as uow:
            profile_id = await uow.profiles.get_profile_id(auth_id)
            if profile_id is None:
                logger.debug("access_denied", auth_id=auth_id, entity=str(entity), reason="no_profile")
                return False

            ownership = uow.entities.for_type(entity.entity_type)
            if await ownership.is_owned_by(entity.entity_id, profile_id):
                return True

            archived = await ownership.is_archived(entity.entity_id)
            if archived is None or archived:
                logger.debug(
                    "access_denied",
                    profile_id=str(profile_id),
                    entity=str(entity),
                    reason="missing" if archived is None else "archived",
                )
                return False

            lookup = GrantRoleLookup(uow.grants, uow.group_members)
            direct = await lookup.direct_role(entity, profile_id)
            if direct is not None and direct.satisfies(required_role):
                return True

            for _group_id, role in await lookup.group_roles(entity, profile_id):
                if role.satisfies(required_role):
                    return True

        logger.debug(
            "access_denied",
            profile_id=str(profile_id),
            entity=str(entity),
            required_role=required_role.value,
            reason="insufficient_role",
        )
        return False

    async def resolve(self, auth_id: str, entity: EntityRef) -> ResolvedAccess:
        """Compute the effective role and where it comes from."""
        async with self._uow_factory() as uow:
            profile_id = await uow.profiles.get_profile_id(auth_id)
            if profile_id is None:
                return ResolvedAccess.denied(entity)

            ownership = uow.entities.for_type(entity.entity_type)
            source = AccessSource()
            source.is_owner = await ownership.is_owned_by(entity.entity_id, profile_id)
            archived = await ownership.is_archived(entity.entity_id)
            source.archived = bool(archived)

            if archived is None and not source.is_owner:
                return ResolvedAccess.denied(entity, source)

            lookup = GrantRoleLookup(uow.grants, uow.group_members)
            source.direct_role = await lookup.direct_role(entity, profile_id)
            source.group_roles = await lookup.group_roles(entity, profile_id)
            source.highest_grant_role = highest_role(
                [source.direct_role, *(role for _, role in source.group_roles)]
            )

        if source.is_owner:
            role = PermissionRole.OWNER
        elif source.archived:
            role = None
        else:
            role = source.highest_grant_role
        return ResolvedAccess(entity=entity, role=role, source=source)
