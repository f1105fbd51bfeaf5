"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon
import falcon.asgi
import structlog
from falcon.asgi import App
from psycopg_pool import AsyncConnectionPool

from grantkeeper.application.ports import AccessChecker
from grantkeeper.application.use_cases.access.check_access import (
    CheckAccessUseCase,
    ResolveAccessUseCase,
)
from grantkeeper.application.use_cases.grant.grant_access import GrantAccessUseCase
from grantkeeper.application.use_cases.grant.list_grants import (
    ListEntityGrantsUseCase,
    ListSubjectGrantsUseCase,
)
from grantkeeper.application.use_cases.grant.revoke_grant import RevokeGrantUseCase
from grantkeeper.application.use_cases.group.create_group import CreateGroupUseCase
from grantkeeper.application.use_cases.group.members import (
    AddGroupMemberUseCase,
    ListGroupMembersUseCase,
    ListTeamGroupsUseCase,
    RemoveGroupMemberUseCase,
)
from grantkeeper.application.use_cases.group.update_group import (
    ArchiveGroupUseCase,
    UpdateGroupUseCase,
)
from grantkeeper.interfaces.api.resources.access import EntityAccessResource
from grantkeeper.interfaces.api.resources.grants import (
    EntityGrantsResource,
    GrantResource,
    GrantsResource,
    SubjectGrantsResource,
)
from grantkeeper.interfaces.api.resources.groups import (
    GroupMemberResource,
    GroupMembersResource,
    GroupResource,
    TeamGroupsResource,
)
from grantkeeper.interfaces.api.resources.health import HealthResource

logger = structlog.get_logger()


@dataclass
class ApiResources:
    """All resources served by the API."""

    health: HealthResource
    grants: GrantsResource
    grant: GrantResource
    entity_grants: EntityGrantsResource
    entity_access: EntityAccessResource
    subject_grants: SubjectGrantsResource
    team_groups: TeamGroupsResource
    group: GroupResource
    group_members: GroupMembersResource
    group_member: GroupMemberResource


def build_resources(
    unit_of_work_factory: type,
    access_checker: AccessChecker,
    pool: AsyncConnectionPool | None = None,
) -> ApiResources:
    """Wire use cases into resources."""
    uow = unit_of_work_factory
    return ApiResources(
        health=HealthResource(pool),
        grants=GrantsResource(GrantAccessUseCase(uow, access_checker)),
        grant=GrantResource(RevokeGrantUseCase(uow, access_checker)),
        entity_grants=EntityGrantsResource(ListEntityGrantsUseCase(uow, access_checker)),
        entity_access=EntityAccessResource(
            CheckAccessUseCase(uow, access_checker),
            ResolveAccessUseCase(uow, access_checker),
        ),
        subject_grants=SubjectGrantsResource(ListSubjectGrantsUseCase(uow)),
        team_groups=TeamGroupsResource(CreateGroupUseCase(uow), ListTeamGroupsUseCase(uow)),
        group=GroupResource(UpdateGroupUseCase(uow), ArchiveGroupUseCase(uow)),
        group_members=GroupMembersResource(
            ListGroupMembersUseCase(uow), AddGroupMemberUseCase(uow)
        ),
        group_member=GroupMemberResource(RemoveGroupMemberUseCase(uow)),
    )


async def handle_unexpected(req, resp, ex, params) -> None:
    """Log unhandled errors and answer 500 without leaking details."""
    logger.exception("unhandled_error", method=req.method, path=req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(resources: ApiResources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected)
    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/grants", resources.grants)
    app.add_route("/v1/grants/{grant_id}", resources.grant)
    app.add_route("/v1/entities/{entity_type}/{entity_id}/grants", resources.entity_grants)
    app.add_route("/v1/entities/{entity_type}/{entity_id}/access", resources.entity_access)
    app.add_route("/v1/subjects/{subject_type}/{subject_id}/grants", resources.subject_grants)
    app.add_route("/v1/teams/{team_id}/groups", resources.team_groups)
    app.add_route("/v1/groups/{group_id}", resources.group)
    app.add_route("/v1/groups/{group_id}/members", resources.group_members)
    app.add_route("/v1/groups/{group_id}/members/{user_id}", resources.group_member)
    return app
