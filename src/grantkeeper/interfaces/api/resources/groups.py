"""Group API resources."""

import falcon
import falcon.asgi

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
from grantkeeper.domain.exceptions import GrantKeeperError
from grantkeeper.interfaces.api.resources.common import (
    group_to_dict,
    membership_to_dict,
    parse_uuid,
    require_user,
    set_error,
)


class TeamGroupsResource:
    """GET/POST /v1/teams/{team_id}/groups - list and create groups."""

    def __init__(
        self,
        create_group: CreateGroupUseCase,
        list_groups: ListTeamGroupsUseCase,
    ) -> None:
        self._create = create_group
        self._list = list_groups

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, team_id: str
    ) -> None:
        """List active groups in team."""
        user = require_user(req, resp)
        if not user:
            return

        try:
            groups = await self._list.execute(user.auth_id, parse_uuid(team_id, "team ID"))
        except GrantKeeperError as e:
            set_error(resp, e)
            return

        resp.media = {"items": [group_to_dict(g) for g in groups]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, team_id: str
    ) -> None:
        """Create group. Body: name, description (optional)."""
        user = require_user(req, resp)
        if not user:
            return

        try:
            body = await req.get_media()
            name = body["name"]
            description = body.get("description")
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        try:
            group = await self._create.execute(
                user.auth_id, parse_uuid(team_id, "team ID"), name, description
            )
        except GrantKeeperError as e:
            set_error(resp, e)
            return

        resp.media = group_to_dict(group)
        resp.status = falcon.HTTP_201


class GroupResource:
    """PATCH/DELETE /v1/groups/{group_id} - update or archive group."""

    def __init__(
        self,
        update_group: UpdateGroupUseCase,
        archive_group: ArchiveGroupUseCase,
    ) -> None:
        self._update = update_group
        self._archive = archive_group

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, group_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        body = await req.get_media(default_when_empty={})
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Body must be a JSON object"}
            return

        try:
            group = await self._update.execute(
                user.auth_id,
                parse_uuid(group_id, "group ID"),
                name=body.get("name"),
                description=body.get("description"),
            )
        except GrantKeeperError as e:
            set_error(resp, e)
            return

        resp.media = group_to_dict(group)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, group_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        try:
            await self._archive.execute(user.auth_id, parse_uuid(group_id, "group ID"))
            resp.status = falcon.HTTP_204
        except GrantKeeperError as e:
            set_error(resp, e)


class GroupMembersResource:
    """GET/POST /v1/groups/{group_id}/members - list and add members."""

    def __init__(
        self,
        list_members: ListGroupMembersUseCase,
        add_member: AddGroupMemberUseCase,
    ) -> None:
        self._list = list_members
        self._add = add_member

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, group_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        try:
            members = await self._list.execute(user.auth_id, parse_uuid(group_id, "group ID"))
        except GrantKeeperError as e:
            set_error(resp, e)
            return

        resp.media = {"items": [membership_to_dict(m) for m in members]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, group_id: str
    ) -> None:
        """Add member. Body: user_id (profile id)."""
        user = require_user(req, resp)
        if not user:
            return

        try:
            body = await req.get_media()
            user_id = body["user_id"]
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        try:
            membership = await self._add.execute(
                user.auth_id,
                parse_uuid(group_id, "group ID"),
                parse_uuid(user_id, "user ID"),
            )
        except GrantKeeperError as e:
            set_error(resp, e)
            return

        resp.media = membership_to_dict(membership)
        resp.status = falcon.HTTP_201


class GroupMemberResource:
    """DELETE /v1/groups/{group_id}/members/{user_id} - remove member."""

    def __init__(self, remove_member: RemoveGroupMemberUseCase) -> None:
        self._remove = remove_member

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        group_id: str,
        user_id: str,
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        try:
            await self._remove.execute(
                user.auth_id,
                parse_uuid(group_id, "group ID"),
                parse_uuid(user_id, "user ID"),
            )
            resp.status = falcon.HTTP_204
        except GrantKeeperError as e:
            set_error(resp, e)
