"""Grant API resources."""

import falcon
import falcon.asgi

from grantkeeper.application.use_cases.grant.grant_access import GrantAccessUseCase
from grantkeeper.application.use_cases.grant.list_grants import (
    ListEntityGrantsUseCase,
    ListSubjectGrantsUseCase,
)
from grantkeeper.application.use_cases.grant.revoke_grant import RevokeGrantUseCase
from grantkeeper.domain.exceptions import GrantKeeperError, ValidationError
from grantkeeper.domain.value_objects import EntityRef, PermissionRole, SubjectType
from grantkeeper.interfaces.api.resources.common import (
    grant_to_dict,
    parse_uuid,
    require_user,
    set_error,
)


class GrantsResource:
    """POST /v1/grants - grant a role on an entity."""

    def __init__(self, grant_access: GrantAccessUseCase) -> None:
        self._grant = grant_access

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create grant. Body: entity_type, entity_id, subject_type, subject_id, role."""
        user = require_user(req, resp)
        if not user:
            return

        try:
            body = await req.get_media()
            entity = EntityRef.parse(body["entity_type"], body["entity_id"])
            subject_type = SubjectType(body["subject_type"])
            subject_id = parse_uuid(body["subject_id"], "subject ID")
            role = PermissionRole(body.get("role", "viewer"))
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except (TypeError, ValueError, ValidationError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            grant = await self._grant.execute(user.auth_id, entity, subject_type, subject_id, role)
        except GrantKeeperError as e:
            set_error(resp, e, hide_denied=True)
            return

        resp.media = grant_to_dict(grant)
        resp.status = falcon.HTTP_201


class GrantResource:
    """DELETE /v1/grants/{grant_id} - revoke grant."""

    def __init__(self, revoke_grant: RevokeGrantUseCase) -> None:
        self._revoke = revoke_grant

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, grant_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        try:
            await self._revoke.execute(user.auth_id, parse_uuid(grant_id, "grant ID"))
            resp.status = falcon.HTTP_204
        except GrantKeeperError as e:
            set_error(resp, e, hide_denied=True)


class EntityGrantsResource:
    """GET /v1/entities/{entity_type}/{entity_id}/grants - active grants on entity."""

    def __init__(self, list_entity_grants: ListEntityGrantsUseCase) -> None:
        self._list = list_entity_grants

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        entity_type: str,
        entity_id: str,
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        try:
            entity = EntityRef.parse(entity_type, entity_id)
            grants = await self._list.execute(user.auth_id, entity)
        except ValidationError as e:
            set_error(resp, e)
            return
        except GrantKeeperError as e:
            set_error(resp, e, hide_denied=True)
            return

        resp.media = {"items": [grant_to_dict(g) for g in grants]}
        resp.status = falcon.HTTP_200


class SubjectGrantsResource:
    """GET /v1/subjects/{subject_type}/{subject_id}/grants - what a subject can access."""

    def __init__(self, list_subject_grants: ListSubjectGrantsUseCase) -> None:
        self._list = list_subject_grants

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        subject_type: str,
        subject_id: str,
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        try:
            stype = SubjectType(subject_type)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Unknown subject type: {subject_type}"}
            return

        try:
            grants = await self._list.execute(
                user.auth_id, stype, parse_uuid(subject_id, "subject ID")
            )
        except GrantKeeperError as e:
            set_error(resp, e)
            return

        resp.media = {"items": [grant_to_dict(g) for g in grants]}
        resp.status = falcon.HTTP_200
