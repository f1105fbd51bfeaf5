"""Access check API resource."""

import falcon
import falcon.asgi

from grantkeeper.application.use_cases.access.check_access import (
    CheckAccessUseCase,
    ResolveAccessUseCase,
)
from grantkeeper.domain.exceptions import GrantKeeperError
from grantkeeper.domain.value_objects import EntityRef, PermissionRole
from grantkeeper.interfaces.api.resources.common import (
    access_source_to_dict,
    require_user,
    set_error,
)


class EntityAccessResource:
    """GET /v1/entities/{entity_type}/{entity_id}/access - caller's access to entity.

    With ?role=<role> answers whether the caller holds at least that role.
    Without it, returns the effective role, capability flags and where the
    role comes from.
    """

    def __init__(
        self,
        check_access: CheckAccessUseCase,
        resolve_access: ResolveAccessUseCase,
    ) -> None:
        self._check = check_access
        self._resolve = resolve_access

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

        required = req.get_param("role")
        try:
            entity = EntityRef.parse(entity_type, entity_id)
            required_role = PermissionRole(required) if required else None
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Unknown role: {required}"}
            return
        except GrantKeeperError as e:
            set_error(resp, e)
            return

        try:
            if required_role is not None:
                allowed = await self._check.execute(user.auth_id, entity, required_role)
                resp.media = {
                    "entity_type": entity.entity_type.value,
                    "entity_id": str(entity.entity_id),
                    "role": required_role.value,
                    "allowed": allowed,
                }
            else:
                access = await self._resolve.execute(user.auth_id, entity)
                resp.media = {
                    "entity_type": entity.entity_type.value,
                    "entity_id": str(entity.entity_id),
                    "role": access.role.value if access.role else None,
                    "can_view": access.can_view,
                    "can_comment": access.can_comment,
                    "can_edit": access.can_edit,
                    "can_manage": access.can_manage,
                    "source": access_source_to_dict(access.source),
                }
        except GrantKeeperError as e:
            set_error(resp, e)
            return

        resp.status = falcon.HTTP_200
