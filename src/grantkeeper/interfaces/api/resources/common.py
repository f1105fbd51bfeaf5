"""Helpers shared by API resources - auth guard, parsing, serialization, error mapping."""

from uuid import UUID

import falcon
import falcon.asgi

from grantkeeper.application.dto.access_dto import AccessSource
from grantkeeper.domain.entities import Grant, Group, GroupMembership
from grantkeeper.domain.exceptions import (
    AlreadyMember,
    AlreadyRevoked,
    DuplicateGrant,
    DuplicateGroupName,
    GrantKeeperError,
    NotFound,
    Unauthenticated,
    Unauthorized,
    ValidationError,
)

_STATUS = [
    (ValidationError, falcon.HTTP_400),
    (Unauthenticated, falcon.HTTP_401),
    (Unauthorized, falcon.HTTP_403),
    (NotFound, falcon.HTTP_404),
    (DuplicateGrant, falcon.HTTP_409),
    (AlreadyRevoked, falcon.HTTP_409),
    (DuplicateGroupName, falcon.HTTP_409),
    (AlreadyMember, falcon.HTTP_409),
]


def require_user(req: falcon.asgi.Request, resp: falcon.asgi.Response):
    """Return request user or set 401 and return None."""
    user = getattr(req.context, "user", None)
    if not user:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
    return user


def parse_uuid(value: object, label: str) -> UUID:
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {label}") from None


def set_error(
    resp: falcon.asgi.Response, exc: GrantKeeperError, hide_denied: bool = False
) -> None:
    """Map domain error to status and body.

    With hide_denied, a denial looks exactly like a missing entity so callers
    can not probe for existence.
    """
    if hide_denied and isinstance(exc, (Unauthorized, NotFound)):
        resp.status = falcon.HTTP_404
        resp.media = {"error": "Not found"}
        return
    for exc_type, status in _STATUS:
        if isinstance(exc, exc_type):
            resp.status = status
            break
    else:
        resp.status = falcon.HTTP_400
    if isinstance(exc, Unauthorized):
        resp.media = {"error": "Permission denied"}
    elif isinstance(exc, Unauthenticated):
        resp.media = {"error": "Unauthorized"}
    else:
        resp.media = {"error": str(exc)}


def grant_to_dict(g: Grant) -> dict:
    return {
        "id": str(g.id),
        "entity_type": g.entity_type.value,
        "entity_id": str(g.entity_id),
        "subject_type": g.subject_type.value,
        "subject_id": str(g.subject_id),
        "permission_role": g.permission_role.value,
        "granted_by": str(g.granted_by) if g.granted_by else None,
        "granted_at": g.granted_at.isoformat(),
        "revoked_at": g.revoked_at.isoformat() if g.revoked_at else None,
    }


def group_to_dict(g: Group) -> dict:
    return {
        "id": str(g.id),
        "team_id": str(g.team_id),
        "name": g.name,
        "description": g.description,
        "created_by": str(g.created_by) if g.created_by else None,
        "created_at": g.created_at.isoformat(),
        "updated_at": g.updated_at.isoformat(),
        "archived_at": g.archived_at.isoformat() if g.archived_at else None,
    }


def membership_to_dict(m: GroupMembership) -> dict:
    return {
        "id": str(m.id),
        "group_id": str(m.group_id),
        "user_id": str(m.user_id),
        "added_by": str(m.added_by) if m.added_by else None,
        "created_at": m.created_at.isoformat(),
    }


def access_source_to_dict(s: AccessSource) -> dict:
    return {
        "is_owner": s.is_owner,
        "archived": s.archived,
        "direct_role": s.direct_role.value if s.direct_role else None,
        "group_roles": [
            {"group_id": str(group_id), "role": role.value} for group_id, role in s.group_roles
        ],
        "highest_grant_role": s.highest_grant_role.value if s.highest_grant_role else None,
    }
