"""Identity and team role checks shared by use cases."""

from uuid import UUID

from grantkeeper.application.ports import UnitOfWork
from grantkeeper.domain.exceptions import Unauthenticated, Unauthorized

TEAM_MANAGER_ROLES = frozenset({"owner", "admin"})


async def require_profile(uow: UnitOfWork, auth_id: str) -> UUID:
    """Resolve auth identity to profile id or raise Unauthenticated."""
    profile_id = await uow.profiles.get_profile_id(auth_id)
    if profile_id is None:
        raise Unauthenticated("No profile for authenticated identity")
    return profile_id


async def require_team_member(uow: UnitOfWork, team_id: UUID, profile_id: UUID) -> str:
    """Return the active team role of profile_id or raise Unauthorized."""
    role = await uow.teams.get_member_role(team_id, profile_id)
    if role is None:
        raise Unauthorized("User is not an active member of the team")
    return role


async def require_team_manager(uow: UnitOfWork, team_id: UUID, profile_id: UUID) -> str:
    """Team owners and admins manage groups."""
    role = await require_team_member(uow, team_id, profile_id)
    if role not in TEAM_MANAGER_ROLES:
        raise Unauthorized("User cannot manage groups in this team")
    return role
