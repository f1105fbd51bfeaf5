"""Permission roles, totally ordered by privilege."""

from collections.abc import Iterable
from enum import StrEnum


class PermissionRole(StrEnum):
    """Role held on an entity. owner > editor > commenter > viewer."""

    OWNER = "owner"
    EDITOR = "editor"
    COMMENTER = "commenter"
    VIEWER = "viewer"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def satisfies(self, required: "PermissionRole") -> bool:
        """True if this role grants at least the required role."""
        return self.rank >= required.rank


_RANKS = {
    PermissionRole.VIEWER: 1,
    PermissionRole.COMMENTER: 2,
    PermissionRole.EDITOR: 3,
    PermissionRole.OWNER: 4,
}


def highest_role(roles: Iterable[PermissionRole | None]) -> PermissionRole | None:
    """Return the most privileged role, or None if there is none."""
    present = [r for r in roles if r is not None]
    if not present:
        return None
    return max(present, key=lambda r: r.rank)
