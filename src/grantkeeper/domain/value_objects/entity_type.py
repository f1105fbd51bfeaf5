"""Permission-able entity types."""

from enum import StrEnum

from grantkeeper.domain.value_objects.permission_role import PermissionRole


class EntityType(StrEnum):
    """Types of entities that accept grants."""

    TRACK = "track"
    SUBTRACK = "subtrack"
    TRACKER = "tracker"

    @property
    def grantable_roles(self) -> frozenset[PermissionRole]:
        """Roles that may be assigned through a grant on this entity type.

        Tracker ownership is a property of the tracker itself, so grants on
        trackers are limited to editor and viewer.
        """
        if self is EntityType.TRACKER:
            return frozenset({PermissionRole.EDITOR, PermissionRole.VIEWER})
        return frozenset(PermissionRole)
