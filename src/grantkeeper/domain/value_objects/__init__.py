"""Domain value objects."""

from grantkeeper.domain.value_objects.entity_ref import EntityRef
from grantkeeper.domain.value_objects.entity_type import EntityType
from grantkeeper.domain.value_objects.permission_role import PermissionRole, highest_role
from grantkeeper.domain.value_objects.subject_type import SubjectType

__all__ = [
    "EntityRef",
    "EntityType",
    "PermissionRole",
    "SubjectType",
    "highest_role",
]
