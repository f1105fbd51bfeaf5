"""Domain entities."""

from grantkeeper.domain.entities.grant import Grant
from grantkeeper.domain.entities.group import (
    Group,
    normalize_group_description,
    normalize_group_name,
)
from grantkeeper.domain.entities.group_membership import GroupMembership

__all__ = [
    "Grant",
    "Group",
    "GroupMembership",
    "normalize_group_description",
    "normalize_group_name",
]
