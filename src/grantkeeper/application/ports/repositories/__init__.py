"""Repository ports."""

from grantkeeper.application.ports.repositories.grant_repository import GrantRepository
from grantkeeper.application.ports.repositories.group_member_repository import (
    GroupMemberRepository,
)
from grantkeeper.application.ports.repositories.group_repository import GroupRepository

__all__ = [
    "GrantRepository",
    "GroupMemberRepository",
    "GroupRepository",
]
