"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from grantkeeper.application.ports.directories import (
    EntityRegistry,
    ProfileDirectory,
    TeamDirectory,
)
from grantkeeper.application.ports.repositories.grant_repository import GrantRepository
from grantkeeper.application.ports.repositories.group_member_repository import (
    GroupMemberRepository,
)
from grantkeeper.application.ports.repositories.group_repository import GroupRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def grants(self) -> GrantRepository: ...

    @property
    def groups(self) -> GroupRepository: ...

    @property
    def group_members(self) -> GroupMemberRepository: ...

    @property
    def profiles(self) -> ProfileDirectory: ...

    @property
    def entities(self) -> EntityRegistry: ...

    @property
    def teams(self) -> TeamDirectory: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
