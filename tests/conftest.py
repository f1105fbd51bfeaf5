"""Pytest fixtures for GrantKeeper tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from grantkeeper.domain.entities import Grant, Group, GroupMembership
from grantkeeper.domain.exceptions import (
    AlreadyMember,
    DuplicateGrant,
    DuplicateGroupName,
    ValidationError,
)
from grantkeeper.domain.value_objects import EntityRef, EntityType, PermissionRole, SubjectType
from grantkeeper.infrastructure.access.access_resolver import EntityAccessResolver


# --- Fake repositories ---


class FakeGrantRepository:
    """In-memory grant repository. Revoked rows stay in place."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Grant] = {}

    def _active(self) -> list[Grant]:
        return [g for g in self._by_id.values() if g.revoked_at is None]

    async def get_by_id(self, grant_id: UUID) -> Grant | None:
        return self._by_id.get(grant_id)

    async def get_active(
        self, entity: EntityRef, subject_type: SubjectType, subject_id: UUID
    ) -> Grant | None:
        for g in self._active():
            if g.entity == entity and g.subject_type == subject_type and g.subject_id == subject_id:
                return g
        return None

    async def list_active_for_entity(self, entity: EntityRef) -> list[Grant]:
        items = [g for g in self._active() if g.entity == entity]
        return sorted(items, key=lambda g: g.granted_at)

    async def list_active_for_subject(
        self, subject_type: SubjectType, subject_id: UUID
    ) -> list[Grant]:
        items = [
            g
            for g in self._active()
            if g.subject_type == subject_type and g.subject_id == subject_id
        ]
        return sorted(items, key=lambda g: g.granted_at)

    async def list_active_for_subjects(
        self, entity: EntityRef, subject_type: SubjectType, subject_ids: Sequence[UUID]
    ) -> list[Grant]:
        wanted = set(subject_ids)
        return [
            g
            for g in self._active()
            if g.entity == entity and g.subject_type == subject_type and g.subject_id in wanted
        ]

    async def create(self, grant: Grant) -> Grant:
        if await self.get_active(grant.entity, grant.subject_type, grant.subject_id):
            raise DuplicateGrant(f"Active grant exists for {grant.subject_id} on {grant.entity}")
        self._by_id[grant.id] = grant
        return grant

    async def mark_revoked(self, grant_id: UUID, revoked_by: UUID | None) -> Grant | None:
        grant = self._by_id.get(grant_id)
        if not grant or grant.revoked_at is not None:
            return None
        revoked = replace(grant, revoked_at=datetime.now(UTC), revoked_by=revoked_by)
        self._by_id[grant_id] = revoked
        return revoked


class FakeGroupRepository:
    """In-memory group repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Group] = {}

    def add_group(self, team_id: UUID, name: str, archived: bool = False) -> Group:
        """Seed a group directly (test helper)."""
        now = datetime.now(UTC)
        group = Group(
            id=uuid4(),
            team_id=team_id,
            name=name,
            created_at=now,
            updated_at=now,
            archived_at=now if archived else None,
        )
        self._by_id[group.id] = group
        return group

    async def get_by_id(self, group_id: UUID, include_archived: bool = False) -> Group | None:
        group = self._by_id.get(group_id)
        if not group or (not include_archived and group.archived_at):
            return None
        return replace(group)

    async def get_active_by_name(self, team_id: UUID, name: str) -> Group | None:
        for g in self._by_id.values():
            if g.team_id == team_id and g.name == name and g.archived_at is None:
                return g
        return None

    async def list_by_team(self, team_id: UUID, include_archived: bool = False) -> list[Group]:
        items = [
            g
            for g in self._by_id.values()
            if g.team_id == team_id and (include_archived or g.archived_at is None)
        ]
        return sorted(items, key=lambda g: g.name)

    async def create(self, group: Group) -> Group:
        if await self.get_active_by_name(group.team_id, group.name):
            raise DuplicateGroupName(f"Group '{group.name}' already exists in team")
        self._by_id[group.id] = group
        return group

    async def update(self, group: Group) -> None:
        clash = await self.get_active_by_name(group.team_id, group.name)
        if clash and clash.id != group.id:
            raise DuplicateGroupName(f"Group '{group.name}' already exists in team")
        self._by_id[group.id] = group

    async def archive(self, group_id: UUID) -> None:
        group = self._by_id.get(group_id)
        if group:
            now = datetime.now(UTC)
            self._by_id[group_id] = replace(group, archived_at=now, updated_at=now)


class FakeGroupMemberRepository:
    """In-memory group membership repository.

    Needs the group repository to hide memberships of archived groups.
    """

    def __init__(self, groups_repo: FakeGroupRepository) -> None:
        self._groups = groups_repo
        self._rows: dict[tuple[UUID, UUID], GroupMembership] = {}

    def add_member(self, group_id: UUID, user_id: UUID) -> GroupMembership:
        """Seed a membership directly (test helper)."""
        membership = GroupMembership(
            id=uuid4(), group_id=group_id, user_id=user_id, created_at=datetime.now(UTC)
        )
        self._rows[(group_id, user_id)] = membership
        return membership

    async def get(self, group_id: UUID, user_id: UUID) -> GroupMembership | None:
        return self._rows.get((group_id, user_id))

    async def list_by_group(self, group_id: UUID) -> list[GroupMembership]:
        items = [m for (gid, _), m in self._rows.items() if gid == group_id]
        return sorted(items, key=lambda m: m.created_at)

    async def list_active_group_ids_for_user(self, user_id: UUID) -> list[UUID]:
        result = []
        for gid, uid in self._rows:
            group = self._groups._by_id.get(gid)
            if uid == user_id and group is not None and group.archived_at is None:
                result.append(gid)
        return result

    async def add(self, membership: GroupMembership) -> GroupMembership:
        key = (membership.group_id, membership.user_id)
        if key in self._rows:
            raise AlreadyMember(f"User {membership.user_id} is already a member")
        self._rows[key] = membership
        return membership

    async def remove(self, group_id: UUID, user_id: UUID) -> bool:
        return self._rows.pop((group_id, user_id), None) is not None


# --- Fake directories ---


class FakeProfileDirectory:
    """Auth identity to profile id map."""

    def __init__(self) -> None:
        self._by_auth: dict[str, UUID] = {}

    def add_profile(self, auth_id: str) -> UUID:
        profile_id = uuid4()
        self._by_auth[auth_id] = profile_id
        return profile_id

    async def get_profile_id(self, auth_id: str) -> UUID | None:
        return self._by_auth.get(auth_id)

    async def exists(self, profile_id: UUID) -> bool:
        return profile_id in self._by_auth.values()


class FakeEntityOwnership:
    """Rows of one entity table: entity_id -> (owner_id, archived)."""

    def __init__(self) -> None:
        self._rows: dict[UUID, tuple[UUID, bool]] = {}

    async def is_owned_by(self, entity_id: UUID, profile_id: UUID) -> bool:
        row = self._rows.get(entity_id)
        return row is not None and row[0] == profile_id

    async def is_archived(self, entity_id: UUID) -> bool | None:
        row = self._rows.get(entity_id)
        return None if row is None else row[1]


class FakeEntityRegistry:
    """Entity tables keyed by entity type."""

    def __init__(self) -> None:
        self._tables = {t: FakeEntityOwnership() for t in EntityType}

    def add_entity(
        self, entity_type: EntityType, owner_id: UUID, archived: bool = False
    ) -> EntityRef:
        entity = EntityRef(entity_type, uuid4())
        self._tables[entity_type]._rows[entity.entity_id] = (owner_id, archived)
        return entity

    def set_archived(self, entity: EntityRef, archived: bool = True) -> None:
        owner_id, _ = self._tables[entity.entity_type]._rows[entity.entity_id]
        self._tables[entity.entity_type]._rows[entity.entity_id] = (owner_id, archived)

    def for_type(self, entity_type: EntityType) -> FakeEntityOwnership:
        try:
            return self._tables[entity_type]
        except KeyError:
            raise ValidationError(f"Unknown entity type: {entity_type}") from None


class FakeTeamDirectory:
    """Active team members and their roles."""

    def __init__(self) -> None:
        self._roles: dict[tuple[UUID, UUID], str] = {}

    def add_member(self, team_id: UUID, profile_id: UUID, role: str = "member") -> None:
        self._roles[(team_id, profile_id)] = role

    async def get_member_role(self, team_id: UUID, profile_id: UUID) -> str | None:
        return self._roles.get((team_id, profile_id))


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.grants = FakeGrantRepository()
        self.groups = FakeGroupRepository()
        self.group_members = FakeGroupMemberRepository(groups_repo=self.groups)
        self.profiles = FakeProfileDirectory()
        self.entities = FakeEntityRegistry()
        self.teams = FakeTeamDirectory()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def seed_grant(
    uow: FakeUnitOfWork,
    entity: EntityRef,
    subject_type: SubjectType,
    subject_id: UUID,
    role: PermissionRole,
) -> Grant:
    """Store an active grant without going through the use case."""
    grant = Grant.issue(
        entity, subject_type, subject_id, role, granted_by=None, granted_at=datetime.now(UTC)
    )
    uow.grants._by_id[grant.id] = grant
    return grant


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager that yields the test's UoW."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield fake_uow

    return _factory


@pytest.fixture
def resolver(uow_factory) -> EntityAccessResolver:
    """Access resolver over the in-memory stores."""
    return EntityAccessResolver(uow_factory)
