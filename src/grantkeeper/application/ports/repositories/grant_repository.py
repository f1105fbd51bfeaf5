"""Grant repository port."""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from grantkeeper.domain.entities import Grant
from grantkeeper.domain.value_objects import EntityRef, SubjectType


class GrantRepository(Protocol):
    """Port for grant persistence. Revoked grants are kept for audit."""

    async def get_by_id(self, grant_id: UUID) -> Grant | None: ...

    async def get_active(
        self, entity: EntityRef, subject_type: SubjectType, subject_id: UUID
    ) -> Grant | None: ...

    async def list_active_for_entity(self, entity: EntityRef) -> list[Grant]: ...

    async def list_active_for_subject(
        self, subject_type: SubjectType, subject_id: UUID
    ) -> list[Grant]: ...

    async def list_active_for_subjects(
        self, entity: EntityRef, subject_type: SubjectType, subject_ids: Sequence[UUID]
    ) -> list[Grant]: ...

    async def create(self, grant: Grant) -> Grant:
        """Insert grant. Raises DuplicateGrant if an active one exists for the tuple."""
        ...

    async def mark_revoked(self, grant_id: UUID, revoked_by: UUID | None) -> Grant | None:
        """Revoke grant if active. Returns None when no active grant matched."""
        ...
