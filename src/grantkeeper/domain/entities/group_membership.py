"""Group membership entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class GroupMembership:
    """User is a member of group. Removal deletes the row."""

    id: UUID
    group_id: UUID
    user_id: UUID
    created_at: datetime
    added_by: UUID | None = None
