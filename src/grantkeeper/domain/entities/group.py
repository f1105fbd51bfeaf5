"""Group entity - team-scoped set of users usable as a grant subject."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from grantkeeper.domain.exceptions import ValidationError


def normalize_group_name(name: object) -> str:
    """Strip surrounding whitespace; empty or non-string names are rejected."""
    if name is not None and not isinstance(name, str):
        raise ValidationError("Group name must be a string")
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Group name must not be empty")
    return cleaned


def normalize_group_description(description: object) -> str | None:
    """Blank descriptions are stored as None."""
    if description is None:
        return None
    if not isinstance(description, str):
        raise ValidationError("Group description must be a string")
    return description.strip() or None


@dataclass
class Group:
    """Group - named collection of users within one team, soft-deleted via archived_at."""

    id: UUID
    team_id: UUID
    name: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    created_by: UUID | None = None
    archived_at: datetime | None = None

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None

    def rename(self, name: object, description: object, at: datetime) -> None:
        """Update name and/or description. None leaves a field unchanged."""
        if name is not None:
            self.name = normalize_group_name(name)
        if description is not None:
            self.description = normalize_group_description(description)
        self.updated_at = at
