"""Grant subject types."""

from enum import StrEnum


class SubjectType(StrEnum):
    """Holder of a grant - a single user or a group."""

    USER = "user"
    GROUP = "group"
