"""Domain exceptions."""


class GrantKeeperError(Exception):
    """Base exception for GrantKeeper."""

    pass


class NotFound(GrantKeeperError):
    """Requested resource was not found."""

    pass


class ValidationError(GrantKeeperError):
    """Validation failed for input data."""

    pass


class InvalidRole(ValidationError):
    """Role is not permitted for the entity type."""

    pass


class DuplicateGrant(GrantKeeperError):
    """An active grant already exists for the entity and subject."""

    pass


class AlreadyRevoked(GrantKeeperError):
    """Grant has already been revoked."""

    pass


class DuplicateGroupName(GrantKeeperError):
    """An active group with the same name exists in the team."""

    pass


class AlreadyMember(GrantKeeperError):
    """User is already a member of the group."""

    pass


class Unauthenticated(GrantKeeperError):
    """Request identity could not be resolved to a profile."""

    pass


class Unauthorized(GrantKeeperError):
    """Identity does not have the access required for the operation."""

    pass
