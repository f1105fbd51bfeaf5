"""Application ports - interfaces for external adapters."""

from grantkeeper.application.ports.access_checker import AccessChecker
from grantkeeper.application.ports.directories import (
    EntityOwnership,
    EntityRegistry,
    ProfileDirectory,
    TeamDirectory,
)
from grantkeeper.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AccessChecker",
    "EntityOwnership",
    "EntityRegistry",
    "ProfileDirectory",
    "TeamDirectory",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
