"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import OrganizationLookup, SnapshotFetcher
from .persistence import OrganizationRepository
from .unit_of_work import OrganizationUnitOfWork, UnitOfWorkFactory

__all__ = [
    "OrganizationLookup",
    "OrganizationRepository",
    "OrganizationUnitOfWork",
    "SnapshotFetcher",
    "UnitOfWorkFactory",
]
