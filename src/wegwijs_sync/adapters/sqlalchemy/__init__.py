"""SQLAlchemy adapter package for the organisation registry."""

from __future__ import annotations

from .mappings import (
    create_all_tables,
    kbo_organization_table,
    metadata,
    organization_table,
    ovo_structure_table,
)
from .repositories import SqlAlchemyOrganizationRepository
from .unit_of_work import SqlAlchemyUnitOfWork, StartupError, shutdown, startup

__all__ = [
    "SqlAlchemyOrganizationRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "create_all_tables",
    "kbo_organization_table",
    "metadata",
    "organization_table",
    "ovo_structure_table",
    "shutdown",
    "startup",
]
