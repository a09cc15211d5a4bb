"""Application wiring: builds the sync services from settings."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from wegwijs_sync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, startup
from wegwijs_sync.adapters.wegwijs import WegwijsClient, WegwijsSnapshotFetcher
from wegwijs_sync.domain.healing import ReconciliationSweep
from wegwijs_sync.domain.locks import OrganizationLocks
from wegwijs_sync.domain.single_sync import sync_organization

if TYPE_CHECKING:
    from wegwijs_sync.config.settings import Settings
    from wegwijs_sync.domain.healing import SweepResult
    from wegwijs_sync.domain.model import SyncResult
    from wegwijs_sync.domain.ports.fetching import OrganizationLookup, SnapshotFetcher
    from wegwijs_sync.domain.ports.unit_of_work import UnitOfWorkFactory

log = getLogger(__name__)


@dataclass(slots=True)
class SyncServices:
    """Both sync entry points sharing one set of organisation locks."""

    settings: Settings
    lookup: OrganizationLookup
    sweep: ReconciliationSweep
    unit_of_work_factory: UnitOfWorkFactory
    locks: OrganizationLocks

    def sync_organization(self, structured_id_uuid: str) -> SyncResult:
        return sync_organization(
            structured_id_uuid,
            lookup=self.lookup,
            unit_of_work_factory=self.unit_of_work_factory,
            locks=self.locks,
        )

    def heal(self) -> SweepResult:
        return self.sweep.run()


def build_services(
    settings: Settings,
    *,
    lookup: OrganizationLookup | None = None,
    fetcher: SnapshotFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SyncServices:
    """Wire the adapters; the database is only started when no factory is injected."""

    if unit_of_work_factory is None:
        startup(
            database_uri=settings.database.uri,
            resource_base_uri=settings.database.resource_base_uri,
        )
        unit_of_work_factory = SqlAlchemyUnitOfWork
        log.info("Registry store ready at %s", settings.database.uri)

    client = WegwijsClient(config=settings.wegwijs)
    locks = OrganizationLocks()
    sweep = ReconciliationSweep(
        fetcher=fetcher or WegwijsSnapshotFetcher(client),
        unit_of_work_factory=unit_of_work_factory,
        locks=locks,
    )
    return SyncServices(
        settings=settings,
        lookup=lookup or client,
        sweep=sweep,
        unit_of_work_factory=unit_of_work_factory,
        locks=locks,
    )
