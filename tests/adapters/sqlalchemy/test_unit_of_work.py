from __future__ import annotations

from collections.abc import Callable  # noqa: TC003

import pytest
from sqlalchemy import func, select

from tests.helpers.organizations import FakeSnapshotFetcher, make_snapshot
from wegwijs_sync.adapters.sqlalchemy import (
    SqlAlchemyUnitOfWork,
    StartupError,
    kbo_organization_table,
    shutdown,
    startup,
)
from wegwijs_sync.config import ConfigurationError
from wegwijs_sync.domain.healing import ReconciliationSweep, SweepResult

SeedOrganization = Callable[..., str]
UnitOfWorkFactory = Callable[[], SqlAlchemyUnitOfWork]


def _count_kbo_organizations(uow: SqlAlchemyUnitOfWork) -> int:
    stmt = select(func.count()).select_from(kbo_organization_table)
    return uow.session.execute(stmt).scalar_one()


def test_unit_of_work_requires_startup() -> None:
    shutdown()

    with pytest.raises(StartupError):
        SqlAlchemyUnitOfWork()


def test_startup_rejects_malformed_database_uri() -> None:
    shutdown()

    with pytest.raises(ConfigurationError, match="database URI"):
        startup(database_uri="not a database uri")

    with pytest.raises(StartupError):
        SqlAlchemyUnitOfWork()


def test_uncommitted_work_is_rolled_back(
    sqlite_unit_of_work: UnitOfWorkFactory,
    seed_organization: SeedOrganization,
) -> None:
    uri = seed_organization("gent", kbo_number="0123456789")

    with sqlite_unit_of_work() as uow:
        uow.organizations.create_business_id_record(make_snapshot(), None, uri)

    with sqlite_unit_of_work() as uow:
        assert _count_kbo_organizations(uow) == 0


def test_work_is_rolled_back_when_block_raises(
    sqlite_unit_of_work: UnitOfWorkFactory,
    seed_organization: SeedOrganization,
) -> None:
    uri = seed_organization("gent", kbo_number="0123456789")

    with pytest.raises(RuntimeError), sqlite_unit_of_work() as uow:
        uow.organizations.create_business_id_record(make_snapshot(), None, uri)
        raise RuntimeError("boom")

    with sqlite_unit_of_work() as uow:
        assert _count_kbo_organizations(uow) == 0


def test_healing_sweep_on_real_storage_is_idempotent(
    sqlite_unit_of_work: UnitOfWorkFactory,
    seed_organization: SeedOrganization,
) -> None:
    gent = seed_organization("gent", kbo_number="0207451227")
    seed_organization("brugge", kbo_number="0207529227")
    seed_organization("zonder-kbo", kbo_number=None)
    fetcher = FakeSnapshotFetcher(
        [
            make_snapshot("0207451227", ovo_number="OVO000001"),
            make_snapshot("0999999999"),
        ]
    )
    sweep = ReconciliationSweep(fetcher=fetcher, unit_of_work_factory=sqlite_unit_of_work)

    first = sweep.run()
    second = sweep.run()

    assert first == SweepResult(processed=1, created=1, ovo_updated=1, unmatched=1)
    assert second == SweepResult(processed=1, unmatched=1)
    with sqlite_unit_of_work() as uow:
        record = uow.organizations.get_organization(gent)
        assert _count_kbo_organizations(uow) == 1
    assert record is not None
    assert record.ovo_number == "OVO000001"
    assert record.change_time == "2024-01-01T00:00:00Z"
