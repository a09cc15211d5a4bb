from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import insert

from tests.helpers.settings import make_settings
from wegwijs_sync.adapters.sqlalchemy.mappings import organization_table
from wegwijs_sync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    build_engine,
    shutdown,
    startup,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine

    from wegwijs_sync.config import WegwijsConfig

_CONFIG_ENV_VARS = (
    "WEGWIJS_API_URL",
    "WEGWIJS_API_FIELDS",
    "WEGWIJS_TIMEOUT_SECONDS",
    "WEGWIJS_MAX_CALLS_PER_SECOND",
    "WEGWIJS_HTTP_CACHE",
    "WEGWIJS_SYNC_DATA_DIR",
    "DATABASE_URI",
    "RESOURCE_BASE_URI",
    "HEALING_CRON_PATTERN",
    "HEALING_ENABLED",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def wegwijs_config() -> WegwijsConfig:
    return make_settings().wegwijs


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = build_engine("sqlite+pysqlite:///:memory:")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyUnitOfWork]]:
    startup(engine=sqlite_engine, resource_base_uri="http://data.test/id/", force=True)
    try:
        yield SqlAlchemyUnitOfWork
    finally:
        shutdown()


@pytest.fixture
def seed_organization(sqlite_engine: Engine) -> Callable[..., str]:
    """Insert an organisation row and return its URI."""

    def seed(name: str, *, kbo_number: str | None, uuid: str | None = None) -> str:
        uri = f"http://data.test/organizations/{name}"
        with sqlite_engine.begin() as connection:
            connection.execute(
                insert(organization_table).values(
                    uri=uri,
                    name=name,
                    kbo_identifier_uri=f"http://data.test/identifiers/{name}",
                    kbo_structured_id_uri=f"http://data.test/structured/{name}",
                    kbo_structured_id_uuid=uuid or f"uuid-{name}",
                    kbo_number=kbo_number,
                )
            )
        return uri

    return seed
