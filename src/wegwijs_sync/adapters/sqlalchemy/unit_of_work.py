"""SQLAlchemy-backed unit of work for the organisation registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from wegwijs_sync.adapters.sqlalchemy.mappings import create_all_tables
from wegwijs_sync.adapters.sqlalchemy.repositories import SqlAlchemyOrganizationRepository
from wegwijs_sync.config.errors import ConfigurationError
from wegwijs_sync.config.storage import DEFAULT_RESOURCE_BASE_URI
from wegwijs_sync.domain.errors import PersistenceError

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None
    resource_base_uri: str = DEFAULT_RESOURCE_BASE_URI

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call wegwijs_sync.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def build_engine(database_uri: str) -> Engine:
    """Create an engine; in-memory SQLite is pinned to one connection shared by all threads."""

    if database_uri.startswith("sqlite") and (
        database_uri.endswith(":memory:") or database_uri.endswith("://")
    ):
        return create_engine(
            database_uri,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_uri)


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    resource_base_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, tables, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )
    if engine is None and database_uri is None:
        raise StartupError("startup() needs either an engine or a database URI")

    try:
        resolved_engine = engine or build_engine(database_uri or "")
    except ArgumentError as exc:
        raise ConfigurationError(f"Invalid database URI {database_uri!r}: {exc}") from exc
    try:
        create_all_tables(resolved_engine)
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Could not prepare registry tables: {exc}") from exc

    _STATE.engine = resolved_engine
    _STATE.resource_base_uri = resource_base_uri or DEFAULT_RESOURCE_BASE_URI


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class SqlAlchemyUnitOfWork:
    """Unit of work managing one SQLAlchemy session per organisation batch."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._resource_base_uri = _STATE.resource_base_uri
        self._session: Session | None = None
        self._organizations: SqlAlchemyOrganizationRepository | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self.session_factory()
        self._organizations = SqlAlchemyOrganizationRepository(
            self._session, resource_base_uri=self._resource_base_uri
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        # anything not committed explicitly is discarded
        self.rollback()
        self.session.close()
        self._session = None
        self._organizations = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @property
    def organizations(self) -> SqlAlchemyOrganizationRepository:
        if self._organizations is None:
            raise StartupError("Unit of work session not initialised")
        return self._organizations

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not commit registry changes: {exc}") from exc

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from wegwijs_sync.domain.ports.unit_of_work import OrganizationUnitOfWork

    _uow_check: OrganizationUnitOfWork = SqlAlchemyUnitOfWork()
