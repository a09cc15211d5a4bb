"""Repository implementation backed by SQLAlchemy sessions."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from dataclasses import asdict
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from wegwijs_sync.adapters.sqlalchemy.mappings import (
    kbo_organization_table,
    organization_table,
    ovo_structure_table,
)
from wegwijs_sync.domain.errors import PersistenceError
from wegwijs_sync.domain.model import BusinessIdLink, InternalOrgRecord

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Row, Select
    from sqlalchemy.orm import Session

    from wegwijs_sync.domain.model import ExternalOrgSnapshot


@contextmanager
def _persistence_errors(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Could not {action}: {exc}") from exc


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _snapshot_values(snapshot: ExternalOrgSnapshot, *, only_provided: bool) -> dict[str, Any]:
    values: dict[str, Any] = {
        "kbo_number": snapshot.kbo_number,
        "change_time": snapshot.change_time,
    }
    fields: dict[str, Any] = {
        "name": snapshot.name,
        "short_name": snapshot.short_name,
        "labels": [asdict(item) for item in snapshot.labels],
        "contacts": [asdict(item) for item in snapshot.contacts],
        "classifications": [asdict(item) for item in snapshot.classifications],
        "locations": [asdict(item) for item in snapshot.locations],
    }
    for name, value in fields.items():
        if only_provided and name not in snapshot.provided_fields:
            continue
        values[name] = value
    return values


class SqlAlchemyOrganizationRepository:
    """Registry reads and writes used by the reconciliation core."""

    def __init__(self, session: Session, *, resource_base_uri: str) -> None:
        self.session = session
        self._resource_base_uri = resource_base_uri

    def get_internal_record(self, structured_id_uuid: str) -> InternalOrgRecord | None:
        stmt = self._record_query().where(
            organization_table.c.kbo_structured_id_uuid == structured_id_uuid
        )
        with _persistence_errors("read organisation"):
            row = self.session.execute(stmt).one_or_none()
        return None if row is None else _to_record(row)

    def get_organization(self, organization_uri: str) -> InternalOrgRecord | None:
        stmt = self._record_query().where(organization_table.c.uri == organization_uri)
        with _persistence_errors("read organisation"):
            row = self.session.execute(stmt).one_or_none()
        return None if row is None else _to_record(row)

    def list_internal_records_with_kbo(self) -> list[InternalOrgRecord]:
        stmt = (
            self._record_query()
            .where(organization_table.c.kbo_number.is_not(None))
            .order_by(organization_table.c.uri)
        )
        with _persistence_errors("list organisations"):
            rows = self.session.execute(stmt).all()
        return [_to_record(row) for row in rows]

    def get_business_id_link(self, organization_uri: str) -> BusinessIdLink | None:
        stmt = select(
            kbo_organization_table.c.uri,
            kbo_organization_table.c.organization_uri,
            kbo_organization_table.c.kbo_number,
            kbo_organization_table.c.change_time,
        ).where(kbo_organization_table.c.organization_uri == organization_uri)
        with _persistence_errors("read KBO organisation"):
            row = self.session.execute(stmt).one_or_none()
        if row is None:
            return None
        return BusinessIdLink(
            uri=row.uri,
            organization_uri=row.organization_uri,
            kbo_number=row.kbo_number,
            change_time=row.change_time,
        )

    def create_business_id_record(
        self,
        snapshot: ExternalOrgSnapshot,
        identifier_uri: str | None,
        organization_uri: str,
    ) -> str:
        uri = self._new_uri("kbo-organisaties")
        values = _snapshot_values(snapshot, only_provided=False)
        stmt = insert(kbo_organization_table).values(
            uri=uri,
            organization_uri=organization_uri,
            kbo_identifier_uri=identifier_uri,
            modified=_utcnow(),
            **values,
        )
        with _persistence_errors("create KBO organisation"):
            self.session.execute(stmt)
        return uri

    def update_business_id_record(
        self,
        snapshot: ExternalOrgSnapshot,
        link: BusinessIdLink,
    ) -> None:
        values = _snapshot_values(snapshot, only_provided=True)
        stmt = (
            update(kbo_organization_table)
            .where(kbo_organization_table.c.uri == link.uri)
            .values(modified=_utcnow(), **values)
        )
        with _persistence_errors("update KBO organisation"):
            result = self.session.execute(stmt)
        if result.rowcount == 0:
            raise PersistenceError(f"KBO organisation {link.uri} no longer exists")

    def construct_ovo_structure(self, structured_id_uri: str) -> str:
        uri = self._new_uri("gestructureerde-identificatoren")
        now = _utcnow()
        stmt = insert(ovo_structure_table).values(
            uri=uri,
            anchor_uri=structured_id_uri,
            ovo_number=None,
            created=now,
            modified=now,
        )
        with _persistence_errors("construct OVO structure"):
            self.session.execute(stmt)
        return uri

    def update_ovo_value(self, uri: str, ovo_number: str) -> None:
        stmt = (
            update(ovo_structure_table)
            .where(ovo_structure_table.c.uri == uri)
            .values(ovo_number=ovo_number, modified=_utcnow())
        )
        with _persistence_errors("update OVO number"):
            result = self.session.execute(stmt)
        if result.rowcount == 0:
            raise PersistenceError(f"OVO structure {uri} does not exist")

    def _new_uri(self, kind: str) -> str:
        return f"{self._resource_base_uri}{kind}/{uuid.uuid4()}"

    @staticmethod
    def _record_query() -> Select[Any]:
        return select(
            organization_table.c.uri,
            organization_table.c.kbo_identifier_uri,
            organization_table.c.kbo_number,
            organization_table.c.kbo_structured_id_uri,
            ovo_structure_table.c.uri.label("ovo_uri"),
            ovo_structure_table.c.ovo_number,
            kbo_organization_table.c.uri.label("kbo_organization_uri"),
            kbo_organization_table.c.change_time,
        ).select_from(
            organization_table.outerjoin(
                ovo_structure_table,
                ovo_structure_table.c.anchor_uri == organization_table.c.kbo_structured_id_uri,
            ).outerjoin(
                kbo_organization_table,
                kbo_organization_table.c.organization_uri == organization_table.c.uri,
            )
        )


def _to_record(row: Row[Any]) -> InternalOrgRecord:
    return InternalOrgRecord(
        organization_uri=row.uri,
        kbo_identifier_uri=row.kbo_identifier_uri,
        kbo_number=row.kbo_number,
        kbo_structured_id_uri=row.kbo_structured_id_uri,
        ovo_number=row.ovo_number,
        ovo_structured_id_uri=row.ovo_uri,
        kbo_organization_uri=row.kbo_organization_uri,
        change_time=row.change_time,
    )


if TYPE_CHECKING:
    from typing import cast

    from wegwijs_sync.domain.ports.persistence import OrganizationRepository

    _session_stub = cast("Session", object())
    _repo_check: OrganizationRepository = SqlAlchemyOrganizationRepository(
        _session_stub, resource_base_uri=""
    )
