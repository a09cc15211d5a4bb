"""SQLAlchemy table metadata for the internal organisation registry."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    MetaData,
    String,
    Table,
    TypeDecorator,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# An administrative unit and the KBO identifier it carries. The structured
# identifier is the anchor under which an OVO structure gets created.
organization_table = Table(
    "organization",
    metadata,
    Column("uri", String, primary_key=True),
    Column("name", String, nullable=True),
    Column("kbo_identifier_uri", String, nullable=True),
    Column("kbo_structured_id_uri", String, nullable=True, unique=True),
    Column("kbo_structured_id_uuid", String, nullable=True, unique=True, index=True),
    Column("kbo_number", String, nullable=True, index=True),
)

ovo_structure_table = Table(
    "ovo_structure",
    metadata,
    Column("uri", String, primary_key=True),
    Column(
        "anchor_uri",
        String,
        ForeignKey("organization.kbo_structured_id_uri"),
        nullable=False,
        unique=True,
    ),
    Column("ovo_number", String, nullable=True),
    Column("created", UTCDateTime(), nullable=False),
    Column("modified", UTCDateTime(), nullable=False),
)

kbo_organization_table = Table(
    "kbo_organization",
    metadata,
    Column("uri", String, primary_key=True),
    Column("organization_uri", String, ForeignKey("organization.uri"), nullable=False, unique=True),
    Column("kbo_identifier_uri", String, nullable=True),
    Column("kbo_number", String, nullable=False, index=True),
    Column("name", String, nullable=True),
    Column("short_name", String, nullable=True),
    Column("labels", JSON, nullable=False, default=list),
    Column("contacts", JSON, nullable=False, default=list),
    Column("classifications", JSON, nullable=False, default=list),
    Column("locations", JSON, nullable=False, default=list),
    Column("change_time", String, nullable=True),
    Column("modified", UTCDateTime(), nullable=False),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)
