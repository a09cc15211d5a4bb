"""Domain types for KBO/OVO identifier reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final

SNAPSHOT_FIELDS: Final[tuple[str, ...]] = (
    "name",
    "short_name",
    "labels",
    "contacts",
    "classifications",
    "locations",
)


@dataclass(frozen=True, slots=True)
class Label:
    type: str | None
    value: str


@dataclass(frozen=True, slots=True)
class Contact:
    type: str | None
    value: str


@dataclass(frozen=True, slots=True)
class Classification:
    type: str | None
    name: str


@dataclass(frozen=True, slots=True)
class Location:
    address: str | None
    is_main: bool = False


@dataclass(frozen=True, slots=True)
class ExternalOrgSnapshot:
    """One organisation as published by Wegwijs, keyed by its KBO number.

    ``provided_fields`` names the optional fields that were present in the upstream
    payload. Updates only overwrite those; a field Wegwijs did not send at all keeps
    its stored value, while a field sent as ``null`` or empty clears it.
    """

    kbo_number: str
    change_time: str | None = None
    name: str | None = None
    short_name: str | None = None
    ovo_number: str | None = None
    labels: tuple[Label, ...] = ()
    contacts: tuple[Contact, ...] = ()
    classifications: tuple[Classification, ...] = ()
    locations: tuple[Location, ...] = ()
    provided_fields: frozenset[str] = field(default_factory=lambda: frozenset(SNAPSHOT_FIELDS))


@dataclass(frozen=True, slots=True)
class InternalOrgRecord:
    """An organisation of the internal registry with its identifier links."""

    organization_uri: str
    kbo_identifier_uri: str | None = None
    kbo_number: str | None = None
    kbo_structured_id_uri: str | None = None
    ovo_number: str | None = None
    ovo_structured_id_uri: str | None = None
    kbo_organization_uri: str | None = None
    change_time: str | None = None


@dataclass(frozen=True, slots=True)
class BusinessIdLink:
    """The KBO organisation record already linked to an internal organisation."""

    uri: str
    organization_uri: str
    kbo_number: str | None
    change_time: str | None


class ReconciliationDecision(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    NOOP = "noop"


@dataclass(frozen=True, slots=True)
class OvoUpdate:
    """The OVO number written to the registry, and whether its structure was new."""

    uri: str
    value: str
    created_structure: bool = False


class SyncStatus(StrEnum):
    NO_INTERNAL_IDENTIFIER = "no-internal-identifier"
    NO_EXTERNAL_MATCH = "no-external-match"
    RECONCILED = "reconciled"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of synchronising a single organisation."""

    status: SyncStatus
    decision: ReconciliationDecision | None = None
    ovo_update: OvoUpdate | None = None
    error: BaseException | None = None
