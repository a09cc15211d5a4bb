"""Translate Wegwijs payloads into domain snapshots."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from wegwijs_sync.domain.model import (
    Classification,
    Contact,
    ExternalOrgSnapshot,
    Label,
    Location,
)

if TYPE_CHECKING:
    from .schema import WegwijsOrganisation

log = getLogger(__name__)

# payload field -> snapshot field, for the fields an update may leave untouched
_PROVIDED_FIELD_NAMES: Final[dict[str, str]] = {
    "name": "name",
    "short_name": "short_name",
    "labels": "labels",
    "contacts": "contacts",
    "classifications": "classifications",
    "locations": "locations",
}


def translate_organisation(payload: WegwijsOrganisation) -> ExternalOrgSnapshot | None:
    """Return the snapshot for ``payload``, or ``None`` when it carries no KBO number."""

    if payload.kbo_number is None:
        log.debug("Skipping Wegwijs organisation without KBO number: %s", payload.name)
        return None

    provided = frozenset(
        snapshot_field
        for payload_field, snapshot_field in _PROVIDED_FIELD_NAMES.items()
        if payload_field in payload.model_fields_set
    )
    return ExternalOrgSnapshot(
        kbo_number=payload.kbo_number,
        change_time=payload.change_time,
        name=payload.name,
        short_name=payload.short_name,
        ovo_number=payload.ovo_number,
        labels=tuple(
            Label(type=item.label_type_name, value=item.value) for item in payload.labels or ()
        ),
        contacts=tuple(
            Contact(type=item.contact_type_name, value=item.value)
            for item in payload.contacts or ()
        ),
        classifications=tuple(
            Classification(type=item.type_name, name=item.name)
            for item in payload.classifications or ()
        ),
        locations=tuple(
            Location(address=item.formatted_address, is_main=item.is_main_location)
            for item in payload.locations or ()
        ),
        provided_fields=provided,
    )
