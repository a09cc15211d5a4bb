"""Resolution of the OVO number against the Wegwijs snapshot."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .model import OvoUpdate

if TYPE_CHECKING:
    from .ports.persistence import OrganizationRepository

log = getLogger(__name__)


def resolve_ovo(
    repository: OrganizationRepository,
    *,
    external_ovo: str | None,
    internal_ovo: str | None,
    structured_id_uri: str | None,
    existing_ovo_structure_uri: str | None,
) -> OvoUpdate | None:
    """Bring the stored OVO number in line with Wegwijs when Wegwijs has one.

    Wegwijs is only authoritative when it carries a value: some organisation types
    (worship services in particular) are often missing there, and their OVO number
    must survive. A missing OVO structure is constructed under the KBO structured
    identifier before the value is written; without that identifier the stored
    value is left alone.
    """

    if not external_ovo or external_ovo == internal_ovo:
        return None

    uri = existing_ovo_structure_uri
    created = False
    if not uri:
        if not structured_id_uri:
            log.warning(
                "Keeping OVO number %s: no structured identifier to anchor %s under",
                internal_ovo,
                external_ovo,
            )
            return None
        uri = repository.construct_ovo_structure(structured_id_uri)
        created = True
        log.debug("Constructed OVO structure %s under %s", uri, structured_id_uri)

    repository.update_ovo_value(uri, external_ovo)
    log.info("OVO number %s -> %s at %s", internal_ovo, external_ovo, uri)
    return OvoUpdate(uri=uri, value=external_ovo, created_structure=created)
