"""Create/update/skip decision for the KBO organisation record."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .change_detection import is_update_needed
from .model import ReconciliationDecision

if TYPE_CHECKING:
    from .model import BusinessIdLink, ExternalOrgSnapshot
    from .ports.persistence import OrganizationRepository

log = getLogger(__name__)


def decide(
    link: BusinessIdLink | None,
    snapshot: ExternalOrgSnapshot | None,
) -> ReconciliationDecision:
    if snapshot is None:
        return ReconciliationDecision.NOOP
    if link is None:
        return ReconciliationDecision.CREATE
    if is_update_needed(snapshot.change_time, link.change_time):
        return ReconciliationDecision.UPDATE
    return ReconciliationDecision.NOOP


def reconcile_record(
    repository: OrganizationRepository,
    *,
    link: BusinessIdLink | None,
    snapshot: ExternalOrgSnapshot | None,
    organization_uri: str,
    identifier_uri: str | None,
) -> ReconciliationDecision:
    """Apply the decision for one organisation and return it."""

    decision = decide(link, snapshot)
    if snapshot is None:
        return decision
    if link is None:
        record_uri = repository.create_business_id_record(
            snapshot, identifier_uri, organization_uri
        )
        log.info("Created KBO organisation %s for %s", record_uri, organization_uri)
    elif decision is ReconciliationDecision.UPDATE:
        repository.update_business_id_record(snapshot, link)
        log.info(
            "Updated KBO organisation %s (change time %s -> %s)",
            link.uri,
            link.change_time,
            snapshot.change_time,
        )
    return decision
