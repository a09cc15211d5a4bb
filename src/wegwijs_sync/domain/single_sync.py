"""On-demand synchronisation of a single organisation."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .apply import apply_snapshot
from .locks import OrganizationLocks
from .model import SyncResult, SyncStatus

if TYPE_CHECKING:
    from .ports.fetching import OrganizationLookup
    from .ports.unit_of_work import UnitOfWorkFactory

log = getLogger(__name__)


def sync_organization(
    structured_id_uuid: str,
    *,
    lookup: OrganizationLookup,
    unit_of_work_factory: UnitOfWorkFactory,
    locks: OrganizationLocks | None = None,
) -> SyncResult:
    """Synchronise the organisation owning the given KBO structured identifier.

    Never raises: unexpected failures come back as ``SyncStatus.FAILED`` with the
    exception attached so the caller can log it and pick a response.
    """

    try:
        with unit_of_work_factory() as uow:
            record = uow.organizations.get_internal_record(structured_id_uuid)

        if record is None or not record.kbo_number:
            log.info("No KBO number known for structured identifier %s", structured_id_uuid)
            return SyncResult(status=SyncStatus.NO_INTERNAL_IDENTIFIER)

        matches = lookup.find_by_kbo_number(record.kbo_number)
        if not matches:
            log.info("Wegwijs has no organisation for KBO %s", record.kbo_number)
            return SyncResult(status=SyncStatus.NO_EXTERNAL_MATCH)
        if len(matches) > 1:
            log.warning(
                "Wegwijs returned %d organisations for KBO %s, using the first",
                len(matches),
                record.kbo_number,
            )

        applied = apply_snapshot(
            organization_uri=record.organization_uri,
            snapshot=matches[0],
            unit_of_work_factory=unit_of_work_factory,
            locks=locks or OrganizationLocks(),
        )
    except Exception as exc:  # noqa: BLE001
        return SyncResult(status=SyncStatus.FAILED, error=exc)

    return SyncResult(
        status=SyncStatus.RECONCILED,
        decision=applied.decision,
        ovo_update=applied.ovo_update,
    )
