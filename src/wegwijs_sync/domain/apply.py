"""Reconcile one organisation against its Wegwijs snapshot inside a unit of work."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .model import ReconciliationDecision
from .ovo import resolve_ovo
from .reconciliation import reconcile_record

if TYPE_CHECKING:
    from .locks import OrganizationLocks
    from .model import ExternalOrgSnapshot, OvoUpdate
    from .ports.unit_of_work import UnitOfWorkFactory

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AppliedSnapshot:
    decision: ReconciliationDecision
    ovo_update: OvoUpdate | None

    @property
    def changed(self) -> bool:
        return self.decision is not ReconciliationDecision.NOOP or self.ovo_update is not None


def apply_snapshot(
    *,
    organization_uri: str,
    snapshot: ExternalOrgSnapshot,
    unit_of_work_factory: UnitOfWorkFactory,
    locks: OrganizationLocks,
) -> AppliedSnapshot:
    """Run the record reconciler, then the OVO resolver, and commit.

    Both the on-demand and the healing path go through here, so the order is the
    same everywhere. The organisation is re-read under its lock so a concurrent
    sync of the same organisation is always observed.
    """

    with locks.hold(organization_uri), unit_of_work_factory() as uow:
        repository = uow.organizations
        record = repository.get_organization(organization_uri)
        if record is None:
            log.warning("Organisation %s disappeared before it could be synced", organization_uri)
            return AppliedSnapshot(decision=ReconciliationDecision.NOOP, ovo_update=None)

        link = repository.get_business_id_link(organization_uri)
        decision = reconcile_record(
            repository,
            link=link,
            snapshot=snapshot,
            organization_uri=organization_uri,
            identifier_uri=record.kbo_identifier_uri,
        )
        ovo_update = resolve_ovo(
            repository,
            external_ovo=snapshot.ovo_number,
            internal_ovo=record.ovo_number,
            structured_id_uri=record.kbo_structured_id_uri,
            existing_ovo_structure_uri=record.ovo_structured_id_uri,
        )
        applied = AppliedSnapshot(decision=decision, ovo_update=ovo_update)
        if applied.changed:
            uow.commit()
        return applied
