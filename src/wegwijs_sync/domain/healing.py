"""Full-population sweep that heals the registry from the Wegwijs snapshot."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .apply import apply_snapshot
from .locks import OrganizationLocks
from .model import ReconciliationDecision

if TYPE_CHECKING:
    from .ports.fetching import SnapshotFetcher
    from .ports.unit_of_work import UnitOfWorkFactory

log = getLogger(__name__)


@dataclass(slots=True)
class SweepResult:
    """Counters for one healing run."""

    processed: int = 0
    created: int = 0
    updated: int = 0
    ovo_updated: int = 0
    unmatched: int = 0
    skipped: bool = False


class ReconciliationSweep:
    """Reconcile every organisation with a KBO number against Wegwijs.

    Records are handled sequentially in the order the registry returns them, each
    in its own unit of work. The first error aborts the rest of the sweep; what was
    committed before it stays, and the next scheduled run picks up the remainder.
    A run that starts while another is still going returns immediately.
    """

    def __init__(
        self,
        *,
        fetcher: SnapshotFetcher,
        unit_of_work_factory: UnitOfWorkFactory,
        locks: OrganizationLocks | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._unit_of_work_factory = unit_of_work_factory
        self._locks = locks or OrganizationLocks()
        self._running = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._running.locked()

    def run(self) -> SweepResult:
        if not self._running.acquire(blocking=False):
            log.warning("Healing already in progress, skipping this run")
            return SweepResult(skipped=True)
        try:
            return self._run()
        finally:
            self._running.release()

    def _run(self) -> SweepResult:
        log.info("Healing KBO/OVO data from Wegwijs starting")
        with self._unit_of_work_factory() as uow:
            records = uow.organizations.list_internal_records_with_kbo()
        snapshots = self._fetcher.fetch_all()
        log.info(
            "Loaded %d internal organisations and %d Wegwijs organisations",
            len(records),
            len(snapshots),
        )

        result = SweepResult()
        for record in records:
            snapshot = snapshots.get(record.kbo_number) if record.kbo_number else None
            if snapshot is None:
                result.unmatched += 1
                continue
            try:
                applied = apply_snapshot(
                    organization_uri=record.organization_uri,
                    snapshot=snapshot,
                    unit_of_work_factory=self._unit_of_work_factory,
                    locks=self._locks,
                )
            except Exception:
                log.exception(
                    "Healing aborted at %s (KBO %s) after %d organisations",
                    record.organization_uri,
                    record.kbo_number,
                    result.processed,
                )
                raise
            result.processed += 1
            if applied.decision is ReconciliationDecision.CREATE:
                result.created += 1
            elif applied.decision is ReconciliationDecision.UPDATE:
                result.updated += 1
            if applied.ovo_update is not None:
                result.ovo_updated += 1

        log.info(
            "Healing complete: processed=%d created=%d updated=%d ovo_updated=%d unmatched=%d",
            result.processed,
            result.created,
            result.updated,
            result.ovo_updated,
            result.unmatched,
        )
        return result
