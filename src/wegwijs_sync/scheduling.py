"""Cron-driven trigger for the healing sweep."""

from __future__ import annotations

import asyncio
import contextlib
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from croniter import croniter

if TYPE_CHECKING:
    from collections.abc import Callable

    from wegwijs_sync.config.scheduler import SchedulerConfig
    from wegwijs_sync.domain.healing import ReconciliationSweep, SweepResult

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class HealingScheduler:
    """Run the healing sweep on a cron pattern until stopped.

    The sweep runs in a worker thread so the event loop keeps serving requests.
    Failures are logged and swallowed here; the next tick is the retry.
    """

    def __init__(
        self,
        config: SchedulerConfig,
        sweep: ReconciliationSweep,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._sweep = sweep
        self._clock = clock
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def next_run(self, after: datetime | None = None) -> datetime:
        anchor = after or self._clock()
        return croniter(self._config.cron_pattern, anchor).get_next(datetime)

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run_loop(), name="wegwijs-healing")
        log.info("Healing scheduled with cron pattern %s", self._config.cron_pattern)

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is not None and not self._task.done():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        self._task = None

    async def run_once(self) -> SweepResult | None:
        started = self._clock().isoformat()
        log.info("Wegwijs data healing triggered at %s", started)
        try:
            result = await asyncio.to_thread(self._sweep.run)
        except Exception:
            log.exception("An error occurred during Wegwijs data healing started at %s", started)
            return None
        if result.skipped:
            log.info("Wegwijs data healing at %s skipped, previous run still busy", started)
        return result

    async def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            now = self._clock()
            wait_seconds = max(0.0, (self.next_run(now) - now).total_seconds())
            log.debug("Next healing run in %.0f seconds", wait_seconds)
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=wait_seconds)
            except TimeoutError:
                await self.run_once()
