"""Full Wegwijs snapshot retrieval for the healing sweep."""

from __future__ import annotations

import asyncio
from contextlib import aclosing
from logging import getLogger
from typing import TYPE_CHECKING

from .translator import translate_organisation

if TYPE_CHECKING:
    from wegwijs_sync.domain.model import ExternalOrgSnapshot

    from .client import WegwijsClient

log = getLogger(__name__)


class WegwijsSnapshotFetcher:
    """Collect every Wegwijs organisation with a KBO number into one mapping.

    Later pages overwrite earlier entries for the same KBO number. When any page
    fails the whole fetch fails; callers never see a partial mapping.
    """

    def __init__(self, client: WegwijsClient) -> None:
        self._client = client

    def fetch_all(self) -> dict[str, ExternalOrgSnapshot]:
        return asyncio.run(self._fetch_all_async())

    async def _fetch_all_async(self) -> dict[str, ExternalOrgSnapshot]:
        snapshots: dict[str, ExternalOrgSnapshot] = {}
        pages = 0
        async with aclosing(self._client.iter_pages()) as page_iterator:
            async for page in page_iterator:
                pages += 1
                for organisation in page:
                    snapshot = translate_organisation(organisation)
                    if snapshot is not None:
                        snapshots[snapshot.kbo_number] = snapshot
        log.info("Fetched %d Wegwijs organisations over %d pages", len(snapshots), pages)
        return snapshots
