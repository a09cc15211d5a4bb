"""HTTP client for the Wegwijs organisation search API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import TypeAdapter, ValidationError

from wegwijs_sync.adapters.http_resilience import ResilientClient
from wegwijs_sync.domain.errors import UpstreamFetchError, UpstreamShapeError

from .schema import SEARCH_METADATA_HEADER, SearchMetadata, WegwijsOrganisation
from .translator import translate_organisation

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from wegwijs_sync.config.http_resilience import ResilienceConfig
    from wegwijs_sync.config.wegwijs import WegwijsConfig
    from wegwijs_sync.domain.model import ExternalOrgSnapshot

log = getLogger(__name__)

ALL_KBO_NUMBERS_QUERY: Final[str] = "kboNumber:/.*[0-9].*/"

_PAGE_ADAPTER: Final[TypeAdapter[list[WegwijsOrganisation]]] = TypeAdapter(
    list[WegwijsOrganisation]
)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class WegwijsClient:
    """Low-level access to the Wegwijs search endpoints.

    Transport problems surface as ``UpstreamFetchError`` and malformed payloads as
    ``UpstreamShapeError``; nothing else escapes from the request helpers.
    """

    def __init__(
        self,
        *,
        config: WegwijsConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or _default_client_factory

    @property
    def config(self) -> WegwijsConfig:
        return self._config

    def find_by_kbo_number(self, kbo_number: str) -> list[ExternalOrgSnapshot]:
        return asyncio.run(self._find_by_kbo_number_async(kbo_number))

    async def _find_by_kbo_number_async(self, kbo_number: str) -> list[ExternalOrgSnapshot]:
        params = {"q": f"kboNumber:{kbo_number}", "fields": self._config.fields_param}
        async with self._client_factory(self._config.resilience) as client:
            organisations, _ = await self._request_page(
                client, self._config.search_url, params=params
            )
        snapshots = [translate_organisation(item) for item in organisations]
        return [snapshot for snapshot in snapshots if snapshot is not None]

    async def iter_pages(self) -> AsyncIterator[list[WegwijsOrganisation]]:
        """Yield the pages of the scrolled query over every KBO number.

        The sequence is finite and cannot be restarted: the scroll id from the first
        response drives every following request and the first empty page ends it.
        """

        params = {
            "q": ALL_KBO_NUMBERS_QUERY,
            "fields": self._config.fields_param,
            "scroll": "true",
        }
        async with self._client_factory(self._config.resilience) as client:
            page, response = await self._request_page(
                client, self._config.search_url, params=params
            )
            if not page:
                return
            scroll_id = _scroll_id(response)
            page_number = 1
            while page:
                log.debug("Wegwijs page %d: %d organisations", page_number, len(page))
                yield page
                page, _ = await self._request_page(
                    client, self._config.scroll_url, params={"id": scroll_id}
                )
                page_number += 1

    async def _request_page(
        self,
        client: ResilientClient,
        url: str,
        *,
        params: dict[str, str],
    ) -> tuple[list[WegwijsOrganisation], httpx.Response]:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(f"Wegwijs request to {url} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamShapeError(f"Wegwijs returned invalid JSON from {url}") from exc
        if not isinstance(payload, list):
            raise UpstreamShapeError(
                f"Expected a list of organisations from {url}, got {type(payload).__name__}"
            )

        try:
            return _PAGE_ADAPTER.validate_python(payload), response
        except ValidationError as exc:
            raise UpstreamShapeError(f"Unexpected organisation payload from {url}: {exc}") from exc


def _scroll_id(response: httpx.Response) -> str:
    raw = response.headers.get(SEARCH_METADATA_HEADER)
    if raw is None:
        raise UpstreamShapeError(f"Wegwijs response is missing the {SEARCH_METADATA_HEADER} header")
    try:
        metadata = SearchMetadata.from_header(raw)
    except ValueError as exc:
        raise UpstreamShapeError(f"Unreadable {SEARCH_METADATA_HEADER} header: {raw}") from exc
    if not metadata.scroll_id:
        raise UpstreamShapeError(f"No scroll id in {SEARCH_METADATA_HEADER} header")
    return metadata.scroll_id
