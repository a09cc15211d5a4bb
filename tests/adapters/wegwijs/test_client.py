from __future__ import annotations

import asyncio
import json
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from wegwijs_sync.adapters.http_resilience import ResilientClient
from wegwijs_sync.adapters.wegwijs import WegwijsClient, WegwijsSnapshotFetcher
from wegwijs_sync.adapters.wegwijs.client import ALL_KBO_NUMBERS_QUERY
from wegwijs_sync.config import ResilienceConfig, WegwijsConfig
from wegwijs_sync.domain.errors import UpstreamFetchError, UpstreamShapeError

SCROLL_HEADER = {"x-search-metadata": json.dumps({"scrollId": "scroll-1", "totalItems": 3})}


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(async_handler))

    return factory


def _organisation(kbo_number: str | None, **extra: object) -> dict[str, object]:
    payload: dict[str, object] = {"name": f"Organisatie {kbo_number}", "changeTime": "2024-01-01"}
    if kbo_number is not None:
        payload["kboNumber"] = kbo_number
    payload.update(extra)
    return payload


def _scrolled_handler(
    pages: list[list[dict[str, object]]],
    requests: list[httpx.Request],
) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        index = len(requests) - 1
        page = pages[index] if index < len(pages) else []
        headers = SCROLL_HEADER if index == 0 else {}
        return httpx.Response(200, json=page, headers=headers)

    return handler


def test_fetch_all_follows_scroll_until_empty_page(wegwijs_config: WegwijsConfig) -> None:
    requests: list[httpx.Request] = []
    pages = [
        [_organisation("0000000001", ovoNumber="OVO001"), _organisation(None)],
        [_organisation("0000000002"), _organisation("0000000001", ovoNumber="OVO009")],
        [],
    ]
    client = WegwijsClient(
        config=wegwijs_config,
        client_factory=_make_client_factory(_scrolled_handler(pages, requests)),
    )

    snapshots = WegwijsSnapshotFetcher(client).fetch_all()

    assert sorted(snapshots) == ["0000000001", "0000000002"]
    assert snapshots["0000000001"].ovo_number == "OVO009"
    assert len(requests) == 3

    first, *scrolls = requests
    assert first.url.path == "/v1/search/organisations"
    assert first.url.params["q"] == ALL_KBO_NUMBERS_QUERY
    assert first.url.params["scroll"] == "true"
    assert "kboNumber" in first.url.params["fields"].split(",")
    for scroll in scrolls:
        assert scroll.url.path == "/v1/search/organisations/scroll"
        assert scroll.url.params["id"] == "scroll-1"


def test_empty_first_page_yields_empty_mapping(wegwijs_config: WegwijsConfig) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=[])

    client = WegwijsClient(config=wegwijs_config, client_factory=_make_client_factory(handler))

    assert WegwijsSnapshotFetcher(client).fetch_all() == {}
    assert len(requests) == 1


def test_missing_scroll_metadata_is_a_shape_error(wegwijs_config: WegwijsConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[_organisation("0000000001")])

    client = WegwijsClient(config=wegwijs_config, client_factory=_make_client_factory(handler))

    with pytest.raises(UpstreamShapeError, match="x-search-metadata"):
        WegwijsSnapshotFetcher(client).fetch_all()


def test_unreadable_scroll_metadata_is_a_shape_error(wegwijs_config: WegwijsConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[_organisation("0000000001")],
            headers={"x-search-metadata": "not json"},
        )

    client = WegwijsClient(config=wegwijs_config, client_factory=_make_client_factory(handler))

    with pytest.raises(UpstreamShapeError):
        WegwijsSnapshotFetcher(client).fetch_all()


def test_failing_later_page_fails_whole_fetch(wegwijs_config: WegwijsConfig) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if len(requests) == 1:
            return httpx.Response(200, json=[_organisation("0000000001")], headers=SCROLL_HEADER)
        return httpx.Response(404, text="scroll expired")

    client = WegwijsClient(config=wegwijs_config, client_factory=_make_client_factory(handler))

    with pytest.raises(UpstreamFetchError, match="404"):
        WegwijsSnapshotFetcher(client).fetch_all()


def test_find_by_kbo_number_queries_exact_number(wegwijs_config: WegwijsConfig) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200, json=[_organisation("0123456789", ovoNumber="OVO002"), _organisation(None)]
        )

    client = WegwijsClient(config=wegwijs_config, client_factory=_make_client_factory(handler))

    snapshots = client.find_by_kbo_number("0123456789")

    assert [snapshot.ovo_number for snapshot in snapshots] == ["OVO002"]
    assert len(requests) == 1
    assert requests[0].url.params["q"] == "kboNumber:0123456789"
    assert "scroll" not in requests[0].url.params


def test_find_by_kbo_number_without_match_is_empty(wegwijs_config: WegwijsConfig) -> None:
    client = WegwijsClient(
        config=wegwijs_config,
        client_factory=_make_client_factory(lambda _request: httpx.Response(200, json=[])),
    )

    assert client.find_by_kbo_number("0123456789") == []


def test_transport_failure_is_a_fetch_error(wegwijs_config: WegwijsConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = WegwijsClient(config=wegwijs_config, client_factory=_make_client_factory(handler))

    with pytest.raises(UpstreamFetchError):
        client.find_by_kbo_number("0123456789")


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"organisations": []}),
        httpx.Response(200, text="<html>maintenance</html>"),
        httpx.Response(200, json=[{"kboNumber": "0123456789", "labels": "not a list"}]),
    ],
    ids=["object", "html", "invalid-item"],
)
def test_unexpected_payload_is_a_shape_error(
    wegwijs_config: WegwijsConfig,
    response: httpx.Response,
) -> None:
    client = WegwijsClient(
        config=wegwijs_config,
        client_factory=_make_client_factory(lambda _request: response),
    )

    with pytest.raises(UpstreamShapeError):
        client.find_by_kbo_number("0123456789")


def test_iter_pages_yields_raw_pages(wegwijs_config: WegwijsConfig) -> None:
    requests: list[httpx.Request] = []
    pages = [[_organisation("0000000001")], [_organisation("0000000002")]]
    client = WegwijsClient(
        config=wegwijs_config,
        client_factory=_make_client_factory(_scrolled_handler(pages, requests)),
    )

    async def collect() -> list[list[str | None]]:
        return [[item.kbo_number for item in page] async for page in client.iter_pages()]

    assert asyncio.run(collect()) == [["0000000001"], ["0000000002"]]
