from __future__ import annotations

import asyncio

import httpx

from wegwijs_sync.adapters.http_resilience import ResilientClient
from wegwijs_sync.config import RateLimit, ResilienceConfig, RetryPolicy


def test_client_sends_configured_headers_and_timeout() -> None:
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    config = ResilienceConfig(
        name="test",
        timeout_seconds=7.0,
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=1, per_seconds=2.0),
        default_headers={"Accept": "application/json"},
    )

    async def exercise() -> int:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            response = await client.get("https://wegwijs.test/search", params={"q": "x"})
        return response.status_code

    assert asyncio.run(exercise()) == 200
    assert len(seen) == 1
    assert seen[0].headers["Accept"] == "application/json"
    assert seen[0].url.params["q"] == "x"
    assert seen[0].extensions["timeout"]["read"] == 7.0


def test_retries_server_errors_on_get() -> None:
    statuses = iter([503, 200])

    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(next(statuses), json=[])

    config = ResilienceConfig(
        name="test",
        retry=RetryPolicy(total=1, backoff_factor=0.0, backoff_jitter=0.0),
    )

    async def exercise() -> int:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            response = await client.get("https://wegwijs.test/search")
        return response.status_code

    assert asyncio.run(exercise()) == 200
