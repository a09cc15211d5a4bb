"""Wegwijs organisation registry configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .env import env_float, env_str
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from .storage import StorageConfig

DEFAULT_WEGWIJS_API_URL: Final[str] = "https://api.wegwijs.vlaanderen.be/v1/search/organisations"
DEFAULT_WEGWIJS_FIELDS: Final[tuple[str, ...]] = (
    "changeTime",
    "name",
    "shortName",
    "ovoNumber",
    "kboNumber",
    "labels",
    "contacts",
    "organisationClassifications",
    "locations",
)
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0


@dataclass(frozen=True, slots=True)
class WegwijsConfig:
    """Where and how to query the Wegwijs search API."""

    search_url: str
    fields: tuple[str, ...]
    resilience: ResilienceConfig

    @property
    def scroll_url(self) -> str:
        return f"{self.search_url.rstrip('/')}/scroll"

    @property
    def fields_param(self) -> str:
        return ",".join(self.fields)


def _parse_fields(raw: str) -> tuple[str, ...]:
    fields = tuple(part.strip() for part in raw.split(",") if part.strip())
    if "kboNumber" not in fields:
        raise ConfigurationError("WEGWIJS_API_FIELDS must include kboNumber")
    return fields


def _cache_config(mode: str, storage: StorageConfig | None) -> CacheConfig | None:
    normalized = mode.strip().lower()
    if normalized in {"", "off", "none", "false"}:
        return None
    if normalized == "memory":
        return CacheConfig(backend="memory")
    if normalized == "sqlite":
        path = str(storage.http_cache_path()) if storage is not None else None
        return CacheConfig(backend="sqlite", sqlite_path=path)
    raise ConfigurationError(f"Unsupported WEGWIJS_HTTP_CACHE mode: {mode}")


def _rate_limit(calls_per_second: float) -> RateLimit:
    if calls_per_second < 1:
        return RateLimit(max_calls=1, per_seconds=1 / calls_per_second)
    return RateLimit(max_calls=int(calls_per_second), per_seconds=1.0)


def get_wegwijs_config(*, storage: StorageConfig | None = None) -> WegwijsConfig:
    search_url = env_str("WEGWIJS_API_URL", DEFAULT_WEGWIJS_API_URL).rstrip("/")
    fields = _parse_fields(env_str("WEGWIJS_API_FIELDS", ",".join(DEFAULT_WEGWIJS_FIELDS)))
    timeout = env_float("WEGWIJS_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
    calls_per_second = env_float("WEGWIJS_MAX_CALLS_PER_SECOND", None)

    ratelimit = None
    if calls_per_second is not None:
        if calls_per_second <= 0:
            raise ConfigurationError("WEGWIJS_MAX_CALLS_PER_SECOND must be positive")
        ratelimit = _rate_limit(calls_per_second)

    resilience = ResilienceConfig(
        name="wegwijs",
        timeout_seconds=timeout or DEFAULT_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=3),
        ratelimit=ratelimit,
        cache=_cache_config(env_str("WEGWIJS_HTTP_CACHE", "off"), storage),
        default_headers={"Accept": "application/json"},
    )
    return WegwijsConfig(search_url=search_url, fields=fields, resilience=resilience)
