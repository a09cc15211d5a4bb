"""Settings builders that never touch the environment."""

from __future__ import annotations

from wegwijs_sync.config import (
    DatabaseConfig,
    ResilienceConfig,
    RetryPolicy,
    SchedulerConfig,
    Settings,
    WegwijsConfig,
)
from wegwijs_sync.config.wegwijs import DEFAULT_WEGWIJS_FIELDS


def make_settings(*, cron_pattern: str = "0 2 * * *", healing_enabled: bool = True) -> Settings:
    return Settings(
        wegwijs=WegwijsConfig(
            search_url="https://wegwijs.test/v1/search/organisations",
            fields=DEFAULT_WEGWIJS_FIELDS,
            resilience=ResilienceConfig(name="wegwijs-test", retry=RetryPolicy(total=0)),
        ),
        database=DatabaseConfig(uri="sqlite+pysqlite:///:memory:"),
        scheduler=SchedulerConfig(cron_pattern=cron_pattern, enabled=healing_enabled),
    )
