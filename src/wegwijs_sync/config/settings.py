"""Aggregate application settings, built once at startup."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import env_str
from .scheduler import SchedulerConfig, get_scheduler_config
from .storage import DatabaseConfig, get_database_config, get_storage_config
from .wegwijs import WegwijsConfig, get_wegwijs_config


@dataclass(frozen=True, slots=True)
class Settings:
    wegwijs: WegwijsConfig
    database: DatabaseConfig
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read every configuration section from the environment."""

    storage = get_storage_config()
    return Settings(
        wegwijs=get_wegwijs_config(storage=storage),
        database=get_database_config(storage=storage),
        scheduler=get_scheduler_config(),
        log_level=env_str("LOG_LEVEL", "INFO"),
    )
