"""Application configuration helpers."""

from __future__ import annotations

from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .scheduler import SchedulerConfig, get_scheduler_config
from .settings import Settings, load_settings
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .wegwijs import WegwijsConfig, get_wegwijs_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SchedulerConfig",
    "Settings",
    "StorageConfig",
    "WegwijsConfig",
    "configure_logging",
    "get_database_config",
    "get_scheduler_config",
    "get_storage_config",
    "get_wegwijs_config",
    "load_settings",
]
