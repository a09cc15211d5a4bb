"""Healing schedule configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from croniter import croniter

from .env import env_bool, env_str
from .errors import ConfigurationError

DEFAULT_HEALING_CRON_PATTERN: Final[str] = "0 2 * * *"


@dataclass(frozen=True, slots=True)
class SchedulerConfig:
    cron_pattern: str = DEFAULT_HEALING_CRON_PATTERN
    enabled: bool = True


def get_scheduler_config() -> SchedulerConfig:
    pattern = env_str("HEALING_CRON_PATTERN", DEFAULT_HEALING_CRON_PATTERN)
    if not croniter.is_valid(pattern):
        raise ConfigurationError(f"Invalid HEALING_CRON_PATTERN: {pattern}")
    return SchedulerConfig(cron_pattern=pattern, enabled=env_bool("HEALING_ENABLED", True))
