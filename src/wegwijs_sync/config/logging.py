"""Shared logging helpers."""

from __future__ import annotations

import logging

from .errors import ConfigurationError


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    ``level`` accepts either a numeric level or its name (``"DEBUG"``, ``"info"``).
    Pass ``force=True`` to reconfigure during tests or specialised entry points.
    """

    if isinstance(level, str):
        resolved = logging.getLevelNamesMapping().get(level.strip().upper())
        if resolved is None:
            raise ConfigurationError(f"Unknown log level: {level}")
        level = resolved

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
