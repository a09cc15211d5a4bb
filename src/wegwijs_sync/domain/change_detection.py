"""Staleness check between a Wegwijs snapshot and the stored record."""

from __future__ import annotations

from datetime import UTC, datetime


def _parse_iso(value: str) -> datetime | None:
    normalized = value.strip()
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def is_update_needed(external_change_time: str | None, internal_change_time: str | None) -> bool:
    """Return whether the Wegwijs change time is strictly newer than the stored one.

    A snapshot without a change time never triggers an update; a stored record
    without one always does. Values that are not valid ISO-8601 are compared as
    plain strings.
    """

    if not external_change_time:
        return False
    if not internal_change_time:
        return True

    external = _parse_iso(external_change_time)
    internal = _parse_iso(internal_change_time)
    if external is None or internal is None:
        return external_change_time > internal_change_time
    return external > internal
