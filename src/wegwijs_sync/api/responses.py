"""Mapping of sync outcomes onto HTTP responses."""

from __future__ import annotations

from typing import Final

from wegwijs_sync.domain.errors import PersistenceError, UpstreamFetchError, UpstreamShapeError
from wegwijs_sync.domain.model import SyncResult, SyncStatus

OK: Final = (200, "Organization synchronized with Wegwijs")
NO_INTERNAL_IDENTIFIER: Final = (422, "Organization has no KBO number")
NO_EXTERNAL_MATCH: Final = (404, "No Wegwijs organization found for this KBO number")
UPSTREAM_UNREACHABLE: Final = (502, "Wegwijs could not be reached")
UPSTREAM_UNEXPECTED: Final = (502, "Wegwijs returned an unexpected response")
PERSISTENCE_FAILED: Final = (500, "Organization data could not be stored")
SERVER_ERROR: Final = (500, "Internal server error")


def status_for(result: SyncResult) -> tuple[int, str]:
    """Return the ``(status code, body)`` pair for ``result``."""

    match result.status:
        case SyncStatus.RECONCILED:
            return OK
        case SyncStatus.NO_INTERNAL_IDENTIFIER:
            return NO_INTERNAL_IDENTIFIER
        case SyncStatus.NO_EXTERNAL_MATCH:
            return NO_EXTERNAL_MATCH
        case SyncStatus.FAILED:
            return _status_for_error(result.error)


def _status_for_error(error: BaseException | None) -> tuple[int, str]:
    if isinstance(error, UpstreamFetchError):
        return UPSTREAM_UNREACHABLE
    if isinstance(error, UpstreamShapeError):
        return UPSTREAM_UNEXPECTED
    if isinstance(error, PersistenceError):
        return PERSISTENCE_FAILED
    return SERVER_ERROR
