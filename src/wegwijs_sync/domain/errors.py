"""Failure taxonomy shared by the sync paths."""

from __future__ import annotations


class SyncError(RuntimeError):
    """Base class for failures while reconciling with Wegwijs."""


class UpstreamFetchError(SyncError):
    """Wegwijs could not be reached or answered with an HTTP error."""


class UpstreamShapeError(SyncError):
    """Wegwijs answered, but the payload did not have the expected shape."""


class PersistenceError(SyncError):
    """Reading from or writing to the internal registry failed."""
