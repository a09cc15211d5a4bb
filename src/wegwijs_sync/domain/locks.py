"""Serialisation of reconciliation work per organisation."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class OrganizationLocks:
    """One lock per organisation URI, shared by the on-demand and healing paths.

    Without it the two triggers can race on the same organisation and create two
    KBO records when both observe a missing link before either commits.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._holders: dict[str, int] = {}

    @contextmanager
    def hold(self, organization_uri: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(organization_uri, threading.Lock())
            self._holders[organization_uri] = self._holders.get(organization_uri, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                remaining = self._holders[organization_uri] - 1
                if remaining:
                    self._holders[organization_uri] = remaining
                else:
                    del self._holders[organization_uri]
                    del self._locks[organization_uri]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
