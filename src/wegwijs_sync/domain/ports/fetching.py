"""Ports for fetching organisation data from Wegwijs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from wegwijs_sync.domain.model import ExternalOrgSnapshot


@runtime_checkable
class SnapshotFetcher(Protocol):
    """Retrieves the complete Wegwijs population keyed by KBO number."""

    def fetch_all(self) -> dict[str, ExternalOrgSnapshot]: ...


@runtime_checkable
class OrganizationLookup(Protocol):
    """Targeted, non-paged query for the organisations carrying one KBO number."""

    def find_by_kbo_number(self, kbo_number: str) -> list[ExternalOrgSnapshot]: ...


__all__ = ["OrganizationLookup", "SnapshotFetcher"]
