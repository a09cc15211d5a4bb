"""Ports for reading and writing the internal organisation registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from wegwijs_sync.domain.model import BusinessIdLink, ExternalOrgSnapshot, InternalOrgRecord


@runtime_checkable
class OrganizationRepository(Protocol):
    """Store operations the reconciliation core relies on."""

    def get_internal_record(self, structured_id_uuid: str) -> InternalOrgRecord | None: ...

    def get_organization(self, organization_uri: str) -> InternalOrgRecord | None: ...

    def list_internal_records_with_kbo(self) -> list[InternalOrgRecord]: ...

    def get_business_id_link(self, organization_uri: str) -> BusinessIdLink | None: ...

    def create_business_id_record(
        self,
        snapshot: ExternalOrgSnapshot,
        identifier_uri: str | None,
        organization_uri: str,
    ) -> str: ...

    def update_business_id_record(
        self,
        snapshot: ExternalOrgSnapshot,
        link: BusinessIdLink,
    ) -> None: ...

    def construct_ovo_structure(self, structured_id_uri: str) -> str: ...

    def update_ovo_value(self, uri: str, ovo_number: str) -> None: ...


__all__ = ["OrganizationRepository"]
