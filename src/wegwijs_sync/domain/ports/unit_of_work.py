"""Unit-of-work abstraction around the organisation repository."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from wegwijs_sync.domain.ports.persistence import OrganizationRepository


@runtime_checkable
class OrganizationUnitOfWork(Protocol):
    """Transaction boundary for one batch of registry reads and writes."""

    @property
    def organizations(self) -> OrganizationRepository: ...

    def __enter__(self) -> OrganizationUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


UnitOfWorkFactory: TypeAlias = Callable[[], OrganizationUnitOfWork]

__all__ = ["OrganizationUnitOfWork", "UnitOfWorkFactory"]
