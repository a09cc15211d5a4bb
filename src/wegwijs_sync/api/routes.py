"""HTTP routes triggering the on-demand sync."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from wegwijs_sync.domain.model import SyncStatus

from .responses import status_for

if TYPE_CHECKING:
    from wegwijs_sync.app import SyncServices

log = getLogger(__name__)

router = APIRouter()


def _services(request: Request) -> SyncServices:
    return request.app.state.services


@router.post("/sync-kbo-data/{structured_id_uuid}", response_class=PlainTextResponse)
def sync_kbo_data(structured_id_uuid: str, request: Request) -> PlainTextResponse:
    result = _services(request).sync_organization(structured_id_uuid)
    status_code, body = status_for(result)
    if result.status is SyncStatus.FAILED:
        log.error(
            "Something went wrong while calling /sync-kbo-data/%s",
            structured_id_uuid,
            exc_info=result.error,
        )
    return PlainTextResponse(body, status_code=status_code)


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
