# evaltrack/services/request_service.py
"""
Ciclo de vida de una solicitud.

`status` (0..3) y `detailedStatus` se mantienen como campos independientes:
no se valida que sean coherentes entre sí. Todas las mutaciones son
last-write-wins (sin bloqueo optimista) y refrescan `lastUpdated` en la
misma escritura.
"""
import logging
from datetime import datetime
from typing import Optional, List, Dict, Any
from evaltrack.core.errors import NotFoundError, ValidationError, InvalidStatusError
from evaltrack.models.common import STATUS_LABELS, COMPLETED, CANCELED, DETAILED_STATUS_SET
from evaltrack.models.request import RequestCreate, RequestInDB, StatusHistoryEntry
from evaltrack.repositories import requests_repo as repo
from evaltrack.services import reference_service
from evaltrack.utils.dates import utcnow, format_display

logger = logging.getLogger(__name__)

NOT_FOUND = "Request not found"


def ensure_detailed_status(value: str):
    if value not in DETAILED_STATUS_SET:
        raise InvalidStatusError(value, field="detailedStatus")


def ensure_status(value: int):
    if isinstance(value, bool) or value not in STATUS_LABELS:
        raise InvalidStatusError(value, field="status")


async def _require(request_id: str) -> dict:
    doc = await repo.find_by_id(request_id)
    if not doc:
        raise NotFoundError(NOT_FOUND)
    return doc


async def create_request(payload: RequestCreate) -> dict:
    # si falla el contador no se inserta nada
    ref = await reference_service.allocate()
    now = utcnow()
    req = RequestInDB(
        referenceNumber=ref,
        timestamp=now,
        formattedTimestamp=format_display(now),
        lastUpdated=now,
        **payload.model_dump(exclude_none=True),
    )
    doc = req.model_dump()
    await repo.insert(doc)
    logger.info("create_request: %s (%s)", ref, req.id)
    return doc


async def get_request(request_id: str) -> dict:
    return await _require(request_id)


async def list_requests(assigned_to: Optional[str] = None) -> List[dict]:
    filt: Dict[str, Any] = {}
    if assigned_to:
        filt["assignedTo"] = assigned_to
    return await repo.list_all(filt)


async def set_detailed_status(
    request_id: str,
    new_status: str,
    remarks: Optional[str] = "",
    actor: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> dict:
    if new_status not in DETAILED_STATUS_SET:
        await _require(request_id)
        ensure_detailed_status(new_status)

    now = utcnow()
    entry = StatusHistoryEntry(
        status=new_status,
        remarks=(remarks or "").strip(),
        timestamp=timestamp or now,
        actor=actor or "system",
    )
    doc = await repo.update_and_get(request_id, {
        "$set": {"detailedStatus": new_status, "lastUpdated": now},
        "$push": {"statusHistory": entry.model_dump()},
    })
    if not doc:
        raise NotFoundError(NOT_FOUND)
    return doc


async def set_coarse_status(
    request_id: str,
    status: int,
    completed_at: Optional[datetime] = None,
    cancellation_reason: Optional[str] = None,
    assigned_to: Optional[str] = None,
) -> dict:
    ensure_status(status)
    now = utcnow()
    set_ops: Dict[str, Any] = {"status": status, "lastUpdated": now}
    if assigned_to is not None:
        set_ops["assignedTo"] = assigned_to
    if status == COMPLETED and completed_at:
        set_ops["completedAt"] = completed_at
    if status == CANCELED:
        set_ops["canceledAt"] = now
        set_ops["cancellationReason"] = cancellation_reason or ""

    doc = await repo.update_and_get(request_id, {"$set": set_ops})
    if not doc:
        raise NotFoundError(NOT_FOUND)
    return doc


async def set_remarks(request_id: str, remarks: Optional[str]) -> dict:
    # "" es válido; sólo se rechaza la ausencia del campo
    if remarks is None:
        raise ValidationError("remarks is required")
    doc = await repo.update_and_get(
        request_id, {"$set": {"remarks": remarks.strip(), "lastUpdated": utcnow()}}
    )
    if not doc:
        raise NotFoundError(NOT_FOUND)
    return doc


async def attach_file(request_id: str, url_field: str, name_field: str, url: str, name: str) -> dict:
    doc = await repo.update_and_get(
        request_id, {"$set": {url_field: url, name_field: name, "lastUpdated": utcnow()}}
    )
    if not doc:
        raise NotFoundError(NOT_FOUND)
    return doc


async def delete_request(request_id: str) -> dict:
    doc = await repo.delete_by_id(request_id)
    if not doc:
        raise NotFoundError(NOT_FOUND)
    await reference_service.renumber_after_deletion(request_id)
    return doc


async def delete_all_requests() -> int:
    return await reference_service.reset_all()
