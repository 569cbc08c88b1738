# evaltrack/services/pi_service.py
from typing import Optional, List, Dict, Any
from evaltrack.core.errors import NotFoundError, InvalidStatusError
from evaltrack.models.common import PI_STATUSES
from evaltrack.models.pi_monitoring import PIRecord, PIRecordCreate, PIRecordUpdate
from evaltrack.repositories import pi_repo as repo
from evaltrack.utils.dates import utcnow

NOT_FOUND = "PI record not found"


def ensure_pi_status(value: str):
    if value not in PI_STATUSES:
        raise InvalidStatusError(value, field="PI status")


async def create(payload: PIRecordCreate) -> dict:
    ensure_pi_status(payload.status)
    doc = PIRecord(**payload.model_dump()).model_dump()
    await repo.insert(doc)
    return doc


async def get(record_id: str) -> dict:
    doc = await repo.find_by_id(record_id)
    if not doc:
        raise NotFoundError(NOT_FOUND)
    return doc


async def list_records(status: Optional[str] = None, supplier_name: Optional[str] = None) -> List[dict]:
    filt: Dict[str, Any] = {}
    if status:
        ensure_pi_status(status)
        filt["status"] = status
    if supplier_name:
        filt["supplierName"] = supplier_name
    return await repo.list_filtered(filt)


async def update(record_id: str, payload: PIRecordUpdate) -> dict:
    fields = payload.model_dump(exclude_unset=True)
    if fields.get("status") is not None:
        ensure_pi_status(fields["status"])
    fields["lastUpdated"] = utcnow()
    doc = await repo.update_and_get(record_id, fields)
    if not doc:
        raise NotFoundError(NOT_FOUND)
    return doc


async def delete(record_id: str):
    if not await repo.delete_by_id(record_id):
        raise NotFoundError(NOT_FOUND)
