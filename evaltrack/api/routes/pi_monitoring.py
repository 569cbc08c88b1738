# evaltrack/api/routes/pi_monitoring.py
from fastapi import APIRouter, status as http_status
from typing import Optional
from evaltrack.models.pi_monitoring import PIRecordCreate, PIRecordUpdate
from evaltrack.services import pi_service as svc

router = APIRouter()


@router.post("", status_code=http_status.HTTP_201_CREATED)
async def create_pi_record(payload: PIRecordCreate):
    return await svc.create(payload)


@router.get("")
async def list_pi_records(status: Optional[str] = None, supplierName: Optional[str] = None):
    return await svc.list_records(status, supplierName)


@router.get("/{record_id}")
async def get_pi_record(record_id: str):
    return await svc.get(record_id)


@router.put("/{record_id}")
async def update_pi_record(record_id: str, payload: PIRecordUpdate):
    return await svc.update(record_id, payload)


@router.delete("/{record_id}")
async def delete_pi_record(record_id: str):
    await svc.delete(record_id)
    return {"message": "PI record deleted successfully"}
