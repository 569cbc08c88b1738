# evaltrack/api/routes/requests.py
from fastapi import APIRouter, Request as FastAPIRequest, status as http_status
from typing import Optional
from evaltrack.core.rate_limit import limiter, CREATE_LIMIT
from evaltrack.models.request import (
    RequestCreate, RequestStatusUpdate, DetailedStatusUpdate, RemarksUpdate,
)
from evaltrack.services import request_service as svc

router = APIRouter()


@router.post("", status_code=http_status.HTTP_201_CREATED)
@limiter.limit(CREATE_LIMIT)
async def create_request(request: FastAPIRequest, payload: RequestCreate):
    return await svc.create_request(payload)


@router.get("")
async def get_requests(assignedTo: Optional[str] = None):
    return await svc.list_requests(assignedTo)


@router.delete("")
async def delete_all_requests():
    deleted = await svc.delete_all_requests()
    return {"message": "All requests deleted and counter reset", "deletedCount": deleted}


@router.get("/{request_id}")
async def get_request_detail(request_id: str):
    return await svc.get_request(request_id)


@router.put("/{request_id}/updateDetailedStatus")
async def update_detailed_status(request_id: str, payload: DetailedStatusUpdate):
    return await svc.set_detailed_status(
        request_id,
        payload.detailedStatus,
        remarks=payload.statusRemarks,
        actor=payload.actor,
        timestamp=payload.timestamp,
    )


@router.put("/{request_id}/updateRemarks")
async def update_remarks(request_id: str, payload: RemarksUpdate):
    return await svc.set_remarks(request_id, payload.remarks)


@router.put("/{request_id}")
async def update_request(request_id: str, payload: RequestStatusUpdate):
    return await svc.set_coarse_status(
        request_id,
        payload.status,
        completed_at=payload.completedAt,
        cancellation_reason=payload.cancellationReason,
        assigned_to=payload.assignedTo,
    )


@router.delete("/{request_id}")
async def delete_request(request_id: str):
    await svc.delete_request(request_id)
    return {"message": "Request deleted successfully"}
