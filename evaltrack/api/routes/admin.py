# evaltrack/api/routes/admin.py
from fastapi import APIRouter
from typing import Optional
from evaltrack.core.errors import ValidationError
from evaltrack.models.common import STATUS_LABELS, DETAILED_STATUSES
from evaltrack.models.request import ResetCounterPayload
from evaltrack.services import reference_service

router = APIRouter()

RESET_WARNING = (
    "Existing requests were kept; new requests will reuse reference numbers "
    "until the counter passes the current highest one."
)


@router.get("/statuses")
async def list_statuses():
    return {"status": STATUS_LABELS, "detailedStatus": list(DETAILED_STATUSES)}


@router.post("/reset-counter")
async def reset_counter(payload: Optional[ResetCounterPayload] = None):
    # operación peligrosa: exige confirmación explícita
    if payload is None or not payload.confirm:
        raise ValidationError("Counter reset requires {\"confirm\": true}")
    seq = await reference_service.reset_counter()
    return {"message": "Counter reset", "seq": seq, "warning": RESET_WARNING}
