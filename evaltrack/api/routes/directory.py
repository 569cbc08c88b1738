# evaltrack/api/routes/directory.py
from fastapi import APIRouter, Query, status as http_status
from typing import List, Optional
from evaltrack.core.errors import NotFoundError
from evaltrack.models.directory import Supplier, SupplierCreate, TeamMember
from evaltrack.repositories import directory_repo as repo
from evaltrack.services.stats_service import team_member_stats
from evaltrack.utils.dates import format_display

router = APIRouter()


# ---- Team members ----
@router.get("/teamMembers", response_model=List[TeamMember])
async def get_team_members():
    return await repo.list_team_members()


# declarado antes de /teamMembers/{name} para que "stats" no se tome como nombre
@router.get("/teamMembers/stats")
async def get_team_member_stats(
    evaluatorId: Optional[str] = None,
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1970),
):
    return await team_member_stats(evaluatorId, month, year)


@router.get("/teamMembers/{name}", response_model=TeamMember)
async def get_team_member(name: str):
    member = await repo.find_team_member(name)
    if not member:
        raise NotFoundError("Team member not found")
    return member


# ---- Suppliers ----
def _with_display(doc: dict) -> dict:
    out = dict(doc)
    if out.get("timestamp"):
        out["formattedTimestamp"] = format_display(out["timestamp"])
    return out


@router.get("/suppliers")
async def get_suppliers():
    return [_with_display(d) for d in await repo.list_suppliers()]


@router.post("/suppliers", status_code=http_status.HTTP_201_CREATED)
async def create_supplier(payload: SupplierCreate):
    doc = Supplier(**payload.model_dump()).model_dump()
    await repo.insert_supplier(doc)
    return _with_display(doc)
