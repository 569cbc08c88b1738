# evaltrack/models/request.py
from pydantic import BaseModel, ConfigDict, Field, StrictInt
from datetime import datetime, timezone
from typing import Optional, List
import uuid
from evaltrack.models.common import RequestStatus, DEFAULT_DETAILED_STATUS


class StatusHistoryEntry(BaseModel):
    status: str
    remarks: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    actor: str = "system"


class RequestInDB(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    referenceNumber: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    formattedTimestamp: Optional[str] = None
    email: str
    name: str
    typeOfClient: Optional[str] = None
    classification: Optional[str] = None
    projectTitle: Optional[str] = None
    philgepsReferenceNumber: Optional[str] = None
    productType: Optional[str] = None
    requestType: Optional[str] = None
    dateNeeded: Optional[str] = None
    specialInstructions: Optional[str] = None
    assignedTo: Optional[str] = None
    status: RequestStatus = 0
    detailedStatus: str = DEFAULT_DETAILED_STATUS
    statusHistory: List[StatusHistoryEntry] = Field(default_factory=list)
    remarks: str = ""
    fileUrl: Optional[str] = None
    fileName: Optional[str] = None
    requesterFileUrl: Optional[str] = None
    requesterFileName: Optional[str] = None
    completedAt: Optional[datetime] = None
    canceledAt: Optional[datetime] = None
    cancellationReason: Optional[str] = None
    lastUpdated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RequestCreate(BaseModel):
    # referenceNumber / timestamp los asigna el servidor; si vienen en el body se ignoran
    model_config = ConfigDict(extra="ignore")

    email: str
    name: str
    typeOfClient: Optional[str] = None
    classification: Optional[str] = None
    projectTitle: Optional[str] = None
    philgepsReferenceNumber: Optional[str] = None
    productType: Optional[str] = None
    requestType: Optional[str] = None
    dateNeeded: Optional[str] = None
    specialInstructions: Optional[str] = None
    assignedTo: Optional[str] = None


class RequestStatusUpdate(BaseModel):
    # StrictInt: true/false no se convierten en 1/0
    status: StrictInt
    completedAt: Optional[datetime] = None
    assignedTo: Optional[str] = None
    cancellationReason: Optional[str] = None


class DetailedStatusUpdate(BaseModel):
    # se valida contra DETAILED_STATUSES en el servicio (400, no 422)
    detailedStatus: str
    statusRemarks: Optional[str] = ""
    timestamp: Optional[datetime] = None
    actor: Optional[str] = None


class RemarksUpdate(BaseModel):
    remarks: Optional[str] = None


class ResetCounterPayload(BaseModel):
    confirm: bool = False
