# evaltrack/models/pi_monitoring.py
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional
import uuid


class PIRecordCreate(BaseModel):
    piNumber: str
    supplierName: str
    requestReference: Optional[str] = None
    description: str = ""
    amount: float = Field(default=0, ge=0)
    currency: str = "PHP"
    status: str = "open"
    dateReceived: Optional[datetime] = None
    dueDate: Optional[datetime] = None
    remarks: str = ""


class PIRecordUpdate(BaseModel):
    piNumber: Optional[str] = None
    supplierName: Optional[str] = None
    requestReference: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = None
    status: Optional[str] = None
    dateReceived: Optional[datetime] = None
    dueDate: Optional[datetime] = None
    remarks: Optional[str] = None


class PIRecord(PIRecordCreate):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    lastUpdated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
