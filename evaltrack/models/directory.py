# evaltrack/models/directory.py
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional
import uuid


class TeamMember(BaseModel):
    name: str
    openTasks: int = 0
    closedTasks: int = 0
    completionRate: int = 0
    profileImage: Optional[str] = None


class SupplierCreate(BaseModel):
    email: str
    category: str
    classification: str
    companyName: str
    address: str
    location: str
    account: str
    contactNumber: str
    contactEmail: str
    website: str = ""
    contactPerson: str


class Supplier(SupplierCreate):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
