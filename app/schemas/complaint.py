from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.core.config import settings
from app.models.complaint import ComplaintType, ComplaintPriority, ComplaintStatus, ComplaintSource


class ComplaintCreate(BaseModel):
    person_name: str = Field(min_length=2, max_length=120)
    phone: str = Field(min_length=7, max_length=30)
    email: Optional[EmailStr] = None
    address: str = Field(min_length=2, max_length=300)
    ward_number: int
    location: Optional[str] = Field(default=None, max_length=200)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    complaint_type: ComplaintType
    title: str = Field(min_length=3, max_length=200)
    description: str = Field(min_length=10, max_length=4000)
    priority: ComplaintPriority = ComplaintPriority.medium
    incident_date: Optional[datetime] = None

    @field_validator("person_name", "phone", "address", "title", "description", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("ward_number")
    @classmethod
    def _ward_in_range(cls, v: int) -> int:
        if not 1 <= v <= settings.max_ward_number:
            raise ValueError(f"ward_number must be between 1 and {settings.max_ward_number}")
        return v


class QRComplaintCreate(ComplaintCreate):
    """Submission coming from a scanned location QR; the binding always carries a location."""
    location: str = Field(min_length=1, max_length=200)


class ComplaintOut(BaseModel):
    id: int
    complaint_number: str
    person_name: str
    phone: str
    email: Optional[str] = None
    address: str
    ward_number: int
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    complaint_type: ComplaintType
    title: str
    description: str
    priority: ComplaintPriority
    status: ComplaintStatus
    source: ComplaintSource

    assigned_to: Optional[str] = None
    assigned_phone: Optional[str] = None
    assigned_email: Optional[str] = None
    resolution_notes: Optional[str] = None

    action_date: Optional[datetime] = None
    incident_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ComplaintTrackOut(BaseModel):
    """Public view for citizens tracking by number; no submitter contact details."""
    complaint_number: str
    title: str
    complaint_type: ComplaintType
    priority: ComplaintPriority
    status: ComplaintStatus
    ward_number: int
    location: Optional[str] = None
    assigned_to: Optional[str] = None
    resolution_notes: Optional[str] = None
    action_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ComplaintStatusPatch(BaseModel):
    # validated by the workflow so unknown values get a field-level error
    status: str
    resolution_notes: Optional[str] = Field(default=None, max_length=4000)
    assigned_to: Optional[str] = Field(default=None, max_length=120)
    assigned_phone: Optional[str] = Field(default=None, max_length=30)
    assigned_email: Optional[EmailStr] = None


class Pagination(BaseModel):
    current: int
    limit: int
    total: int
    total_pages: int


class ComplaintPage(BaseModel):
    items: List[ComplaintOut]
    pagination: Pagination


class StatCount(BaseModel):
    key: str
    count: int


class ComplaintStats(BaseModel):
    total: int
    by_status: List[StatCount]
    by_type: List[StatCount]
    by_priority: List[StatCount]


class ComplaintQROut(BaseModel):
    complaint_number: str
    tracking_url: str
