# File: app/schemas/qr.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class LocationQRIn(BaseModel):
    location: str = Field(min_length=1, max_length=200)
    ward_number: int
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class LocationQROut(BaseModel):
    id: int
    location: str
    ward_number: int
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    payload_url: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
