# app/services/qr.py
"""
Payload URLs for printable QR codes.

Rendering the image is left to the frontend; here we only build the URL the
code encodes. Location bindings pre-fill the submission form and are not
tied to any complaint.
"""
import logging
from typing import Optional
from urllib.parse import quote, urlencode

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import ValidationError
from app.models.location_qr import LocationQR

logger = logging.getLogger(__name__)


def _base_url(base_url: Optional[str]) -> str:
    return (base_url or settings.frontend_base_url).rstrip("/")


def build_location_qr_url(
    location: Optional[str],
    ward_number: Optional[int],
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    base_url: Optional[str] = None,
) -> str:
    errors = []
    location = (location or "").strip()
    if not location:
        errors.append({"field": "location", "message": "location is required"})
    ward = None
    if ward_number is None:
        errors.append({"field": "ward_number", "message": "ward_number is required"})
    else:
        try:
            ward = int(ward_number)
        except (TypeError, ValueError):
            errors.append({"field": "ward_number", "message": f"Invalid ward_number '{ward_number}'"})
    if ward is not None and not 1 <= ward <= settings.max_ward_number:
        errors.append({
            "field": "ward_number",
            "message": f"ward_number must be between 1 and {settings.max_ward_number}",
        })
    if errors:
        raise ValidationError("Location and ward number are required", errors=errors)

    params = [("location", location), ("ward", ward)]
    if latitude is not None and longitude is not None:
        params += [("lat", latitude), ("lng", longitude)]
    return f"{_base_url(base_url)}/submit?{urlencode(params, quote_via=quote)}"


def build_tracking_url(complaint_number: str, base_url: Optional[str] = None) -> str:
    return f"{_base_url(base_url)}/track?{urlencode({'number': complaint_number}, quote_via=quote)}"


async def get_or_create_location_qr(
    db: AsyncSession,
    location: str,
    ward_number: int,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    created_by: Optional[str] = None,
) -> LocationQR:
    url = build_location_qr_url(location, ward_number, latitude, longitude)
    existing = await db.scalar(select(LocationQR).where(LocationQR.payload_url == url))
    if existing:
        return existing

    binding = LocationQR(
        location=location.strip(),
        ward_number=int(ward_number),
        latitude=latitude if longitude is not None else None,
        longitude=longitude if latitude is not None else None,
        payload_url=url,
        created_by=created_by,
    )
    db.add(binding)
    await db.commit()
    await db.refresh(binding)
    logger.info("Generated location QR for %s (ward %s)", binding.location, binding.ward_number)
    return binding


async def list_location_qrs(db: AsyncSession, ward_number: Optional[int] = None) -> list[LocationQR]:
    q = select(LocationQR).order_by(LocationQR.ward_number, LocationQR.location)
    if ward_number is not None:
        q = q.where(LocationQR.ward_number == ward_number)
    return list((await db.scalars(q)).all())
