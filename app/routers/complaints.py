# File: app/routers/complaints.py
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.config import settings
from app.core.ratelimit import limiter
from app.core.security import require_admin, TokenClaims
from app.db.session import get_db
from app.models.complaint import ComplaintSource
from app.schemas.common import ApiResponse
from app.schemas.complaint import (
    ComplaintCreate,
    ComplaintOut,
    ComplaintPage,
    ComplaintQROut,
    ComplaintStats,
    ComplaintStatusPatch,
    ComplaintTrackOut,
    Pagination,
    QRComplaintCreate,
)
from app.schemas.qr import LocationQRIn, LocationQROut
from app.services import complaints as complaint_service
from app.services.complaint_query import list_complaints, parse_filters
from app.services.complaint_stats import complaint_stats
from app.services.qr import build_tracking_url, get_or_create_location_qr

router = APIRouter(prefix="/complaints", tags=["complaints"])

SUBMITTED_MESSAGE = "Complaint submitted successfully. Keep your complaint number to track progress."


@router.post("/submit", response_model=ApiResponse[ComplaintOut], status_code=201)
@limiter.limit(settings.submit_rate_limit)
async def submit(request: Request, body: ComplaintCreate, db: AsyncSession = Depends(get_db)):
    complaint = await complaint_service.submit_complaint(db, body)
    return ApiResponse(message=SUBMITTED_MESSAGE, data=ComplaintOut.model_validate(complaint))


@router.post("/qr/submit", response_model=ApiResponse[ComplaintOut], status_code=201)
@limiter.limit(settings.submit_rate_limit)
async def submit_from_qr(request: Request, body: QRComplaintCreate, db: AsyncSession = Depends(get_db)):
    complaint = await complaint_service.submit_complaint(db, body, source=ComplaintSource.qr)
    return ApiResponse(message=SUBMITTED_MESSAGE, data=ComplaintOut.model_validate(complaint))


@router.post("/qr/generate-location", response_model=ApiResponse[LocationQROut])
async def generate_location_qr(
    body: LocationQRIn,
    db: AsyncSession = Depends(get_db),
    admin: TokenClaims = Depends(require_admin),
):
    binding = await get_or_create_location_qr(
        db, body.location, body.ward_number, body.latitude, body.longitude, created_by=admin.username
    )
    return ApiResponse(message="QR code generated", data=LocationQROut.model_validate(binding))


@router.get("", response_model=ApiResponse[ComplaintPage], dependencies=[Depends(require_admin)])
async def list_all(
    db: AsyncSession = Depends(get_db),
    page: int = Query(default=1),
    status: Optional[str] = Query(default=None),
    complaint_type: Optional[str] = Query(default=None),
    ward_number: Optional[str] = Query(default=None),
    priority: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
):
    filters = parse_filters(
        status=status, complaint_type=complaint_type, ward_number=ward_number, priority=priority, search=search
    )
    result = await list_complaints(db, filters, page=page)
    return ApiResponse(
        data=ComplaintPage(
            items=[ComplaintOut.model_validate(c) for c in result.items],
            pagination=Pagination(
                current=result.current,
                limit=result.limit,
                total=result.total,
                total_pages=result.total_pages,
            ),
        )
    )


@router.get("/stats/overview", response_model=ApiResponse[ComplaintStats], dependencies=[Depends(require_admin)])
async def stats_overview(db: AsyncSession = Depends(get_db)):
    stats = await complaint_stats(db)
    return ApiResponse(data=ComplaintStats(**stats))


@router.get("/track/{complaint_number}", response_model=ApiResponse[ComplaintTrackOut])
async def track(complaint_number: str, db: AsyncSession = Depends(get_db)):
    complaint = await complaint_service.get_by_number(db, complaint_number)
    return ApiResponse(data=ComplaintTrackOut.model_validate(complaint))


@router.get("/{complaint_id}", response_model=ApiResponse[ComplaintOut], dependencies=[Depends(require_admin)])
async def get_one(complaint_id: int, db: AsyncSession = Depends(get_db)):
    complaint = await complaint_service.get_complaint(db, complaint_id)
    return ApiResponse(data=ComplaintOut.model_validate(complaint))


@router.patch("/{complaint_id}/status", response_model=ApiResponse[ComplaintOut], dependencies=[Depends(require_admin)])
async def update_status(complaint_id: int, body: ComplaintStatusPatch, db: AsyncSession = Depends(get_db)):
    complaint = await complaint_service.update_status(db, complaint_id, body)
    return ApiResponse(message="Complaint updated", data=ComplaintOut.model_validate(complaint))


@router.get("/{complaint_id}/qr", response_model=ApiResponse[ComplaintQROut], dependencies=[Depends(require_admin)])
async def complaint_qr(complaint_id: int, db: AsyncSession = Depends(get_db)):
    complaint = await complaint_service.get_complaint(db, complaint_id)
    return ApiResponse(
        data=ComplaintQROut(
            complaint_number=complaint.complaint_number,
            tracking_url=build_tracking_url(complaint.complaint_number),
        )
    )
