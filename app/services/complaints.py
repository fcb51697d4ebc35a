# app/services/complaints.py
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import ConflictError, NotFoundError
from app.models.complaint import Complaint, ComplaintSource, ComplaintStatus
from app.schemas.complaint import ComplaintCreate, ComplaintStatusPatch
from app.services.complaint_number import next_complaint_number
from app.services.workflow import apply_status_update

logger = logging.getLogger(__name__)

NumberFactory = Callable[[AsyncSession, int], Awaitable[str]]


async def submit_complaint(
    db: AsyncSession,
    data: ComplaintCreate,
    source: ComplaintSource = ComplaintSource.web,
    number_factory: Optional[NumberFactory] = None,
) -> Complaint:
    number_factory = number_factory or next_complaint_number
    now = datetime.now(timezone.utc)
    fields = data.model_dump()
    fields["email"] = str(data.email) if data.email else None
    fields["incident_date"] = data.incident_date or now

    for attempt in range(settings.complaint_number_max_attempts):
        number = await number_factory(db, attempt)
        complaint = Complaint(
            **fields,
            complaint_number=number,
            status=ComplaintStatus.submitted,
            source=source,
        )
        db.add(complaint)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning("Complaint number %s already taken, regenerating (attempt %d)", number, attempt + 1)
            continue
        await db.refresh(complaint)
        logger.info(
            "Complaint %s submitted: ward %s, %s, priority %s",
            complaint.complaint_number,
            complaint.ward_number,
            complaint.complaint_type.value,
            complaint.priority.value,
        )
        return complaint

    raise ConflictError("Could not allocate a complaint number. Please try again.")


async def get_complaint(db: AsyncSession, complaint_id: int) -> Complaint:
    complaint = await db.get(Complaint, complaint_id)
    if not complaint:
        raise NotFoundError("Complaint not found")
    return complaint


async def get_by_number(db: AsyncSession, complaint_number: str) -> Complaint:
    number = (complaint_number or "").strip()
    complaint = await db.scalar(select(Complaint).where(Complaint.complaint_number == number))
    if not complaint:
        raise NotFoundError(f"No complaint found with number {number}")
    return complaint


async def update_status(db: AsyncSession, complaint_id: int, patch: ComplaintStatusPatch) -> Complaint:
    complaint = await get_complaint(db, complaint_id)
    apply_status_update(complaint, patch)
    await db.commit()
    await db.refresh(complaint)
    return complaint
