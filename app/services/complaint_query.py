# app/services/complaint_query.py
import math
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import ValidationError
from app.models.complaint import Complaint, ComplaintPriority, ComplaintStatus, ComplaintType
from app.services.workflow import parse_enum


@dataclass
class ComplaintFilters:
    status: Optional[ComplaintStatus] = None
    complaint_type: Optional[ComplaintType] = None
    ward_number: Optional[int] = None
    priority: Optional[ComplaintPriority] = None
    search: Optional[str] = None


@dataclass
class ComplaintPageResult:
    items: List[Complaint]
    current: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_filters(
    status=None,
    complaint_type=None,
    ward_number=None,
    priority=None,
    search=None,
) -> ComplaintFilters:
    """Build filters from raw query values; empty strings mean "no constraint"."""
    filters = ComplaintFilters()
    if not _blank(status):
        filters.status = parse_enum(ComplaintStatus, status, "status")
    if not _blank(complaint_type):
        filters.complaint_type = parse_enum(ComplaintType, complaint_type, "complaint_type")
    if not _blank(priority):
        filters.priority = parse_enum(ComplaintPriority, priority, "priority")
    if not _blank(ward_number):
        try:
            filters.ward_number = int(ward_number)
        except (TypeError, ValueError):
            raise ValidationError.for_field("ward_number", f"Invalid ward_number '{ward_number}'")
    if not _blank(search):
        filters.search = search.strip()
    return filters


def apply_filters(q, filters: ComplaintFilters):
    if filters.status is not None:
        q = q.where(Complaint.status == filters.status)
    if filters.complaint_type is not None:
        q = q.where(Complaint.complaint_type == filters.complaint_type)
    if filters.ward_number is not None:
        q = q.where(Complaint.ward_number == filters.ward_number)
    if filters.priority is not None:
        q = q.where(Complaint.priority == filters.priority)
    if filters.search:
        term = f"%{filters.search.lower()}%"
        q = q.where(
            or_(
                func.lower(Complaint.complaint_number).like(term),
                func.lower(Complaint.title).like(term),
                func.lower(Complaint.person_name).like(term),
            )
        )
    return q


async def list_complaints(
    db: AsyncSession,
    filters: Optional[ComplaintFilters] = None,
    page: int = 1,
    limit: Optional[int] = None,
) -> ComplaintPageResult:
    filters = filters or ComplaintFilters()
    limit = limit or settings.page_size
    if page < 1:
        raise ValidationError.for_field("page", "page must be 1 or greater")

    total = await db.scalar(apply_filters(select(func.count(Complaint.id)), filters)) or 0
    q = (
        apply_filters(select(Complaint), filters)
        .order_by(Complaint.created_at.desc(), Complaint.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    items = list((await db.scalars(q)).all())
    return ComplaintPageResult(items=items, current=page, limit=limit, total=total)
