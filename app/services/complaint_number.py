# app/services/complaint_number.py
"""
Citizen-facing complaint numbers: ``<PREFIX>-<YYYYMMDD>-<NNNN>``.

The sequence part continues from the highest number already issued for the
UTC day, so two concurrent submissions can compute the same candidate. The
unique constraint on ``complaints.complaint_number`` catches that; the caller
rolls back and asks again, and the re-read sees the rival's committed number.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.complaint import Complaint


def day_prefix(now: datetime, prefix: Optional[str] = None) -> str:
    return f"{prefix or settings.complaint_number_prefix}-{now.strftime('%Y%m%d')}"


def format_complaint_number(now: datetime, sequence: int, prefix: Optional[str] = None) -> str:
    return f"{day_prefix(now, prefix)}-{sequence:04d}"


def parse_sequence(complaint_number: str) -> int:
    return int(complaint_number.rsplit("-", 1)[1])


async def last_sequence(db: AsyncSession, now: datetime) -> int:
    # padding only guarantees lexical order up to 9999, so longer numbers sort first
    latest = await db.scalar(
        select(Complaint.complaint_number)
        .where(Complaint.complaint_number.like(f"{day_prefix(now)}-%"))
        .order_by(func.length(Complaint.complaint_number).desc(), Complaint.complaint_number.desc())
        .limit(1)
    )
    return parse_sequence(latest) if latest else 0


async def next_complaint_number(db: AsyncSession, attempt: int = 0, now: Optional[datetime] = None) -> str:
    """``attempt`` is the retry index from the caller; every attempt re-reads the latest issued number."""
    now = now or datetime.now(timezone.utc)
    return format_complaint_number(now, await last_sequence(db, now) + 1)
