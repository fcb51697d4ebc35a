# app/services/complaint_stats.py
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.complaint import Complaint


async def _count_by(db: AsyncSession, column) -> list[dict]:
    count = func.count(Complaint.id)
    rows = (await db.execute(select(column, count).group_by(column))).all()
    out = [{"key": key.value if hasattr(key, "value") else str(key), "count": n} for key, n in rows]
    # only values that currently exist appear; zero-count keys are never listed
    return sorted(out, key=lambda r: (-r["count"], r["key"]))


async def complaint_stats(db: AsyncSession) -> dict:
    total = await db.scalar(select(func.count(Complaint.id))) or 0
    return {
        "total": total,
        "by_status": await _count_by(db, Complaint.status),
        "by_type": await _count_by(db, Complaint.complaint_type),
        "by_priority": await _count_by(db, Complaint.priority),
    }
