# File: app/models/complaint.py
from __future__ import annotations
from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import String, Float, Enum, Integer, DateTime, Text, func, Index
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base


class ComplaintType(PyEnum):
    road = "Road"
    nala = "Nala"
    water_supply = "Water Supply"
    electricity = "Electricity"
    waste_management = "Waste Management"
    public_health = "Public Health"
    other = "Other"


class ComplaintPriority(PyEnum):
    low = "Low"
    medium = "Medium"
    high = "High"
    emergency = "Emergency"


class ComplaintStatus(PyEnum):
    submitted = "Submitted"
    under_review = "Under Review"
    accepted = "Accepted"
    in_progress = "In Progress"
    resolved = "Resolved"
    rejected = "Rejected"


class ComplaintSource(PyEnum):
    web = "web"
    qr = "qr"


TERMINAL_STATUSES = frozenset({ComplaintStatus.resolved, ComplaintStatus.rejected})


def _values(enum_cls):
    return [m.value for m in enum_cls]


class Complaint(Base):
    __tablename__ = "complaints"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    complaint_number: Mapped[str] = mapped_column(String(40), unique=True, index=True, nullable=False)

    person_name: Mapped[str] = mapped_column(String(120))
    phone: Mapped[str] = mapped_column(String(30))
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str] = mapped_column(String(300))
    ward_number: Mapped[int] = mapped_column(Integer, index=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    complaint_type: Mapped[ComplaintType] = mapped_column(
        Enum(ComplaintType, name="complaint_type", values_callable=_values), index=True
    )
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    priority: Mapped[ComplaintPriority] = mapped_column(
        Enum(ComplaintPriority, name="complaint_priority", values_callable=_values),
        default=ComplaintPriority.medium,
        index=True,
    )
    status: Mapped[ComplaintStatus] = mapped_column(
        Enum(ComplaintStatus, name="complaint_status", values_callable=_values),
        default=ComplaintStatus.submitted,
        index=True,
    )
    source: Mapped[ComplaintSource] = mapped_column(
        Enum(ComplaintSource, name="complaint_source", values_callable=_values),
        default=ComplaintSource.web,
    )

    assigned_to: Mapped[str | None] = mapped_column(String(120), nullable=True)
    assigned_phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    assigned_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    resolution_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    action_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    incident_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

Index("ix_complaints_status_ward", Complaint.status, Complaint.ward_number)
