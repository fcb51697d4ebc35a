# app/services/workflow.py
"""
Complaint status workflow.

Triage is deliberately permissive: any of the six statuses can be set at any
time, including reopening a resolved complaint. The workflow only validates
the value, stamps ``action_date`` and applies the optional side fields.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from app.core.config import settings
from app.core.errors import ValidationError
from app.models.complaint import Complaint, ComplaintStatus, TERMINAL_STATUSES
from app.schemas.complaint import ComplaintStatusPatch

logger = logging.getLogger(__name__)

ASSIGNMENT_FIELDS = ("assigned_to", "assigned_phone", "assigned_email")


def parse_enum(enum_cls, value, field: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError.for_field(field, f"Invalid {field} '{value}'. Allowed values: {allowed}")


def parse_status(value) -> ComplaintStatus:
    if value is None or value == "":
        raise ValidationError.for_field("status", "status is required")
    return parse_enum(ComplaintStatus, value, "status")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def apply_status_update(
    complaint: Complaint,
    patch: ComplaintStatusPatch,
    now: Optional[datetime] = None,
    require_notes: Optional[bool] = None,
) -> Complaint:
    """Mutate ``complaint`` in place according to ``patch``. Nothing is persisted here."""
    new_status = parse_status(patch.status)
    now = now or datetime.now(timezone.utc)
    if require_notes is None:
        require_notes = settings.require_resolution_notes

    fields = patch.model_fields_set
    notes = _clean(patch.resolution_notes) if "resolution_notes" in fields else complaint.resolution_notes
    if require_notes and new_status in TERMINAL_STATUSES and not notes:
        raise ValidationError.for_field(
            "resolution_notes", f"resolution_notes are required when marking a complaint {new_status.value}"
        )

    previous = complaint.status
    complaint.status = new_status
    if new_status != previous and new_status != ComplaintStatus.submitted:
        complaint.action_date = now

    if "resolution_notes" in fields:
        complaint.resolution_notes = notes
    for name in ASSIGNMENT_FIELDS:
        if name in fields:
            value = getattr(patch, name)
            setattr(complaint, name, _clean(str(value)) if value is not None else None)

    complaint.updated_at = now
    if previous != new_status:
        logger.info(
            "Complaint %s status %s -> %s",
            complaint.complaint_number,
            previous.value if previous else None,
            new_status.value,
        )
    return complaint
