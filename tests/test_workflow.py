from datetime import datetime, timezone

import pytest

from app.core.errors import ValidationError
from app.models.complaint import Complaint, ComplaintStatus
from app.schemas.complaint import ComplaintStatusPatch
from app.services.workflow import apply_status_update, parse_status

NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


def make_complaint(status=ComplaintStatus.submitted, **kwargs):
    return Complaint(complaint_number="GP-20261019-0001", status=status, **kwargs)


@pytest.mark.parametrize("value", [s.value for s in ComplaintStatus])
def test_every_listed_status_is_accepted(value):
    complaint = apply_status_update(make_complaint(), ComplaintStatusPatch(status=value), now=NOW)
    assert complaint.status == ComplaintStatus(value)


@pytest.mark.parametrize("value", ["Closed", "resolved", "", "Pending"])
def test_unlisted_status_is_rejected(value):
    complaint = make_complaint()
    with pytest.raises(ValidationError) as exc:
        apply_status_update(complaint, ComplaintStatusPatch(status=value), now=NOW)
    assert exc.value.errors[0]["field"] == "status"
    assert complaint.status == ComplaintStatus.submitted


def test_parse_status_accepts_enum_members():
    assert parse_status(ComplaintStatus.accepted) is ComplaintStatus.accepted


def test_leaving_submitted_stamps_action_date():
    complaint = apply_status_update(make_complaint(), ComplaintStatusPatch(status="Under Review"), now=NOW)
    assert complaint.action_date == NOW
    assert complaint.updated_at == NOW


def test_same_status_keeps_action_date():
    earlier = datetime(2026, 10, 1, tzinfo=timezone.utc)
    complaint = make_complaint(status=ComplaintStatus.accepted, action_date=earlier)
    apply_status_update(complaint, ComplaintStatusPatch(status="Accepted"), now=NOW)
    assert complaint.action_date == earlier


def test_resolved_complaint_can_be_reopened():
    complaint = make_complaint(status=ComplaintStatus.resolved, resolution_notes="Patched")
    apply_status_update(complaint, ComplaintStatusPatch(status="Under Review"), now=NOW)
    assert complaint.status == ComplaintStatus.under_review
    assert complaint.action_date == NOW


def test_back_to_submitted_does_not_restamp():
    earlier = datetime(2026, 10, 1, tzinfo=timezone.utc)
    complaint = make_complaint(status=ComplaintStatus.resolved, action_date=earlier)
    apply_status_update(complaint, ComplaintStatusPatch(status="Submitted"), now=NOW)
    assert complaint.status == ComplaintStatus.submitted
    assert complaint.action_date == earlier


def test_missing_notes_do_not_block_resolution_by_default():
    complaint = apply_status_update(
        make_complaint(), ComplaintStatusPatch(status="Resolved"), now=NOW, require_notes=False
    )
    assert complaint.status == ComplaintStatus.resolved
    assert complaint.resolution_notes is None


@pytest.mark.parametrize("value", ["Resolved", "Rejected"])
def test_strict_mode_requires_notes_for_terminal_states(value):
    complaint = make_complaint()
    with pytest.raises(ValidationError) as exc:
        apply_status_update(complaint, ComplaintStatusPatch(status=value), now=NOW, require_notes=True)
    assert exc.value.errors[0]["field"] == "resolution_notes"
    assert complaint.status == ComplaintStatus.submitted


def test_strict_mode_accepts_new_or_stored_notes():
    complaint = apply_status_update(
        make_complaint(),
        ComplaintStatusPatch(status="Resolved", resolution_notes="  Road resurfaced  "),
        now=NOW,
        require_notes=True,
    )
    assert complaint.resolution_notes == "Road resurfaced"

    stored = make_complaint(status=ComplaintStatus.in_progress, resolution_notes="Duplicate of GP-1")
    apply_status_update(stored, ComplaintStatusPatch(status="Rejected"), now=NOW, require_notes=True)
    assert stored.status == ComplaintStatus.rejected


def test_assignment_is_set_and_cleared_independently_of_status():
    complaint = make_complaint()
    apply_status_update(
        complaint,
        ComplaintStatusPatch(
            status="Accepted",
            assigned_to="Ward Engineer",
            assigned_phone="9800000000",
            assigned_email="engineer@example.com",
        ),
        now=NOW,
    )
    assert complaint.assigned_to == "Ward Engineer"
    assert complaint.assigned_email == "engineer@example.com"

    # omitted fields are left alone
    apply_status_update(complaint, ComplaintStatusPatch(status="In Progress"), now=NOW)
    assert complaint.assigned_to == "Ward Engineer"

    # explicit nulls clear
    apply_status_update(
        complaint,
        ComplaintStatusPatch(status="In Progress", assigned_to=None, assigned_phone=None, assigned_email=None),
        now=NOW,
    )
    assert complaint.assigned_to is None
    assert complaint.assigned_phone is None
    assert complaint.assigned_email is None
