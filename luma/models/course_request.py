"""
LUMA Learning Platform
Course request domain model.

A CourseRequest asks the requester's manager to approve (and optionally
reimburse) an external course. The manager is captured when the request is
created and is never re-resolved, so later org-chart changes do not reroute
historical requests.

Status machine:
    pending -> approved | rejected
    approved, rejected -> (terminal)
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from luma.models import db


# ── Constants ────────────────────────────────────────────────────────────────

REQUEST_STATUSES = frozenset({"pending", "approved", "rejected"})
TERMINAL_STATUSES = frozenset({"approved", "rejected"})

REQUEST_TRANSITIONS = {
    "pending":  ["approved", "rejected"],
    "approved": [],
    "rejected": [],
}

# Fields the request store may change after creation. Requester, course and
# cost fields are fixed at submit time.
MUTABLE_FIELDS = frozenset({
    "status",
    "reviewed_at",
    "reviewer_notes",
    "reimbursement_completed",
    "proof_of_completion",
})


def validate_request_transition(old_status, new_status):
    """Return True if CourseRequest status transition is valid."""
    return new_status in REQUEST_TRANSITIONS.get(old_status, [])


def _uuid():
    return str(uuid.uuid4())


def _utcnow():
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value else None


class CourseRequest(db.Model):
    """Employee-initiated course approval request."""

    __tablename__ = "course_requests"
    __table_args__ = (
        db.Index("ix_course_requests_manager_status", "manager_id", "status"),
        db.Index("ix_course_requests_requester", "requester_id"),
    )

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    requester_id = db.Column(
        db.String(36),
        db.ForeignKey("profiles.id"),
        nullable=False,
    )
    manager_id = db.Column(
        db.String(36),
        db.ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
        comment="Snapshot of the requester's manager at submit time",
    )

    course_name = db.Column(db.String(300), nullable=False)
    course_provider = db.Column(db.String(100), nullable=False)
    course_url = db.Column(db.String(500), nullable=True)
    estimated_cost = db.Column(db.Numeric(10, 2), nullable=True)
    reason = db.Column(db.Text, nullable=True)

    status = db.Column(
        db.String(20), nullable=False, default="pending",
        comment="pending | approved | rejected",
    )
    reviewer_notes = db.Column(db.Text, nullable=True)
    reviewed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    reimbursement_completed = db.Column(db.Boolean, nullable=True)
    proof_of_completion = db.Column(db.String(500), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    requester = db.relationship("Profile", foreign_keys=[requester_id])
    manager = db.relationship("Profile", foreign_keys=[manager_id])

    def to_dict(self):
        cost = self.estimated_cost
        if isinstance(cost, Decimal):
            cost = float(cost)
        return {
            "id": self.id,
            "requester_id": self.requester_id,
            "requester_name": self.requester.name if self.requester else None,
            "manager_id": self.manager_id,
            "course_name": self.course_name,
            "course_provider": self.course_provider,
            "course_url": self.course_url,
            "estimated_cost": cost,
            "reason": self.reason,
            "status": self.status,
            "reviewer_notes": self.reviewer_notes,
            "reviewed_at": _iso(self.reviewed_at),
            "reimbursement_completed": self.reimbursement_completed,
            "proof_of_completion": self.proof_of_completion,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def __repr__(self):
        return f"<CourseRequest {self.id} {self.course_name[:30]} [{self.status}]>"
