"""
LUMA Learning Platform
Profile domain model.

Models:
    - Profile: employee identity record (distinct from the auth account)
    - UserRole: application role grant for an auth account (admin | user)

A profile may reference at most one manager profile (self-referential,
nullable). Deleting a manager detaches their reports (ON DELETE SET NULL).
"""

import uuid
from datetime import datetime, timezone

from luma.models import db


# ── Constants ────────────────────────────────────────────────────────────────

EMPLOYEE_ROLES = (
    "Intern",
    "Programmer Analyst Trainee",
    "Programmer Analyst",
    "Business/Technology Analyst",
    "Senior Analyst",
    "AEL",
    "EL",
    "SEL",
    "Director",
    "Executive Director",
)

OFFICE_LOCATIONS = (
    "Cyber Greens, Gurgaon",
    "Managed Services, Gurgaon",
    "Analytics Office, Pune",
)

APP_ROLES = frozenset({"admin", "user"})


def _uuid():
    return str(uuid.uuid4())


def _utcnow():
    return datetime.now(timezone.utc)


class Profile(db.Model):
    """
    Employee profile.

    Business rules:
    - employee_id and email are unique across the organisation.
    - manager_id points to an existing profile or is NULL; never to itself.
    - user_id links to the external auth account once the employee signs in.
    """

    __tablename__ = "profiles"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    user_id = db.Column(
        db.String(64), nullable=True, unique=True,
        comment="Auth account id issued by the identity provider",
    )
    employee_id = db.Column(db.String(30), nullable=False, unique=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True)
    employee_role = db.Column(db.String(50), nullable=False, default="Intern")
    office_location = db.Column(
        db.String(50), nullable=False, default="Cyber Greens, Gurgaon",
    )
    manager_id = db.Column(
        db.String(36),
        db.ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="NULL when the employee has no manager assigned",
    )

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    manager = db.relationship("Profile", remote_side=[id], backref=db.backref("reports", lazy="dynamic"))

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "employee_id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "employee_role": self.employee_role,
            "office_location": self.office_location,
            "manager_id": self.manager_id,
            "direct_report_count": self.reports.count(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Profile {self.employee_id}: {self.name}>"


class UserRole(db.Model):
    """Application role grant. One row per (user_id, role)."""

    __tablename__ = "user_roles"
    __table_args__ = (
        db.UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False, comment="admin | user")
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "role": self.role,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<UserRole {self.user_id}:{self.role}>"
