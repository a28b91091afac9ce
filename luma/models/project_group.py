"""
LUMA Learning Platform
Project group models.

Models:
    - ProjectGroup: named group of employees
    - ProjectGroupMember: (group, profile) membership join row

Membership is unique per (group_id, profile_id).
"""

import uuid
from datetime import datetime, timezone

from luma.models import db


def _uuid():
    return str(uuid.uuid4())


def _utcnow():
    return datetime.now(timezone.utc)


class ProjectGroup(db.Model):
    __tablename__ = "project_groups"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    created_by = db.Column(db.String(64), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    members = db.relationship(
        "ProjectGroupMember",
        backref="group",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProjectGroupMember.created_at",
    )

    def to_dict(self, include_members=True):
        d = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_members:
            d["members"] = [m.to_dict() for m in self.members]
        return d

    def __repr__(self):
        return f"<ProjectGroup {self.name}>"


class ProjectGroupMember(db.Model):
    __tablename__ = "project_group_members"
    __table_args__ = (
        db.UniqueConstraint("group_id", "profile_id", name="uq_group_member"),
    )

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    group_id = db.Column(
        db.String(36), db.ForeignKey("project_groups.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    profile_id = db.Column(
        db.String(36), db.ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)

    profile = db.relationship("Profile")

    def to_dict(self):
        return {
            "id": self.id,
            "group_id": self.group_id,
            "profile_id": self.profile_id,
            "profile": {
                "name": self.profile.name,
                "employee_id": self.profile.employee_id,
            } if self.profile else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
