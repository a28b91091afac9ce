"""
Project Group Service - named groups of employees.

Membership is unique per (group, profile); adding an existing member is a
409 conflict. Deleting a group removes its memberships.
"""

from __future__ import annotations

import logging

from sqlalchemy import select

from luma.core.exceptions import ConflictError, NotFoundError, ValidationError
from luma.models import db
from luma.models.profile import Profile
from luma.models.project_group import ProjectGroup, ProjectGroupMember

logger = logging.getLogger(__name__)


def _get_group(group_id: str) -> ProjectGroup:
    group = db.session.get(ProjectGroup, group_id)
    if group is None:
        raise NotFoundError(resource="ProjectGroup", resource_id=group_id)
    return group


def list_groups() -> list[dict]:
    rows = db.session.execute(
        select(ProjectGroup).order_by(ProjectGroup.created_at.desc())
    ).scalars().all()
    return [g.to_dict() for g in rows]


def get_group(group_id: str) -> dict:
    return _get_group(group_id).to_dict()


def create_group(data: dict, created_by: str | None = None) -> dict:
    name = str(data.get("name") or "").strip()
    if not name:
        raise ValidationError("name is required", details={"name": "required"})
    group = ProjectGroup(
        name=name,
        description=(data.get("description") or "").strip() or None,
        created_by=created_by,
    )
    db.session.add(group)
    db.session.commit()
    logger.info("Project group created: %s", name)
    return group.to_dict()


def update_group(group_id: str, data: dict) -> dict:
    group = _get_group(group_id)
    if "name" in data:
        name = str(data["name"] or "").strip()
        if not name:
            raise ValidationError("name cannot be empty", details={"name": "required"})
        group.name = name
    if "description" in data:
        group.description = (data["description"] or "").strip() or None
    db.session.commit()
    return group.to_dict()


def delete_group(group_id: str) -> None:
    group = _get_group(group_id)
    db.session.delete(group)
    db.session.commit()
    logger.info("Project group deleted: %s", group_id)


def add_member(group_id: str, profile_id: str) -> dict:
    _get_group(group_id)
    if not profile_id:
        raise ValidationError("profile_id is required", details={"profile_id": "required"})
    if db.session.get(Profile, profile_id) is None:
        raise NotFoundError(resource="Profile", resource_id=profile_id)

    existing = db.session.execute(
        select(ProjectGroupMember).where(
            ProjectGroupMember.group_id == group_id,
            ProjectGroupMember.profile_id == profile_id,
        )
    ).scalar_one_or_none()
    if existing:
        raise ConflictError("ProjectGroupMember", "profile_id", profile_id)

    member = ProjectGroupMember(group_id=group_id, profile_id=profile_id)
    db.session.add(member)
    db.session.commit()
    logger.info("Member added to project group", extra={"profile_id": profile_id})
    return member.to_dict()


def remove_member(group_id: str, member_id: str) -> None:
    member = db.session.get(ProjectGroupMember, member_id)
    if member is None or member.group_id != group_id:
        raise NotFoundError(resource="ProjectGroupMember", resource_id=member_id)
    db.session.delete(member)
    db.session.commit()
