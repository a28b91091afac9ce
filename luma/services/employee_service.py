"""
Employee Service - profile CRUD and the manager team view.

Business rules:
    - email is validated (no deliverability check) and normalised.
    - email and employee_id are unique across the organisation.
    - employee_role / office_location come from fixed lists.
    - manager_id must reference an existing profile and never the profile itself.
    - A profile with course requests cannot be deleted.
"""

from __future__ import annotations

import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import func, or_, select

from luma.core.exceptions import (
    ConflictError,
    NotFoundError,
    StateConflictError,
    ValidationError,
)
from luma.models import db
from luma.models.course_request import CourseRequest
from luma.models.profile import EMPLOYEE_ROLES, OFFICE_LOCATIONS, Profile

logger = logging.getLogger(__name__)

_EDITABLE = ("employee_id", "name", "email", "employee_role", "office_location", "manager_id", "user_id")


# ═══════════════════════════════════════════════════════════════
# Validation helpers
# ═══════════════════════════════════════════════════════════════
def _normalise_email(email: str) -> str:
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise ValidationError(f"Invalid email: {e}", details={"email": "invalid"}) from None


def _check_unique(field: str, value, exclude_id: str | None = None) -> None:
    stmt = select(Profile.id).where(getattr(Profile, field) == value)
    if exclude_id:
        stmt = stmt.where(Profile.id != exclude_id)
    if db.session.execute(stmt).first():
        raise ConflictError("Profile", field, value)


def _clean(data: dict, profile_id: str | None = None) -> dict:
    """Validate and normalise editable fields present in ``data``."""
    out = {}
    for key in _EDITABLE:
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, str):
            value = value.strip()
        out[key] = value if value != "" else None

    for required in ("employee_id", "name", "email"):
        if required in out and not out[required]:
            raise ValidationError(f"{required} cannot be empty", details={required: "required"})

    if out.get("email"):
        out["email"] = _normalise_email(out["email"])

    if "employee_role" in out:
        out["employee_role"] = out["employee_role"] or "Intern"
        if out["employee_role"] not in EMPLOYEE_ROLES:
            raise ValidationError(
                f"Invalid employee_role '{out['employee_role']}'",
                details={"employee_role": "invalid", "allowed": list(EMPLOYEE_ROLES)},
            )
    if "office_location" in out:
        out["office_location"] = out["office_location"] or OFFICE_LOCATIONS[0]
        if out["office_location"] not in OFFICE_LOCATIONS:
            raise ValidationError(
                f"Invalid office_location '{out['office_location']}'",
                details={"office_location": "invalid", "allowed": list(OFFICE_LOCATIONS)},
            )

    manager_id = out.get("manager_id")
    if manager_id:
        if profile_id and manager_id == profile_id:
            raise ValidationError("An employee cannot be their own manager", details={"manager_id": "self"})
        if db.session.get(Profile, manager_id) is None:
            raise ValidationError("Manager does not exist", details={"manager_id": "not_found"})
    return out


# ═══════════════════════════════════════════════════════════════
# CRUD
# ═══════════════════════════════════════════════════════════════
def list_employees(search: str | None = None) -> list[dict]:
    """All profiles ordered by name, optionally filtered by name/email/employee id."""
    stmt = select(Profile).order_by(Profile.name)
    term = (search or "").strip().lower()
    if term:
        like = f"%{term}%"
        stmt = stmt.where(or_(
            func.lower(Profile.name).like(like),
            func.lower(Profile.email).like(like),
            func.lower(Profile.employee_id).like(like),
        ))
    result = []
    for p in db.session.execute(stmt).scalars().all():
        d = p.to_dict()
        d["manager_name"] = p.manager.name if p.manager else None
        result.append(d)
    return result


def get_employee(profile_id: str) -> dict:
    profile = db.session.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError(resource="Profile", resource_id=profile_id)
    d = profile.to_dict()
    d["manager_name"] = profile.manager.name if profile.manager else None
    return d


def create_employee(data: dict) -> dict:
    """Create a profile. employee_id, name and email are required."""
    missing = [f for f in ("employee_id", "name", "email") if not str(data.get(f) or "").strip()]
    if missing:
        raise ValidationError(
            "Missing required fields: " + ", ".join(missing),
            details={f: "required" for f in missing},
        )
    fields = _clean(data)
    _check_unique("email", fields["email"])
    _check_unique("employee_id", fields["employee_id"])
    if fields.get("user_id"):
        _check_unique("user_id", fields["user_id"])

    profile = Profile(**fields)
    db.session.add(profile)
    db.session.commit()
    logger.info("Employee created", extra={"profile_id": profile.id})
    return profile.to_dict()


def update_employee(profile_id: str, data: dict) -> dict:
    profile = db.session.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError(resource="Profile", resource_id=profile_id)

    fields = _clean(data, profile_id=profile_id)
    if fields.get("email") and fields["email"] != profile.email:
        _check_unique("email", fields["email"], exclude_id=profile_id)
    if fields.get("employee_id") and fields["employee_id"] != profile.employee_id:
        _check_unique("employee_id", fields["employee_id"], exclude_id=profile_id)
    if fields.get("user_id") and fields["user_id"] != profile.user_id:
        _check_unique("user_id", fields["user_id"], exclude_id=profile_id)

    for key, value in fields.items():
        setattr(profile, key, value)
    db.session.commit()
    logger.info("Employee updated", extra={"profile_id": profile_id})
    return profile.to_dict()


def delete_employee(profile_id: str) -> None:
    profile = db.session.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError(resource="Profile", resource_id=profile_id)

    request_count = db.session.execute(
        select(func.count(CourseRequest.id)).where(CourseRequest.requester_id == profile_id)
    ).scalar_one()
    if request_count:
        raise StateConflictError(
            f"Profile has {request_count} course request(s) and cannot be deleted"
        )

    db.session.delete(profile)
    db.session.commit()
    logger.info("Employee deleted", extra={"profile_id": profile_id})


# ═══════════════════════════════════════════════════════════════
# Team view
# ═══════════════════════════════════════════════════════════════
def team_overview(manager_id: str) -> list[dict]:
    """Direct reports of ``manager_id`` with pending/approved request counts."""
    reports = db.session.execute(
        select(Profile).where(Profile.manager_id == manager_id).order_by(Profile.name)
    ).scalars().all()
    if not reports:
        return []

    counts = db.session.execute(
        select(CourseRequest.requester_id, CourseRequest.status, func.count(CourseRequest.id))
        .where(CourseRequest.requester_id.in_([r.id for r in reports]))
        .group_by(CourseRequest.requester_id, CourseRequest.status)
    ).all()
    by_member: dict[str, dict[str, int]] = {}
    for requester_id, status, n in counts:
        by_member.setdefault(requester_id, {})[status] = n

    result = []
    for r in reports:
        d = r.to_dict()
        member_counts = by_member.get(r.id, {})
        d["pending_requests"] = member_counts.get("pending", 0)
        d["approved_requests"] = member_counts.get("approved", 0)
        result.append(d)
    return result
