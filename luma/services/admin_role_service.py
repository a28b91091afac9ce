"""
Admin Role Service - grant, list and revoke the ``admin`` application role.

Grants are keyed by auth account id (``user_id``), not profile id, so an
account can be made admin before its profile is linked.
"""

from __future__ import annotations

import logging

from sqlalchemy import select

from luma.core.exceptions import ConflictError, NotFoundError, ValidationError
from luma.models import db
from luma.models.profile import Profile, UserRole

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def list_admins() -> list[dict]:
    """Admin grants, newest first, with the linked profile's name/email when known."""
    grants = db.session.execute(
        select(UserRole).where(UserRole.role == ADMIN_ROLE).order_by(UserRole.created_at.desc())
    ).scalars().all()
    user_ids = [g.user_id for g in grants]
    profiles = {}
    if user_ids:
        profiles = {
            p.user_id: p
            for p in db.session.execute(select(Profile).where(Profile.user_id.in_(user_ids))).scalars()
        }
    result = []
    for grant in grants:
        d = grant.to_dict()
        profile = profiles.get(grant.user_id)
        d["name"] = profile.name if profile else None
        d["email"] = profile.email if profile else None
        result.append(d)
    return result


def grant_admin(user_id: str) -> dict:
    user_id = (user_id or "").strip()
    if not user_id:
        raise ValidationError("user_id is required", details={"user_id": "required"})

    existing = db.session.execute(
        select(UserRole).where(UserRole.user_id == user_id, UserRole.role == ADMIN_ROLE)
    ).scalar_one_or_none()
    if existing:
        raise ConflictError("UserRole", "user_id", user_id)

    grant = UserRole(user_id=user_id, role=ADMIN_ROLE)
    db.session.add(grant)
    db.session.commit()
    logger.info("Admin role granted", extra={"user_id": user_id})
    return grant.to_dict()


def revoke_admin(grant_id: str) -> None:
    grant = db.session.get(UserRole, grant_id)
    if grant is None or grant.role != ADMIN_ROLE:
        raise NotFoundError(resource="UserRole", resource_id=grant_id)
    user_id = grant.user_id
    db.session.delete(grant)
    db.session.commit()
    logger.info("Admin role revoked", extra={"user_id": user_id})
