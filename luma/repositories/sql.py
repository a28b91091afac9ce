"""
SQL repositories - Flask-SQLAlchemy implementations of the workflow stores.

Rules:
  - Every write commits its own unit of work; on failure the session is
    rolled back and PersistenceError carries the backend's raw error text.
  - Reads return ``to_dict()`` payloads, never ORM instances.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from luma.core.exceptions import NotFoundError, PersistenceError
from luma.models import db
from luma.models.course_request import CourseRequest
from luma.models.email_template import EmailTemplate
from luma.models.profile import Profile, UserRole
from luma.repositories.base import (
    CourseRequestRepository,
    EmailTemplateRepository,
    ProfileRepository,
    RepositoryBundle,
)

logger = logging.getLogger(__name__)


def _commit(operation: str) -> None:
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raw = str(getattr(exc, "orig", None) or exc)
        logger.error("%s failed: %s", operation, raw)
        raise PersistenceError(operation, raw) from exc


class SqlProfileRepository(ProfileRepository):
    def get(self, profile_id):
        if not profile_id:
            return None
        profile = db.session.get(Profile, profile_id)
        return profile.to_dict() if profile else None

    def get_by_user_id(self, user_id):
        if not user_id:
            return None
        profile = db.session.execute(
            select(Profile).where(Profile.user_id == user_id)
        ).scalar_one_or_none()
        return profile.to_dict() if profile else None

    def list_reports(self, manager_id):
        rows = db.session.execute(
            select(Profile).where(Profile.manager_id == manager_id).order_by(Profile.name)
        ).scalars().all()
        return [p.to_dict() for p in rows]

    def is_admin(self, user_id):
        if not user_id:
            return False
        grant = db.session.execute(
            select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == "admin")
        ).first()
        return grant is not None


class SqlEmailTemplateRepository(EmailTemplateRepository):
    def get_by_name(self, name):
        tpl = db.session.execute(
            select(EmailTemplate).where(EmailTemplate.name == name)
        ).scalar_one_or_none()
        return tpl.to_dict() if tpl else None


class SqlCourseRequestRepository(CourseRequestRepository):
    _CREATE_FIELDS = (
        "requester_id",
        "manager_id",
        "course_name",
        "course_provider",
        "course_url",
        "estimated_cost",
        "reason",
    )

    def create(self, row):
        req = CourseRequest(**{k: row.get(k) for k in self._CREATE_FIELDS})
        req.status = "pending"
        db.session.add(req)
        _commit("Course request insert")
        return req.to_dict()

    def get(self, request_id):
        req = db.session.get(CourseRequest, request_id)
        return req.to_dict() if req else None

    def list(self, *, status=None, requester_id=None, manager_id=None):
        stmt = select(CourseRequest)
        if status is not None:
            stmt = stmt.where(CourseRequest.status == status)
        if requester_id is not None:
            stmt = stmt.where(CourseRequest.requester_id == requester_id)
        if manager_id is not None:
            stmt = stmt.where(CourseRequest.manager_id == manager_id)
        stmt = stmt.order_by(CourseRequest.created_at.desc())
        return [r.to_dict() for r in db.session.execute(stmt).scalars().all()]

    def update(self, request_id, fields):
        self.check_mutable(fields)
        req = db.session.get(CourseRequest, request_id)
        if req is None:
            raise NotFoundError(resource="CourseRequest", resource_id=request_id)
        for key, value in fields.items():
            setattr(req, key, value)
        req.updated_at = datetime.now(timezone.utc)
        _commit("Course request update")
        return req.to_dict()

    def count(self, *, status=None, requester_id=None):
        stmt = select(func.count(CourseRequest.id))
        if status is not None:
            stmt = stmt.where(CourseRequest.status == status)
        if requester_id is not None:
            stmt = stmt.where(CourseRequest.requester_id == requester_id)
        return db.session.execute(stmt).scalar_one()


def sql_repositories() -> RepositoryBundle:
    return RepositoryBundle(
        profiles=SqlProfileRepository(),
        requests=SqlCourseRequestRepository(),
        templates=SqlEmailTemplateRepository(),
    )
