"""
Repository interfaces for the course-request workflow.

Two variants implement these contracts:
    - ``luma.repositories.sql``    - Flask-SQLAlchemy session (production)
    - ``luma.repositories.memory`` - process-local dicts (deterministic tests)

All methods exchange plain dicts shaped like the models' ``to_dict()`` so the
workflow never depends on which variant it was given.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from luma.core.exceptions import ValidationError
from luma.models.course_request import MUTABLE_FIELDS


class ProfileRepository(ABC):
    """Read access to employee profiles."""

    @abstractmethod
    def get(self, profile_id: str) -> dict | None:
        """Return the profile with ``profile_id`` or None."""

    @abstractmethod
    def get_by_user_id(self, user_id: str) -> dict | None:
        """Return the profile linked to auth account ``user_id`` or None."""

    @abstractmethod
    def list_reports(self, manager_id: str) -> list[dict]:
        """Return profiles whose manager is ``manager_id``, ordered by name."""

    @abstractmethod
    def is_admin(self, user_id: str | None) -> bool:
        """Return True if auth account ``user_id`` holds the admin role."""


class EmailTemplateRepository(ABC):
    """Read access to email templates."""

    @abstractmethod
    def get_by_name(self, name: str) -> dict | None:
        """Return the template whose unique name is ``name`` or None."""


class CourseRequestRepository(ABC):
    """Request Store - create/list/update course requests.

    ``update`` only ever sets status and the review/reimbursement fields;
    requester, course and cost fields are immutable after creation.
    """

    @abstractmethod
    def create(self, row: dict) -> dict:
        """Insert a new request with status ``pending``.

        Raises:
            PersistenceError: the backend rejected the insert. Nothing is stored.
        """

    @abstractmethod
    def get(self, request_id: str) -> dict | None:
        """Return the request or None."""

    @abstractmethod
    def list(
        self,
        *,
        status: str | None = None,
        requester_id: str | None = None,
        manager_id: str | None = None,
    ) -> list[dict]:
        """Return matching requests, newest first. ``None`` filters are not applied."""

    @abstractmethod
    def update(self, request_id: str, fields: dict) -> dict:
        """Apply ``fields`` to an existing request and return it.

        Raises:
            ValidationError: a field outside the mutable set was supplied.
            NotFoundError: no request with ``request_id``.
        """

    @abstractmethod
    def count(self, *, status: str | None = None, requester_id: str | None = None) -> int:
        """Return the number of matching requests."""

    @staticmethod
    def check_mutable(fields: dict) -> None:
        """Reject updates that touch immutable columns."""
        illegal = sorted(set(fields) - MUTABLE_FIELDS)
        if illegal:
            raise ValidationError(
                "Course request fields are immutable after creation: " + ", ".join(illegal),
                details={name: "immutable" for name in illegal},
            )


@dataclass
class RepositoryBundle:
    """The three repositories the approval workflow depends on."""

    profiles: ProfileRepository
    requests: CourseRequestRepository
    templates: EmailTemplateRepository
