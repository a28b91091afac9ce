"""
Course Approval Workflow Service.

Owns the lifecycle of a CourseRequest:

    submit  -> pending            (manager snapshot + mail composition)
    approve -> pending → approved
    reject  -> pending → rejected
    mark_reimbursed               (approved requests only)

Design decisions:
    - The requester's manager is resolved once, at submit time, and stored on
      the row. Later org-chart changes never reroute a request.
    - The request is persisted before any mail is composed. A failed insert
      raises PersistenceError and nothing is composed.
    - LUMA does not deliver mail. The composition is returned to the caller
      and, when a mail opener is configured (CLI), handed to it. Opener
      failures are logged, never raised: the request already exists.
    - approved/rejected are terminal. Reviewing a terminal request raises
      StateConflictError and leaves the row untouched.
    - A reviewer, when given, must be the snapshotted manager or an admin.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable, Mapping

from luma.core.exceptions import (
    NotFoundError,
    PermissionDenied,
    StateConflictError,
    ValidationError,
)
from luma.models.course_request import REQUEST_STATUSES, validate_request_transition
from luma.repositories.base import RepositoryBundle
from luma.services.mail_compose import MailComposition
from luma.services.template_renderer import render

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_NAME = "Course Approval Request"
CENTS = Decimal("0.01")
MAX_COST = Decimal("100000000")

FALLBACK_SUBJECT = "Course Approval Request: {{course_name}}"
FALLBACK_BODY = (
    "Hello,\n"
    "\n"
    "{{employee_name}} has requested approval for the following course:\n"
    "\n"
    "Course: {{course_name}}\n"
    "Provider: {{course_provider}}\n"
    "Estimated Cost: {{estimated_cost}}\n"
    "\n"
    "Reason:\n"
    "{{reason}}\n"
    "\n"
    "Please review this request in LUMA.\n"
    "\n"
    "Thank you."
)


@dataclass
class SubmissionResult:
    """Outcome of ``ApprovalWorkflow.submit``."""

    request: dict
    composition: MailComposition | None = None
    awaiting_manager: bool = False

    def to_dict(self) -> dict:
        return {
            "request": self.request,
            "mail": self.composition.to_dict() if self.composition else None,
            "awaiting_manager": self.awaiting_manager,
        }


def _first(mapping: Mapping, *keys):
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return None


def _parse_cost(raw) -> Decimal | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise ValidationError("estimated_cost must be a number", details={"estimated_cost": "invalid"})
    try:
        value = Decimal(str(raw).replace("$", "").replace(",", "").strip())
    except InvalidOperation:
        raise ValidationError(
            "estimated_cost must be a number", details={"estimated_cost": "invalid"}
        ) from None
    if not value.is_finite() or value < 0:
        raise ValidationError(
            "estimated_cost must be a non-negative number", details={"estimated_cost": "invalid"}
        )
    # estimated_cost column is NUMERIC(10, 2)
    if value >= MAX_COST:
        raise ValidationError(
            "estimated_cost is too large", details={"estimated_cost": "invalid"}
        )
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


class ApprovalWorkflow:
    """Submit and review course requests against a repository bundle.

    Args:
        repositories: profiles / requests / templates stores.
        mail_opener: Optional callable receiving the ``mailto:`` URI.
        clock: Optional zero-arg callable returning an aware datetime.
        template_name: Name of the email template used for approval mail.
    """

    def __init__(
        self,
        repositories: RepositoryBundle,
        mail_opener: Callable[[str], object] | None = None,
        clock: Callable[[], datetime] | None = None,
        template_name: str = DEFAULT_TEMPLATE_NAME,
    ):
        self.repos = repositories
        self.mail_opener = mail_opener
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.template_name = template_name

    # ── Submission ───────────────────────────────────────────────────────

    def submit(
        self,
        requester_profile_id: str,
        course: Mapping,
        reason: str | None,
        course_url: str | None = None,
    ) -> SubmissionResult:
        """Persist a pending request and prepare the manager notification.

        Raises:
            ValidationError: course name or provider missing, bad cost.
            NotFoundError: unknown requester.
            PersistenceError: the store rejected the insert.
        """
        course = course or {}
        course_name = str(_first(course, "course_name", "title") or "").strip()
        course_provider = str(_first(course, "course_provider", "provider") or "").strip()
        details = {}
        if not course_name:
            details["course_name"] = "required"
        if not course_provider:
            details["course_provider"] = "required"
        if details:
            raise ValidationError("Course name and provider are required", details=details)
        estimated_cost = _parse_cost(_first(course, "estimated_cost", "price"))

        requester = self.repos.profiles.get(requester_profile_id)
        if requester is None:
            raise NotFoundError(resource="Profile", resource_id=requester_profile_id)

        manager = self.repos.profiles.get(requester.get("manager_id"))

        created = self.repos.requests.create({
            "requester_id": requester["id"],
            "manager_id": manager["id"] if manager else None,
            "course_name": course_name,
            "course_provider": course_provider,
            "course_url": (course_url or course.get("course_url") or "").strip() or None,
            "estimated_cost": float(estimated_cost) if estimated_cost is not None else None,
            "reason": (reason or "").strip() or None,
        })

        logger.info(
            "Course request submitted",
            extra={
                "course_request_id": created["id"],
                "profile_id": requester["id"],
                "request_status": created["status"],
                "has_manager": manager is not None,
            },
        )

        if manager is None:
            return SubmissionResult(request=created, awaiting_manager=True)

        if not (manager.get("email") or "").strip():
            logger.warning(
                "Manager has no email; approval mail not composed",
                extra={"course_request_id": created["id"], "profile_id": manager["id"]},
            )
            return SubmissionResult(request=created)

        composition = self._compose(requester, manager, created, estimated_cost)
        self._open(composition, created["id"])
        return SubmissionResult(request=created, composition=composition)

    def _compose(
        self, requester: dict, manager: dict, req: dict, estimated_cost: Decimal | None
    ) -> MailComposition:
        context = {
            "employee_name": requester.get("name"),
            "course_name": req["course_name"],
            "course_provider": req["course_provider"],
            "estimated_cost": estimated_cost,
            "reason": req.get("reason"),
        }
        template = self.repos.templates.get_by_name(self.template_name)
        if template:
            return MailComposition(
                to=manager["email"],
                subject=render(template.get("subject"), context),
                body=render(template.get("body"), context),
                cc=template.get("cc") or None,
                bcc=template.get("bcc") or None,
                template_name=template["name"],
            )
        return MailComposition(
            to=manager["email"],
            subject=render(FALLBACK_SUBJECT, context),
            body=render(FALLBACK_BODY, context),
        )

    def _open(self, composition: MailComposition, request_id: str) -> None:
        if self.mail_opener is None:
            return
        try:
            self.mail_opener(composition.mailto_uri)
        except Exception:
            logger.exception(
                "Mail opener failed; request was saved",
                extra={"course_request_id": request_id},
            )

    # ── Review ───────────────────────────────────────────────────────────

    def approve(self, request_id: str, reviewer: dict | None = None, notes: str | None = None) -> dict:
        """Move a pending request to ``approved``."""
        return self._review(request_id, "approved", reviewer, notes)

    def reject(self, request_id: str, reviewer: dict | None = None, notes: str | None = None) -> dict:
        """Move a pending request to ``rejected``."""
        return self._review(request_id, "rejected", reviewer, notes)

    def _review(self, request_id, new_status, reviewer, notes):
        req = self._get_or_raise(request_id)
        self._check_reviewer(req, reviewer, "approve_request")

        old_status = req["status"]
        if not validate_request_transition(old_status, new_status):
            raise StateConflictError(
                f"Cannot move course request from '{old_status}' to '{new_status}'",
                current_state=old_status,
            )

        updated = self.repos.requests.update(request_id, {
            "status": new_status,
            "reviewed_at": self.clock(),
            "reviewer_notes": (notes or "").strip() or None,
        })
        logger.info(
            "Course request reviewed",
            extra={
                "course_request_id": request_id,
                "profile_id": reviewer.get("id") if reviewer else None,
                "request_status": new_status,
            },
        )
        return updated

    def mark_reimbursed(
        self,
        request_id: str,
        proof_of_completion: str | None = None,
        reviewer: dict | None = None,
    ) -> dict:
        """Flag an approved request as reimbursed, optionally with a proof URL."""
        req = self._get_or_raise(request_id)
        self._check_reviewer(req, reviewer, "mark_reimbursed")
        if req["status"] != "approved":
            raise StateConflictError(
                "Only approved course requests can be reimbursed",
                current_state=req["status"],
            )
        updated = self.repos.requests.update(request_id, {
            "reimbursement_completed": True,
            "proof_of_completion": (proof_of_completion or "").strip() or None,
        })
        logger.info(
            "Course request reimbursed",
            extra={"course_request_id": request_id, "request_status": updated["status"]},
        )
        return updated

    def _get_or_raise(self, request_id):
        req = self.repos.requests.get(request_id)
        if req is None:
            raise NotFoundError(resource="CourseRequest", resource_id=request_id)
        return req

    def _check_reviewer(self, req: dict, reviewer: dict | None, action: str) -> None:
        if reviewer is None:
            return
        if req.get("manager_id") and reviewer.get("id") == req["manager_id"]:
            return
        if reviewer.get("is_admin") or self.repos.profiles.is_admin(reviewer.get("user_id")):
            return
        raise PermissionDenied(action, reviewer.get("name") or reviewer.get("id"))

    # ── Queries ──────────────────────────────────────────────────────────

    @staticmethod
    def _check_status(status):
        if status is not None and status not in REQUEST_STATUSES:
            raise ValidationError(
                f"Invalid status '{status}'. Must be one of: {', '.join(sorted(REQUEST_STATUSES))}",
                details={"status": "invalid"},
            )

    def list_for_requester(self, requester_id: str, status: str | None = None) -> list[dict]:
        self._check_status(status)
        return self.repos.requests.list(requester_id=requester_id, status=status)

    def list_for_manager(self, manager_id: str, status: str | None = None) -> list[dict]:
        self._check_status(status)
        return self.repos.requests.list(manager_id=manager_id, status=status)

    def list_all(self, status: str | None = None) -> list[dict]:
        self._check_status(status)
        return self.repos.requests.list(status=status)

    def get(self, request_id: str) -> dict:
        return self._get_or_raise(request_id)


def build_approval_workflow(mail_opener=None) -> ApprovalWorkflow:
    """Construct the workflow for the current Flask app."""
    from flask import current_app

    from luma.repositories import get_repositories

    return ApprovalWorkflow(
        get_repositories(),
        mail_opener=mail_opener,
        template_name=current_app.config.get("COURSE_APPROVAL_TEMPLATE_NAME", DEFAULT_TEMPLATE_NAME),
    )
