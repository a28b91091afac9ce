"""
In-memory repositories - deterministic test double for the workflow stores.

Rows are kept as dicts shaped exactly like the SQL variant's ``to_dict()``
output. Every read returns a copy so callers cannot mutate stored state.
``fail_next_insert`` simulates a backend write failure.
"""

from __future__ import annotations

import copy
import itertools
import uuid
from datetime import datetime, timezone

from luma.core.exceptions import NotFoundError, PersistenceError
from luma.repositories.base import (
    CourseRequestRepository,
    EmailTemplateRepository,
    ProfileRepository,
    RepositoryBundle,
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryProfileRepository(ProfileRepository):
    def __init__(self, profiles=None, admin_user_ids=None):
        self._rows: dict[str, dict] = {}
        self._admins: set[str] = set(admin_user_ids or ())
        for p in profiles or ():
            self.add(p)

    def add(self, profile: dict) -> dict:
        row = {
            "id": profile.get("id") or str(uuid.uuid4()),
            "user_id": profile.get("user_id"),
            "employee_id": profile.get("employee_id", ""),
            "name": profile.get("name", ""),
            "email": profile.get("email", ""),
            "employee_role": profile.get("employee_role", "Intern"),
            "office_location": profile.get("office_location", "Cyber Greens, Gurgaon"),
            "manager_id": profile.get("manager_id"),
            "created_at": _now_iso(),
            "updated_at": _now_iso(),
        }
        self._rows[row["id"]] = row
        return self.get(row["id"])

    def set_manager(self, profile_id: str, manager_id: str | None) -> None:
        self._rows[profile_id]["manager_id"] = manager_id
        self._rows[profile_id]["updated_at"] = _now_iso()

    def grant_admin(self, user_id: str) -> None:
        self._admins.add(user_id)

    def _with_counts(self, row: dict) -> dict:
        out = copy.deepcopy(row)
        out["direct_report_count"] = sum(
            1 for r in self._rows.values() if r["manager_id"] == row["id"]
        )
        return out

    def get(self, profile_id):
        row = self._rows.get(profile_id) if profile_id else None
        return self._with_counts(row) if row else None

    def get_by_user_id(self, user_id):
        if not user_id:
            return None
        for row in self._rows.values():
            if row["user_id"] == user_id:
                return self._with_counts(row)
        return None

    def list_reports(self, manager_id):
        rows = [r for r in self._rows.values() if r["manager_id"] == manager_id]
        return [self._with_counts(r) for r in sorted(rows, key=lambda r: r["name"])]

    def is_admin(self, user_id):
        return bool(user_id) and user_id in self._admins


class InMemoryEmailTemplateRepository(EmailTemplateRepository):
    def __init__(self, templates=None):
        self._rows: dict[str, dict] = {}
        for t in templates or ():
            self.add(t)

    def add(self, template: dict) -> dict:
        row = {
            "id": template.get("id") or str(uuid.uuid4()),
            "name": template["name"],
            "subject": template.get("subject", ""),
            "body": template.get("body", ""),
            "cc": template.get("cc"),
            "bcc": template.get("bcc"),
            "created_by": template.get("created_by"),
            "created_at": _now_iso(),
            "updated_at": _now_iso(),
        }
        self._rows[row["name"]] = row
        return copy.deepcopy(row)

    def get_by_name(self, name):
        row = self._rows.get(name)
        return copy.deepcopy(row) if row else None


class InMemoryCourseRequestRepository(CourseRequestRepository):
    def __init__(self, profiles: InMemoryProfileRepository | None = None):
        self._rows: dict[str, dict] = {}
        self._profiles = profiles
        self._seq = itertools.count()
        self.fail_next_insert: str | None = None

    def _requester_name(self, requester_id):
        if self._profiles is None:
            return None
        profile = self._profiles.get(requester_id)
        return profile["name"] if profile else None

    def create(self, row):
        if self.fail_next_insert:
            message, self.fail_next_insert = self.fail_next_insert, None
            raise PersistenceError("Course request insert", message)

        now = _now_iso()
        stored = {
            "id": str(uuid.uuid4()),
            "requester_id": row["requester_id"],
            "requester_name": self._requester_name(row["requester_id"]),
            "manager_id": row.get("manager_id"),
            "course_name": row["course_name"],
            "course_provider": row["course_provider"],
            "course_url": row.get("course_url"),
            "estimated_cost": row.get("estimated_cost"),
            "reason": row.get("reason"),
            "status": "pending",
            "reviewer_notes": None,
            "reviewed_at": None,
            "reimbursement_completed": None,
            "proof_of_completion": None,
            "created_at": now,
            "updated_at": now,
            "_seq": next(self._seq),
        }
        self._rows[stored["id"]] = stored
        return self.get(stored["id"])

    @staticmethod
    def _public(row: dict) -> dict:
        out = copy.deepcopy(row)
        out.pop("_seq", None)
        return out

    def get(self, request_id):
        row = self._rows.get(request_id)
        return self._public(row) if row else None

    def list(self, *, status=None, requester_id=None, manager_id=None):
        rows = [
            r for r in self._rows.values()
            if (status is None or r["status"] == status)
            and (requester_id is None or r["requester_id"] == requester_id)
            and (manager_id is None or r["manager_id"] == manager_id)
        ]
        rows.sort(key=lambda r: r["_seq"], reverse=True)
        return [self._public(r) for r in rows]

    def update(self, request_id, fields):
        self.check_mutable(fields)
        row = self._rows.get(request_id)
        if row is None:
            raise NotFoundError(resource="CourseRequest", resource_id=request_id)
        for key, value in fields.items():
            if isinstance(value, datetime):
                value = value.isoformat()
            row[key] = value
        row["updated_at"] = _now_iso()
        return self._public(row)

    def count(self, *, status=None, requester_id=None):
        return len(self.list(status=status, requester_id=requester_id))


def memory_repositories(profiles=None, templates=None, admin_user_ids=None) -> RepositoryBundle:
    profile_repo = InMemoryProfileRepository(profiles, admin_user_ids)
    return RepositoryBundle(
        profiles=profile_repo,
        requests=InMemoryCourseRequestRepository(profile_repo),
        templates=InMemoryEmailTemplateRepository(templates),
    )
