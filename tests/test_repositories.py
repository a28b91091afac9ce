"""
Repository tests: SQL request store behaviour, filter parity between
backends, and backend selection.
"""
import pytest

from luma.core.exceptions import NotFoundError, PersistenceError, ValidationError
from luma.repositories import get_repositories
from luma.repositories.memory import InMemoryCourseRequestRepository, memory_repositories
from luma.repositories.sql import (
    SqlCourseRequestRepository,
    SqlEmailTemplateRepository,
    SqlProfileRepository,
)


def _row(requester_id, manager_id=None, **kw):
    row = {
        "requester_id": requester_id,
        "manager_id": manager_id,
        "course_name": "AWS Solutions Architect Certification",
        "course_provider": "Udemy",
        "estimated_cost": 199.99,
        "reason": "Cloud migration",
    }
    row.update(kw)
    return row


# ═════════════════════════════════════════════════════════════════════════
# SQL REQUEST STORE
# ═════════════════════════════════════════════════════════════════════════

class TestSqlCourseRequestRepository:
    def test_create_forces_pending(self, employee, manager):
        repo = SqlCourseRequestRepository()
        req = repo.create(_row(employee["id"], manager["id"], status="approved"))
        assert req["status"] == "pending"
        assert req["requester_name"] == "John Smith"
        assert req["manager_id"] == manager["id"]
        assert req["estimated_cost"] == 199.99
        assert repo.get(req["id"]) == req

    def test_insert_failure_carries_raw_error(self):
        repo = SqlCourseRequestRepository()
        with pytest.raises(PersistenceError) as exc:
            repo.create(_row("no-such-profile"))
        assert "FOREIGN KEY" in exc.value.raw_error
        assert repo.count() == 0

    def test_update_review_fields(self, employee, manager):
        repo = SqlCourseRequestRepository()
        req = repo.create(_row(employee["id"], manager["id"]))
        updated = repo.update(req["id"], {"status": "rejected", "reviewer_notes": "Not this quarter"})
        assert updated["status"] == "rejected"
        assert updated["reviewer_notes"] == "Not this quarter"
        assert updated["course_name"] == req["course_name"]

    @pytest.mark.parametrize("field, value", [
        ("course_name", "Something else"),
        ("requester_id", "p-other"),
        ("estimated_cost", 1.0),
        ("manager_id", None),
    ])
    def test_immutable_fields_rejected(self, employee, manager, field, value):
        repo = SqlCourseRequestRepository()
        req = repo.create(_row(employee["id"], manager["id"]))
        with pytest.raises(ValidationError) as exc:
            repo.update(req["id"], {field: value})
        assert exc.value.details == {field: "immutable"}
        assert repo.get(req["id"]) == req

    def test_update_unknown(self):
        with pytest.raises(NotFoundError):
            SqlCourseRequestRepository().update("missing", {"status": "approved"})

    def test_list_and_count_filters(self, employee, manager, loner):
        repo = SqlCourseRequestRepository()
        a = repo.create(_row(employee["id"], manager["id"]))
        repo.create(_row(loner["id"]))
        repo.update(a["id"], {"status": "approved"})

        assert repo.count() == 2
        assert repo.count(status="pending") == 1
        assert repo.count(requester_id=employee["id"]) == 1
        assert [r["id"] for r in repo.list(manager_id=manager["id"])] == [a["id"]]
        assert repo.list(status="rejected") == []


# ═════════════════════════════════════════════════════════════════════════
# BACKEND PARITY
# ═════════════════════════════════════════════════════════════════════════

@pytest.fixture(params=["sql", "memory"])
def request_store(request, employee, manager):
    """A request store of either backend holding one pending request from John to Jane."""
    if request.param == "sql":
        repo = SqlCourseRequestRepository()
    else:
        repo = memory_repositories(profiles=[employee, manager]).requests
    repo.create(_row(employee["id"], manager["id"]))
    return repo


class TestFilterParity:
    def test_none_means_unfiltered(self, request_store):
        assert len(request_store.list(status=None, requester_id=None, manager_id=None)) == 1
        assert request_store.count(status=None, requester_id=None) == 1

    @pytest.mark.parametrize("field", ["status", "requester_id", "manager_id"])
    def test_empty_string_matches_nothing(self, request_store, field):
        assert request_store.list(**{field: ""}) == []

    @pytest.mark.parametrize("field", ["status", "requester_id"])
    def test_empty_string_counts_nothing(self, request_store, field):
        assert request_store.count(**{field: ""}) == 0


class TestSqlProfileRepository:
    def test_lookup_and_reports(self, employee, manager, admin):
        repo = SqlProfileRepository()
        jane = repo.get_by_user_id("u-jane")
        assert jane["id"] == manager["id"]
        assert jane["direct_report_count"] == 1
        assert [p["name"] for p in repo.list_reports(manager["id"])] == ["John Smith"]
        assert repo.get(None) is None
        assert repo.get_by_user_id("u-unknown") is None

    def test_is_admin(self, admin, employee):
        repo = SqlProfileRepository()
        assert repo.is_admin("u-ada") is True
        assert repo.is_admin("u-john") is False
        assert repo.is_admin(None) is False


class TestSqlEmailTemplateRepository:
    def test_get_by_name(self, make_template):
        make_template(cc="hr@example.com")
        repo = SqlEmailTemplateRepository()
        tpl = repo.get_by_name("Course Approval Request")
        assert tpl["subject"] == "Approve {{course_name}}"
        assert tpl["cc"] == "hr@example.com"
        assert repo.get_by_name("Missing") is None


# ═════════════════════════════════════════════════════════════════════════
# BACKEND SELECTION
# ═════════════════════════════════════════════════════════════════════════

class TestBackendSelection:
    def test_sql_is_default(self):
        assert isinstance(get_repositories().requests, SqlCourseRequestRepository)

    def test_memory_bundle_is_reused(self, app, monkeypatch):
        monkeypatch.setitem(app.config, "REPOSITORY_BACKEND", "memory")
        monkeypatch.delitem(app.extensions, "luma_memory_repositories", raising=False)
        first = get_repositories()
        assert isinstance(first.requests, InMemoryCourseRequestRepository)
        assert get_repositories() is first

    def test_unknown_backend(self, app, monkeypatch):
        monkeypatch.setitem(app.config, "REPOSITORY_BACKEND", "redis")
        with pytest.raises(RuntimeError):
            get_repositories()
