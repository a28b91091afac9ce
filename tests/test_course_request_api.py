"""
Course request API tests.

Tests cover:
  - Identity resolution (401 for missing / unknown caller)
  - Submit by catalog id and by explicit course object
  - Mail composition in the response (fallback and stored template)
  - Manager / admin review, terminal-state conflicts, reviewer checks
  - Reimbursement
  - Listing endpoints and per-request visibility
  - Team overview
"""
import pytest

BASE = "/api/v1/course-requests"


# ── Fixtures ────────────────────────────────────────────────────────────

@pytest.fixture()
def submitted(client, auth, employee):
    res = client.post(BASE, json={"course_id": "1", "reason": "Cloud migration"}, headers=auth(employee))
    assert res.status_code == 201
    return res.get_json()["request"]


@pytest.fixture()
def other_manager(make_profile):
    """Mark Lead manages Rita; unrelated to John's request."""
    mark = make_profile("Mark Lead", "EMP300", "mark.lead@example.com", user_id="u-mark")
    make_profile("Rita Report", "EMP301", "rita.report@example.com", user_id="u-rita",
                 manager_id=mark["id"])
    return mark


# ═════════════════════════════════════════════════════════════════════════
# IDENTITY
# ═════════════════════════════════════════════════════════════════════════

class TestIdentity:
    def test_missing_header(self, client):
        res = client.post(BASE, json={"course_id": "1"})
        assert res.status_code == 401
        assert res.get_json()["code"] == "ERR_UNAUTHENTICATED"

    def test_unknown_account(self, client, auth):
        res = client.get(f"{BASE}/mine", headers=auth("u-ghost"))
        assert res.status_code == 401

    def test_non_json_body(self, client, auth, employee):
        res = client.post(BASE, data="course_id=1", headers=auth(employee),
                          content_type="application/x-www-form-urlencoded")
        assert res.status_code == 415


# ═════════════════════════════════════════════════════════════════════════
# SUBMIT
# ═════════════════════════════════════════════════════════════════════════

class TestSubmit:
    def test_submit_catalog_course(self, client, auth, employee, manager):
        res = client.post(BASE, json={"course_id": "1", "reason": "Cloud migration"}, headers=auth(employee))
        assert res.status_code == 201
        data = res.get_json()
        req = data["request"]
        assert req["status"] == "pending"
        assert req["requester_id"] == employee["id"]
        assert req["manager_id"] == manager["id"]
        assert req["course_name"] == "AWS Solutions Architect Certification"
        assert req["course_provider"] == "Udemy"
        assert req["estimated_cost"] == 199.99
        assert data["awaiting_manager"] is False

        mail = data["mail"]
        assert mail["to"] == "jane.doe@example.com"
        assert mail["subject"] == "Course Approval Request: AWS Solutions Architect Certification"
        assert "John Smith" in mail["body"]
        assert mail["mailto"].startswith("mailto:jane.doe@example.com?subject=")

    def test_submit_explicit_course(self, client, auth, employee):
        res = client.post(BASE, json={
            "course": {"course_name": "Kubernetes Deep Dive", "course_provider": "Pluralsight",
                       "estimated_cost": "49.00"},
            "course_url": "https://example.com/k8s",
        }, headers=auth(employee))
        assert res.status_code == 201
        req = res.get_json()["request"]
        assert req["course_name"] == "Kubernetes Deep Dive"
        assert req["estimated_cost"] == 49.0
        assert "Estimated Cost: 49.00" in res.get_json()["mail"]["body"]
        assert req["course_url"] == "https://example.com/k8s"
        assert req["reason"] is None

    def test_stored_template_used(self, client, auth, employee, make_template):
        make_template(
            subject="Please approve {{course_name}}",
            body="{{employee_name}}: {{reason}}",
            cc="learning@example.com",
        )
        res = client.post(BASE, json={"course_id": "1"}, headers=auth(employee))
        mail = res.get_json()["mail"]
        assert mail["subject"] == "Please approve AWS Solutions Architect Certification"
        assert mail["body"] == "John Smith: N/A"
        assert mail["cc"] == "learning@example.com"
        assert mail["template_name"] == "Course Approval Request"

    def test_no_manager(self, client, auth, loner):
        res = client.post(BASE, json={"course_id": "1"}, headers=auth(loner))
        assert res.status_code == 201
        data = res.get_json()
        assert data["awaiting_manager"] is True
        assert data["mail"] is None
        assert data["request"]["manager_id"] is None

    def test_course_required(self, client, auth, employee):
        res = client.post(BASE, json={"reason": "x"}, headers=auth(employee))
        assert res.status_code == 400
        assert res.get_json()["code"] == "ERR_VALIDATION_REQUIRED"

    def test_unknown_course(self, client, auth, employee):
        res = client.post(BASE, json={"course_id": "999"}, headers=auth(employee))
        assert res.status_code == 404

    def test_missing_provider(self, client, auth, employee):
        res = client.post(BASE, json={"course": {"course_name": "Mystery"}}, headers=auth(employee))
        assert res.status_code == 422
        assert res.get_json()["details"]["course_provider"] == "required"

    def test_body_must_be_object(self, client, auth, employee):
        res = client.post(BASE, json=["1"], headers=auth(employee))
        assert res.status_code == 400

    def test_reason_must_be_string(self, client, auth, employee):
        res = client.post(BASE, json={"course_id": "1", "reason": 42}, headers=auth(employee))
        assert res.status_code == 400


# ═════════════════════════════════════════════════════════════════════════
# REVIEW
# ═════════════════════════════════════════════════════════════════════════

class TestReview:
    def test_manager_approves(self, client, auth, manager, submitted):
        res = client.post(f"{BASE}/{submitted['id']}/approve", json={"notes": "Enjoy"}, headers=auth(manager))
        assert res.status_code == 200
        data = res.get_json()
        assert data["status"] == "approved"
        assert data["reviewer_notes"] == "Enjoy"
        assert data["reviewed_at"] is not None

    def test_approve_without_body(self, client, auth, manager, submitted):
        res = client.post(f"{BASE}/{submitted['id']}/approve", headers=auth(manager))
        assert res.status_code == 200

    def test_manager_rejects(self, client, auth, manager, submitted):
        res = client.post(f"{BASE}/{submitted['id']}/reject", json={}, headers=auth(manager))
        assert res.status_code == 200
        assert res.get_json()["status"] == "rejected"

    def test_terminal_state_conflict(self, client, auth, manager, submitted):
        client.post(f"{BASE}/{submitted['id']}/approve", headers=auth(manager))
        res = client.post(f"{BASE}/{submitted['id']}/reject", headers=auth(manager))
        assert res.status_code == 409
        body = res.get_json()
        assert body["code"] == "ERR_CONFLICT_STATE"
        assert body["details"]["current_state"] == "approved"

        res = client.get(f"{BASE}/{submitted['id']}", headers=auth(manager))
        assert res.get_json()["status"] == "approved"

    def test_employee_cannot_approve(self, client, auth, employee, submitted):
        res = client.post(f"{BASE}/{submitted['id']}/approve", headers=auth(employee))
        assert res.status_code == 403
        assert res.get_json()["details"]["action"] == "approve_request"

    def test_other_manager_cannot_approve(self, client, auth, other_manager, submitted):
        res = client.post(f"{BASE}/{submitted['id']}/approve", headers=auth(other_manager))
        assert res.status_code == 403

    def test_admin_can_approve(self, client, auth, admin, submitted):
        res = client.post(f"{BASE}/{submitted['id']}/approve", headers=auth(admin))
        assert res.status_code == 200

    def test_unknown_request(self, client, auth, manager, employee):
        res = client.post(f"{BASE}/nope/approve", headers=auth(manager))
        assert res.status_code == 404

    def test_notes_must_be_string(self, client, auth, manager, submitted):
        res = client.post(f"{BASE}/{submitted['id']}/reject", json={"notes": 1}, headers=auth(manager))
        assert res.status_code == 400


class TestReimbursement:
    def test_pending_conflict(self, client, auth, manager, submitted):
        res = client.post(f"{BASE}/{submitted['id']}/reimbursement", headers=auth(manager))
        assert res.status_code == 409

    def test_after_approval(self, client, auth, manager, submitted):
        client.post(f"{BASE}/{submitted['id']}/approve", headers=auth(manager))
        res = client.post(
            f"{BASE}/{submitted['id']}/reimbursement",
            json={"proof_of_completion": "https://example.com/cert.pdf"},
            headers=auth(manager),
        )
        assert res.status_code == 200
        data = res.get_json()
        assert data["reimbursement_completed"] is True
        assert data["proof_of_completion"] == "https://example.com/cert.pdf"


# ═════════════════════════════════════════════════════════════════════════
# QUERIES
# ═════════════════════════════════════════════════════════════════════════

class TestQueries:
    def test_mine(self, client, auth, employee, submitted):
        res = client.get(f"{BASE}/mine", headers=auth(employee))
        assert res.status_code == 200
        data = res.get_json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == submitted["id"]

    def test_mine_status_filter(self, client, auth, employee, submitted):
        res = client.get(f"{BASE}/mine?status=approved", headers=auth(employee))
        assert res.get_json()["total"] == 0

    def test_invalid_status(self, client, auth, employee, submitted):
        res = client.get(f"{BASE}/mine?status=archived", headers=auth(employee))
        assert res.status_code == 400

    def test_team_requests(self, client, auth, manager, submitted):
        res = client.get(f"{BASE}/team?status=pending", headers=auth(manager))
        assert res.status_code == 200
        items = res.get_json()["items"]
        assert [r["id"] for r in items] == [submitted["id"]]
        assert items[0]["requester_name"] == "John Smith"

    def test_team_requests_empty_for_employee(self, client, auth, employee, submitted):
        res = client.get(f"{BASE}/team", headers=auth(employee))
        assert res.status_code == 200
        assert res.get_json()["total"] == 0

    def test_all_requests_admin_only(self, client, auth, admin, manager, submitted):
        assert client.get(BASE, headers=auth(manager)).status_code == 403
        res = client.get(BASE, headers=auth(admin))
        assert res.status_code == 200
        assert res.get_json()["total"] == 1

    def test_get_visibility(self, client, auth, employee, manager, admin, other_manager, submitted):
        url = f"{BASE}/{submitted['id']}"
        assert client.get(url, headers=auth(employee)).status_code == 200
        assert client.get(url, headers=auth(manager)).status_code == 200
        assert client.get(url, headers=auth(admin)).status_code == 200
        assert client.get(url, headers=auth(other_manager)).status_code == 403

    def test_get_unknown(self, client, auth, employee):
        assert client.get(f"{BASE}/missing", headers=auth(employee)).status_code == 404


class TestTeam:
    def test_team_overview(self, client, auth, manager, employee, submitted):
        res = client.get("/api/v1/team", headers=auth(manager))
        assert res.status_code == 200
        data = res.get_json()
        assert data["total"] == 1
        member = data["items"][0]
        assert member["name"] == "John Smith"
        assert member["pending_requests"] == 1
        assert member["approved_requests"] == 0


# ═════════════════════════════════════════════════════════════════════════
# SNAPSHOT ROUTING
# ═════════════════════════════════════════════════════════════════════════

class TestReassignedManager:
    """Requests stay with the manager captured at submission."""

    @pytest.fixture()
    def reassigned(self, client, auth, admin, employee, other_manager, submitted):
        res = client.put(
            f"/api/v1/admin/employees/{employee['id']}",
            json={"manager_id": other_manager["id"]},
            headers=auth(admin),
        )
        assert res.status_code == 200
        return submitted

    def test_original_manager_has_no_reports(self, client, auth, manager, reassigned):
        me = client.get("/api/v1/me", headers=auth(manager)).get_json()
        assert me["role"] == "employee"

    def test_original_manager_still_sees_request(self, client, auth, manager, reassigned):
        res = client.get(f"{BASE}/team?status=pending", headers=auth(manager))
        assert res.status_code == 200
        assert [r["id"] for r in res.get_json()["items"]] == [reassigned["id"]]

    def test_original_manager_approves(self, client, auth, manager, reassigned):
        res = client.post(f"{BASE}/{reassigned['id']}/approve", headers=auth(manager))
        assert res.status_code == 200
        assert res.get_json()["status"] == "approved"

    def test_original_manager_rejects(self, client, auth, manager, reassigned):
        res = client.post(f"{BASE}/{reassigned['id']}/reject", json={"notes": "Budget"}, headers=auth(manager))
        assert res.status_code == 200
        assert res.get_json()["status"] == "rejected"

    def test_new_manager_cannot_approve(self, client, auth, other_manager, reassigned):
        res = client.post(f"{BASE}/{reassigned['id']}/approve", headers=auth(other_manager))
        assert res.status_code == 403
        assert client.get(f"{BASE}/team", headers=auth(other_manager)).get_json()["total"] == 0

    def test_dashboard_keeps_pending_approvals(self, client, auth, manager, reassigned):
        stats = client.get("/api/v1/dashboard", headers=auth(manager)).get_json()["stats"]
        assert stats["pending_approvals"] == 1
