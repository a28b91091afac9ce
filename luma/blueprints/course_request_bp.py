"""
Course Request Blueprint - submit and review course approval requests.

Endpoints:
    POST /api/v1/course-requests                      - submit (201)
    GET  /api/v1/course-requests/mine                 - caller's own requests
    GET  /api/v1/course-requests/team?status=         - requests routed to caller
    GET  /api/v1/course-requests?status=              - all requests (admin)
    GET  /api/v1/course-requests/<id>                 - single request
    POST /api/v1/course-requests/<id>/approve         - pending → approved
    POST /api/v1/course-requests/<id>/reject          - pending → rejected
    POST /api/v1/course-requests/<id>/reimbursement   - mark approved request reimbursed
    GET  /api/v1/team                                 - caller's direct reports

Layer contract:
    - Shape validation here (400); business rules in the workflow (422/409/403).
    - Review endpoints only require a known caller; the workflow admits the
      request's snapshotted manager or an admin, so a manager whose reports
      have moved keeps the requests already routed to them.
    - No ORM calls here.
"""

import logging

from flask import Blueprint, g, jsonify, request

from luma.auth import require_capability, require_profile
from luma.models.course_request import REQUEST_STATUSES
from luma.services import catalog_service, employee_service
from luma.services.approval_workflow import build_approval_workflow
from luma.services.permissions import can
from luma.utils.errors import E, api_error

logger = logging.getLogger(__name__)

course_request_bp = Blueprint("course_requests", __name__, url_prefix="/api/v1")


# ── Private helpers ───────────────────────────────────────────────────────────


def _status_arg():
    """Return (status, err_response) from the ?status= query parameter."""
    status = (request.args.get("status") or "").strip().lower() or None
    if status and status not in REQUEST_STATUSES:
        return None, api_error(
            E.VALIDATION_INVALID,
            f"status must be one of {sorted(REQUEST_STATUSES)}",
        )
    return status, None


def _review_body():
    """Return (data, err_response) for approve/reject/reimbursement bodies."""
    data = request.get_json(silent=True)
    if data is None:
        return {}, None
    if not isinstance(data, dict):
        return None, api_error(E.VALIDATION_INVALID, "Request body must be a JSON object")
    notes = data.get("notes")
    if notes is not None and not isinstance(notes, str):
        return None, api_error(E.VALIDATION_INVALID, "notes must be a string")
    return data, None


# ── Submission ────────────────────────────────────────────────────────────────


@course_request_bp.route("/course-requests", methods=["POST"])
@require_capability("submit_request")
def submit_request():
    """Submit a course request for the caller.

    Body: { course_id } or { course: {course_name, course_provider, estimated_cost} },
          plus optional reason and course_url.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return api_error(E.VALIDATION_INVALID, "Request body must be a JSON object")

    course_id = data.get("course_id")
    course = data.get("course")
    if course_id is None and course is None:
        return api_error(E.VALIDATION_REQUIRED, "course_id or course is required")
    if course is not None and not isinstance(course, dict):
        return api_error(E.VALIDATION_INVALID, "course must be an object")
    for field in ("reason", "course_url"):
        if data.get(field) is not None and not isinstance(data[field], str):
            return api_error(E.VALIDATION_INVALID, f"{field} must be a string")

    if course_id is not None:
        course = catalog_service.get_course(str(course_id))

    result = build_approval_workflow().submit(
        g.current_profile["id"],
        course,
        data.get("reason"),
        course_url=data.get("course_url"),
    )
    return jsonify(result.to_dict()), 201


# ── Queries ───────────────────────────────────────────────────────────────────


@course_request_bp.route("/course-requests/mine", methods=["GET"])
@require_profile
def my_requests():
    status, err = _status_arg()
    if err:
        return err
    items = build_approval_workflow().list_for_requester(g.current_profile["id"], status)
    return jsonify({"items": items, "total": len(items)})


@course_request_bp.route("/course-requests/team", methods=["GET"])
@require_profile
def team_requests():
    """Requests whose snapshotted manager is the caller, whatever the current org chart says."""
    status, err = _status_arg()
    if err:
        return err
    items = build_approval_workflow().list_for_manager(g.current_profile["id"], status)
    return jsonify({"items": items, "total": len(items)})


@course_request_bp.route("/course-requests", methods=["GET"])
@require_capability("review_any_request")
def all_requests():
    status, err = _status_arg()
    if err:
        return err
    items = build_approval_workflow().list_all(status)
    return jsonify({"items": items, "total": len(items)})


@course_request_bp.route("/course-requests/<request_id>", methods=["GET"])
@require_profile
def get_request(request_id):
    req = build_approval_workflow().get(request_id)
    me = g.current_profile
    if me["id"] not in (req["requester_id"], req["manager_id"]) and not can(me, "review_any_request"):
        return api_error(E.FORBIDDEN, "You cannot view this course request")
    return jsonify(req)


# ── Review ────────────────────────────────────────────────────────────────────


@course_request_bp.route("/course-requests/<request_id>/approve", methods=["POST"])
@require_profile
def approve_request(request_id):
    data, err = _review_body()
    if err:
        return err
    req = build_approval_workflow().approve(request_id, reviewer=g.current_profile, notes=data.get("notes"))
    return jsonify(req)


@course_request_bp.route("/course-requests/<request_id>/reject", methods=["POST"])
@require_profile
def reject_request(request_id):
    data, err = _review_body()
    if err:
        return err
    req = build_approval_workflow().reject(request_id, reviewer=g.current_profile, notes=data.get("notes"))
    return jsonify(req)


@course_request_bp.route("/course-requests/<request_id>/reimbursement", methods=["POST"])
@require_profile
def mark_reimbursed(request_id):
    """Body: { proof_of_completion? }"""
    data, err = _review_body()
    if err:
        return err
    proof = data.get("proof_of_completion")
    if proof is not None and not isinstance(proof, str):
        return api_error(E.VALIDATION_INVALID, "proof_of_completion must be a string")
    req = build_approval_workflow().mark_reimbursed(request_id, proof, reviewer=g.current_profile)
    return jsonify(req)


# ── Team ──────────────────────────────────────────────────────────────────────


@course_request_bp.route("/team", methods=["GET"])
@require_capability("view_team")
def my_team():
    members = employee_service.team_overview(g.current_profile["id"])
    return jsonify({"items": members, "total": len(members)})
