"""
Learning Blueprint - catalog, roadmaps, certifications, org tracker,
learner dashboard and the caller's own profile.

Endpoints:
    GET /api/v1/me
    GET /api/v1/courses?search=&category=&provider=
    GET /api/v1/courses/<course_id>
    GET /api/v1/roadmaps
    GET /api/v1/roadmaps/<track_id>
    GET /api/v1/certifications?search=
    GET /api/v1/organization/certifications?search=   (view_organization)
    GET /api/v1/dashboard
"""

from flask import Blueprint, g, jsonify, request

from luma.auth import require_capability, require_profile
from luma.services import catalog_service, certification_service, dashboard_service
from luma.services.permissions import capabilities_for, role_of

learning_bp = Blueprint("learning", __name__, url_prefix="/api/v1")


@learning_bp.route("/me", methods=["GET"])
@require_profile
def me():
    profile = g.current_profile
    return jsonify({
        "profile": profile,
        "role": role_of(profile),
        "capabilities": capabilities_for(profile),
    })


@learning_bp.route("/courses", methods=["GET"])
@require_profile
def list_courses():
    return jsonify(catalog_service.search_courses(
        search=request.args.get("search"),
        category=request.args.get("category"),
        provider=request.args.get("provider"),
    ))


@learning_bp.route("/courses/<course_id>", methods=["GET"])
@require_profile
def get_course(course_id):
    return jsonify(catalog_service.get_course(course_id))


@learning_bp.route("/roadmaps", methods=["GET"])
@require_profile
def list_roadmaps():
    return jsonify({"items": catalog_service.list_roadmaps()})


@learning_bp.route("/roadmaps/<track_id>", methods=["GET"])
@require_profile
def get_roadmap(track_id):
    return jsonify(catalog_service.get_roadmap(track_id))


@learning_bp.route("/certifications", methods=["GET"])
@require_profile
def my_certifications():
    return jsonify(certification_service.my_certifications(request.args.get("search")))


@learning_bp.route("/organization/certifications", methods=["GET"])
@require_capability("view_organization")
def organization_certifications():
    return jsonify(certification_service.organization_tracker(request.args.get("search")))


@learning_bp.route("/dashboard", methods=["GET"])
@require_profile
def dashboard():
    return jsonify(dashboard_service.learner_dashboard(g.current_profile))
