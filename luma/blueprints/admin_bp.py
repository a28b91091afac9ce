"""
Admin Blueprint - employees, admin grants, email templates, project groups
and dashboard counters.

Endpoints (all under /api/v1/admin):
    GET    /stats
    GET    /employees?search=            POST /employees
    GET    /employees/<id>               PUT  /employees/<id>      DELETE /employees/<id>
    GET    /admins                       POST /admins              DELETE /admins/<grant_id>
    GET    /email-templates              POST /email-templates
    GET    /email-templates/<id>         PUT  /email-templates/<id> DELETE /email-templates/<id>
    POST   /email-templates/<id>/preview
    GET    /project-groups               POST /project-groups
    GET    /project-groups/<id>          PUT  /project-groups/<id>  DELETE /project-groups/<id>
    POST   /project-groups/<id>/members  DELETE /project-groups/<id>/members/<member_id>
"""

import logging

from flask import Blueprint, g, jsonify, request

from luma.auth import require_capability
from luma.services import (
    admin_role_service,
    dashboard_service,
    email_template_service,
    employee_service,
    project_group_service,
)
from luma.utils.errors import E, api_error

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__, url_prefix="/api/v1/admin")


def _json_object():
    """Return (data, err_response); the body must be a JSON object."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, api_error(E.VALIDATION_INVALID, "Request body must be a JSON object")
    return data, None


# ═════════════════════════════════════════════════════════════════════════════
# DASHBOARD
# ═════════════════════════════════════════════════════════════════════════════

@admin_bp.route("/stats", methods=["GET"])
@require_capability("view_admin_dashboard")
def stats():
    return jsonify(dashboard_service.admin_stats())


# ═════════════════════════════════════════════════════════════════════════════
# EMPLOYEES
# ═════════════════════════════════════════════════════════════════════════════

@admin_bp.route("/employees", methods=["GET"])
@require_capability("manage_employees")
def list_employees():
    items = employee_service.list_employees(request.args.get("search"))
    return jsonify({"items": items, "total": len(items)})


@admin_bp.route("/employees", methods=["POST"])
@require_capability("manage_employees")
def create_employee():
    """Body: { employee_id, name, email, employee_role?, office_location?, manager_id?, user_id? }"""
    data, err = _json_object()
    if err:
        return err
    return jsonify(employee_service.create_employee(data)), 201


@admin_bp.route("/employees/<profile_id>", methods=["GET"])
@require_capability("manage_employees")
def get_employee(profile_id):
    return jsonify(employee_service.get_employee(profile_id))


@admin_bp.route("/employees/<profile_id>", methods=["PUT"])
@require_capability("manage_employees")
def update_employee(profile_id):
    data, err = _json_object()
    if err:
        return err
    return jsonify(employee_service.update_employee(profile_id, data))


@admin_bp.route("/employees/<profile_id>", methods=["DELETE"])
@require_capability("manage_employees")
def delete_employee(profile_id):
    employee_service.delete_employee(profile_id)
    return "", 204


# ═════════════════════════════════════════════════════════════════════════════
# ADMINS
# ═════════════════════════════════════════════════════════════════════════════

@admin_bp.route("/admins", methods=["GET"])
@require_capability("manage_admins")
def list_admins():
    items = admin_role_service.list_admins()
    return jsonify({"items": items, "total": len(items)})


@admin_bp.route("/admins", methods=["POST"])
@require_capability("manage_admins")
def grant_admin():
    """Body: { user_id }"""
    data, err = _json_object()
    if err:
        return err
    user_id = data.get("user_id")
    if not isinstance(user_id, str) or not user_id.strip():
        return api_error(E.VALIDATION_REQUIRED, "user_id is required")
    return jsonify(admin_role_service.grant_admin(user_id)), 201


@admin_bp.route("/admins/<grant_id>", methods=["DELETE"])
@require_capability("manage_admins")
def revoke_admin(grant_id):
    admin_role_service.revoke_admin(grant_id)
    return "", 204


# ═════════════════════════════════════════════════════════════════════════════
# EMAIL TEMPLATES
# ═════════════════════════════════════════════════════════════════════════════

@admin_bp.route("/email-templates", methods=["GET"])
@require_capability("manage_templates")
def list_templates():
    items = email_template_service.list_templates()
    return jsonify({"items": items, "total": len(items)})


@admin_bp.route("/email-templates", methods=["POST"])
@require_capability("manage_templates")
def create_template():
    """Body: { name, subject, body, cc?, bcc? }"""
    data, err = _json_object()
    if err:
        return err
    tpl = email_template_service.create_template(data, created_by=g.current_user_id)
    return jsonify(tpl), 201


@admin_bp.route("/email-templates/<template_id>", methods=["GET"])
@require_capability("manage_templates")
def get_template(template_id):
    return jsonify(email_template_service.get_template(template_id))


@admin_bp.route("/email-templates/<template_id>", methods=["PUT"])
@require_capability("manage_templates")
def update_template(template_id):
    data, err = _json_object()
    if err:
        return err
    return jsonify(email_template_service.update_template(template_id, data))


@admin_bp.route("/email-templates/<template_id>", methods=["DELETE"])
@require_capability("manage_templates")
def delete_template(template_id):
    email_template_service.delete_template(template_id)
    return "", 204


@admin_bp.route("/email-templates/<template_id>/preview", methods=["POST"])
@require_capability("manage_templates")
def preview_template(template_id):
    """Body: { context?: {placeholder: value} }"""
    data = request.get_json(silent=True) or {}
    context = data.get("context") if isinstance(data, dict) else None
    if context is not None and not isinstance(context, dict):
        return api_error(E.VALIDATION_INVALID, "context must be an object")
    return jsonify(email_template_service.preview_template(template_id, context))


# ═════════════════════════════════════════════════════════════════════════════
# PROJECT GROUPS
# ═════════════════════════════════════════════════════════════════════════════

@admin_bp.route("/project-groups", methods=["GET"])
@require_capability("manage_groups")
def list_groups():
    items = project_group_service.list_groups()
    return jsonify({"items": items, "total": len(items)})


@admin_bp.route("/project-groups", methods=["POST"])
@require_capability("manage_groups")
def create_group():
    """Body: { name, description? }"""
    data, err = _json_object()
    if err:
        return err
    group = project_group_service.create_group(data, created_by=g.current_user_id)
    return jsonify(group), 201


@admin_bp.route("/project-groups/<group_id>", methods=["GET"])
@require_capability("manage_groups")
def get_group(group_id):
    return jsonify(project_group_service.get_group(group_id))


@admin_bp.route("/project-groups/<group_id>", methods=["PUT"])
@require_capability("manage_groups")
def update_group(group_id):
    data, err = _json_object()
    if err:
        return err
    return jsonify(project_group_service.update_group(group_id, data))


@admin_bp.route("/project-groups/<group_id>", methods=["DELETE"])
@require_capability("manage_groups")
def delete_group(group_id):
    project_group_service.delete_group(group_id)
    return "", 204


@admin_bp.route("/project-groups/<group_id>/members", methods=["POST"])
@require_capability("manage_groups")
def add_member(group_id):
    """Body: { profile_id }"""
    data, err = _json_object()
    if err:
        return err
    profile_id = data.get("profile_id")
    if not isinstance(profile_id, str) or not profile_id.strip():
        return api_error(E.VALIDATION_REQUIRED, "profile_id is required")
    return jsonify(project_group_service.add_member(group_id, profile_id.strip())), 201


@admin_bp.route("/project-groups/<group_id>/members/<member_id>", methods=["DELETE"])
@require_capability("manage_groups")
def remove_member(group_id, member_id):
    project_group_service.remove_member(group_id, member_id)
    return "", 204
