"""
Dashboard Service - learner home page and admin overview counters.
"""

from __future__ import annotations

from sqlalchemy import func, select

from luma.data.mock_data import AI_RECOMMENDATIONS, CERTIFICATIONS, LEARNING_PROGRESS
from luma.models import db
from luma.models.email_template import EmailTemplate
from luma.models.profile import Profile
from luma.models.project_group import ProjectGroup
from luma.repositories import get_repositories
from luma.services.catalog_service import get_course


def learner_dashboard(profile: dict) -> dict:
    """Progress, certification and request summary for the current learner."""
    repos = get_repositories()
    in_progress = [
        dict(p, course=get_course(p["course_id"]))
        for p in LEARNING_PROGRESS if p["status"] == "In Progress"
    ]
    completed = sum(1 for p in LEARNING_PROGRESS if p["status"] == "Completed")
    active_certs = sum(1 for c in CERTIFICATIONS if c["status"] == "Active")

    stats = {
        "completed_courses": completed,
        "in_progress_courses": len(in_progress),
        "active_certifications": active_certs,
        "pending_requests": repos.requests.count(status="pending", requester_id=profile["id"]),
    }
    # routed by snapshot, so a former manager can still have approvals waiting
    awaiting_me = repos.requests.list(status="pending", manager_id=profile["id"])
    if awaiting_me or (profile.get("direct_report_count") or 0) > 0:
        stats["pending_approvals"] = len(awaiting_me)

    return {
        "profile": {"id": profile["id"], "name": profile["name"]},
        "stats": stats,
        "continue_learning": in_progress,
        "recommendations": [
            dict(r, course=get_course(r["course_id"])) for r in AI_RECOMMENDATIONS
        ],
    }


def admin_stats() -> dict:
    """Totals shown on the admin dashboard."""
    repos = get_repositories()

    def _count(model):
        return db.session.execute(select(func.count(model.id))).scalar_one()

    return {
        "employees": _count(Profile),
        "project_groups": _count(ProjectGroup),
        "email_templates": _count(EmailTemplate),
        "pending_requests": repos.requests.count(status="pending"),
    }
