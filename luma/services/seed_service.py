"""
Demo data seeding - used by ``flask seed-demo`` and scripts/seed_demo_data.py.

Idempotent: rows are matched by employee_id / user_id / template name and
only created when missing.
"""

from __future__ import annotations

import logging

from sqlalchemy import select

from luma.models import db
from luma.models.email_template import EmailTemplate
from luma.models.profile import Profile, UserRole

logger = logging.getLogger(__name__)

DEMO_MANAGER = {
    "employee_id": "EMP100",
    "user_id": "demo-manager",
    "name": "Jane Doe",
    "email": "jane.doe@luma.example.com",
    "employee_role": "SEL",
    "office_location": "Cyber Greens, Gurgaon",
}

DEMO_REPORTS = [
    {
        "employee_id": "EMP101",
        "user_id": "demo-employee",
        "name": "John Smith",
        "email": "john.smith@luma.example.com",
        "employee_role": "Programmer Analyst",
        "office_location": "Cyber Greens, Gurgaon",
    },
    {
        "employee_id": "EMP102",
        "user_id": "demo-analyst",
        "name": "Asha Rao",
        "email": "asha.rao@luma.example.com",
        "employee_role": "Senior Analyst",
        "office_location": "Analytics Office, Pune",
    },
]

DEMO_ADMIN = {
    "employee_id": "EMP001",
    "user_id": "demo-admin",
    "name": "LUMA Admin",
    "email": "admin@luma.example.com",
    "employee_role": "Director",
    "office_location": "Managed Services, Gurgaon",
}

DEFAULT_APPROVAL_TEMPLATE = {
    "name": "Course Approval Request",
    "subject": "Course Approval Request: {{course_name}}",
    "body": (
        "Hi,\n\n"
        "{{employee_name}} would like to enrol in {{course_name}} ({{course_provider}}).\n"
        "Estimated cost: {{estimated_cost}}\n\n"
        "Reason:\n{{reason}}\n\n"
        "Please approve or reject this request in LUMA.\n\n"
        "Thanks,\nLUMA Learning"
    ),
}


def _ensure_profile(data: dict, manager_id: str | None = None) -> tuple[Profile, bool]:
    profile = db.session.execute(
        select(Profile).where(Profile.employee_id == data["employee_id"])
    ).scalar_one_or_none()
    if profile:
        return profile, False
    profile = Profile(**data, manager_id=manager_id)
    db.session.add(profile)
    db.session.flush()
    return profile, True


def seed_demo_data(template_name: str | None = None) -> dict:
    """Create demo profiles, an admin grant and the approval template.

    Returns a dict of created counts per kind.
    """
    created = {"profiles": 0, "admin_grants": 0, "templates": 0}

    manager, new = _ensure_profile(DEMO_MANAGER)
    created["profiles"] += int(new)
    for report in DEMO_REPORTS:
        _, new = _ensure_profile(report, manager_id=manager.id)
        created["profiles"] += int(new)
    admin, new = _ensure_profile(DEMO_ADMIN)
    created["profiles"] += int(new)

    grant = db.session.execute(
        select(UserRole).where(UserRole.user_id == admin.user_id, UserRole.role == "admin")
    ).scalar_one_or_none()
    if grant is None:
        db.session.add(UserRole(user_id=admin.user_id, role="admin"))
        created["admin_grants"] += 1

    name = template_name or DEFAULT_APPROVAL_TEMPLATE["name"]
    tpl = db.session.execute(
        select(EmailTemplate).where(EmailTemplate.name == name)
    ).scalar_one_or_none()
    if tpl is None:
        db.session.add(EmailTemplate(
            name=name,
            subject=DEFAULT_APPROVAL_TEMPLATE["subject"],
            body=DEFAULT_APPROVAL_TEMPLATE["body"],
            created_by=admin.user_id,
        ))
        created["templates"] += 1

    db.session.commit()
    logger.info(
        "Demo data seeded: %d profiles, %d admin grants, %d templates",
        created["profiles"], created["admin_grants"], created["templates"],
    )
    return created
