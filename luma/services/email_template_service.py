"""
Email Template Service - CRUD and preview for admin-managed templates.

Template names are unique; the approval workflow looks its template up by
name. Blank cc/bcc values are stored as NULL.
"""

from __future__ import annotations

import logging

from sqlalchemy import select

from luma.core.exceptions import ConflictError, NotFoundError, ValidationError
from luma.models import db
from luma.models.email_template import EmailTemplate
from luma.services.template_renderer import PLACEHOLDERS, placeholders_in, render

logger = logging.getLogger(__name__)

# Sample values used when previewing a template without a context
SAMPLE_CONTEXT = {
    "employee_name": "John Smith",
    "course_name": "AWS Solutions Architect Certification",
    "course_provider": "Udemy",
    "estimated_cost": "199.99",
    "reason": "To strengthen our team's cloud architecture skills.",
}


def _get(template_id: str) -> EmailTemplate:
    tpl = db.session.get(EmailTemplate, template_id)
    if tpl is None:
        raise NotFoundError(resource="EmailTemplate", resource_id=template_id)
    return tpl


def _check_name(name: str, exclude_id: str | None = None) -> None:
    stmt = select(EmailTemplate.id).where(EmailTemplate.name == name)
    if exclude_id:
        stmt = stmt.where(EmailTemplate.id != exclude_id)
    if db.session.execute(stmt).first():
        raise ConflictError("EmailTemplate", "name", name)


def _optional(value) -> str | None:
    return (value or "").strip() or None


def list_templates() -> list[dict]:
    rows = db.session.execute(select(EmailTemplate).order_by(EmailTemplate.name)).scalars().all()
    return [t.to_dict() for t in rows]


def get_template(template_id: str) -> dict:
    return _get(template_id).to_dict()


def create_template(data: dict, created_by: str | None = None) -> dict:
    """Create a template. name, subject and body are required."""
    missing = [f for f in ("name", "subject", "body") if not str(data.get(f) or "").strip()]
    if missing:
        raise ValidationError(
            "Missing required fields: " + ", ".join(missing),
            details={f: "required" for f in missing},
        )
    name = data["name"].strip()
    _check_name(name)

    tpl = EmailTemplate(
        name=name,
        subject=data["subject"].strip(),
        body=data["body"],
        cc=_optional(data.get("cc")),
        bcc=_optional(data.get("bcc")),
        created_by=created_by,
    )
    db.session.add(tpl)
    db.session.commit()
    logger.info("Email template created: %s", name)
    return tpl.to_dict()


def update_template(template_id: str, data: dict) -> dict:
    tpl = _get(template_id)

    if "name" in data:
        name = (data["name"] or "").strip()
        if not name:
            raise ValidationError("name cannot be empty", details={"name": "required"})
        if name != tpl.name:
            _check_name(name, exclude_id=template_id)
        tpl.name = name
    for field in ("subject", "body"):
        if field in data:
            if not str(data[field] or "").strip():
                raise ValidationError(f"{field} cannot be empty", details={field: "required"})
            setattr(tpl, field, data[field])
    for field in ("cc", "bcc"):
        if field in data:
            setattr(tpl, field, _optional(data[field]))

    db.session.commit()
    logger.info("Email template updated: %s", tpl.name)
    return tpl.to_dict()


def delete_template(template_id: str) -> None:
    tpl = _get(template_id)
    name = tpl.name
    db.session.delete(tpl)
    db.session.commit()
    logger.info("Email template deleted: %s", name)


def preview_template(template_id: str, context: dict | None = None) -> dict:
    """Render a stored template with ``context`` (sample values by default)."""
    tpl = _get(template_id)
    ctx = dict(SAMPLE_CONTEXT)
    if context:
        ctx.update(context)
    used = placeholders_in(tpl.subject) + placeholders_in(tpl.body)
    return {
        "subject": render(tpl.subject, ctx),
        "body": render(tpl.body, ctx),
        "cc": tpl.cc,
        "bcc": tpl.bcc,
        "unknown_placeholders": sorted({p for p in used if p not in PLACEHOLDERS}),
    }
