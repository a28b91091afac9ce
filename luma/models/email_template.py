"""
LUMA Learning Platform
Email template model.

Templates are looked up by their unique ``name``. Subject and body carry
``{{placeholder}}`` tokens rendered by ``luma.services.template_renderer``.
"""

import uuid
from datetime import datetime, timezone

from luma.models import db


def _uuid():
    return str(uuid.uuid4())


def _utcnow():
    return datetime.now(timezone.utc)


class EmailTemplate(db.Model):
    """Admin-managed email template."""

    __tablename__ = "email_templates"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    name = db.Column(db.String(150), nullable=False, unique=True)
    subject = db.Column(db.String(300), nullable=False)
    body = db.Column(db.Text, nullable=False)
    cc = db.Column(db.String(500), nullable=True, comment="Comma-separated addresses")
    bcc = db.Column(db.String(500), nullable=True, comment="Comma-separated addresses")
    created_by = db.Column(db.String(64), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "subject": self.subject,
            "body": self.body,
            "cc": self.cc,
            "bcc": self.bcc,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<EmailTemplate {self.name}>"
