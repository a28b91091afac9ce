"""
Mail composition - builds ``mailto:`` requests for the local mail client.

LUMA never delivers mail itself. A composition is either returned to the
browser (which opens the URI) or handed to an injected opener callable such
as ``webbrowser.open`` when the workflow runs from the CLI. There is no
delivery confirmation, retry or queue.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote


def build_mailto_uri(
    to: str,
    subject: str,
    body: str,
    cc: str | None = None,
    bcc: str | None = None,
) -> str:
    """Return a percent-encoded ``mailto:`` URI.

    Empty ``cc``/``bcc`` values are omitted from the query string.
    """
    params = [
        ("subject", subject or ""),
        ("body", body or ""),
    ]
    if cc and cc.strip():
        params.append(("cc", cc.strip()))
    if bcc and bcc.strip():
        params.append(("bcc", bcc.strip()))

    query = "&".join(f"{key}={quote(value, safe='')}" for key, value in params)
    return f"mailto:{quote(to.strip(), safe='@,')}?{query}"


@dataclass(frozen=True)
class MailComposition:
    """A prepared (not sent) email addressed to a single recipient."""

    to: str
    subject: str
    body: str
    cc: str | None = None
    bcc: str | None = None
    template_name: str | None = None

    @property
    def mailto_uri(self) -> str:
        return build_mailto_uri(self.to, self.subject, self.body, self.cc, self.bcc)

    def to_dict(self) -> dict:
        return {
            "to": self.to,
            "subject": self.subject,
            "body": self.body,
            "cc": self.cc,
            "bcc": self.bcc,
            "template_name": self.template_name,
            "mailto": self.mailto_uri,
        }
