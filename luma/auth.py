"""
LUMA Learning Platform
Caller identity & capability middleware.

Provides:
    - Identity resolution from the ``X-User-Id`` header (the caller is already
      authenticated upstream; LUMA only maps the account to a profile)
    - Capability decorators backed by ``luma.services.permissions.can``
    - Content-Type enforcement for state-changing API requests

Per request, ``init_auth`` sets:
    g.current_user_id   - raw account id from the header, or None
    g.current_profile   - the caller's profile dict plus ``is_admin``, or None
"""

import functools
import logging

from flask import g, request

from luma.repositories import get_repositories
from luma.services.permissions import can
from luma.utils.errors import E, api_error

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"


def resolve_principal(user_id: str | None) -> dict | None:
    """Return the profile for ``user_id`` with ``is_admin`` attached, or None."""
    if not user_id:
        return None
    repos = get_repositories()
    profile = repos.profiles.get_by_user_id(user_id)
    if profile is None:
        return None
    profile["is_admin"] = repos.profiles.is_admin(user_id)
    return profile


# ── Decorators ───────────────────────────────────────────────────────────────

def require_profile(f):
    """
    Decorator: require a caller whose account maps to a profile.

    Responds 401 when the header is missing or unknown.
    """
    @functools.wraps(f)
    def decorated(*args, **kwargs):
        if getattr(g, "current_profile", None) is None:
            return api_error(E.UNAUTHENTICATED, "Authentication required. Provide X-User-Id header.")
        return f(*args, **kwargs)
    return decorated


def require_capability(action: str):
    """
    Decorator: require the caller's role to grant ``action``.

    Usage:
        @course_request_bp.route("/team")
        @require_capability("view_team")
        def my_team(): ...
    """
    def decorator(f):
        @functools.wraps(f)
        def decorated(*args, **kwargs):
            profile = getattr(g, "current_profile", None)
            if profile is None:
                return api_error(E.UNAUTHENTICATED, "Authentication required. Provide X-User-Id header.")
            if not can(profile, action):
                logger.warning(
                    "Access denied: '%s' lacks '%s' on %s",
                    profile.get("name"), action, request.path,
                    extra={"profile_id": profile.get("id")},
                )
                return api_error(E.FORBIDDEN, "Insufficient permissions", details={"action": action})
            return f(*args, **kwargs)
        return decorated
    return decorator


# ── CSRF protection for API ──────────────────────────────────────────────────

def _check_content_type():
    """
    For state-changing requests with a body, require application/json.
    HTML forms cannot send that content type.
    """
    if request.method in ("POST", "PUT", "PATCH", "DELETE"):
        ct = request.content_type or ""
        if "application/json" not in ct and request.content_length and request.content_length > 0:
            return api_error(
                E.VALIDATION_INVALID,
                "Content-Type must be application/json for state-changing requests",
                status=415,
            )
    return None


def init_auth(app):
    """
    Install identity middleware on the Flask app.

    - Resolves the caller once per API request
    - Skips health checks and pre-flight requests
    """
    @app.before_request
    def _before_request_auth():
        g.current_user_id = None
        g.current_profile = None

        if not request.path.startswith("/api/v1/"):
            return None
        if request.path.startswith("/api/v1/health/"):
            return None
        if request.method == "OPTIONS":
            return None

        csrf_error = _check_content_type()
        if csrf_error:
            return csrf_error

        user_id = request.headers.get(USER_ID_HEADER, "").strip() or None
        g.current_user_id = user_id
        g.current_profile = resolve_principal(user_id)
        if user_id and g.current_profile is None:
            logger.info("No profile linked to account", extra={"user_id": user_id})
        return None
