"""
Flask-Limiter limits for the LUMA blueprints.

The shared ``Limiter`` in ``luma/__init__.py`` has no default limit;
``init_rate_limits`` attaches one per blueprint once they are registered.
Callers are counted by X-User-Id, or by remote address when anonymous.
"""

import logging

from flask import request as flask_request

logger = logging.getLogger(__name__)

ASSISTANT_LIMIT = "10/minute"
WRITE_LIMIT = "60/minute"

# blueprint name -> limit
BLUEPRINT_LIMITS = {
    "assistant": ASSISTANT_LIMIT,
    "course_requests": WRITE_LIMIT,
    "admin": WRITE_LIMIT,
}
EXEMPT_BLUEPRINTS = ("health",)


def rate_limit_key():
    user_id = flask_request.headers.get("X-User-Id", "").strip()
    return f"user:{user_id}" if user_id else (flask_request.remote_addr or "unknown")


def init_rate_limits(app, limiter):
    """Apply ``BLUEPRINT_LIMITS``; a no-op when the app is TESTING."""
    if app.config.get("TESTING"):
        app.logger.info("Rate limiter disabled (TESTING=True)")
        return

    for name, limit in BLUEPRINT_LIMITS.items():
        blueprint = app.blueprints.get(name)
        if blueprint is not None:
            limiter.limit(limit)(blueprint)
    for name in EXEMPT_BLUEPRINTS:
        blueprint = app.blueprints.get(name)
        if blueprint is not None:
            limiter.exempt(blueprint)

    logger.info("Rate limits applied: %s", ", ".join(f"{k}={v}" for k, v in BLUEPRINT_LIMITS.items()))
