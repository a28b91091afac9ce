"""
Per-request timing and correlation ids.

Every response carries ``X-Request-ID`` (echoed from the caller or freshly
generated) and ``X-Request-Duration-Ms``. One log line per request is
written with the caller's user and profile ids attached.
"""

import logging
import time
import uuid

from flask import Flask, g, request

logger = logging.getLogger(__name__)

# probes are polled constantly
_UNLOGGED_PATHS = frozenset({"/api/v1/health/live", "/api/v1/health/ready"})

# above the assistant's scripted reply delay
SLOW_THRESHOLD_MS = 2000


def _level_for(status_code, duration_ms):
    if status_code >= 500:
        return logging.ERROR, "Server error"
    if duration_ms > SLOW_THRESHOLD_MS:
        return logging.WARNING, "Slow request"
    return logging.DEBUG, "Request"


def init_request_timing(app: Flask):
    """Install the hooks; must run before ``init_auth`` so timing covers identity lookup."""

    @app.before_request
    def _stamp_request():
        g.request_start = time.perf_counter()
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]

    @app.after_request
    def _finish_request(response):
        started = getattr(g, "request_start", None)
        if started is None:
            return response

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Request-ID"] = g.request_id
        response.headers["X-Request-Duration-Ms"] = f"{elapsed_ms:.1f}"
        if request.path in _UNLOGGED_PATHS:
            return response

        profile = getattr(g, "current_profile", None) or {}
        level, label = _level_for(response.status_code, elapsed_ms)
        logger.log(
            level, "%s: %s %s %d (%.0fms)",
            label, request.method, request.path, response.status_code, elapsed_ms,
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "duration_ms": elapsed_ms,
                "remote_addr": request.remote_addr,
                "request_id": g.request_id,
                "user_id": getattr(g, "current_user_id", None),
                "profile_id": profile.get("id"),
            },
        )
        return response
