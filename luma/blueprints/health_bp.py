"""
Health probes.

    GET /api/v1/health/ready  - process is up (load balancer probe)
    GET /api/v1/health/live   - database round trip and request store status
"""

import logging
import time

from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from luma.models import db
from luma.repositories import get_repositories

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/api/v1/health")


def _check_database():
    started = time.perf_counter()
    try:
        db.session.execute(db.text("SELECT 1"))
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Health check: database unreachable: %s", exc)
        return {"status": "error", "detail": str(exc)}
    return {"status": "ok", "latency_ms": round((time.perf_counter() - started) * 1000, 1)}


def _check_request_store():
    backend = current_app.config.get("REPOSITORY_BACKEND", "sql")
    try:
        pending = get_repositories().requests.count(status="pending")
    except (SQLAlchemyError, RuntimeError) as exc:
        logger.error("Health check: request store (%s) failed: %s", backend, exc)
        return {"status": "error", "backend": backend, "detail": str(exc)}
    return {"status": "ok", "backend": backend, "pending_requests": pending}


@health_bp.route("/ready", methods=["GET"])
def ready():
    return jsonify({"status": "ok"}), 200


@health_bp.route("/live", methods=["GET"])
def live():
    """Report each dependency; any failing check turns the response into a 503."""
    checks = {
        "database": _check_database(),
        "request_store": _check_request_store(),
        "app": {
            "name": "LUMA Learning Platform",
            "debug": current_app.debug,
            "testing": current_app.testing,
        },
    }
    healthy = all(c["status"] == "ok" for name, c in checks.items() if name != "app")
    return jsonify({
        "status": "healthy" if healthy else "degraded",
        "checks": checks,
    }), 200 if healthy else 503
