"""
Health endpoints and cross-cutting middleware (timing headers, logging
formatters, rate-limit key).
"""
import json
import logging

from luma.middleware.logging_config import JSONFormatter, ReadableFormatter
from luma.middleware.rate_limiter import rate_limit_key


class TestHealth:
    def test_ready(self, client):
        res = client.get("/api/v1/health/ready")
        assert res.status_code == 200
        assert res.get_json() == {"status": "ok"}

    def test_live(self, client):
        res = client.get("/api/v1/health/live")
        assert res.status_code == 200
        data = res.get_json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"]["status"] == "ok"
        assert data["checks"]["request_store"]["backend"] == "sql"
        assert data["checks"]["request_store"]["pending_requests"] == 0
        assert data["checks"]["app"]["testing"] is True

    def test_unknown_route(self, client):
        res = client.get("/api/v1/nowhere")
        assert res.status_code == 404
        assert res.get_json()["path"] == "/api/v1/nowhere"

    def test_method_not_allowed(self, client):
        assert client.delete("/api/v1/health/ready").status_code == 405


class TestRequestTiming:
    def test_headers_added(self, client):
        res = client.get("/api/v1/health/ready")
        assert res.headers["X-Request-ID"]
        assert float(res.headers["X-Request-Duration-Ms"]) >= 0

    def test_request_id_propagated(self, client):
        res = client.get("/api/v1/health/ready", headers={"X-Request-ID": "abc123"})
        assert res.headers["X-Request-ID"] == "abc123"


def _record(**extra):
    record = logging.LogRecord("luma.test", logging.INFO, __file__, 10, "Course request submitted", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogFormatters:
    def test_json_includes_domain_extras(self):
        line = JSONFormatter().format(_record(course_request_id="r-1", has_manager=False, unrelated="x"))
        entry = json.loads(line)
        assert entry["message"] == "Course request submitted"
        assert entry["level"] == "INFO"
        assert entry["course_request_id"] == "r-1"
        assert entry["has_manager"] is False
        assert "unrelated" not in entry

    def test_readable_mentions_request(self):
        out = ReadableFormatter().format(_record(course_request_id="r-1", duration_ms=12.4))
        assert "Course request submitted (request r-1) [12ms]" in out


class TestRateLimitKey:
    def test_keyed_by_user(self, app):
        with app.test_request_context("/", headers={"X-User-Id": "u-john"}):
            assert rate_limit_key() == "user:u-john"

    def test_falls_back_to_address(self, app):
        with app.test_request_context("/", environ_base={"REMOTE_ADDR": "10.0.0.7"}):
            assert rate_limit_key() == "10.0.0.7"
