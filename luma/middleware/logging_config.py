"""
Logging setup for LUMA.

Local runs get a short coloured line per record; production emits one JSON
object per line so the course-request trail (who submitted, which manager
was mailed, who reviewed) can be searched by ``course_request_id``.
LOG_LEVEL overrides the default level.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

# Keys callers pass through ``extra=`` that are worth keeping in JSON output
EXTRA_FIELDS = (
    "method",
    "path",
    "status",
    "duration_ms",
    "remote_addr",
    "request_id",
    "user_id",
    "profile_id",
    "course_request_id",
    "request_status",
    "has_manager",
)

QUIET_LOGGERS = ("urllib3", "werkzeug", "sqlalchemy.engine")


def _exception_text(formatter, record):
    if record.exc_info and record.exc_info[0] is not None:
        return formatter.formatException(record.exc_info)
    return None


class JSONFormatter(logging.Formatter):
    """One JSON document per record; ``None`` extras are dropped."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update(
            (key, getattr(record, key))
            for key in EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )
        trace = _exception_text(self, record)
        if trace:
            entry["exception"] = trace
        return json.dumps(entry, ensure_ascii=False, default=str)


class ReadableFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL logger: message (request id) [N ms]`` with ANSI colours."""

    LEVEL_COLOURS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        colour = self.LEVEL_COLOURS.get(record.levelname, "")
        parts = [
            f"{colour}{datetime.now():%H:%M:%S} {record.levelname:<8}{self.RESET}",
            f"{record.name}: {record.getMessage()}",
        ]
        request_id = getattr(record, "course_request_id", None)
        if request_id:
            parts.append(f"(request {request_id})")
        duration = getattr(record, "duration_ms", None)
        if duration is not None:
            parts.append(f"[{duration:.0f}ms]")
        line = " ".join(parts)
        trace = _exception_text(self, record)
        return f"{line}\n{trace}" if trace else line


def configure_logging(app):
    """Attach a single stderr handler to the root logger.

    JSON output is used unless the app runs with DEBUG or TESTING. The root
    handlers are replaced on each call so an app factory invoked many times
    (as in the test suite) never doubles the output.
    """
    testing = app.config.get("TESTING", False)
    structured = not (app.config.get("DEBUG", False) or testing)

    level_name = os.getenv("LOG_LEVEL") or ("INFO" if structured else "DEBUG")
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if structured else ReadableFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    app.logger.setLevel(level)

    if not testing:
        app.logger.info(
            "LUMA logging ready (level=%s, %s output)",
            level_name, "json" if structured else "readable",
        )
