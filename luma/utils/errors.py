"""JSON error envelope shared by every LUMA endpoint.

Each failure leaves the API as ``{"error": <message>, "code": <code>}``,
plus ``details`` when there is something structured to report (field
errors, the current state of a course request, the denied action).

    from luma.utils.errors import api_error, E

    return api_error(E.VALIDATION_REQUIRED, "course_id or course is required")
    return api_error(E.FORBIDDEN, "You cannot view this course request")
"""

from __future__ import annotations

from flask import jsonify


class E:
    """Error codes understood by the LUMA front end."""

    # malformed body or query string
    VALIDATION_REQUIRED = "ERR_VALIDATION_REQUIRED"
    VALIDATION_INVALID = "ERR_VALIDATION_INVALID"
    # well-formed input that breaks a rule (bad cost, unknown manager, ...)
    VALIDATION_CONSTRAINT = "ERR_VALIDATION_CONSTRAINT"

    NOT_FOUND = "ERR_NOT_FOUND"

    # duplicate email / employee id / template name
    CONFLICT_DUPLICATE = "ERR_CONFLICT_DUPLICATE"
    # course request already approved or rejected
    CONFLICT_STATE = "ERR_CONFLICT_STATE"

    UNAUTHENTICATED = "ERR_UNAUTHENTICATED"
    FORBIDDEN = "ERR_FORBIDDEN"

    DATABASE = "ERR_DATABASE"
    INTERNAL = "ERR_INTERNAL"


_STATUS_BY_CODE: dict[str, int] = {
    E.VALIDATION_REQUIRED: 400,
    E.VALIDATION_INVALID: 400,
    E.VALIDATION_CONSTRAINT: 422,
    E.NOT_FOUND: 404,
    E.CONFLICT_DUPLICATE: 409,
    E.CONFLICT_STATE: 409,
    E.UNAUTHENTICATED: 401,
    E.FORBIDDEN: 403,
    E.DATABASE: 500,
    E.INTERNAL: 500,
}


def status_for(code: str) -> int:
    """HTTP status normally sent with ``code``; unknown codes are client errors."""
    return _STATUS_BY_CODE.get(code, 400)


def api_error(
    code: str,
    message: str,
    *,
    status: int | None = None,
    details: dict | None = None,
):
    """Build the ``(response, status)`` pair a view or error handler returns.

    ``status`` overrides the code's usual HTTP status. Empty ``details``
    are left out of the body.
    """
    payload: dict = {"error": message, "code": code}
    if details:
        payload["details"] = details
    return jsonify(payload), status or status_for(code)
