"""
Platform-wide exception hierarchy.

Services raise these types; the app-level error handlers registered in
``luma/__init__.py`` translate them into the standard JSON error envelope
(see ``luma.utils.errors``) so every blueprint gets consistent status codes.

Usage:
    from luma.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError(resource="CourseRequest", resource_id=request_id)
    raise ValidationError("course_name is required", details={"course_name": "required"})
"""


class NotFoundError(Exception):
    """Raised when a requested resource does not exist.

    Args:
        resource: Human-readable entity name (e.g. "Profile", "EmailTemplate").
        resource_id: The key that was looked up. Included in logs and message.
    """

    def __init__(self, resource: str, resource_id: int | str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(msg)


class ValidationError(Exception):
    """Raised when well-formed input violates a business rule.

    Distinct from HTTP 400 (malformed input, caught in the blueprint).
    Maps to HTTP 422.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown; keys are field names.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class ConflictError(Exception):
    """Raised when an operation would duplicate a unique value. Maps to HTTP 409.

    Args:
        resource: Model name.
        field: The unique field that would be duplicated.
        value: The conflicting value.
    """

    def __init__(self, resource: str, field: str, value: str | None = None) -> None:
        self.resource = resource
        self.field = field
        self.value = value
        msg = f"{resource} with {field}={value!r} already exists"
        super().__init__(msg)


class StateConflictError(Exception):
    """Raised when an entity is not in a state that permits the operation.

    Used for illegal status transitions (e.g. approving an already rejected
    course request) and for deletes blocked by dependent rows. Maps to HTTP 409.
    """

    def __init__(self, message: str, current_state: str | None = None) -> None:
        self.current_state = current_state
        super().__init__(message)


class PermissionDenied(Exception):
    """Raised when the caller lacks the capability for an action. Maps to HTTP 403."""

    def __init__(self, action: str, subject: str | None = None) -> None:
        self.action = action
        self.subject = subject
        who = subject or "caller"
        super().__init__(f"{who} does not have permission for '{action}'")


class AuthenticationRequired(Exception):
    """Raised when a guarded endpoint is called without a resolvable identity. HTTP 401."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class PersistenceError(Exception):
    """Raised when the backing store rejects a write.

    Carries the backend's raw error text; the session has already been rolled
    back, so no partial state is left behind. Maps to HTTP 500.
    """

    def __init__(self, operation: str, raw_error: str) -> None:
        self.operation = operation
        self.raw_error = raw_error
        super().__init__(f"{operation} failed: {raw_error}")
