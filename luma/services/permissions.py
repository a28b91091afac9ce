"""
Capability resolution - who may do what in LUMA.

Roles are derived, never stored per action:
    admin    - the caller's account holds an ``admin`` grant in user_roles
    manager  - the caller has at least one direct report
    employee - everyone else

Usage:
    from luma.services.permissions import can, check_capability

    if can(g.current_profile, "view_team"):
        ...

    # Raises PermissionDenied if not allowed
    check_capability(g.current_profile, "manage_templates")
"""

from __future__ import annotations

from luma.core.exceptions import PermissionDenied

ACTIONS = frozenset({
    "submit_request",
    "view_team",
    "approve_request",
    "view_organization",
    "view_admin_dashboard",
    "manage_employees",
    "manage_groups",
    "manage_templates",
    "manage_admins",
    "review_any_request",
})

_EMPLOYEE = {"submit_request"}
_MANAGER = _EMPLOYEE | {"view_team", "approve_request", "view_organization"}

ROLE_CAPABILITIES = {
    "employee": frozenset(_EMPLOYEE),
    "manager": frozenset(_MANAGER),
    "admin": ACTIONS,
}


def role_of(profile: dict | None) -> str | None:
    """Return ``admin``, ``manager`` or ``employee`` for a resolved profile."""
    if not profile:
        return None
    if profile.get("is_admin"):
        return "admin"
    if (profile.get("direct_report_count") or 0) > 0:
        return "manager"
    return "employee"


def can(profile: dict | None, action: str) -> bool:
    """Return True if ``profile`` may perform ``action``.

    Unknown actions are never granted.
    """
    role = role_of(profile)
    if role is None:
        return False
    return action in ROLE_CAPABILITIES.get(role, frozenset())


def check_capability(profile: dict | None, action: str) -> None:
    """Assert capability; raise PermissionDenied if not granted."""
    if not can(profile, action):
        subject = (profile or {}).get("name") or "caller"
        raise PermissionDenied(action, subject)


def capabilities_for(profile: dict | None) -> list[str]:
    """Sorted list of every action ``profile`` may perform."""
    role = role_of(profile)
    if role is None:
        return []
    return sorted(ROLE_CAPABILITIES[role])
