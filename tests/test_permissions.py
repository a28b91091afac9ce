"""
Role derivation and capability checks.
"""
import pytest

from luma.core.exceptions import PermissionDenied
from luma.services.permissions import (
    ACTIONS,
    can,
    capabilities_for,
    check_capability,
    role_of,
)

EMPLOYEE = {"id": "p1", "name": "John Smith", "direct_report_count": 0, "is_admin": False}
MANAGER = {"id": "p2", "name": "Jane Doe", "direct_report_count": 2, "is_admin": False}
ADMIN = {"id": "p3", "name": "Ada Admin", "direct_report_count": 0, "is_admin": True}


class TestRoleOf:
    def test_roles(self):
        assert role_of(EMPLOYEE) == "employee"
        assert role_of(MANAGER) == "manager"
        assert role_of(ADMIN) == "admin"
        assert role_of(None) is None

    def test_admin_wins_over_manager(self):
        assert role_of(dict(MANAGER, is_admin=True)) == "admin"


class TestCan:
    @pytest.mark.parametrize("action, employee, manager, admin", [
        ("submit_request", True, True, True),
        ("view_team", False, True, True),
        ("approve_request", False, True, True),
        ("view_organization", False, True, True),
        ("view_admin_dashboard", False, False, True),
        ("manage_employees", False, False, True),
        ("manage_templates", False, False, True),
        ("review_any_request", False, False, True),
    ])
    def test_matrix(self, action, employee, manager, admin):
        assert can(EMPLOYEE, action) is employee
        assert can(MANAGER, action) is manager
        assert can(ADMIN, action) is admin

    def test_unknown_action_denied(self):
        assert can(ADMIN, "delete_everything") is False

    def test_anonymous_denied(self):
        assert can(None, "submit_request") is False


class TestCheckCapability:
    def test_raises_with_action(self):
        with pytest.raises(PermissionDenied) as exc:
            check_capability(EMPLOYEE, "view_team")
        assert exc.value.action == "view_team"
        assert exc.value.subject == "John Smith"

    def test_allows(self):
        check_capability(MANAGER, "approve_request")


def test_capabilities_for():
    assert capabilities_for(EMPLOYEE) == ["submit_request"]
    assert capabilities_for(ADMIN) == sorted(ACTIONS)
    assert capabilities_for(None) == []
