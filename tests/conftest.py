"""
Shared pytest fixtures for the LUMA test suite.

Provides:
    - app: Flask application (session-scoped)
    - _setup_db: Database table creation/teardown (session-scoped)
    - session: Per-test DB cleanup w/ rollback + recreate (autouse)
    - client: Flask test client (function-scoped)
    - manager / employee / admin / loner: pre-created profiles (dicts)
    - auth: builds the X-User-Id header for a profile
    - make_profile / make_template: row factories
"""

import pytest

from luma import create_app
from luma.models import db as _db
from luma.models.email_template import EmailTemplate
from luma.models.profile import Profile, UserRole


# ── Helpers ──────────────────────────────────────────────────────────────


def _make_profile(name, employee_id, email, user_id=None, manager_id=None, **kw):
    """Insert a profile row and return its dict."""
    p = Profile(
        name=name,
        employee_id=employee_id,
        email=email,
        user_id=user_id,
        manager_id=manager_id,
        **kw,
    )
    _db.session.add(p)
    _db.session.commit()
    return p.to_dict()


def _make_admin_grant(user_id):
    grant = UserRole(user_id=user_id, role="admin")
    _db.session.add(grant)
    _db.session.commit()
    return grant.to_dict()


def _make_template(name="Course Approval Request", subject="Approve {{course_name}}",
                  body="{{employee_name}} asks for {{course_name}}", cc=None, bcc=None):
    tpl = EmailTemplate(name=name, subject=subject, body=body, cc=cc, bcc=bcc)
    _db.session.add(tpl)
    _db.session.commit()
    return tpl.to_dict()


def _headers_for(profile_or_user_id):
    if isinstance(profile_or_user_id, dict):
        return {"X-User-Id": profile_or_user_id["user_id"]}
    return {"X-User-Id": profile_or_user_id}


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    application = create_app("testing")
    return application


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, rollback after test, recreate tables."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture()
def auth():
    """Return a callable building the identity header for a profile or user id."""
    return _headers_for


# ── Convenience fixtures ─────────────────────────────────────────────────


@pytest.fixture()
def make_profile():
    return _make_profile


@pytest.fixture()
def make_template():
    return _make_template


@pytest.fixture()
def manager():
    """Jane Doe, manager of ``employee``."""
    return _make_profile(
        "Jane Doe", "EMP100", "jane.doe@example.com",
        user_id="u-jane", employee_role="SEL",
    )


@pytest.fixture()
def employee(manager):
    """John Smith, reporting to Jane Doe."""
    return _make_profile(
        "John Smith", "EMP101", "john.smith@example.com",
        user_id="u-john", manager_id=manager["id"],
    )


@pytest.fixture()
def loner():
    """An employee with no manager assigned."""
    return _make_profile("Lee Solo", "EMP200", "lee.solo@example.com", user_id="u-lee")


@pytest.fixture()
def admin():
    """Profile whose account holds the admin grant."""
    profile = _make_profile(
        "Ada Admin", "EMP001", "ada.admin@example.com",
        user_id="u-ada", employee_role="Director",
    )
    _make_admin_grant("u-ada")
    return profile
