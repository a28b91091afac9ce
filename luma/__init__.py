"""
LUMA Learning Platform: Flask application factory.

    from luma import create_app
    app = create_app()           # APP_ENV, falling back to "development"
    app = create_app("testing")
"""

import logging
import os

import click
from flask import Flask, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_migrate import Migrate
from sqlalchemy import engine as sa_engine
from sqlalchemy import event as sa_event
from sqlalchemy.exc import SQLAlchemyError

from luma.auth import init_auth
from luma.config import config
from luma.core.exceptions import (
    AuthenticationRequired,
    ConflictError,
    NotFoundError,
    PermissionDenied,
    PersistenceError,
    StateConflictError,
    ValidationError,
)
from luma.middleware.logging_config import configure_logging
from luma.middleware.rate_limiter import init_rate_limits, rate_limit_key
from luma.middleware.timing import init_request_timing
from luma.models import db
from luma.utils.errors import E, api_error

logger = logging.getLogger(__name__)


@sa_event.listens_for(sa_engine.Engine, "connect")
def _sqlite_foreign_keys(dbapi_conn, connection_record):
    """SQLite ignores REFERENCES clauses unless the pragma is set per connection."""
    if "sqlite" in type(dbapi_conn).__module__:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


migrate = Migrate()
# per-blueprint limits only
limiter = Limiter(key_func=rate_limit_key, default_limits=[])

# exception type -> (error code, details built from the exception)
_DOMAIN_ERRORS = (
    (ValidationError, E.VALIDATION_CONSTRAINT, lambda e: e.details),
    (NotFoundError, E.NOT_FOUND, lambda e: None),
    (ConflictError, E.CONFLICT_DUPLICATE, lambda e: {"field": e.field}),
    (StateConflictError, E.CONFLICT_STATE,
     lambda e: {"current_state": e.current_state} if e.current_state else None),
    (PermissionDenied, E.FORBIDDEN, lambda e: {"action": e.action}),
    (AuthenticationRequired, E.UNAUTHENTICATED, lambda e: None),
)


def create_app(config_name=None):
    """
    Build a LUMA app for ``config_name`` ("development", "testing" or
    "production"; defaults to APP_ENV).
    """
    config_name = config_name or os.getenv("APP_ENV", "development")

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config[config_name]())
    app.config.setdefault("MAX_CONTENT_LENGTH", 1 * 1024 * 1024)

    configure_logging(app)
    _init_extensions(app)

    init_request_timing(app)
    init_auth(app)

    # registers every table on db.metadata for create_all and Alembic
    from luma.models import course_request, email_template, profile, project_group  # noqa: F401

    if config_name != "production":
        _create_local_schema(app)

    from luma.blueprints.admin_bp import admin_bp
    from luma.blueprints.assistant_bp import assistant_bp
    from luma.blueprints.course_request_bp import course_request_bp
    from luma.blueprints.health_bp import health_bp
    from luma.blueprints.learning_bp import learning_bp

    for blueprint in (health_bp, learning_bp, course_request_bp, assistant_bp, admin_bp):
        app.register_blueprint(blueprint)

    _register_error_handlers(app)
    _register_cli(app)

    # limits attach to registered blueprints
    init_rate_limits(app, limiter)

    return app


def _init_extensions(app):
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    origins = app.config.get("CORS_ORIGINS", "*")
    if origins and origins != "*":
        CORS(app, origins=[o.strip() for o in origins.split(",") if o.strip()])
    else:
        CORS(app)


def _create_local_schema(app):
    """Create missing tables for SQLite/dev databases; production runs migrations."""
    os.makedirs(app.instance_path, exist_ok=True)
    with app.app_context():
        try:
            db.create_all()
        except SQLAlchemyError as e:
            app.logger.warning("Could not create tables: %s", e)


def _register_error_handlers(app):
    """Translate service exceptions and HTTP errors into the JSON error envelope."""

    def _domain_handler(code, details_of):
        def handle(e):
            return api_error(code, str(e), details=details_of(e))
        return handle

    for exc_type, code, details_of in _DOMAIN_ERRORS:
        app.register_error_handler(exc_type, _domain_handler(code, details_of))

    @app.errorhandler(PersistenceError)
    def _persistence_error(e):
        logger.error("Course request store write failed: %s", e)
        return api_error(E.DATABASE, e.raw_error)

    @app.errorhandler(404)
    def _unknown_route(e):
        return {"error": "Not found", "code": E.NOT_FOUND, "path": request.path}, 404

    @app.errorhandler(405)
    def _wrong_method(e):
        return {"error": "Method not allowed"}, 405

    @app.errorhandler(429)
    def _rate_limited(e):
        return {"error": "Too many requests", "retry_after": e.description}, 429

    @app.errorhandler(500)
    def _internal_error(e):
        logger.error("Unhandled error: %s", e, exc_info=True)
        return {"error": "Internal server error", "code": E.INTERNAL}, 500


def _register_cli(app):
    @app.cli.command("seed-demo")
    def seed_demo_cmd():
        """Seed demo profiles, an admin grant and the approval email template."""
        from luma.services.seed_service import seed_demo_data
        created = seed_demo_data(app.config.get("COURSE_APPROVAL_TEMPLATE_NAME"))
        click.echo(
            f"Seeded {created['profiles']} profiles, {created['admin_grants']} admin grants, "
            f"{created['templates']} templates."
        )

    @app.cli.command("grant-admin")
    @click.argument("user_id")
    def grant_admin_cmd(user_id):
        """Grant the admin role to an auth account id."""
        from luma.services.admin_role_service import grant_admin
        try:
            grant_admin(user_id)
        except ConflictError:
            click.echo(f"{user_id} is already an admin.")
            return
        click.echo(f"Granted admin to {user_id}.")

    @app.cli.command("submit-request")
    @click.argument("profile_id")
    @click.argument("course_id")
    @click.option("--reason", default="", help="Why the course is needed.")
    @click.option("--open-mail", is_flag=True, help="Open the approval email in the local mail client.")
    def submit_request_cmd(profile_id, course_id, reason, open_mail):
        """Submit a course request for PROFILE_ID and print the approval email."""
        import webbrowser

        from luma.services.approval_workflow import build_approval_workflow
        from luma.services.catalog_service import get_course

        workflow = build_approval_workflow(mail_opener=webbrowser.open if open_mail else None)
        try:
            result = workflow.submit(profile_id, get_course(course_id), reason)
        except (ValidationError, NotFoundError, PersistenceError) as e:
            raise click.ClickException(str(e)) from e

        click.echo(f"Request {result.request['id']} is {result.request['status']}.")
        if result.awaiting_manager:
            click.echo("No manager assigned; the request is waiting for a manager.")
        elif result.composition:
            click.echo(f"To: {result.composition.to}")
            click.echo(f"Subject: {result.composition.subject}")
            click.echo(result.composition.mailto_uri)
