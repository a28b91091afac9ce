"""
Settings for the LUMA app factory, one class per environment.

``create_app(name)`` instantiates ``config[name]`` and loads it with
``app.config.from_object``; instantiation is where production validates
its required environment variables.
"""

import os
import secrets

basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))


def _database_url(default=None):
    """DATABASE_URL with the legacy ``postgres://`` scheme rewritten for SQLAlchemy."""
    raw = os.getenv("DATABASE_URL", "")
    if not raw:
        return default
    return raw.replace("postgres://", "postgresql://", 1)


class Config:
    """Values every environment starts from."""

    # per-process fallback; production refuses to start without SECRET_KEY
    SECRET_KEY = os.getenv("SECRET_KEY", secrets.token_hex(32))
    DEBUG = False
    TESTING = False

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "sql" or "memory"
    REPOSITORY_BACKEND = os.getenv("REPOSITORY_BACKEND", "sql")

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

    # name of the EmailTemplate used for the manager approval mail
    COURSE_APPROVAL_TEMPLATE_NAME = os.getenv(
        "COURSE_APPROVAL_TEMPLATE_NAME", "Course Approval Request"
    )

    # pause before the scripted assistant answers
    ASSISTANT_RESPONSE_DELAY_SECONDS = float(os.getenv("ASSISTANT_RESPONSE_DELAY_SECONDS", "1.5"))


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = _database_url(
        f"sqlite:///{os.path.join(basedir, 'instance', 'luma_dev.db')}"
    )


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    RATELIMIT_ENABLED = False
    REPOSITORY_BACKEND = "sql"
    ASSISTANT_RESPONSE_DELAY_SECONDS = 0.0


class ProductionConfig(Config):
    """PostgreSQL behind a pooled engine; CORS origins must be listed explicitly."""

    SQLALCHEMY_DATABASE_URI = _database_url()
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")

    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "pool_recycle": 300,
        "pool_timeout": 20,
    }

    def __init__(self):
        missing = [
            name for name, present in (
                ("DATABASE_URL", bool(self.SQLALCHEMY_DATABASE_URI)),
                ("SECRET_KEY", bool(os.getenv("SECRET_KEY"))),
            )
            if not present
        ]
        if missing:
            raise RuntimeError(
                f"{missing[0]} environment variable is required in production"
            )


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
