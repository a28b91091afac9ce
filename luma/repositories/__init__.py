"""
Repository selection.

``get_repositories()`` returns the bundle configured by REPOSITORY_BACKEND:
    sql    - Flask-SQLAlchemy (default)
    memory - a process-local bundle stored on the app, created on first use
"""

import logging

from flask import current_app

from luma.repositories.base import RepositoryBundle
from luma.repositories.memory import memory_repositories
from luma.repositories.sql import sql_repositories

logger = logging.getLogger(__name__)

_MEMORY_KEY = "luma_memory_repositories"


def get_repositories() -> RepositoryBundle:
    backend = current_app.config.get("REPOSITORY_BACKEND", "sql")
    if backend == "memory":
        bundle = current_app.extensions.get(_MEMORY_KEY)
        if bundle is None:
            bundle = memory_repositories()
            current_app.extensions[_MEMORY_KEY] = bundle
            logger.info("In-memory repositories initialised")
        return bundle
    if backend != "sql":
        raise RuntimeError(f"Unknown REPOSITORY_BACKEND '{backend}' (expected 'sql' or 'memory')")
    return sql_repositories()
