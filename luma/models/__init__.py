"""
LUMA Learning Platform
SQLAlchemy models package.

All model modules import the shared ``db`` handle from here:

    from luma.models import db
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
