"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata
before create_all runs.
"""

import logging

from sqlalchemy.engine import Engine

from app.db.session import engine as default_engine
from app.models.base import Base
from app.models import user  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine | None = None) -> None:
    """
    Create all tables based on SQLAlchemy models.

    There are no migrations; tables that already exist are left untouched.
    """
    bind = engine or default_engine
    Base.metadata.create_all(bind=bind)
    logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")
