"""
Database initialization helper.
"""

import staffhub.models  # noqa: F401  (registers tables on Base.metadata)
from staffhub.db import Base, get_engine


def init_db() -> None:
    """
    Create database tables for all registered models.
    """
    Base.metadata.create_all(bind=get_engine())
