# hostel_admin/db/init_db.py
"""Database initialization utilities."""

from typing import Optional

from sqlalchemy.engine import Engine

from hostel_admin.core.logging import get_logger
from hostel_admin.db.base import Base, import_models

logger = get_logger(__name__)


def _resolve_engine(bind: Optional[Engine]) -> Engine:
    if bind is not None:
        return bind
    from hostel_admin.db.session import engine

    return engine


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create all tables, indexes and constraints that do not exist yet.

    Suitable for development and testing; production schemas should be
    managed with migrations.
    """
    engine = _resolve_engine(bind)
    try:
        import_models()
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured", extra={"tables": len(Base.metadata.tables)})
    except Exception as e:
        logger.error(f"Error initializing database: {e}", exc_info=True)
        raise


def drop_db(bind: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data!
    """
    engine = _resolve_engine(bind)
    try:
        import_models()
        Base.metadata.drop_all(bind=engine)
        logger.warning("All database tables dropped")
    except Exception as e:
        logger.error(f"Error dropping database: {e}", exc_info=True)
        raise


def reset_db(bind: Optional[Engine] = None) -> None:
    """Drop and recreate all tables."""
    logger.warning("Resetting database...")
    drop_db(bind)
    init_db(bind)
    logger.info("Database reset complete")
