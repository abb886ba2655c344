"""Database engine and session management."""

import time
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from hostel_admin.config.settings import settings
from hostel_admin.core.logging import get_logger

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ships with foreign key enforcement switched off."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: Optional[str] = None, **overrides: Any) -> Engine:
    """
    Create an engine for ``url`` (defaults to the configured database).

    SQLite engines get foreign key enforcement and thread-shareable
    connections; server databases get the configured pool.
    """
    url = url or settings.get_database_url()
    options: Dict[str, Any] = {
        "pool_pre_ping": True,
        "echo": settings.DB_ECHO,
    }

    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False, "timeout": 30}
    else:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_OVERFLOW,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
        if settings.DB_STATEMENT_TIMEOUT_MS:
            options["connect_args"] = {
                "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"
            }

    options.update(overrides)
    new_engine = create_engine(url, **options)

    if url.startswith("sqlite"):
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)

    return new_engine


# Event listeners for performance monitoring
@event.listens_for(Engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault("query_start_time", []).append(time.perf_counter())


@event.listens_for(Engine, "after_cursor_execute")
def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Stop the query timer and log slow queries."""
    started = conn.info.get("query_start_time")
    if not started:
        return
    total_time = time.perf_counter() - started.pop()

    if total_time > settings.SLOW_QUERY_THRESHOLD_SECONDS:
        logger.warning(
            f"Slow query detected ({total_time:.4f}s): {statement[:100]}...",
            extra={"duration_seconds": round(total_time, 4)},
        )


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """Context manager for database sessions outside a request."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception as e:
        logger.error(f"Database context error: {str(e)}")
        session.rollback()
        raise
    finally:
        session.close()


__all__ = ["engine", "SessionLocal", "build_engine", "get_db", "get_db_context"]
