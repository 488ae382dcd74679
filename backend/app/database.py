# backend/app/database.py
"""
Database engine, session factory, and metadata shared across the application.

The engine is created lazily by ``init_engine`` and disposed by
``dispose_engine``; the FastAPI lifespan drives both so the store handle has
an explicit lifecycle instead of living as import-time global state.
"""

from __future__ import annotations

import logging
from typing import Any, Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool

from .core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False)

_engine: Optional[Engine] = None


def _on_sqlite_connect(dbapi_connection: Any, _connection_record: Any) -> None:
    # Let SQLAlchemy emit BEGIN itself so SAVEPOINTs nest inside a real transaction
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _on_sqlite_begin(conn: Any) -> None:
    conn.exec_driver_sql("BEGIN")


def build_engine(database_url: str, **overrides: Any) -> Engine:
    """Create an engine with pooling tuned for the target dialect."""
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=settings.db_echo,
            **overrides,
        )
        event.listen(engine, "connect", _on_sqlite_connect)
        event.listen(engine, "begin", _on_sqlite_begin)
        return engine

    return create_engine(
        database_url,
        poolclass=QueuePool,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=3600,
        pool_pre_ping=True,
        echo=settings.db_echo,
        **overrides,
    )


def init_engine(database_url: Optional[str] = None) -> Engine:
    """Open the process-wide engine and bind the session factory to it."""
    global _engine
    if _engine is not None:
        return _engine
    url = database_url or settings.database_url
    _engine = build_engine(url)
    SessionLocal.configure(bind=_engine)
    logger.info("Database engine initialised (%s)", _engine.dialect.name)
    return _engine


def get_engine() -> Engine:
    return _engine if _engine is not None else init_engine()


def dispose_engine() -> None:
    """Close pooled connections; called at shutdown."""
    global _engine
    if _engine is None:
        return
    _engine.dispose()
    logger.info("Database engine disposed")
    _engine = None


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    get_engine()
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
