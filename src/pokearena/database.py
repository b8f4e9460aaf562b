"""Database connection and session management.

This module provides engine construction, session factories and utility
functions for the roster and battle-history store.
"""

import logging
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pokearena.models import Base

logger = logging.getLogger(__name__)


def _configure_sqlite(
    dbapi_connection: Any, connection_record: Any  # noqa: ARG001
) -> None:
    """Enable WAL journaling and foreign keys on every SQLite connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _is_memory_url(url: str) -> bool:
    return url in {"sqlite://", "sqlite:///:memory:"}


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Create and configure a database engine.

    Args:
        url: SQLAlchemy database URL
        echo: Whether to log every statement

    Returns:
        Engine: Configured SQLAlchemy engine

    Note:
        In-memory SQLite shares one connection across threads so every
        session sees the same database.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo, pool_pre_ping=True)

    if _is_memory_url(url):
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            pool_pre_ping=True,
        )
    event.listen(engine, "connect", _configure_sqlite)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``."""
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)


def check_database_health(engine: Engine) -> bool:
    """Return True when a trivial query succeeds."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("database health check failed: %s", exc)
        return False
    return True
