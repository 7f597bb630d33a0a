"""
Database Session Management
Creates and manages the SQLAlchemy engine and session factory of the local store.

The aggregate lives in a single-file SQLite database by default. Components
receive a session factory built with `create_session_factory` explicitly;
there is no module-level session.
"""

from typing import Callable, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from rexos.core.config import settings
from rexos.db.base import Base


def create_db_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create an engine for the local store.

    Configuration:
    - echo=settings.DEBUG: Log all SQL statements when debug mode is enabled
    - pool_pre_ping=True: Verify connections before using them
    """
    return create_engine(
        database_url or settings.DATABASE_URL,
        echo=settings.DEBUG,  # Log SQL statements in debug mode
        pool_pre_ping=True,  # Check connection health before using
    )


def create_session_factory(
    database_url: Optional[str] = None,
    create_tables: bool = True
) -> Callable[[], Session]:
    """
    Build a session factory bound to a fresh engine.

    Args:
        database_url: SQLAlchemy URL (defaults to settings.DATABASE_URL)
        create_tables: Create all registered tables if they don't exist

    Returns:
        sessionmaker producing sessions with explicit commit/flush

    Example:
        factory = create_session_factory("sqlite:///tmp/rexos.db")
        with factory() as db:
            db.query(StateBlob).count()
    """
    db_engine = create_db_engine(database_url)
    if create_tables:
        # Import models so they are registered on Base before create_all
        import rexos.models  # noqa: F401

        Base.metadata.create_all(bind=db_engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
