"""
Database Configuration Module

SQLAlchemy 2.0 engine, session factory and declarative base.

Session Management Pattern
==========================
One session per request:
1. Request arrives: create a new session
2. Resolvers use that session for every read and write
3. The store layer commits or rolls back each write
4. The session is closed when the request ends

The per-request session is provided by the `get_db` FastAPI dependency,
which the GraphQL context getter depends on.
"""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# SQLite (tests, local runs) uses a single-thread pool without overflow
# options; every other backend gets a sized connection pool.


def enable_sqlite_foreign_keys(sqlite_engine: Engine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores REFERENCES clauses unless the pragma is set per
    connection, so a book or review could otherwise point at a missing user.
    """

    @event.listens_for(sqlite_engine, "connect")
    def _set_foreign_keys_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


if settings.is_sqlite:
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False},
        echo=settings.debug,
    )
    enable_sqlite_foreign_keys(engine)
else:
    engine = create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic reads `Base.metadata` to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Yields a new session and closes it when the request ends, even if the
    request failed.

    Usage:
        from fastapi import Depends
        from app.database import get_db

        async def get_context(db: Session = Depends(get_db)):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    For local development and scripts. Use Alembic migrations in production.
    """
    # Models must be imported so they register with Base.metadata
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
