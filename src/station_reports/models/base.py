"""
SQLAlchemy ORM Base Configuration
Provides declarative base and session management for ORM models.

The engine comes from database.connection so there is a single pool.
"""

from sqlalchemy.orm import DeclarativeBase, scoped_session, sessionmaker


class Base(DeclarativeBase):
    """Base class for all ORM models"""
    pass


def _get_engine():
    """Lazy import to avoid circular dependencies during module initialization."""
    from ..database.connection import db
    return db.get_engine()


# Session factory for manual session creation (scripts)
SessionLocal = sessionmaker(
    bind=_get_engine(),
    expire_on_commit=False,
    autoflush=True,
)

# Scoped session for Flask request context (thread-local session management)
db_session = scoped_session(SessionLocal)


def create_session():
    """
    Factory for creating sessions outside Flask context.

    Returns:
        SQLAlchemy Session instance (caller commits and closes)
    """
    return SessionLocal()
