"""Engine, session factory and request-scoped session dependency."""

from .session import SessionLocal, create_tables, get_db

__all__ = ["SessionLocal", "create_tables", "get_db"]
