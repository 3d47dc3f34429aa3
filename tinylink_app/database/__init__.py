"""
Database layer for TinyLink.

The engine is process-wide; sessions are acquired per request through
``get_db`` and closed when the request finishes.
"""

from .connection import Base, SessionLocal, engine, get_db, check_database

__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "check_database",
]
