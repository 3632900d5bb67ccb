"""Database helpers (engine ownership, table metadata)."""

from .session import Base, Database

__all__ = ["Base", "Database"]
