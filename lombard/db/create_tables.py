"""Utility script to create the Clients table on DATABASE_URL."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from lombard.core.config import get_settings
from .session import Database


def create_all() -> None:
    database = Database.from_settings(get_settings())
    try:
        database.create_all()
    finally:
        database.dispose()


if __name__ == "__main__":
    try:
        create_all()
        print("Database tables created successfully.")
    except (SQLAlchemyError, RuntimeError) as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
