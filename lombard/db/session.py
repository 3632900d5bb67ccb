"""Engine/session ownership for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from lombard.core.config import Settings

Base = declarative_base()


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    # SQLite's built-in lower() only folds ASCII letters
    dbapi_connection.create_function("lower", 1, lambda value: value.lower() if isinstance(value, str) else value)


class Database:
    """
    One engine (and its connection pool) owned by whoever builds it.

    Repositories receive a Database instead of reaching for a process-wide
    singleton; dispose() releases every pooled connection.
    """

    def __init__(self, url: str, **engine_options) -> None:
        url = (url or "").strip()
        if not url:
            raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
        self.url = url
        self.engine = create_engine(url, pool_pre_ping=True, **engine_options)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _register_sqlite_functions)
        self._sessionmaker = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    @contextmanager
    def session(self) -> Iterator[Session]:
        session: Session = self._sessionmaker()
        try:
            yield session
        finally:
            session.close()

    def create_all(self) -> None:
        from . import models  # noqa: F401  # register tables on Base.metadata

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
