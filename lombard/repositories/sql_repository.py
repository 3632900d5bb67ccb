"""
Relational client backend built on SQLAlchemy.

No collection is cached: every operation runs its own statements against the
Clients table and commits immediately. All values travel as bound
parameters.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import ColumnElement, delete, func, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lombard.db.models import ClientRow
from lombard.db.session import Database
from lombard.domain.clients import Client, ClientSummary
from lombard.domain.errors import (
    ClientNotFoundError,
    ClientValidationError,
    DuplicateClientError,
    StorageError,
)
from lombard.domain.validation import digits_only, validate_client

from .base import ClientRepository, SortKey, check_page

logger = logging.getLogger(__name__)

def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _row_to_client(row: ClientRow) -> Client:
    return Client(
        id=row.client_id,
        last_name=row.last_name,
        first_name=row.first_name,
        patronymic=row.patronymic or "",
        passport_series=row.passport_series,
        passport_number=row.passport_number,
        phone_number=row.phone_number,
        email=row.email or "",
        birth_date=row.birth_date,
        gender=row.gender or "",
    )


def _row_to_summary(row: ClientRow) -> ClientSummary:
    return ClientSummary(
        id=row.client_id,
        last_name=row.last_name,
        first_name=row.first_name,
        patronymic=row.patronymic or "",
        passport_series=row.passport_series,
        passport_number=row.passport_number,
        phone_number=row.phone_number,
    )


def _column_values(client: Client) -> dict:
    return {
        "last_name": client.last_name,
        "first_name": client.first_name,
        "patronymic": client.patronymic or None,
        "passport_series": client.passport_series,
        "passport_number": client.passport_number,
        "phone_number": client.phone_number,
        "phone_digits": client.normalized_phone,
        "email": client.email or None,
        "birth_date": client.birth_date,
        "gender": client.gender.code,
    }


class SQLClientRepository(ClientRepository):
    """CRUD helpers running statements through the database's session factory."""

    def __init__(self, database: Database, *, owns_database: bool = False) -> None:
        self.database = database
        self._owns_database = owns_database
        # ORDER BY columns, or a Python key when the order has no column form
        self._order_by: list[ColumnElement] = [ClientRow.client_id.asc()]
        self._python_order: tuple[SortKey, bool] | None = None

    @classmethod
    def from_url(cls, url: str) -> "SQLClientRepository":
        """Open a private Database for ``url``; close() disposes it."""
        return cls(Database(url), owns_database=True)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self.database.session() as session:
                yield session
        except SQLAlchemyError as exc:
            raise StorageError(f"Database operation failed: {exc}") from exc

    # -------------------------- lifecycle --------------------------
    def load(self) -> None:
        """Rows are read per operation; nothing to load."""

    def save(self) -> None:
        """Every statement commits immediately; nothing to flush."""

    def ping(self) -> bool:
        try:
            with self._session() as session:
                return session.execute(text("SELECT 1")).scalar() == 1
        except StorageError as exc:
            logger.warning("Database ping failed: %s", exc)
            return False

    def close(self) -> None:
        if self._owns_database:
            self.database.dispose()

    # -------------------------- reads --------------------------
    def _load_client(self, row: ClientRow) -> Client:
        try:
            return _row_to_client(row)
        except ClientValidationError as exc:
            raise StorageError(f"Stored client {row.client_id} is invalid: {exc}") from exc

    def get_by_id(self, client_id: int) -> Client:
        with self._session() as session:
            row = session.get(ClientRow, client_id)
            if row is None:
                raise ClientNotFoundError(client_id)
            return self._load_client(row)

    def _ordered_rows(self, session: Session) -> list[ClientRow]:
        return list(session.execute(select(ClientRow).order_by(*self._order_by)).scalars().all())

    def get_all(self) -> list[Client]:
        with self._session() as session:
            clients = [self._load_client(row) for row in self._ordered_rows(session)]
        if self._python_order is not None:
            key, ascending = self._python_order
            clients = sorted(clients, key=key, reverse=not ascending)
        return clients

    def get_short_list(self, offset: int, count: int) -> list[ClientSummary]:
        check_page(offset, count)
        if self._python_order is not None:
            return [c.to_summary() for c in self.get_all()[offset : offset + count]]
        stmt = select(ClientRow).order_by(*self._order_by).limit(count).offset(offset)
        with self._session() as session:
            return [_row_to_summary(row) for row in session.execute(stmt).scalars().all()]

    def get_all_short(self) -> list[ClientSummary]:
        if self._python_order is not None:
            return super().get_all_short()
        with self._session() as session:
            return [_row_to_summary(row) for row in self._ordered_rows(session)]

    def get_count(self) -> int:
        with self._session() as session:
            return session.execute(select(func.count()).select_from(ClientRow)).scalar_one()

    def search_by_last_name(self, last_name: str) -> list[Client]:
        pattern = f"%{_escape_like(last_name or '')}%"
        stmt = (
            select(ClientRow)
            .where(func.lower(ClientRow.last_name).like(func.lower(pattern), escape="\\"))
            .order_by(ClientRow.last_name, ClientRow.first_name)
        )
        with self._session() as session:
            return [self._load_client(row) for row in session.execute(stmt).scalars().all()]

    def search_by_phone(self, phone_number: str) -> list[Client]:
        needle = digits_only(phone_number)
        stmt = (
            select(ClientRow)
            .where(ClientRow.phone_digits == needle)
            .order_by(ClientRow.client_id)
        )
        with self._session() as session:
            return [self._load_client(row) for row in session.execute(stmt).scalars().all()]

    # -------------------------- uniqueness --------------------------
    def _count_matching(self, session: Session, *conditions, exclude_id: int | None) -> int:
        stmt = select(func.count()).select_from(ClientRow).where(*conditions)
        if exclude_id is not None:
            stmt = stmt.where(ClientRow.client_id != exclude_id)
        return session.execute(stmt).scalar_one()

    def _ensure_unique(self, session: Session, client: Client, exclude_id: int | None = None) -> None:
        if self._count_matching(
            session,
            ClientRow.passport_series == client.passport_series,
            ClientRow.passport_number == client.passport_number,
            exclude_id=exclude_id,
        ):
            raise DuplicateClientError("passport", client.passport)
        if self._count_matching(
            session,
            ClientRow.phone_digits == client.normalized_phone,
            exclude_id=exclude_id,
        ):
            raise DuplicateClientError("phone_number", client.phone_number)
        if client.email and self._count_matching(session, ClientRow.email == client.email, exclude_id=exclude_id):
            raise DuplicateClientError("email", client.email)

    # -------------------------- writes --------------------------
    def add(self, client: Client) -> Client:
        validate_client(client)
        with self._session() as session:
            self._ensure_unique(session, client)
            row = ClientRow(**_column_values(client))
            session.add(row)
            session.commit()
            stored = client.with_id(row.client_id)
        logger.info("Added client %d", stored.id)
        return stored

    def update(self, client_id: int, client: Client) -> Client:
        self.get_by_id(client_id)
        validate_client(client)
        with self._session() as session:
            self._ensure_unique(session, client, exclude_id=client_id)
            result = session.execute(
                update(ClientRow).where(ClientRow.client_id == client_id).values(**_column_values(client))
            )
            if result.rowcount == 0:
                session.rollback()
                raise ClientNotFoundError(client_id)
            session.commit()
        logger.info("Updated client %d", client_id)
        return client.with_id(client_id)

    def delete(self, client_id: int) -> bool:
        with self._session() as session:
            result = session.execute(delete(ClientRow).where(ClientRow.client_id == client_id))
            removed = result.rowcount > 0
            session.commit()
        if removed:
            logger.info("Deleted client %d", client_id)
        return removed

    def clear(self) -> None:
        with self._session() as session:
            session.execute(delete(ClientRow))
            if self.database.dialect == "postgresql":
                session.execute(
                    text("SELECT setval(pg_get_serial_sequence(:table, 'client_id'), 1, false)"),
                    {"table": '"Clients"'},
                )
            session.commit()
        logger.info("Cleared Clients table")

    # -------------------------- ordering --------------------------
    def sort_by(self, key: SortKey, ascending: bool = True) -> None:
        """
        Order later listings by an arbitrary key.

        The table has no stored order, so the key is applied to each fetched
        snapshot; listings then read the whole table instead of one window.
        """
        if key is None:
            raise TypeError("key must be a callable")
        self._python_order = (key, ascending)

    def _sort_by_column(self, column, ascending: bool) -> None:
        direction = column.asc() if ascending else column.desc()
        self._order_by = [direction, ClientRow.client_id.asc()]
        self._python_order = None

    def sort_by_last_name(self, ascending: bool = True) -> None:
        self._sort_by_column(ClientRow.last_name, ascending)

    def sort_by_birth_date(self, ascending: bool = True) -> None:
        self._sort_by_column(ClientRow.birth_date, ascending)

    def sort_by_id(self, ascending: bool = True) -> None:
        self._sort_by_column(ClientRow.client_id, ascending)
