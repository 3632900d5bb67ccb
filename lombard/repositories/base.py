"""
Repository contract shared by every storage backend.

Services depend on ClientRepository rather than on a concrete file or
database adapter; each backend implements the same semantics.
"""
from __future__ import annotations

import abc
from typing import Any, Callable

from lombard.domain.clients import Client, ClientSummary
from lombard.domain.errors import ClientValidationError
from lombard.domain.validation import age_on

SortKey = Callable[[Client], Any]


def check_page(offset: int, count: int) -> None:
    if offset < 0:
        raise ClientValidationError("offset", "must not be negative")
    if count <= 0:
        raise ClientValidationError("count", "must be greater than 0")


class ClientRepository(abc.ABC):
    """CRUD, paging, search and ordering over client records."""

    # -------------------------- lifecycle --------------------------
    @abc.abstractmethod
    def load(self) -> None:
        """Read the collection from storage."""

    @abc.abstractmethod
    def save(self) -> None:
        """Write the collection to storage."""

    def ping(self) -> bool:
        """Return True when the storage answers."""
        return True

    def close(self) -> None:
        """Release storage resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # -------------------------- reads --------------------------
    @abc.abstractmethod
    def get_by_id(self, client_id: int) -> Client:
        """Return the client with ``client_id`` or raise ClientNotFoundError."""

    @abc.abstractmethod
    def get_short_list(self, offset: int, count: int) -> list[ClientSummary]:
        """Return up to ``count`` summaries in stored order starting at ``offset``."""

    @abc.abstractmethod
    def get_all(self) -> list[Client]:
        """Return a snapshot of every client in stored order."""

    def get_all_short(self) -> list[ClientSummary]:
        return [client.to_summary() for client in self.get_all()]

    @abc.abstractmethod
    def get_count(self) -> int:
        ...

    @abc.abstractmethod
    def search_by_last_name(self, last_name: str) -> list[Client]:
        """Case-insensitive substring match on the last name."""

    @abc.abstractmethod
    def search_by_phone(self, phone_number: str) -> list[Client]:
        """Match phone numbers after reducing both sides to digits."""

    # -------------------------- writes --------------------------
    @abc.abstractmethod
    def add(self, client: Client) -> Client:
        """Validate, check uniqueness, assign the next identity and persist."""

    @abc.abstractmethod
    def update(self, client_id: int, client: Client) -> Client:
        """Replace the whole record stored at ``client_id``."""

    @abc.abstractmethod
    def delete(self, client_id: int) -> bool:
        """Remove the record; False when nothing was stored under ``client_id``."""

    @abc.abstractmethod
    def clear(self) -> None:
        """Remove every record and restart identities at 1."""

    # -------------------------- ordering --------------------------
    @abc.abstractmethod
    def sort_by(self, key: SortKey, ascending: bool = True) -> None:
        """Stable reorder of the collection by ``key``."""

    def sort_by_last_name(self, ascending: bool = True) -> None:
        self.sort_by(lambda c: c.last_name, ascending)

    def sort_by_birth_date(self, ascending: bool = True) -> None:
        self.sort_by(lambda c: c.birth_date, ascending)

    def sort_by_id(self, ascending: bool = True) -> None:
        self.sort_by(lambda c: c.id, ascending)

    def sort_by_age(self, ascending: bool = True) -> None:
        self.sort_by(lambda c: age_on(c.birth_date), ascending)
