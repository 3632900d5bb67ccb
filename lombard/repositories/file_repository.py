"""
In-memory client collection mirrored to a structured text file.

FileClientRepository keeps the whole collection as an ordered list, reloads it
on construction and rewrites the file after every mutation. Subclasses only
choose the encoding (see json_storage and yaml_storage).
"""
from __future__ import annotations

import abc
import logging
import os
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping

from lombard.domain.clients import Client, ClientSummary
from lombard.domain.errors import ClientNotFoundError, ClientValidationError, StorageError
from lombard.domain.uniqueness import ensure_unique
from lombard.domain.validation import digits_only, validate_client

from .base import ClientRepository, SortKey, check_page

logger = logging.getLogger(__name__)


def client_to_record(client: Client) -> dict:
    """Plain mapping with camelCase keys; birthDate stays a date for the codec to format."""
    return {
        "id": client.id,
        "lastName": client.last_name,
        "firstName": client.first_name,
        "patronymic": client.patronymic,
        "passportSeries": client.passport_series,
        "passportNumber": client.passport_number,
        "phoneNumber": client.phone_number,
        "email": client.email,
        "birthDate": client.birth_date,
        "gender": client.gender.value,
    }


def _parse_birth_date(value: Any) -> date | None:
    if value is None or isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise ClientValidationError("birth_date", f"unreadable date {text!r}") from exc


def client_from_mapping(data: Mapping[str, Any]) -> Client:
    """
    Rebuild a Client from a decoded record.

    Keys are matched case-insensitively ("LastName", "lastname" and
    "lastName" are the same field) and the record goes through the normal
    validating constructor.
    """
    if not isinstance(data, Mapping):
        raise ClientValidationError("record", f"expected a mapping, got {type(data).__name__}")
    fields = {str(key).lower(): value for key, value in data.items()}

    def _text(key: str) -> str:
        value = fields.get(key.lower())
        return "" if value is None else str(value)

    try:
        client_id = int(fields.get("id") or 0)
    except (TypeError, ValueError) as exc:
        raise ClientValidationError("id", f"not an integer: {fields.get('id')!r}") from exc

    return Client(
        id=client_id,
        last_name=_text("lastName"),
        first_name=_text("firstName"),
        patronymic=_text("patronymic"),
        passport_series=_text("passportSeries"),
        passport_number=_text("passportNumber"),
        phone_number=_text("phoneNumber"),
        email=_text("email"),
        birth_date=_parse_birth_date(fields.get("birthdate")),
        gender=_text("gender"),
    )


class FileClientRepository(ClientRepository):
    """Shared CRUD logic for backends that keep the collection in memory."""

    # Exceptions the codec raises on malformed content.
    decode_errors: tuple[type[Exception], ...] = (ValueError,)

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)
        self._clients: list[Client] = []
        self.load()

    # -------------------------- codec --------------------------
    @abc.abstractmethod
    def _decode(self, text: str) -> Any:
        """Parse file content into a list of record mappings."""

    @abc.abstractmethod
    def _encode(self, records: list[dict]) -> str:
        """Render record mappings as file content."""

    # -------------------------- lifecycle --------------------------
    def load(self) -> None:
        self._clients = []
        if not self.path.exists():
            logger.info("No client file at %s, starting empty", self.path)
            return
        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise StorageError(f"Malformed client file {self.path}: not UTF-8 ({exc})") from exc
        except OSError as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc
        if not text.strip():
            return
        try:
            records = self._decode(text)
        except self.decode_errors as exc:
            raise StorageError(f"Malformed client file {self.path}: {exc}") from exc
        if records is None:
            return
        if not isinstance(records, list):
            raise StorageError(f"Malformed client file {self.path}: expected a list of records")
        try:
            clients = [client_from_mapping(record) for record in records]
        except ClientValidationError as exc:
            raise StorageError(f"Invalid record in {self.path}: {exc}") from exc
        self._clients = clients
        logger.info("Loaded %d clients from %s", len(clients), self.path)

    def save(self) -> None:
        content = self._encode([client_to_record(c) for c in self._clients])
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(content, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc

    def _next_id(self) -> int:
        return max((c.id for c in self._clients), default=0) + 1

    def _index_of(self, client_id: int) -> int:
        for index, client in enumerate(self._clients):
            if client.id == client_id:
                return index
        raise ClientNotFoundError(client_id)

    # -------------------------- reads --------------------------
    def get_by_id(self, client_id: int) -> Client:
        return self._clients[self._index_of(client_id)]

    def get_short_list(self, offset: int, count: int) -> list[ClientSummary]:
        check_page(offset, count)
        return [c.to_summary() for c in self._clients[offset : offset + count]]

    def get_all(self) -> list[Client]:
        return list(self._clients)

    def get_count(self) -> int:
        return len(self._clients)

    def search_by_last_name(self, last_name: str) -> list[Client]:
        needle = (last_name or "").casefold()
        return [c for c in self._clients if needle in c.last_name.casefold()]

    def search_by_phone(self, phone_number: str) -> list[Client]:
        needle = digits_only(phone_number)
        return [c for c in self._clients if c.normalized_phone == needle]

    # -------------------------- writes --------------------------
    def _commit(self, clients: list[Client]) -> None:
        """Swap in the new collection and flush it; memory is restored if the write fails."""
        previous = self._clients
        self._clients = clients
        try:
            self.save()
        except StorageError:
            self._clients = previous
            raise

    def add(self, client: Client) -> Client:
        validate_client(client)
        ensure_unique(client, self._clients)
        stored = client.with_id(self._next_id())
        self._commit(self._clients + [stored])
        logger.info("Added client %d to %s", stored.id, self.path)
        return stored

    def update(self, client_id: int, client: Client) -> Client:
        index = self._index_of(client_id)
        validate_client(client)
        ensure_unique(client, self._clients, exclude_id=client_id)
        stored = client.with_id(client_id)
        clients = list(self._clients)
        clients[index] = stored
        self._commit(clients)
        logger.info("Updated client %d in %s", client_id, self.path)
        return stored

    def delete(self, client_id: int) -> bool:
        try:
            index = self._index_of(client_id)
        except ClientNotFoundError:
            return False
        self._commit(self._clients[:index] + self._clients[index + 1 :])
        logger.info("Deleted client %d from %s", client_id, self.path)
        return True

    def clear(self) -> None:
        self._commit([])
        logger.info("Cleared %s", self.path)

    def sort_by(self, key: SortKey, ascending: bool = True) -> None:
        if key is None:
            raise TypeError("key must be a callable")
        self._commit(sorted(self._clients, key=key, reverse=not ascending))
