"""Client registry use cases (listing, registration, edits, ordering)."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from lombard.domain.clients import Client, ClientSummary
from lombard.domain.errors import ClientValidationError
from lombard.repositories.base import ClientRepository

SORT_FIELDS = ("last_name", "birth_date", "id", "age")


class ClientService:
    """Thin orchestration over a ClientRepository."""

    def __init__(self, repository: ClientRepository, *, page_size_max: int = 100) -> None:
        self.repository = repository
        self.page_size_max = page_size_max

    def build_client(self, data: Mapping[str, Any]) -> Client:
        """Turn request data into a transient (unsaved) client."""
        birth_date = data.get("birth_date")
        if isinstance(birth_date, str):
            try:
                birth_date = date.fromisoformat(birth_date)
            except ValueError as exc:
                raise ClientValidationError("birth_date", f"unreadable date {birth_date!r}") from exc
        return Client(
            last_name=data.get("last_name") or "",
            first_name=data.get("first_name") or "",
            patronymic=data.get("patronymic") or "",
            passport_series=data.get("passport_series") or "",
            passport_number=data.get("passport_number") or "",
            phone_number=data.get("phone_number") or "",
            email=data.get("email") or "",
            birth_date=birth_date,
            gender=data.get("gender") or "",
        )

    def list_page(self, offset: int = 0, count: int = 20) -> list[ClientSummary]:
        if count > self.page_size_max:
            raise ClientValidationError("count", f"must not exceed {self.page_size_max}")
        return self.repository.get_short_list(offset, count)

    def get(self, client_id: int) -> Client:
        return self.repository.get_by_id(client_id)

    def count(self) -> int:
        return self.repository.get_count()

    def register(self, data: Mapping[str, Any]) -> Client:
        return self.repository.add(self.build_client(data))

    def edit(self, client_id: int, data: Mapping[str, Any]) -> Client:
        return self.repository.update(client_id, self.build_client(data))

    def remove(self, client_id: int) -> bool:
        return self.repository.delete(client_id)

    def search(self, *, last_name: str | None = None, phone: str | None = None) -> list[Client]:
        if last_name:
            return self.repository.search_by_last_name(last_name)
        if phone:
            return self.repository.search_by_phone(phone)
        raise ClientValidationError("query", "either last_name or phone is required")

    def sort(self, field: str, ascending: bool = True) -> None:
        if field not in SORT_FIELDS:
            raise ClientValidationError("field", f"must be one of {', '.join(SORT_FIELDS)}")
        getattr(self.repository, f"sort_by_{field}")(ascending)

    def healthy(self) -> bool:
        return self.repository.ping()
