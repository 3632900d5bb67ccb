"""Client records and their public projection."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime

from .gender import Gender
from .validation import age_on, digits_only, validate_client, validate_gender


@dataclass(frozen=True)
class ClientSummary:
    """Listing view of a client without email, birth date or gender."""

    id: int
    last_name: str
    first_name: str
    passport_series: str
    passport_number: str
    phone_number: str
    patronymic: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.last_name} {self.first_name} {self.patronymic}".strip()


@dataclass(frozen=True)
class Client:
    """
    A validated client record.

    Construction runs every field rule, so an instance is always valid. The
    identity is 0 until a repository stores the record; changes are made by
    building a new value (replace/with_id), never by mutating one.
    """

    last_name: str
    first_name: str
    passport_series: str
    passport_number: str
    phone_number: str
    birth_date: date
    gender: Gender
    patronymic: str = ""
    email: str = ""
    id: int = 0

    def __post_init__(self) -> None:
        if not (self.patronymic or "").strip():
            object.__setattr__(self, "patronymic", "")
        object.__setattr__(self, "email", self.email or "")
        if isinstance(self.birth_date, datetime):
            object.__setattr__(self, "birth_date", self.birth_date.date())
        validate_client(self)
        object.__setattr__(self, "gender", validate_gender(self.gender))

    @property
    def age(self) -> int:
        return age_on(self.birth_date)

    @property
    def full_name(self) -> str:
        return f"{self.last_name} {self.first_name} {self.patronymic}".strip()

    @property
    def passport(self) -> str:
        return f"{self.passport_series} {self.passport_number}"

    @property
    def normalized_phone(self) -> str:
        return digits_only(self.phone_number)

    def full_info(self) -> str:
        return (
            f"{self.full_name}, gender: {self.gender.value}, passport: {self.passport}, "
            f"phone: {self.phone_number}, email: {self.email}, age: {self.age}"
        )

    def replace(self, **changes) -> "Client":
        return dataclasses.replace(self, **changes)

    def with_id(self, client_id: int) -> "Client":
        return dataclasses.replace(self, id=client_id)

    def to_summary(self) -> ClientSummary:
        return ClientSummary(
            id=self.id,
            last_name=self.last_name,
            first_name=self.first_name,
            passport_series=self.passport_series,
            passport_number=self.passport_number,
            phone_number=self.phone_number,
            patronymic=self.patronymic,
        )

    def __str__(self) -> str:
        return self.full_name
