"""Request/response bodies of the HTTP layer."""
from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from lombard.domain.clients import Client, ClientSummary
from lombard.domain.gender import Gender


class ClientIn(BaseModel):
    last_name: str
    first_name: str
    patronymic: str = ""
    passport_series: str
    passport_number: str
    phone_number: str
    email: str = ""
    birth_date: date
    gender: Gender


class ClientSummaryOut(BaseModel):
    id: int
    last_name: str
    first_name: str
    patronymic: str
    passport_series: str
    passport_number: str
    phone_number: str

    @classmethod
    def from_summary(cls, summary: ClientSummary) -> "ClientSummaryOut":
        return cls(
            id=summary.id,
            last_name=summary.last_name,
            first_name=summary.first_name,
            patronymic=summary.patronymic,
            passport_series=summary.passport_series,
            passport_number=summary.passport_number,
            phone_number=summary.phone_number,
        )


class ClientOut(ClientSummaryOut):
    email: str
    birth_date: date
    gender: Gender
    age: int

    @classmethod
    def from_client(cls, client: Client) -> "ClientOut":
        return cls(
            id=client.id,
            last_name=client.last_name,
            first_name=client.first_name,
            patronymic=client.patronymic,
            passport_series=client.passport_series,
            passport_number=client.passport_number,
            phone_number=client.phone_number,
            email=client.email,
            birth_date=client.birth_date,
            gender=client.gender,
            age=client.age,
        )
