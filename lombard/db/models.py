"""SQLAlchemy model of the Clients table."""
from __future__ import annotations

from sqlalchemy import CHAR, Column, Date, Integer, String

from .session import Base


class ClientRow(Base):
    __tablename__ = "Clients"

    client_id = Column(Integer, primary_key=True, autoincrement=True)
    last_name = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    patronymic = Column(String(255), nullable=True)
    passport_series = Column(String(4), nullable=False)
    passport_number = Column(String(6), nullable=False)
    phone_number = Column(String(32), nullable=False)
    # digits of phone_number, compared for search and uniqueness
    phone_digits = Column(String(11), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    birth_date = Column(Date, nullable=False)
    # M / F; NULL is reserved for "unspecified"
    gender = Column(CHAR(1), nullable=True)
