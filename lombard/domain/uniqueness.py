"""Cross-record uniqueness rules (passport, phone, email)."""
from __future__ import annotations

from typing import Iterable

from .clients import Client
from .errors import DuplicateClientError


def ensure_unique(candidate: Client, existing: Iterable[Client], exclude_id: int | None = None) -> None:
    """
    Raise DuplicateClientError when another record shares a unique value.

    Checks run in a fixed order (passport pair, normalized phone, then email
    when the candidate has one) and the first conflict is reported. The record
    with ``exclude_id`` is ignored so an update never conflicts with itself.
    """
    others = [c for c in existing if exclude_id is None or c.id != exclude_id]

    if any(
        c.passport_series == candidate.passport_series and c.passport_number == candidate.passport_number
        for c in others
    ):
        raise DuplicateClientError("passport", candidate.passport)

    phone = candidate.normalized_phone
    if any(c.normalized_phone == phone for c in others):
        raise DuplicateClientError("phone_number", candidate.phone_number)

    if candidate.email and any(c.email == candidate.email for c in others):
        raise DuplicateClientError("email", candidate.email)
