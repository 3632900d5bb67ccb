"""
Field rules for client records.

Every validator returns the accepted value or raises ClientValidationError
naming the offending field. validate_client runs them all in field order and
stops at the first violation; is_valid collapses that into a boolean.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from email_validator import EmailNotValidError, validate_email as _check_email_syntax

from .errors import ClientValidationError
from .gender import Gender

NAME_PATTERN = re.compile(r"[a-zA-Zа-яА-ЯёЁ\- ]+")
PASSPORT_SERIES_PATTERN = re.compile(r"[0-9]{4}")
PASSPORT_NUMBER_PATTERN = re.compile(r"[0-9]{6}")
NON_DIGITS = re.compile(r"[^0-9]")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255
PHONE_DIGITS = 11
MIN_AGE = 14
MAX_AGE = 150


def digits_only(value: str | None) -> str:
    """Strip every non-digit character ("+7 (999) 000-00-00" -> "79990000000")."""
    return NON_DIGITS.sub("", value or "")


def age_on(birth_date: date, today: date | None = None) -> int:
    """Full years between birth_date and today."""
    today = today or date.today()
    before_birthday = (today.month, today.day) < (birth_date.month, birth_date.day)
    return today.year - birth_date.year - int(before_birthday)


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year - years, day=28)


def _require_text(value: Any, field: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ClientValidationError(field, "must be a string")


def _validate_name(value: str | None, field: str, *, required: bool) -> str:
    _require_text(value, field)
    if value is None or not value.strip():
        if required:
            raise ClientValidationError(field, "must not be empty")
        return value or ""
    if not NAME_PATTERN.fullmatch(value):
        raise ClientValidationError(field, "may contain only letters, hyphens and spaces")
    if len(value) < NAME_MIN_LENGTH:
        raise ClientValidationError(field, f"must contain at least {NAME_MIN_LENGTH} characters")
    if len(value) > NAME_MAX_LENGTH:
        raise ClientValidationError(field, f"must not exceed {NAME_MAX_LENGTH} characters")
    return value


def validate_last_name(value: str | None) -> str:
    return _validate_name(value, "last_name", required=True)


def validate_first_name(value: str | None) -> str:
    return _validate_name(value, "first_name", required=True)


def validate_patronymic(value: str | None) -> str:
    return _validate_name(value, "patronymic", required=False)


def validate_passport_series(value: str | None) -> str:
    _require_text(value, "passport_series")
    if not value or not PASSPORT_SERIES_PATTERN.fullmatch(value):
        raise ClientValidationError("passport_series", "must consist of exactly 4 digits")
    return value


def validate_passport_number(value: str | None) -> str:
    _require_text(value, "passport_number")
    if not value or not PASSPORT_NUMBER_PATTERN.fullmatch(value):
        raise ClientValidationError("passport_number", "must consist of exactly 6 digits")
    return value


def validate_phone_number(value: str | None) -> str:
    _require_text(value, "phone_number")
    if value is None or not value.strip():
        raise ClientValidationError("phone_number", "must not be empty")
    if len(digits_only(value)) != PHONE_DIGITS:
        raise ClientValidationError("phone_number", f"must contain {PHONE_DIGITS} digits")
    return value


def validate_email(value: str | None) -> str:
    _require_text(value, "email")
    if not value:
        return ""
    if len(value) > EMAIL_MAX_LENGTH:
        raise ClientValidationError("email", f"must not exceed {EMAIL_MAX_LENGTH} characters")
    try:
        checked = _check_email_syntax(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ClientValidationError("email", f"invalid address ({exc})") from exc
    # domain case is folded by normalization, anything else must survive it
    if checked.normalized.casefold() != value.casefold():
        raise ClientValidationError("email", f"address is not in normal form (expected {checked.normalized!r})")
    return value


def validate_birth_date(value: date | datetime | None, today: date | None = None) -> date:
    if value is None:
        raise ClientValidationError("birth_date", "is required")
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        raise ClientValidationError("birth_date", "must be a date")
    today = today or date.today()
    if value > today:
        raise ClientValidationError("birth_date", "must not be in the future")
    if value < _years_before(today, MAX_AGE):
        raise ClientValidationError("birth_date", f"must not be more than {MAX_AGE} years ago")
    age = age_on(value, today)
    if age < MIN_AGE:
        raise ClientValidationError("birth_date", f"client must be at least {MIN_AGE} years old")
    if age > MAX_AGE:
        raise ClientValidationError("birth_date", f"age must not exceed {MAX_AGE} years")
    return value


def validate_gender(value: Any) -> Gender:
    try:
        return Gender.parse(value)
    except ValueError as exc:
        raise ClientValidationError("gender", f"unknown value {value!r}") from exc


def validate_id(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ClientValidationError("id", "must be an integer")
    if value < 0:
        raise ClientValidationError("id", "must not be negative")
    return value


def validate_client(client: Any) -> None:
    """Run every field rule against a client-shaped object, raising on the first failure."""
    validate_last_name(client.last_name)
    validate_first_name(client.first_name)
    validate_patronymic(client.patronymic)
    validate_passport_series(client.passport_series)
    validate_passport_number(client.passport_number)
    validate_phone_number(client.phone_number)
    validate_email(client.email)
    validate_birth_date(client.birth_date)
    validate_gender(client.gender)
    validate_id(client.id)


def is_valid(client: Any) -> bool:
    """Return True when every field rule passes."""
    try:
        validate_client(client)
    except ClientValidationError:
        return False
    return True
