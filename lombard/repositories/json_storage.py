"""
JSON file backend.

The file holds an array of objects with camelCase keys; birthDate is written
as an ISO-8601 date-time ("1990-05-15T00:00:00"). Keys are read
case-insensitively.
"""

from __future__ import annotations

from datetime import date, datetime
import json

from .file_repository import FileClientRepository


def _json_default(value):
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time()).isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonClientRepository(FileClientRepository):
    """Client collection persisted as a JSON array."""

    decode_errors = (json.JSONDecodeError,)

    def _decode(self, text: str):
        return json.loads(text)

    def _encode(self, records: list[dict]) -> str:
        return json.dumps(records, ensure_ascii=False, indent=2, default=_json_default)
