"""
YAML file backend.

Block-style sequence of mappings with camelCase keys. Empty optional fields
(patronymic, email) are left out of the document instead of being written
as empty strings.
"""

from __future__ import annotations

import yaml

from .file_repository import FileClientRepository

OPTIONAL_KEYS = ("patronymic", "email")


class YamlClientRepository(FileClientRepository):
    """Client collection persisted as a YAML sequence."""

    decode_errors = (yaml.YAMLError,)

    def _decode(self, text: str):
        return yaml.safe_load(text)

    def _encode(self, records: list[dict]) -> str:
        documents = [
            {key: value for key, value in record.items() if key not in OPTIONAL_KEYS or value}
            for record in records
        ]
        return yaml.safe_dump(
            documents,
            allow_unicode=True,
            sort_keys=False,
            default_flow_style=False,
        )
