"""Gender enumeration shared by the record model and the storage codecs."""
from __future__ import annotations

from enum import Enum


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"

    @property
    def code(self) -> str:
        """Single-character column code (M/F)."""
        return self.value[0]

    @classmethod
    def parse(cls, value: "Gender | str") -> "Gender":
        """Accept a member, its label ("Male") or its code ("M"), any case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            for member in cls:
                if text in (member.value.lower(), member.code.lower(), member.name.lower()):
                    return member
        raise ValueError(f"Unknown gender: {value!r}")
