"""Domain model of the registry: client records, validation rules and uniqueness."""

from .clients import Client, ClientSummary
from .errors import (
    ClientNotFoundError,
    ClientValidationError,
    DuplicateClientError,
    LombardError,
    StorageError,
)
from .gender import Gender

__all__ = [
    "Client",
    "ClientSummary",
    "Gender",
    "LombardError",
    "ClientValidationError",
    "DuplicateClientError",
    "ClientNotFoundError",
    "StorageError",
]
