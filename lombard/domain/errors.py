"""Exceptions raised by the registry."""
from typing import Any


class LombardError(Exception):
    """Base exception for registry workflows."""


class ClientValidationError(LombardError, ValueError):
    """Raised when a field or request argument breaks a validation rule."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class DuplicateClientError(LombardError):
    """Raised when another stored client already owns a unique value."""

    def __init__(self, field: str, value: Any):
        super().__init__(f"Client with {field} '{value}' already exists")
        self.field = field
        self.value = value


class ClientNotFoundError(LombardError, LookupError):
    """Raised when no client has the requested identity."""

    def __init__(self, client_id: Any):
        super().__init__(f"Client with ID {client_id} not found")
        self.client_id = client_id


class StorageError(LombardError):
    """Raised when the backing file or database cannot be read or written."""
