"""
Persistence adapters.

Every backend implements ClientRepository; services choose one through
create_repository and never touch files or tables directly.
"""

from .base import ClientRepository
from .factory import create_repository
from .json_storage import JsonClientRepository
from .sql_repository import SQLClientRepository
from .yaml_storage import YamlClientRepository

__all__ = [
    "ClientRepository",
    "JsonClientRepository",
    "YamlClientRepository",
    "SQLClientRepository",
    "create_repository",
]
