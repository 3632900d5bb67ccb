"""Backend selection from settings."""
from __future__ import annotations

import logging

from lombard.core.config import STORAGE_KINDS, Settings, get_settings
from lombard.db.session import Database

from .base import ClientRepository
from .json_storage import JsonClientRepository
from .sql_repository import SQLClientRepository
from .yaml_storage import YamlClientRepository

logger = logging.getLogger(__name__)


def create_repository(settings: Settings | None = None) -> ClientRepository:
    """Build the backend named by ``settings.storage`` (json, yaml or sql)."""
    settings = settings or get_settings()
    kind = settings.storage
    if kind not in STORAGE_KINDS:
        raise RuntimeError(f"Unknown storage backend {kind!r}; expected one of {', '.join(STORAGE_KINDS)}")
    logger.info("Using %s client storage", kind)
    if kind == "sql":
        database = Database.from_settings(settings)
        database.create_all()
        return SQLClientRepository(database, owns_database=True)
    if kind == "yaml":
        return YamlClientRepository(settings.data_file)
    return JsonClientRepository(settings.data_file)
