"""
Configuration helpers for the Lombard registry.

Settings are read once from environment variables (storage backend, data file
location, database URL, logging level) so that repositories and routers do
not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_KINDS = ("json", "yaml", "sql")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage: str
    data_file: str
    database_url: str
    log_level: str
    page_size_max: int


def _default_data_file(storage: str) -> str:
    suffix = "yaml" if storage == "yaml" else "json"
    return os.path.join("data", f"clients.{suffix}")


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    storage = (os.getenv("LOMBARD_STORAGE") or "json").strip().lower()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage=storage,
        data_file=os.getenv("LOMBARD_DATA_FILE") or _default_data_file(storage),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        page_size_max=_int(os.getenv("PAGE_SIZE_MAX", "100"), 100),
    )
