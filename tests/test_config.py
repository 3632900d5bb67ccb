from __future__ import annotations

import pytest
from sqlalchemy import create_engine, inspect

from lombard.core import config as core_config
from lombard.core.config import Settings
from lombard.db import create_tables
from lombard.repositories.factory import create_repository
from lombard.repositories.json_storage import JsonClientRepository
from lombard.repositories.sql_repository import SQLClientRepository
from lombard.repositories.yaml_storage import YamlClientRepository


@pytest.fixture()
def clean_settings(monkeypatch):
    for name in ("APP_ENV", "LOMBARD_STORAGE", "LOMBARD_DATA_FILE", "DATABASE_URL", "LOG_LEVEL", "PAGE_SIZE_MAX"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    yield monkeypatch
    core_config.get_settings.cache_clear()


def _settings(**overrides) -> Settings:
    fields = dict(
        app_env="test",
        storage="json",
        data_file="clients.json",
        database_url="",
        log_level="INFO",
        page_size_max=100,
    )
    fields.update(overrides)
    return Settings(**fields)


def test_defaults(clean_settings):
    settings = core_config.get_settings()
    assert settings.storage == "json"
    assert settings.data_file.endswith("clients.json")
    assert settings.database_url == ""
    assert settings.page_size_max == 100


def test_environment_overrides(clean_settings):
    clean_settings.setenv("LOMBARD_STORAGE", "YAML")
    clean_settings.setenv("PAGE_SIZE_MAX", "not-a-number")
    clean_settings.setenv("LOG_LEVEL", "debug")
    settings = core_config.get_settings()
    assert settings.storage == "yaml"
    assert settings.data_file.endswith("clients.yaml")
    assert settings.page_size_max == 100
    assert settings.log_level == "DEBUG"


def test_factory_builds_file_backends(tmp_path):
    json_repo = create_repository(_settings(data_file=str(tmp_path / "c.json")))
    yaml_repo = create_repository(_settings(storage="yaml", data_file=str(tmp_path / "c.yaml")))
    assert isinstance(json_repo, JsonClientRepository)
    assert isinstance(yaml_repo, YamlClientRepository)


def test_factory_builds_sql_backend(tmp_path):
    repo = create_repository(_settings(storage="sql", database_url=f"sqlite:///{tmp_path / 'c.db'}"))
    try:
        assert isinstance(repo, SQLClientRepository)
        assert repo.get_count() == 0
    finally:
        repo.close()


def test_factory_rejects_bad_configuration():
    with pytest.raises(RuntimeError, match="DATABASE_URL"):
        create_repository(_settings(storage="sql"))
    with pytest.raises(RuntimeError, match="Unknown storage"):
        create_repository(_settings(storage="xml"))


def test_create_tables_script(clean_settings, tmp_path):
    url = f"sqlite:///{tmp_path / 'schema.db'}"
    clean_settings.setenv("DATABASE_URL", url)
    create_tables.create_all()

    engine = create_engine(url)
    try:
        assert "Clients" in inspect(engine).get_table_names()
    finally:
        engine.dispose()
