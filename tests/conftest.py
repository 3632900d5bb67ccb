"""Shared fixtures: client factory and one repository per backend."""
from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

# Make the lombard package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lombard.db.session import Database  # noqa: E402
from lombard.domain.clients import Client  # noqa: E402
from lombard.domain.gender import Gender  # noqa: E402
from lombard.repositories.json_storage import JsonClientRepository  # noqa: E402
from lombard.repositories.sql_repository import SQLClientRepository  # noqa: E402
from lombard.repositories.yaml_storage import YamlClientRepository  # noqa: E402


def _client(**overrides) -> Client:
    fields = {
        "last_name": "Ivanov",
        "first_name": "Petr",
        "patronymic": "Sergeevich",
        "passport_series": "1234",
        "passport_number": "567890",
        "phone_number": "79990000000",
        "email": "ivanov@example.com",
        "birth_date": date(1990, 5, 15),
        "gender": Gender.MALE,
    }
    fields.update(overrides)
    return Client(**fields)


@pytest.fixture()
def make_client():
    """Factory for valid transient clients; keyword overrides replace single fields."""
    return _client


@pytest.fixture()
def sql_database(tmp_path):
    """Temporary SQLite database with the Clients table created."""
    db_file = tmp_path / "test.db"
    database = Database(f"sqlite:///{db_file}")
    database.create_all()

    yield database

    database.drop_all()
    database.dispose()


@pytest.fixture(params=["json", "yaml", "sql"])
def repo(request, tmp_path):
    """Each backend in turn, empty, so shared behaviour is checked identically."""
    if request.param == "json":
        repository = JsonClientRepository(tmp_path / "clients.json")
    elif request.param == "yaml":
        repository = YamlClientRepository(tmp_path / "clients.yaml")
    else:
        database = Database(f"sqlite:///{tmp_path / 'clients.db'}")
        database.create_all()
        repository = SQLClientRepository(database, owns_database=True)

    yield repository

    repository.close()
