"""
Smoke tests for the SQLClientRepository against a temporary SQLite database.
"""
from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import select

from lombard.db.models import ClientRow
from lombard.domain.errors import ClientNotFoundError, StorageError
from lombard.repositories.sql_repository import SQLClientRepository


def test_rows_use_null_and_gender_codes(sql_database, make_client):
    repo = SQLClientRepository(sql_database)
    stored = repo.add(make_client(patronymic="", email="", gender="Female"))

    with sql_database.session() as session:
        row = session.get(ClientRow, stored.id)
        assert row.patronymic is None
        assert row.email is None
        assert row.gender == "F"
        assert row.birth_date == date(1990, 5, 15)

    loaded = repo.get_by_id(stored.id)
    assert loaded.patronymic == ""
    assert loaded.email == ""
    assert loaded == stored


def test_identity_comes_from_the_store(sql_database, make_client):
    with sql_database.session() as session:
        session.add(
            ClientRow(
                client_id=41,
                last_name="Petrov",
                first_name="Ivan",
                passport_series="4321",
                passport_number="000041",
                phone_number="79990000041",
                phone_digits="79990000041",
                birth_date=date(1980, 1, 1),
                gender="M",
            )
        )
        session.commit()

    repo = SQLClientRepository(sql_database)
    assert repo.add(make_client()).id == 42
    assert repo.get_count() == 2


def test_update_writes_every_column(sql_database, make_client):
    repo = SQLClientRepository(sql_database)
    stored = repo.add(make_client())
    repo.update(stored.id, make_client(first_name="Pavel", email="", gender="F"))

    with sql_database.session() as session:
        row = session.execute(select(ClientRow).where(ClientRow.client_id == stored.id)).scalar_one()
        assert row.first_name == "Pavel"
        assert row.email is None
        assert row.gender == "F"


def test_column_sort_keeps_paging_in_the_query(sql_database, make_client):
    repo = SQLClientRepository(sql_database)
    for n, last_name in enumerate(["Petrov", "Ivanov", "Sidorov"], start=1):
        repo.add(make_client(last_name=last_name, passport_number=f"00000{n}", phone_number=f"7999000000{n}", email=""))

    repo.sort_by_last_name()
    assert [s.last_name for s in repo.get_short_list(0, 2)] == ["Ivanov", "Petrov"]

    # a column sort replaces an earlier key-based one
    repo.sort_by(lambda c: c.first_name)
    repo.sort_by_id(ascending=False)
    assert [s.id for s in repo.get_all_short()] == [3, 2, 1]


def test_cyrillic_search_is_case_insensitive(sql_database, make_client):
    repo = SQLClientRepository(sql_database)
    repo.add(make_client(last_name="Петров"))
    assert [c.last_name for c in repo.search_by_last_name("ПЕТР")] == ["Петров"]


def test_invalid_stored_row_is_a_storage_error(sql_database):
    with sql_database.session() as session:
        session.add(
            ClientRow(
                last_name="Petrov",
                first_name="Ivan",
                passport_series="4321",
                passport_number="000041",
                phone_number="79990000041",
                phone_digits="79990000041",
                birth_date=date(1980, 1, 1),
                gender=None,
            )
        )
        session.commit()

    repo = SQLClientRepository(sql_database)
    with pytest.raises(StorageError):
        repo.get_by_id(1)
    with pytest.raises(ClientNotFoundError):
        repo.get_by_id(2)


def test_missing_table_surfaces_storage_error(sql_database, make_client):
    repo = SQLClientRepository(sql_database)
    sql_database.drop_all()

    with pytest.raises(StorageError):
        repo.get_count()
    with pytest.raises(StorageError):
        repo.add(make_client())
    assert repo.ping() is True


def test_ping_fails_for_unreachable_database(tmp_path):
    repo = SQLClientRepository.from_url(f"sqlite:///{tmp_path / 'missing' / 'x.db'}")
    try:
        assert repo.ping() is False
    finally:
        repo.close()


def test_lifecycle_hooks_are_noops(sql_database, make_client):
    repo = SQLClientRepository(sql_database)
    repo.add(make_client())
    repo.load()
    repo.save()
    assert repo.get_count() == 1
