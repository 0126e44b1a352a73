# tests/conftest.py
from __future__ import annotations

import pytest
from sqlalchemy.orm import Session
from testcontainers.postgres import PostgresContainer

from dubstudio.common.settings import get_settings
from dubstudio.database.core.main import Database


@pytest.fixture(scope="session")
def _postgres_url():
    """
    A throwaway Postgres when USE_TESTCONTAINERS=true; otherwise None and
    every test gets its own SQLite file.
    """
    cfg = get_settings()
    if not cfg.use_testcontainers:
        yield None
        return
    with PostgresContainer(cfg.test_db_image) as pg:
        # testcontainers defaults to psycopg2 in the URL
        yield pg.get_connection_url().replace("psycopg2", "psycopg")


@pytest.fixture()
def database(tmp_path, _postgres_url) -> Database:
    url = _postgres_url or f"sqlite:///{tmp_path / 'dubstudio-test.db'}"
    database = Database(url=url)
    database.create_all()
    try:
        yield database
    finally:
        if _postgres_url:
            database.drop_all()
        database.dispose()


@pytest.fixture()
def db(database) -> Session:
    """Plain session on the per-test database; tests commit when the API must see their rows."""
    session = database.session()
    try:
        yield session
    finally:
        session.close()
