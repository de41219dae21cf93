import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from onboarding.config.settings import Settings
from onboarding.database.connection import close_pool, get_connection, init_pool, ping
from onboarding.database.session_repository import PostgresSessionRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "onboarding_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        ping()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run integration tests")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def session_repository(integration_pool: None) -> PostgresSessionRepository:
    repository = PostgresSessionRepository()
    repository.ensure_schema()
    return repository


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    session_ids: list[str] = []
    yield session_ids
    if not session_ids:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for session_id in session_ids:
                cur.execute("DELETE FROM onboarding_sessions WHERE id = %s", (session_id,))
        conn.commit()
