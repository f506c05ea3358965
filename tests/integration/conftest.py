import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest
from psycopg import sql

from file_migrator.config.settings import Settings
from file_migrator.database.connection import close_pool, get_connection, init_pool

SCHEMA = """
CREATE TABLE IF NOT EXISTS provider_submissions_api (
    submission_id TEXT PRIMARY KEY,
    file_refs JSONB,
    raw_payload JSONB
);
CREATE TABLE IF NOT EXISTS provider_images (
    id BIGSERIAL PRIMARY KEY,
    submission_id TEXT NOT NULL,
    field_id TEXT NOT NULL,
    original_url TEXT NOT NULL,
    stored_path TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
CREATE TABLE IF NOT EXISTS provider_profiles (
    submission_id TEXT PRIMARY KEY,
    images JSONB NOT NULL DEFAULT '[]'::jsonb
);
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "file_migrator_test")
    os.environ.setdefault("DB_SSLMODE", "prefer")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def submission_id(db_conn: psycopg.Connection[Any]) -> Generator[str, None, None]:
    """A unique submission id whose rows are removed after the test."""
    sid = f"it-{uuid.uuid4().hex[:12]}"
    yield sid
    with db_conn.cursor() as cur:
        for table in ("provider_images", "provider_profiles", "provider_submissions_api"):
            cur.execute(
                sql.SQL("DELETE FROM {} WHERE submission_id = %s").format(
                    sql.Identifier(table)
                ),
                (sid,),
            )
    db_conn.commit()
