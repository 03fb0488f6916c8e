import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from discovery.config.settings import Settings
from discovery.database.connection import close_pool, get_connection, init_pool

SCHEMA = """
CREATE TABLE IF NOT EXISTS discovery_data_sources (
    id BIGINT PRIMARY KEY,
    name TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS discovery_files (
    object_id BIGINT PRIMARY KEY,
    name TEXT NOT NULL,
    parent_path TEXT,
    size BIGINT,
    mime_type TEXT,
    md5 TEXT,
    data_source_id BIGINT REFERENCES discovery_data_sources (id),
    modified_time TIMESTAMPTZ,
    created_time TIMESTAMPTZ,
    known_status TEXT,
    hash_set_names TEXT[],
    interesting_item_sets TEXT[],
    tag_names TEXT[],
    owner TEXT
);
CREATE TABLE IF NOT EXISTS cr_file_instances (
    id BIGSERIAL PRIMARY KEY,
    md5 TEXT NOT NULL,
    case_id BIGINT NOT NULL
);
CREATE TABLE IF NOT EXISTS cr_known_files (
    md5 TEXT PRIMARY KEY,
    known_status TEXT NOT NULL
);
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "discovery_test")
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
def owner() -> str:
    """Unique examiner name so seeded rows never collide across runs."""
    return f"examiner-{uuid.uuid4().hex[:8]}"


@pytest.fixture
def seed_files(
    db_conn: psycopg.Connection[Any], owner: str
) -> Generator[list[int], None, None]:
    """Seed one data source with five files of 10..50 bytes owned by `owner`."""
    base_id = uuid.uuid4().int % 1_000_000_000 * 10
    data_source_id = base_id
    object_ids = [base_id + i for i in range(1, 6)]
    with db_conn.cursor() as cur:
        cur.execute(
            "INSERT INTO discovery_data_sources (id, name) VALUES (%s, %s)",
            (data_source_id, "laptop.E01"),
        )
        for i, (object_id, size) in enumerate(zip(object_ids, [30, 50, 10, 40, 20])):
            cur.execute(
                """
                INSERT INTO discovery_files
                    (object_id, name, parent_path, size, mime_type, md5, data_source_id,
                     known_status, hash_set_names, tag_names, owner)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    object_id,
                    f"file{i}.jpg",
                    "/Users/alice/Pictures/",
                    size,
                    "image/jpeg",
                    f"{object_id:032x}",
                    data_source_id,
                    "unknown",
                    [],
                    ["Evidence"] if i < 2 else [],
                    owner,
                ),
            )
    db_conn.commit()
    try:
        yield object_ids
    finally:
        with db_conn.cursor() as cur:
            cur.execute("DELETE FROM discovery_files WHERE object_id = ANY(%s)", (object_ids,))
            cur.execute("DELETE FROM discovery_data_sources WHERE id = %s", (data_source_id,))
        db_conn.commit()


@pytest.fixture
def seed_correlation(
    db_conn: psycopg.Connection[Any],
) -> Generator[str, None, None]:
    md5 = uuid.uuid4().hex
    with db_conn.cursor() as cur:
        for case_id in (1, 2, 2, 3):
            cur.execute(
                "INSERT INTO cr_file_instances (md5, case_id) VALUES (%s, %s)",
                (md5, case_id),
            )
        cur.execute(
            "INSERT INTO cr_known_files (md5, known_status) VALUES (%s, %s)",
            (md5, "notable"),
        )
    db_conn.commit()
    try:
        yield md5
    finally:
        with db_conn.cursor() as cur:
            cur.execute("DELETE FROM cr_file_instances WHERE md5 = %s", (md5,))
            cur.execute("DELETE FROM cr_known_files WHERE md5 = %s", (md5,))
        db_conn.commit()
