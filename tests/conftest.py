"""
Pytest configuration for Database Filler.

Provides fixtures for:
- The sample schema document
- Deterministic generators and policies
- Database connection management for integration tests
"""

from __future__ import annotations

import os
import random
from datetime import datetime
from pathlib import Path
from typing import Generator

import pymysql
import pytest

from dbfiller.config import Settings
from dbfiller.domain.models import GenerationPolicy
from dbfiller.generation.values import ValueGenerator

FIXTURES_DIR = Path(__file__).parent / "fixtures"
FROZEN_NOW = datetime(2024, 2, 29, 13, 45, 7)


@pytest.fixture(scope="session")
def schema_path() -> Path:
    return FIXTURES_DIR / "schema.sql"


@pytest.fixture(scope="session")
def schema_text(schema_path: Path) -> str:
    return schema_path.read_text(encoding="utf-8")


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def random_generator(rng: random.Random) -> ValueGenerator:
    return ValueGenerator(GenerationPolicy(randomized=True), rng=rng, now=FROZEN_NOW)


@pytest.fixture
def fixed_generator(rng: random.Random) -> ValueGenerator:
    return ValueGenerator(GenerationPolicy(randomized=False), rng=rng, now=FROZEN_NOW)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "3306")),
        db_user=os.getenv("DB_USER", "root"),
        db_password=os.getenv("DB_PASSWORD", ""),
        db_name=os.getenv("DB_NAME", "dbfiller_test"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def db_connection_available(test_settings: Settings) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        conn = pymysql.connect(
            host=test_settings.db_host,
            port=test_settings.db_port,
            user=test_settings.db_user,
            password=test_settings.db_password,
            connect_timeout=5,
        )
    except pymysql.err.MySQLError:
        return False
    conn.close()
    return True


@pytest.fixture(scope="session")
def db_connection(
    test_settings: Settings, db_connection_available: bool, schema_text: str
) -> Generator[pymysql.connections.Connection, None, None]:
    """
    Provide a session-scoped connection to a freshly created test schema.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = pymysql.connect(
        host=test_settings.db_host,
        port=test_settings.db_port,
        user=test_settings.db_user,
        password=test_settings.db_password,
    )
    try:
        with conn.cursor() as cur:
            cur.execute(f"DROP DATABASE IF EXISTS `{test_settings.db_name}`")
            cur.execute(f"CREATE DATABASE `{test_settings.db_name}`")
            cur.execute(f"USE `{test_settings.db_name}`")
            for statement in _table_statements(schema_text):
                cur.execute(statement)
        conn.commit()
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def clean_tables(db_connection: pymysql.connections.Connection):
    """
    Empty the fixture tables before each test function.
    """
    _truncate(db_connection)
    yield
    _truncate(db_connection)


def _truncate(conn: pymysql.connections.Connection) -> None:
    with conn.cursor() as cur:
        cur.execute("SET foreign_key_checks = 0")
        cur.execute("TRUNCATE TABLE `orders`")
        cur.execute("TRUNCATE TABLE `customers`")
        cur.execute("SET foreign_key_checks = 1")
    conn.commit()


def _table_statements(schema_text: str) -> list[str]:
    """CREATE TABLE statements of the fixture schema (database statements dropped)."""
    statements = []
    for chunk in schema_text.split(";"):
        start = chunk.find("CREATE TABLE")
        if start >= 0:
            statements.append(chunk[start:])
    return statements
