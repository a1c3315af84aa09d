"""
Integration tests for Database Filler against a real MySQL server.

These tests create the fixture schema in a scratch database and verify that:
1. Every table receives the requested number of rows
2. Random and fixed fills both insert cleanly
3. Generated values land in range once stored

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os

import pytest

from dbfiller.config import Settings
from dbfiller.domain.models import GenerationPolicy
from dbfiller.filler import DatabaseFiller
from dbfiller.generation.random_source import create_random_source
from dbfiller.sinks.mysql import MySQLSink

DEFAULT_ROWS = 25
DEFAULT_SEED = 123

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable MySQL",
)


def _count(conn, table: str) -> int:
    with conn.cursor() as cur:
        cur.execute(f"SELECT COUNT(*) FROM `{table}`")
        return cur.fetchone()[0]


class TestMySQLFill:
    """Fill the fixture schema through the MySQL sink."""

    def test_random_fill_inserts_every_table(
        self, db_connection, clean_tables, schema_path, test_settings: Settings
    ):
        with MySQLSink(test_settings) as sink:
            filler = DatabaseFiller(
                schema_file=schema_path,
                policy=GenerationPolicy(row_count=DEFAULT_ROWS),
                sink=sink,
                rng=create_random_source(DEFAULT_SEED),
            )
            results = filler.run()

        assert all(result.success for result in results), filler.diagnostics.render()
        db_connection.commit()
        assert _count(db_connection, "customers") == DEFAULT_ROWS
        assert _count(db_connection, "orders") == DEFAULT_ROWS

    def test_fixed_fill_stores_maximum_values(
        self, db_connection, clean_tables, schema_path, test_settings: Settings
    ):
        with MySQLSink(test_settings) as sink:
            filler = DatabaseFiller(
                schema_file=schema_path,
                # one row: fixed data collides on the unique name key
                policy=GenerationPolicy(row_count=1, randomized=False),
                sink=sink,
            )
            results = filler.run()

        assert all(result.success for result in results), filler.diagnostics.render()
        db_connection.commit()
        with db_connection.cursor() as cur:
            cur.execute("SELECT DISTINCT `age`, `first_name` FROM `customers`")
            assert cur.fetchall() == ((255, "X" * 30),)
