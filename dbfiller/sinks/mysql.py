"""
MySQL sink: executes one multi-row INSERT per table through PyMySQL.

Foreign key checks are disabled for the session before each insert. The
statement is attempted exactly once; on failure the transaction is rolled
back and the database error plus `SHOW WARNINGS` is returned as the
diagnostic.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import pymysql
from pymysql.connections import Connection

from dbfiller.config import Settings, get_settings
from dbfiller.domain.models import GeneratedRow
from dbfiller.infrastructure.db_factory import get_connection
from dbfiller.sinks.abstract import AbstractSink, SinkOutcome
from dbfiller.sinks.statement import build_insert_statement
from dbfiller.utils.logging import get_logger

log = get_logger(__name__)

# Above this many rows a root session raises max_allowed_packet for all connections.
LARGE_INSERT_ROWS = 1500
MAX_ALLOWED_PACKET = 268_435_456


class MySQLSink(AbstractSink):
    """
    Insert generated rows into a MySQL database.

    The connection is opened lazily on the first table and reused for the
    rest of the run; `close()` (or leaving the context manager) releases it.
    """

    name: str = "mysql"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        connection_factory: Optional[Callable[[Settings], Connection]] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._connection_factory = connection_factory or get_connection
        self._connection: Optional[Connection] = None

    def _get_connection(self) -> Connection:
        if self._connection is None:
            self._connection = self._connection_factory(self._settings)
        return self._connection

    def execute(
        self,
        table_name: str,
        field_names: Sequence[str],
        rows: Sequence[GeneratedRow],
    ) -> SinkOutcome:
        statement = build_insert_statement(table_name, field_names, rows)
        conn = self._get_connection()
        with conn.cursor() as cur:
            cur.execute("SET foreign_key_checks = 0")
            if self._settings.db_user == "root" and len(rows) > LARGE_INSERT_ROWS:
                cur.execute(f"SET GLOBAL max_allowed_packet = {MAX_ALLOWED_PACKET}")
            try:
                affected = cur.execute(statement)
                conn.commit()
            except pymysql.err.MySQLError as exc:
                # warnings are cleared by the next non-diagnostic statement
                detail = self._failure_detail(cur, exc)
                conn.rollback()
                log.warning(
                    f"Insert into {table_name} failed",
                    extra={"table": table_name, "error": str(exc)},
                )
                return False, detail
        return True, f"{affected} rows affected"

    @staticmethod
    def _failure_detail(cur, exc: pymysql.err.MySQLError) -> str:
        parts = [" | ".join(str(arg) for arg in exc.args) or str(exc)]
        try:
            cur.execute("SHOW WARNINGS")
            parts.extend(" | ".join(str(value) for value in row) for row in cur.fetchall())
        except pymysql.err.MySQLError as warnings_exc:
            log.debug("SHOW WARNINGS failed", extra={"error": str(warnings_exc)})
        return "\n".join(parts)

    def close(self) -> None:
        if self._connection is not None:
            try:
                self._connection.close()
            except pymysql.err.Error:
                log.debug("Connection already closed")
            finally:
                self._connection = None


__all__ = ["LARGE_INSERT_ROWS", "MAX_ALLOWED_PACKET", "MySQLSink"]
