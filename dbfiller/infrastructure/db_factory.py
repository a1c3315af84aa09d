"""
Database connection factory for Database Filler.

Opens PyMySQL connections from Settings with the configured connection
charset. Includes retry logic for transient connection failures using
tenacity.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import pymysql
from pymysql.connections import Connection
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from dbfiller.config import Settings, get_settings
from dbfiller.errors import SinkError
from dbfiller.utils.logging import get_logger

log = get_logger(__name__)


def connect_kwargs(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Compose PyMySQL connection arguments from settings."""
    settings = settings or get_settings()
    return {
        "host": settings.db_host,
        "port": settings.db_port,
        "user": settings.db_user,
        "password": settings.db_password,
        "database": settings.db_name,
        "charset": settings.db_encoding,
        "autocommit": False,
    }


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(pymysql.err.OperationalError),
    reraise=True,
)
def _connect(kwargs: Dict[str, Any]) -> Connection:
    return pymysql.connect(**kwargs)


def get_connection(settings: Optional[Settings] = None) -> Connection:
    """
    Open a dedicated connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.

    Returns
    -------
    Connection
        A new PyMySQL connection using the configured charset.

    Raises
    ------
    SinkError
        If the connection fails after all retry attempts.
    """
    kwargs = connect_kwargs(settings)
    try:
        return _connect(kwargs)
    except pymysql.err.MySQLError as exc:
        code = exc.args[0] if exc.args else None
        message = exc.args[1] if len(exc.args) > 1 else str(exc)
        log.error(
            "Database connection failed",
            extra={"host": kwargs["host"], "database": kwargs["database"], "code": code},
        )
        raise SinkError(f"Database connection failed: {message} (error number: {code})") from exc


__all__ = ["connect_kwargs", "get_connection"]
