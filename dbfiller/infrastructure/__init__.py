"""
Infrastructure package for Database Filler.

Centralizes database connectivity concerns. Keep this layer focused on I/O
and resource management, decoupled from parsing and generation logic.
"""

from dbfiller.infrastructure.db_factory import connect_kwargs, get_connection

__all__ = [
    "connect_kwargs",
    "get_connection",
]
