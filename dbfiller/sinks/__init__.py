"""
Sinks package for Database Filler.

Re-exports the sink interface, the statement renderer and the concrete sinks
so downstream code can import from `dbfiller.sinks` directly.
"""

from dbfiller.sinks.abstract import AbstractSink, Sink, SinkOutcome
from dbfiller.sinks.dry_run import DryRunSink
from dbfiller.sinks.mysql import MySQLSink
from dbfiller.sinks.statement import build_insert_statement

__all__ = [
    # Abstracts
    "AbstractSink",
    "Sink",
    "SinkOutcome",
    # Concrete sinks
    "DryRunSink",
    "MySQLSink",
    # Rendering
    "build_insert_statement",
]
