"""
Database Filler - populate a MySQL schema with synthetic rows.

This package reads a MySQL schema (DDL) file and fills every declared table
with rows whose values fit each column's declared type:

- Table segmentation and comment stripping of the schema document
- Column classification (integers by width and sign, decimals, floats,
  character types, enumerations, dates and times)
- Randomized or fixed (fast, deterministic) value generation
- Insertion through PyMySQL, or a dry run that only renders the statements
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "GPL-3.0-or-later"

# Public API exports
from dbfiller.config import Settings, get_settings
from dbfiller.diagnostics import Diagnostics
from dbfiller.domain.models import (
    ColumnCategory,
    ColumnDefinition,
    GenerationPolicy,
    RowSet,
    TableModel,
    TableResult,
)
from dbfiller.filler import DatabaseFiller, build_row_set
from dbfiller.generation import ValueGenerator, create_random_source
from dbfiller.parsing import classify, parse_schema, parse_table, segment_schema
from dbfiller.sinks import DryRunSink, MySQLSink, Sink
from dbfiller.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "ColumnCategory",
    "ColumnDefinition",
    "GenerationPolicy",
    "RowSet",
    "TableModel",
    "TableResult",
    # Parsing
    "classify",
    "parse_schema",
    "parse_table",
    "segment_schema",
    # Generation
    "ValueGenerator",
    "create_random_source",
    # Orchestration
    "DatabaseFiller",
    "Diagnostics",
    "build_row_set",
    # Sinks
    "DryRunSink",
    "MySQLSink",
    "Sink",
    # Logging
    "configure_logging",
    "get_logger",
]
