"""
Domain package for Database Filler.

Exports the table/column model, the generation policy and the result types
shared by the parser, generator, orchestrator and sinks.
"""

from dbfiller.domain.models import (
    ColumnCategory,
    ColumnDefinition,
    GeneratedRow,
    GenerationPolicy,
    RowSet,
    TableModel,
    TableResult,
)

__all__ = [
    "ColumnCategory",
    "ColumnDefinition",
    "GeneratedRow",
    "GenerationPolicy",
    "RowSet",
    "TableModel",
    "TableResult",
]
