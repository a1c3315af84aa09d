"""
Table block parsing.

Turns the declaration candidates of one table block into a TableModel. All
state gathered while reading a table lives on a ParseContext created for that
table only, so nothing carries over from one table to the next.

Callers must guarantee every table declares its primary key with a
backtick-quoted name; a table without one raises MissingPrimaryKeyError.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from dbfiller.domain.models import ColumnDefinition, TableModel
from dbfiller.errors import MissingPrimaryKeyError, SchemaParseError
from dbfiller.parsing.classifier import classify, split_column
from dbfiller.parsing.normalizer import mask_literals, split_definitions
from dbfiller.parsing.segmenter import TABLE_START, segment_schema
from dbfiller.utils.logging import get_logger

log = get_logger(__name__)

_IDENTIFIER = re.compile(r"`([\w\-]+)`")
_PRIMARY_KEY = re.compile(r"PRIMARY\s+KEY", re.IGNORECASE)
_KEY_DECLARATION = re.compile(r"\b(?:KEY|INDEX|CONSTRAINT)\b", re.IGNORECASE)
_AUTO_TIMESTAMP = re.compile(r"TIMESTAMP", re.IGNORECASE)


@dataclass
class ParseContext:
    """Per-table parsing state."""

    candidates: List[str]
    table_name: str = ""
    primary_key: str = ""
    columns: List[ColumnDefinition] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class TableParser:
    """Reads table name, primary key and plain columns from a table block."""

    def parse(self, block: str) -> TableModel:
        context = ParseContext(candidates=split_definitions(block))
        if not context.candidates:
            raise SchemaParseError("Empty table block.")

        context.table_name = self._table_name(context.candidates[0])
        context.primary_key = self._primary_key(context)

        for candidate in context.candidates:
            column = self._column(context, candidate)
            if column is None:
                context.skipped.append(candidate)
            else:
                context.columns.append(column)

        log.debug(
            f"Parsed table {context.table_name}",
            extra={
                "table": context.table_name,
                "primary_key": context.primary_key,
                "columns": len(context.columns),
                "skipped": len(context.skipped),
            },
        )
        return TableModel(
            name=context.table_name,
            primary_key=context.primary_key,
            columns=tuple(context.columns),
        )

    @staticmethod
    def _table_name(head: str) -> str:
        match = _IDENTIFIER.search(head)
        if match is None:
            raise SchemaParseError(f"No backtick-quoted table name in: {head[:80]!r}")
        return match.group(1)

    @staticmethod
    def _primary_key(context: ParseContext) -> str:
        """
        Table-level `PRIMARY KEY (`x`)` wins; the inline column form is only
        used when the table has no such clause.
        """
        inline: Optional[str] = None
        for candidate in context.candidates[1:]:
            declaration = mask_literals(candidate)
            keyword = _PRIMARY_KEY.search(declaration)
            if keyword is None:
                continue
            name, _ = split_column(declaration)
            if name is not None:
                # inline form: `id` INT NOT NULL PRIMARY KEY
                inline = inline or name
                continue
            end = declaration.find(")", keyword.end())
            span = declaration[keyword.end() : end if end >= 0 else len(declaration)]
            match = _IDENTIFIER.search(span)
            if match is not None:
                return match.group(1)
        if inline is not None:
            return inline
        raise MissingPrimaryKeyError(context.table_name)

    @staticmethod
    def _column(context: ParseContext, candidate: str) -> Optional[ColumnDefinition]:
        if TABLE_START.search(candidate):
            return None
        name, declaration = split_column(candidate)
        if name is None:
            return None
        declaration = mask_literals(declaration)
        if _KEY_DECLARATION.search(declaration) or _AUTO_TIMESTAMP.search(declaration):
            return None
        if name == context.primary_key:
            return None
        return classify(candidate)


def parse_table(block: str) -> TableModel:
    """Parse one comment-free table block."""
    return TableParser().parse(block)


def parse_schema(document: str) -> List[TableModel]:
    """
    Parse every table of a schema document, in document order.

    Fails on the first malformed table; use `segment_schema` and
    `parse_table` directly to handle tables one at a time.
    """
    return [parse_table(block) for block in segment_schema(document)]


__all__ = ["ParseContext", "TableParser", "parse_table", "parse_schema"]
