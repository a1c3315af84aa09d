"""
Column type classification.

Maps the declared SQL type of a column to a ColumnCategory with an ordered
keyword table: the first keyword contained in the type name wins. Keywords
that occur inside longer ones must come after them ("INT" is part of
"BIGINT", "TINYINT", ...; "DATE" and "TIME" are part of "DATETIME").
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from dbfiller.domain.models import DEFAULT_CHARACTER_LENGTH, ColumnCategory, ColumnDefinition
from dbfiller.parsing.normalizer import find_parenthesized, split_top_level

TYPE_KEYWORDS: Tuple[Tuple[str, ColumnCategory], ...] = (
    ("BIGINT", ColumnCategory.INT64),
    ("TINYINT", ColumnCategory.INT8),
    ("SMALLINT", ColumnCategory.INT16),
    ("MEDIUMINT", ColumnCategory.INT24),
    ("INT", ColumnCategory.INT32),
    ("DECIMAL", ColumnCategory.DECIMAL),
    ("FLOAT", ColumnCategory.FLOAT32),
    ("DOUBLE", ColumnCategory.FLOAT64),
    ("CHAR", ColumnCategory.CHARACTER),
    ("VARCHAR", ColumnCategory.CHARACTER),
    ("TEXT", ColumnCategory.CHARACTER),
    ("TINYTEXT", ColumnCategory.CHARACTER),
    ("MEDIUMTEXT", ColumnCategory.CHARACTER),
    ("LONGTEXT", ColumnCategory.CHARACTER),
    ("ENUM", ColumnCategory.ENUMERATION),
    ("DATETIME", ColumnCategory.DATETIME),
    ("DATE", ColumnCategory.DATE),
    ("TIME", ColumnCategory.TIME),
)

_LEADING_NAME = re.compile(r"\s*`([\w\-]+)`\s*(.*)", re.DOTALL)
_TYPE_NAME = re.compile(r"\s*([A-Za-z_]+)")
_TYPE_LENGTH = re.compile(r"\s*\(\s*(\d+)")
_UNSIGNED = re.compile(r"unsigned", re.IGNORECASE)


def split_column(definition: str) -> Tuple[Optional[str], str]:
    """
    Split a declaration into its leading backtick-quoted name and the rest.

    The name is None when the declaration does not start with an identifier
    (key and constraint declarations).
    """
    match = _LEADING_NAME.match(definition)
    if match is None:
        return None, definition.strip()
    return match.group(1), match.group(2)


def match_keyword(type_name: str) -> Optional[Tuple[str, ColumnCategory]]:
    """Return the first (keyword, category) pair whose keyword occurs in `type_name`."""
    upper = type_name.upper()
    for keyword, category in TYPE_KEYWORDS:
        if keyword in upper:
            return keyword, category
    return None


def parse_enum_values(declaration: str, start: int = 0) -> Tuple[str, ...]:
    """
    Read the member list of an ENUM declaration.

    Members keep their declaration order; surrounding spaces and quotes are
    removed, duplicates are kept.
    """
    group = find_parenthesized(declaration, start)
    if group is None:
        return ()
    opening, closing = group
    inner = declaration[opening + 1 : closing]
    if not inner.strip():
        return ()
    return tuple(item.strip().strip("'\"") for item in split_top_level(inner))


def classify(definition: str) -> ColumnDefinition:
    """
    Classify one plain column declaration, e.g. "`age` TINYINT(3) UNSIGNED".

    Returns a ColumnDefinition whose category is None when the type is not
    supported (no keyword matched, or an ENUM without members).
    """
    name, declaration = split_column(definition)
    type_match = _TYPE_NAME.match(declaration)
    found = match_keyword(type_match.group(1)) if type_match else None
    unsigned = _UNSIGNED.search(declaration) is not None
    column_name = name or ""

    if found is None:
        return ColumnDefinition(name=column_name, category=None, unsigned=unsigned)

    _, category = found
    type_end = type_match.end() if type_match else 0

    if category.is_temporal:
        return ColumnDefinition(name=column_name, category=category, length=None)

    length_match = _TYPE_LENGTH.match(declaration, type_end)
    length = int(length_match.group(1)) if length_match else 0
    if category is ColumnCategory.CHARACTER and not length:
        length = DEFAULT_CHARACTER_LENGTH

    enum_values: Tuple[str, ...] = ()
    if category is ColumnCategory.ENUMERATION:
        enum_values = parse_enum_values(declaration, type_end)
        if not enum_values:
            return ColumnDefinition(name=column_name, category=None, unsigned=unsigned)
        length = 0

    return ColumnDefinition(
        name=column_name,
        category=category,
        length=length,
        unsigned=unsigned,
        enum_values=enum_values,
    )


__all__ = ["TYPE_KEYWORDS", "split_column", "match_keyword", "parse_enum_values", "classify"]
