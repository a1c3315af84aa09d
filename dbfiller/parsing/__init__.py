"""
Schema parsing package: segmentation, tokenizing, table parsing and type
classification of MySQL DDL.
"""

from dbfiller.parsing.classifier import TYPE_KEYWORDS, classify
from dbfiller.parsing.normalizer import split_definitions
from dbfiller.parsing.segmenter import read_schema, segment_schema, strip_comments
from dbfiller.parsing.table_parser import ParseContext, TableParser, parse_schema, parse_table

__all__ = [
    "TYPE_KEYWORDS",
    "classify",
    "split_definitions",
    "read_schema",
    "segment_schema",
    "strip_comments",
    "ParseContext",
    "TableParser",
    "parse_schema",
    "parse_table",
]
