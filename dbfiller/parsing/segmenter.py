"""
Schema document segmentation.

Cuts a MySQL schema dump into one block per `CREATE TABLE` statement and
strips everything that is not a declaration: column annotations
(`COMMENT '...'`), block comments and line comments. The table options that
start at `ENGINE=` are not part of a block.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from dbfiller.errors import SchemaFileNotFoundError
from dbfiller.parsing.normalizer import STRING_LITERAL
from dbfiller.utils.logging import get_logger

log = get_logger(__name__)

TABLE_START = re.compile(r"CREATE\s+TABLE", re.IGNORECASE)
ENGINE_CLAUSE = re.compile(r"ENGINE\s*=", re.IGNORECASE)

# Scanned left to right: a literal or identifier is consumed whole, so comment
# markers inside quotes are never treated as comments.
_COMMENTS_OR_LITERALS = re.compile(
    rf"""(?P<annotation>\bcomment\s+(?:{STRING_LITERAL}))
    |(?P<literal>{STRING_LITERAL}|`[^`]*`)
    |(?P<block>/\*.*?\*/)
    |(?P<line>[ \t]*(?:--|\#)[^\r\n]*)""",
    re.IGNORECASE | re.DOTALL | re.VERBOSE,
)


def read_schema(path: str | Path) -> str:
    """
    Read the whole schema document.

    Raises
    ------
    SchemaFileNotFoundError
        If `path` does not point to an existing file.
    """
    schema_path = Path(path)
    if not schema_path.is_file():
        raise SchemaFileNotFoundError(str(path))
    return schema_path.read_text(encoding="utf-8")


def strip_comments(block: str) -> str:
    """
    Remove column annotations, block comments and line comments.

    Quoted literals and backtick identifiers are kept verbatim, including
    any `#`, `--` or `/*` they contain.
    """
    return _COMMENTS_OR_LITERALS.sub(_keep_literal, block)


def _keep_literal(match: re.Match) -> str:
    return match.group("literal") or ""


def segment_schema(document: str) -> List[str]:
    """
    Split a schema document into comment-free table blocks, in document order.

    A block runs from its `CREATE TABLE` marker up to the next `ENGINE=`
    clause, or up to the next `CREATE TABLE` (or the end of the document)
    when the table has no engine clause. A document without any
    `CREATE TABLE` yields no blocks.
    """
    starts = [match.start() for match in TABLE_START.finditer(document)]
    blocks: List[str] = []
    for index, start in enumerate(starts):
        limit = starts[index + 1] if index + 1 < len(starts) else len(document)
        engine = ENGINE_CLAUSE.search(document, start, limit)
        end = engine.start() if engine else limit
        if engine is None:
            log.debug("Table block without ENGINE clause", extra={"offset": start})
        blocks.append(strip_comments(document[start:end]))
    return blocks


__all__ = ["TABLE_START", "ENGINE_CLAUSE", "read_schema", "strip_comments", "segment_schema"]
