"""
Definition tokenizer for table blocks.

Turns a table block into one candidate string per column or constraint
declaration, whatever the original line wrapping. Commas only separate
declarations at the top level of the table body: those inside parentheses
(`DECIMAL(10,2)`) or quoted text (`ENUM('a,b')`) do not.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from dbfiller.errors import SchemaParseError

_QUOTES = "'\"`"

# Single- or double-quoted SQL string literal; quotes escape by backslash or doubling.
STRING_LITERAL = r"'(?:[^'\\]|\\.|'')*'" r'|"(?:[^"\\]|\\.|"")*"'
_STRING_LITERAL = re.compile(STRING_LITERAL, re.DOTALL)


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def mask_literals(text: str) -> str:
    """Replace the content of every quoted string literal with nothing (`''`)."""
    return _STRING_LITERAL.sub("''", text)


def _unterminated(quote: str, text: str) -> str:
    return f"Unterminated {quote} quote in: {collapse_whitespace(text)[:80]!r}"


def find_parenthesized(text: str, start: int = 0) -> Optional[Tuple[int, int]]:
    """
    Locate the first parenthesized group at or after `start`.

    Returns the indexes of its opening and matching closing parenthesis;
    the closing index is `len(text)` when the group is left open. Returns
    None when there is no opening parenthesis outside quoted text.

    Raises
    ------
    SchemaParseError
        If a quoted string is still open at the end of `text`.
    """
    depth = 0
    opening = -1
    quote: Optional[str] = None
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in _QUOTES:
            quote = char
        elif char == "(":
            if depth == 0:
                opening = index
            depth += 1
        elif char == ")" and depth:
            depth -= 1
            if depth == 0:
                return opening, index
    if quote:
        raise SchemaParseError(_unterminated(quote, text))
    if opening < 0:
        return None
    return opening, len(text)


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """
    Split `text` on `separator` where it is neither nested nor quoted.

    Raises SchemaParseError when a quoted string is never closed.
    """
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    quote: Optional[str] = None
    escaped = False
    for char in text:
        if quote:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in _QUOTES:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")" and depth:
            depth -= 1
        elif char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    if quote:
        raise SchemaParseError(_unterminated(quote, text))
    parts.append("".join(current))
    return parts


def split_definitions(block: str) -> List[str]:
    """
    Tokenize a table block into declaration candidates.

    The first candidate is the statement head (`CREATE TABLE `name``); the
    others are the column and constraint declarations of the table body in
    order. Whitespace inside each candidate is collapsed to single spaces
    and empty candidates are dropped.
    """
    body = find_parenthesized(block)
    if body is None:
        pieces = [block]
    else:
        opening, closing = body
        pieces = [block[:opening], *split_top_level(block[opening + 1 : closing])]
    candidates = (collapse_whitespace(piece) for piece in pieces)
    return [candidate for candidate in candidates if candidate]


__all__ = [
    "STRING_LITERAL",
    "collapse_whitespace",
    "mask_literals",
    "find_parenthesized",
    "split_top_level",
    "split_definitions",
]
