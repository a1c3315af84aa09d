"""
INSERT statement rendering.
"""

from __future__ import annotations

from typing import Sequence

from dbfiller.domain.models import GeneratedRow


def render_row(row: GeneratedRow) -> str:
    return "(" + ",".join(row) + ")"


def build_insert_statement(
    table_name: str,
    field_names: Sequence[str],
    rows: Sequence[GeneratedRow],
) -> str:
    """
    Render a multi-row INSERT from already-quoted field names and literal rows.

    >>> build_insert_statement("users", ["`name`"], [('"ab"',), ('"cd"',)])
    'INSERT INTO `users` (`name`) VALUES ("ab"),("cd")'
    """
    values = ",".join(render_row(row) for row in rows)
    return f"INSERT INTO `{table_name}` ({','.join(field_names)}) VALUES {values}"


__all__ = ["render_row", "build_insert_statement"]
