"""
Dry-run sink: renders what would be inserted without touching a database.
"""

from __future__ import annotations

from typing import Sequence

from dbfiller.domain.models import GeneratedRow
from dbfiller.sinks.abstract import AbstractSink, SinkOutcome
from dbfiller.sinks.statement import build_insert_statement, render_row


class DryRunSink(AbstractSink):
    """
    Surface the field list, the generated rows and the INSERT text as the
    diagnostic. Always succeeds. Keeps the rendered statements in
    `statements` for callers that want them.
    """

    name: str = "dry_run"

    def __init__(self) -> None:
        self.statements: list[str] = []

    def execute(
        self,
        table_name: str,
        field_names: Sequence[str],
        rows: Sequence[GeneratedRow],
    ) -> SinkOutcome:
        statement = build_insert_statement(table_name, field_names, rows)
        self.statements.append(statement)
        lines = [f"fields: [{', '.join(field_names)}]"]
        lines.extend(f"row {index}: {render_row(row)}" for index, row in enumerate(rows, 1))
        lines.append(statement)
        return True, "\n".join(lines)


__all__ = ["DryRunSink"]
