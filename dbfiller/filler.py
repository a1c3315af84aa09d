"""
Orchestrator for filling a database from a schema file.

Usage (example from CLI):
    from dbfiller.filler import DatabaseFiller

    filler = DatabaseFiller(schema_file="schema.sql", policy=GenerationPolicy(row_count=100))
    results = filler.run()
    print(filler.diagnostics.render())

Tables are processed one after another in document order. Each table is
parsed, its rows generated and handed to the sink exactly once; a failure in
one table is recorded in its TableResult and the run moves on to the next.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from dbfiller.diagnostics import Diagnostics
from dbfiller.domain.models import GeneratedRow, GenerationPolicy, RowSet, TableModel, TableResult
from dbfiller.errors import SinkError, UnsupportedColumnError
from dbfiller.generation.random_source import RandomSource
from dbfiller.generation.values import ValueGenerator
from dbfiller.parsing.segmenter import read_schema, segment_schema
from dbfiller.parsing.table_parser import parse_table
from dbfiller.sinks.abstract import Sink
from dbfiller.sinks.dry_run import DryRunSink
from dbfiller.utils.logging import get_logger
from dbfiller.utils.profiler import profile_block

log = get_logger(__name__)


def build_row_set(table: TableModel, generator: ValueGenerator, row_count: int) -> RowSet:
    """
    Generate `row_count` rows for every supported column of `table`.

    Field names are backtick-quoted and follow the column order; the primary
    key and columns of unsupported type are not part of the row set.
    """
    columns = table.generated_columns
    field_names = tuple(column.quoted_name for column in columns)
    rows: List[GeneratedRow] = []
    for _ in range(row_count):
        row = tuple(generator.generate(column) for column in columns)
        rows.append(row)  # type: ignore[arg-type]
    return RowSet(table_name=table.name, field_names=field_names, rows=tuple(rows))


class DatabaseFiller:
    """
    Parse a schema document and fill each of its tables through a sink.

    Parameters
    ----------
    schema_file : Path | str | None
        DDL file to read. Ignored when `schema_text` is given.
    schema_text : str | None
        DDL document given directly.
    policy : GenerationPolicy | None
        Row count, mode and character range; defaults to GenerationPolicy().
    sink : Sink | None
        Destination of the generated rows; defaults to a DryRunSink.
    rng : RandomSource | None
        Random source handed to the value generator.
    strict_types : bool
        Fail a table that has columns of unsupported type instead of
        leaving those columns out of its inserts.
    """

    def __init__(
        self,
        schema_file: Path | str | None = None,
        schema_text: Optional[str] = None,
        policy: Optional[GenerationPolicy] = None,
        sink: Optional[Sink] = None,
        rng: Optional[RandomSource] = None,
        strict_types: bool = False,
    ) -> None:
        if schema_file is None and schema_text is None:
            raise ValueError("Either schema_file or schema_text is required.")
        self.schema_file = schema_file
        self.schema_text = schema_text
        self.policy = policy or GenerationPolicy()
        self.sink: Sink = sink if sink is not None else DryRunSink()
        self.rng = rng
        self.strict_types = strict_types
        self.diagnostics = Diagnostics()

    def _document(self) -> str:
        if self.schema_text is not None:
            return self.schema_text
        if self.schema_file is None:
            raise ValueError("Either schema_file or schema_text is required.")
        return read_schema(self.schema_file)

    def run(self) -> List[TableResult]:
        """
        Fill every table of the schema, in document order.

        Raises
        ------
        SchemaFileNotFoundError
            Before any generation, if the schema file does not exist.
        SinkError
            If the sink cannot reach the database at all.
        """
        blocks = segment_schema(self._document())
        generator = ValueGenerator(self.policy, rng=self.rng)
        log.info(
            f"[FILL START] {len(blocks)} table(s)",
            extra={"tables": len(blocks), "rows": self.policy.row_count, "mode": self.policy.mode},
        )

        results: List[TableResult] = []
        for iteration, block in enumerate(blocks, 1):
            results.append(self._fill_table(iteration, block, generator))

        failed = sum(1 for result in results if not result.success)
        log.info(
            f"[FILL COMPLETE] {len(results) - failed}/{len(results)} table(s) filled",
            extra={"tables": len(results), "failed": failed},
        )
        return results

    def _fill_table(self, iteration: int, block: str, generator: ValueGenerator) -> TableResult:
        row_count = self.policy.row_count
        mode = self.policy.mode
        table_name = f"#{iteration}"
        generation_seconds = 0.0
        log.info(f"[TABLE START] {table_name}", extra={"iteration": iteration})

        try:
            with profile_block(f"table-{iteration}:generate") as stats:
                table = parse_table(block)
                table_name = table.name
                self._check_columns(table)
                row_set = build_row_set(table, generator, row_count)
            generation_seconds = stats.duration_seconds
            self.diagnostics.add(
                f"table {table_name} iteration {iteration} :: {stats.format_duration()}"
            )

            with profile_block(f"{table_name}:insert") as insert_stats:
                success, detail = self.sink.execute(
                    row_set.table_name, row_set.field_names, row_set.rows
                )
        except SinkError:
            raise
        except Exception as exc:  # noqa: BLE001 - a failed table must not stop the run
            table_name = getattr(exc, "table_name", table_name)
            log.exception(f"[TABLE FAILED] {table_name}", extra={"table": table_name})
            self.diagnostics.warning(f"table {table_name} failed: {exc}")
            return TableResult(
                table_name=table_name,
                rows_requested=row_count,
                mode=mode,
                generation_seconds=generation_seconds,
                error=str(exc),
            )

        if success:
            self.diagnostics.add(f"added {row_count} rows of {mode} data to table {table_name}")
            log.info(f"[TABLE SUCCESS] {table_name}", extra={"table": table_name, "rows": row_count})
        else:
            self.diagnostics.warning(
                f"there were ERRORS attempting to add {row_count} rows of {mode} data "
                f"to table {table_name}"
            )
            log.warning(f"[TABLE FAILED] {table_name}", extra={"table": table_name})
        if detail:
            self.diagnostics.add(detail)
        self.diagnostics.add(f"{self.sink.name} insertion: {insert_stats.format_duration()}")

        return TableResult(
            table_name=table_name,
            rows_requested=row_count,
            rows_written=row_count if success else 0,
            mode=mode,
            success=success,
            generation_seconds=generation_seconds,
            insert_seconds=insert_stats.duration_seconds,
            error=None if success else detail,
        )

    def _check_columns(self, table: TableModel) -> None:
        unsupported = [column.name for column in table.unsupported_columns]
        if not unsupported:
            return
        if self.strict_types:
            raise UnsupportedColumnError(table.name, unsupported)
        self.diagnostics.warning(
            f"table {table.name}: no generator for column(s) {', '.join(unsupported)}; "
            "left to their database defaults"
        )


__all__ = ["build_row_set", "DatabaseFiller"]
