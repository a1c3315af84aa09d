from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from dbfiller.config import get_settings
from dbfiller.errors import DatabaseFillerError, SchemaFileNotFoundError, SchemaParseError
from dbfiller.filler import DatabaseFiller
from dbfiller.generation.random_source import create_random_source
from dbfiller.parsing.segmenter import read_schema, segment_schema
from dbfiller.parsing.table_parser import parse_table
from dbfiller.reporter import print_results, print_table_models
from dbfiller.sinks.abstract import AbstractSink
from dbfiller.sinks.dry_run import DryRunSink
from dbfiller.sinks.mysql import MySQLSink
from dbfiller.utils.logging import configure_logging

app = typer.Typer(help="Fill a MySQL database with junk data parsed from its schema file.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} "
        f"({settings.db_encoding}) | schema={settings.schema_file} rows={settings.num_rows} "
        f"random={settings.random_data} chars={settings.low_char}-{settings.high_char} "
        f"debug={settings.debug}"
    )


@app.command()
def inspect(
    schema: Path = typer.Argument(..., help="Schema (DDL) file to parse."),
) -> None:
    """
    Print the column model parsed from each table of a schema file.
    """
    try:
        blocks = segment_schema(read_schema(schema))
    except SchemaFileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    models = []
    for block in blocks:
        try:
            models.append(parse_table(block))
        except SchemaParseError as exc:
            typer.echo(f"skipped table: {exc}", err=True)
    print_table_models(models)


@app.command()
def fill(
    schema: Optional[Path] = typer.Argument(
        None, help="Schema (DDL) file; defaults to the SCHEMA_FILE setting."
    ),
    rows: Optional[int] = typer.Option(
        None, "--rows", "-r", help="Rows to insert per table (default from settings)."
    ),
    random_data: Optional[bool] = typer.Option(
        None,
        "--random/--fixed",
        help="Random data, or a much faster fixed fill (unsuitable with unique indexes).",
    ),
    low_char: Optional[int] = typer.Option(None, "--low-char", help="Lowest character code."),
    high_char: Optional[int] = typer.Option(None, "--high-char", help="Highest character code."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible data."),
    debug: Optional[bool] = typer.Option(
        None, "--debug/--no-debug", help="Dry run: print statements instead of inserting."
    ),
    strict_types: Optional[bool] = typer.Option(
        None,
        "--strict-types/--lenient-types",
        help="Fail tables that have columns of unsupported type.",
    ),
    json_logs: Optional[bool] = typer.Option(None, "--json-logs/--text-logs"),
) -> None:
    """
    Generate rows for every table of the schema and insert them.
    """
    overrides = {
        "schema_file": str(schema) if schema else None,
        "num_rows": rows,
        "random_data": random_data,
        "low_char": low_char,
        "high_char": high_char,
        "random_seed": seed,
        "debug": debug,
        "strict_types": strict_types,
        "json_logs": json_logs,
    }
    settings = get_settings().model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)

    if not settings.schema_file:
        typer.echo("No schema file specified.", err=True)
        raise typer.Exit(code=1)

    try:
        policy = settings.generation_policy()
    except ValidationError as exc:
        typer.echo(f"Invalid generation settings: {exc}", err=True)
        raise typer.Exit(code=1)

    sink: AbstractSink = DryRunSink() if settings.debug else MySQLSink(settings)
    filler = DatabaseFiller(
        schema_file=settings.schema_file,
        policy=policy,
        sink=sink,
        rng=create_random_source(settings.random_seed, settings.secure_random),
        strict_types=settings.strict_types,
    )
    typer.echo(
        f"Filling tables from '{settings.schema_file}' "
        f"(rows={policy.row_count}, mode={policy.mode}, sink={sink.name})."
    )

    with sink:
        try:
            results = filler.run()
        except DatabaseFillerError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1)

    typer.echo(filler.diagnostics.render())
    print_results(results)
    if any(not result.success for result in results):
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
