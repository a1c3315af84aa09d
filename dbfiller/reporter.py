from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from dbfiller.domain.models import TableModel, TableResult


def print_results(results: Sequence[TableResult], console: Optional[Console] = None) -> None:
    """
    Render per-table fill results as a rich table, in processing order.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No tables found in schema.[/yellow]")
        return

    failed = sum(1 for res in results if not res.success)
    table = Table(
        title="Database Filler Results",
        box=box.ROUNDED,
        caption=f"{len(results) - failed} filled, {failed} failed",
    )

    table.add_column("Table", style="cyan", no_wrap=True)
    table.add_column("Rows", justify="right", style="magenta")
    table.add_column("Mode", style="blue")
    table.add_column("Status")
    table.add_column("Generation (s)", justify="right", style="green")
    table.add_column("Insert (s)", justify="right", style="green")

    for res in results:
        status = "[green]ok[/green]" if res.success else "[bold red]failed[/bold red]"
        table.add_row(
            res.table_name,
            f"{res.rows_written:,}/{res.rows_requested:,}",
            res.mode,
            status,
            f"{res.generation_seconds:.6f}",
            f"{res.insert_seconds:.6f}",
        )

    console.print(table)


def print_table_models(models: Sequence[TableModel], console: Optional[Console] = None) -> None:
    """
    Render the parsed column model of each table.
    """
    console = console or Console()

    if not models:
        console.print("[yellow]No tables found in schema.[/yellow]")
        return

    for model in models:
        table = Table(
            title=f"{model.name} (primary key: {model.primary_key})",
            box=box.ROUNDED,
        )
        table.add_column("Column", style="cyan", no_wrap=True)
        table.add_column("Category", style="magenta")
        table.add_column("Length", justify="right")
        table.add_column("Unsigned", justify="center")
        table.add_column("Values")

        for column in model.columns:
            category = column.category.value if column.category else "[red]unsupported[/red]"
            table.add_row(
                column.name,
                category,
                "" if column.length is None else str(column.length),
                "yes" if column.unsigned else "",
                ", ".join(column.enum_values),
            )

        console.print(table)
