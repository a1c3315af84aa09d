from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from dbfiller import main as cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)


def test_fill_debug_prints_statements(schema_path: Path):
    result = runner.invoke(
        cli.app, ["fill", str(schema_path), "--debug", "--fixed", "--rows", "2", "--seed", "5"]
    )
    assert result.exit_code == 0, result.output
    assert "INSERT INTO `customers`" in result.stdout
    assert "INSERT INTO `orders`" in result.stdout
    assert "Database Filler Results" in result.stdout


def test_fill_missing_schema_exits_with_error(tmp_path: Path):
    result = runner.invoke(cli.app, ["fill", str(tmp_path / "missing.sql"), "--debug"])
    assert result.exit_code == 1


def test_fill_rejects_inverted_char_range(schema_path: Path):
    result = runner.invoke(
        cli.app, ["fill", str(schema_path), "--debug", "--low-char", "100", "--high-char", "50"]
    )
    assert result.exit_code == 1


def test_fill_exits_nonzero_when_a_table_fails(tmp_path: Path):
    schema = tmp_path / "broken.sql"
    schema.write_text("CREATE TABLE `broken` (`a` INT) ENGINE=InnoDB;\n", encoding="utf-8")
    result = runner.invoke(cli.app, ["fill", str(schema), "--debug"])
    assert result.exit_code == 1


def test_inspect_lists_columns(schema_path: Path):
    result = runner.invoke(cli.app, ["inspect", str(schema_path)])
    assert result.exit_code == 0, result.output
    assert "customers (primary key: id)" in result.stdout
    assert "placed_at" in result.stdout
