from __future__ import annotations

import random
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

import pytest

from dbfiller.domain.models import GenerationPolicy
from dbfiller.errors import SchemaFileNotFoundError, SinkError
from dbfiller.filler import DatabaseFiller, build_row_set
from dbfiller.generation.values import ValueGenerator
from dbfiller.parsing.table_parser import parse_schema, parse_table
from dbfiller.sinks.dry_run import DryRunSink

FROZEN_NOW = datetime(2024, 2, 29, 13, 45, 7)

USERS_SCHEMA = """
CREATE TABLE `users` (
  `id` INT(11) NOT NULL AUTO_INCREMENT,
  `name` VARCHAR(10) NOT NULL,
  PRIMARY KEY (`id`)
) ENGINE=InnoDB;
"""
ROW_COUNT = 2


class _RecordingSink:
    name = "recording"

    def __init__(self, outcome: tuple[bool, str] = (True, "")) -> None:
        self.outcome = outcome
        self.calls: list[tuple[str, tuple[str, ...], tuple[Any, ...]]] = []

    def execute(self, table_name: str, field_names: Sequence[str], rows: Sequence[Any]):
        self.calls.append((table_name, tuple(field_names), tuple(rows)))
        return self.outcome


class _BrokenSink(_RecordingSink):
    def execute(self, table_name: str, field_names: Sequence[str], rows: Sequence[Any]):
        raise SinkError("Database connection failed: refused (error number: 2003)")


def test_users_fixed_mode_end_to_end():
    sink = _RecordingSink()
    filler = DatabaseFiller(
        schema_text=USERS_SCHEMA,
        policy=GenerationPolicy(row_count=ROW_COUNT, randomized=False),
        sink=sink,
    )
    results = filler.run()

    assert sink.calls == [("users", ("`name`",), (('"XXXXXXXXXX"',), ('"XXXXXXXXXX"',)))]
    assert len(results) == 1
    assert results[0].success
    assert results[0].rows_written == ROW_COUNT
    assert results[0].mode == "fixed"


def test_tinyint_unsigned_fixed_is_255(fixed_generator: ValueGenerator):
    table = parse_table("CREATE TABLE `p` (`id` INT, `age` TINYINT UNSIGNED, PRIMARY KEY (`id`))")
    row_set = build_row_set(table, fixed_generator, 1)
    assert row_set.field_names == ("`age`",)
    assert row_set.rows == (("255",),)


def test_enum_values_in_any_mode(random_generator: ValueGenerator, fixed_generator: ValueGenerator):
    table = parse_table(
        "CREATE TABLE `p` (`id` INT, `status` ENUM('a','b','c'), PRIMARY KEY (`id`))"
    )
    for generator in (random_generator, fixed_generator):
        for row in build_row_set(table, generator, 25).rows:
            assert row[0] in {'"a"', '"b"', '"c"'}


def test_schema_without_tables_generates_nothing():
    sink = _RecordingSink()
    filler = DatabaseFiller(schema_text="-- empty schema\nSELECT 1;\n", sink=sink)
    assert parse_schema("-- empty schema\n") == []
    assert filler.run() == []
    assert sink.calls == []


def test_rows_align_with_field_names(schema_text: str, random_generator: ValueGenerator):
    for table in parse_schema(schema_text):
        row_set = build_row_set(table, random_generator, 5)
        assert len(row_set.rows) == 5
        assert all(len(row) == len(row_set.field_names) for row in row_set.rows)
        assert f"`{table.primary_key}`" not in row_set.field_names


def test_fixed_mode_is_deterministic(schema_text: str):
    tables = parse_schema(schema_text)
    passes = []
    for seed in (1, 2):
        generator = ValueGenerator(
            GenerationPolicy(randomized=False), rng=random.Random(seed), now=FROZEN_NOW
        )
        # enum and float columns keep drawing even in fixed mode
        passes.append(
            [
                [
                    value
                    for column, value in zip(table.generated_columns, row)
                    if column.category.value not in ("enumeration", "float32", "float64")
                ]
                for table in tables
                for row in build_row_set(table, generator, 3).rows
            ]
        )
    assert passes[0] == passes[1]


def test_failed_table_does_not_stop_the_run():
    schema = (
        "CREATE TABLE `broken` (`a` INT, `b` INT) ENGINE=InnoDB;\n" + USERS_SCHEMA
    )
    sink = _RecordingSink()
    filler = DatabaseFiller(schema_text=schema, sink=sink)
    broken, users = filler.run()

    assert not broken.success
    assert broken.table_name == "broken"
    assert "PRIMARY KEY" in broken.error
    assert users.success
    assert [call[0] for call in sink.calls] == ["users"]
    assert any("broken failed" in message for message in filler.diagnostics)


def test_sink_failure_is_table_scoped():
    sink = _RecordingSink(outcome=(False, "1366 | Incorrect integer value"))
    filler = DatabaseFiller(schema_text=USERS_SCHEMA * 2, sink=sink)
    results = filler.run()

    assert len(sink.calls) == 2
    assert [result.success for result in results] == [False, False]
    assert results[0].rows_written == 0
    assert results[0].error == "1366 | Incorrect integer value"
    messages = filler.diagnostics.messages
    assert any(message.startswith("there were ERRORS") for message in messages)
    assert "1366 | Incorrect integer value" in messages


def test_sink_connection_error_aborts_run():
    filler = DatabaseFiller(schema_text=USERS_SCHEMA, sink=_BrokenSink())
    with pytest.raises(SinkError):
        filler.run()


def test_unsupported_columns_are_reported_and_left_out():
    schema = "CREATE TABLE `t` (`id` INT, `img` BLOB, `n` TINYINT, PRIMARY KEY (`id`)) ENGINE=X;"
    sink = _RecordingSink()
    filler = DatabaseFiller(schema_text=schema, sink=sink)
    (result,) = filler.run()

    assert result.success
    assert sink.calls[0][1] == ("`n`",)
    assert any("img" in message for message in filler.diagnostics)


def test_strict_types_fail_the_table():
    schema = "CREATE TABLE `t` (`id` INT, `img` BLOB, PRIMARY KEY (`id`)) ENGINE=X;" + USERS_SCHEMA
    sink = _RecordingSink()
    filler = DatabaseFiller(schema_text=schema, sink=sink, strict_types=True)
    strict, users = filler.run()

    assert not strict.success
    assert "img" in strict.error
    assert users.success
    assert [call[0] for call in sink.calls] == ["users"]


def test_missing_schema_file_is_fatal(tmp_path: Path):
    sink = _RecordingSink()
    filler = DatabaseFiller(schema_file=tmp_path / "nope.sql", sink=sink)
    with pytest.raises(SchemaFileNotFoundError):
        filler.run()
    assert sink.calls == []


def test_schema_file_is_read(schema_path: Path):
    filler = DatabaseFiller(schema_file=schema_path, policy=GenerationPolicy(row_count=3))
    results = filler.run()
    assert [result.table_name for result in results] == ["customers", "orders"]
    assert all(result.success for result in results)


def test_dry_run_surfaces_statement():
    sink = DryRunSink()
    filler = DatabaseFiller(
        schema_text=USERS_SCHEMA,
        policy=GenerationPolicy(row_count=ROW_COUNT, randomized=False),
        sink=sink,
    )
    filler.run()

    expected = 'INSERT INTO `users` (`name`) VALUES ("XXXXXXXXXX"),("XXXXXXXXXX")'
    assert sink.statements == [expected]
    assert any(expected in message for message in filler.diagnostics)


def test_constructor_requires_a_schema():
    with pytest.raises(ValueError):
        DatabaseFiller()
