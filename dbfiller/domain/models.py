"""
Domain models for Database Filler.

Defines the column/table model produced by the schema parser, the generation
policy consumed by the value generator, and the row sets and per-table results
passed between the orchestrator, sinks and reporter.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

DEFAULT_CHARACTER_LENGTH = 255
DEFAULT_LOW_CHAR = 33
DEFAULT_HIGH_CHAR = 126


class ColumnCategory(str, Enum):
    """Semantic type bucket a column is classified into."""

    CHARACTER = "character"
    INT8 = "int8"
    INT16 = "int16"
    INT24 = "int24"
    INT32 = "int32"
    INT64 = "int64"
    DECIMAL = "decimal"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    ENUMERATION = "enumeration"

    @property
    def is_temporal(self) -> bool:
        return self in _TEMPORAL_CATEGORIES


_TEMPORAL_CATEGORIES = frozenset(
    {ColumnCategory.DATE, ColumnCategory.DATETIME, ColumnCategory.TIME}
)


class ColumnDefinition(BaseModel):
    """
    One plain column of a table, as classified from its DDL declaration.

    `category` is None when the declared type matched no known keyword.
    """

    name: str = Field(..., description="Column name, without backticks.")
    category: Optional[ColumnCategory] = Field(None, description="Classified type bucket.")
    length: Optional[int] = Field(
        0, ge=0, description="Declared length/precision; None for date and time columns."
    )
    unsigned: bool = Field(False, description="UNSIGNED modifier, integer categories only.")
    enum_values: Tuple[str, ...] = Field((), description="Permitted ENUM members in order.")

    model_config = {"frozen": True}

    @property
    def supported(self) -> bool:
        return self.category is not None

    @property
    def quoted_name(self) -> str:
        return f"`{self.name}`"


class TableModel(BaseModel):
    """
    Parsed table: name, primary key and the columns scheduled for generation.

    `columns` never contains the primary key, key/index pseudo-columns or
    auto-timestamp columns; its order is the DDL declaration order.
    """

    name: str
    primary_key: str
    columns: Tuple[ColumnDefinition, ...] = ()

    model_config = {"frozen": True}

    @property
    def generated_columns(self) -> List[ColumnDefinition]:
        return [column for column in self.columns if column.supported]

    @property
    def unsupported_columns(self) -> List[ColumnDefinition]:
        return [column for column in self.columns if not column.supported]


class GenerationPolicy(BaseModel):
    """
    How many rows to generate and how to fill them.

    Fixed mode (`randomized=False`) trades realism for speed and determinism.
    """

    row_count: int = Field(1, ge=1)
    randomized: bool = True
    char_code_low: int = Field(DEFAULT_LOW_CHAR, ge=0, le=0x10FFFF)
    char_code_high: int = Field(DEFAULT_HIGH_CHAR, ge=0, le=0x10FFFF)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_char_range(self) -> "GenerationPolicy":
        if self.char_code_low > self.char_code_high:
            raise ValueError(
                f"char_code_low ({self.char_code_low}) must not exceed "
                f"char_code_high ({self.char_code_high})"
            )
        return self

    @property
    def mode(self) -> str:
        return "random" if self.randomized else "fixed"


GeneratedRow = Tuple[str, ...]


class RowSet(BaseModel):
    """Field list and generated rows for one table, ready for a sink."""

    table_name: str
    field_names: Tuple[str, ...]
    rows: Tuple[GeneratedRow, ...]

    model_config = {"frozen": True}


class TableResult(BaseModel):
    """Outcome of filling one table."""

    table_name: str
    rows_requested: int
    rows_written: int = 0
    mode: str = "random"
    success: bool = False
    generation_seconds: float = 0.0
    insert_seconds: float = 0.0
    error: Optional[str] = None

    model_config = {"frozen": True}


__all__ = [
    "DEFAULT_CHARACTER_LENGTH",
    "DEFAULT_LOW_CHAR",
    "DEFAULT_HIGH_CHAR",
    "ColumnCategory",
    "ColumnDefinition",
    "TableModel",
    "GenerationPolicy",
    "GeneratedRow",
    "RowSet",
    "TableResult",
]
