"""
Per-column value generation.

`ValueGenerator.generate` returns one SQL literal (as text, ready to be put in
a VALUES tuple) for one column. Randomized mode draws from the injected
random source; fixed mode fills columns with placeholder or maximal values,
which is much faster but collides on unique indexes.

Date, datetime and time columns all receive the instant the generator was
created, so every row of a run carries the same timestamp.
"""

from __future__ import annotations

from datetime import datetime
from functools import partial
from typing import Callable, Dict, Optional, Tuple

from pymysql.converters import escape_string

from dbfiller.domain.models import (
    DEFAULT_CHARACTER_LENGTH,
    ColumnCategory,
    ColumnDefinition,
    GenerationPolicy,
)
from dbfiller.generation.random_source import RandomSource, create_random_source

# Largest value of the classic 32-bit generator; upper bound of unsigned INT draws.
RANDOM_MAX = 2_147_483_647

# (unsigned range, signed range)
INTEGER_RANGES: Dict[ColumnCategory, Tuple[Tuple[int, int], Tuple[int, int]]] = {
    ColumnCategory.INT8: ((0, 255), (-128, 127)),
    ColumnCategory.INT16: ((0, 65_535), (-32_768, 32_767)),
    ColumnCategory.INT24: ((0, 16_777_215), (-8_388_608, 8_388_607)),
    # signed range skewed to get predominantly negative values
    ColumnCategory.INT32: ((0, RANDOM_MAX), (-9_999_999, 1_000_000)),
}

# One digit short of BIGINT UNSIGNED width so random values never overflow.
BIGINT_RANDOM_DIGITS = 19
# Slightly below the BIGINT UNSIGNED maximum.
BIGINT_FIXED = "18446744073708551616"

FLOAT_SCALE = 1_000_000
DECIMAL_SCALE_DIGITS = 3
FIXED_DECIMAL_FRACTION = "50"
FIXED_CHARACTER = "X"
MARKUP_REPLACEMENT = "Z"


def _quote(text: str) -> str:
    return f'"{text}"'


class ValueGenerator:
    """
    Generates SQL literals for columns under one GenerationPolicy.

    Parameters
    ----------
    policy : GenerationPolicy
        Row count, mode and character range.
    rng : RandomSource, optional
        Source of uniform draws; defaults to an unseeded `random.Random`.
    now : datetime, optional
        Instant used for date/time columns; defaults to creation time.
    """

    def __init__(
        self,
        policy: GenerationPolicy,
        rng: Optional[RandomSource] = None,
        now: Optional[datetime] = None,
    ) -> None:
        self.policy = policy
        self.rng = rng if rng is not None else create_random_source()
        self.now = now or datetime.now()
        self._date = _quote(self.now.strftime("%Y-%m-%d"))
        self._datetime = _quote(self.now.strftime("%Y-%m-%d %H:%M:%S"))
        self._time = _quote(self.now.strftime("%H:%M:%S"))
        self._handlers: Dict[ColumnCategory, Callable[[ColumnDefinition], str]] = {
            ColumnCategory.CHARACTER: self._character,
            ColumnCategory.INT8: partial(self._integer, ColumnCategory.INT8),
            ColumnCategory.INT16: partial(self._integer, ColumnCategory.INT16),
            ColumnCategory.INT24: partial(self._integer, ColumnCategory.INT24),
            ColumnCategory.INT32: partial(self._integer, ColumnCategory.INT32),
            ColumnCategory.INT64: self._bigint,
            ColumnCategory.DECIMAL: self._decimal,
            ColumnCategory.FLOAT32: self._float32,
            ColumnCategory.FLOAT64: self._float64,
            ColumnCategory.DATE: lambda column: self._date,
            ColumnCategory.DATETIME: lambda column: self._datetime,
            ColumnCategory.TIME: lambda column: self._time,
            ColumnCategory.ENUMERATION: self._enumeration,
        }

    def generate(self, column: ColumnDefinition) -> Optional[str]:
        """
        Return one SQL literal for `column`, or None if its type is unsupported.
        """
        if column.category is None:
            return None
        return self._handlers[column.category](column)

    def _character(self, column: ColumnDefinition) -> str:
        length = column.length or DEFAULT_CHARACTER_LENGTH
        if not self.policy.randomized:
            return _quote(FIXED_CHARACTER * length)
        low, high = self.policy.char_code_low, self.policy.char_code_high
        chars = []
        for _ in range(length):
            char = chr(self.rng.randint(low, high))
            # < and > corrupt markup-bearing output
            if char in "<>":
                char = MARKUP_REPLACEMENT
            chars.append(char)
        return _quote(escape_string("".join(chars)))

    def _integer(self, category: ColumnCategory, column: ColumnDefinition) -> str:
        unsigned_range, signed_range = INTEGER_RANGES[category]
        low, high = unsigned_range if column.unsigned else signed_range
        if not self.policy.randomized:
            return str(high)
        return str(self.rng.randint(low, high))

    def _bigint(self, column: ColumnDefinition) -> str:
        if not self.policy.randomized:
            return BIGINT_FIXED
        return "".join(str(self.rng.randint(0, 9)) for _ in range(BIGINT_RANDOM_DIGITS))

    def _decimal(self, column: ColumnDefinition) -> str:
        width = max((column.length or 0) - DECIMAL_SCALE_DIGITS, 1)
        if not self.policy.randomized:
            return _quote(f"{'9' * width}.{FIXED_DECIMAL_FRACTION}")
        whole = self.rng.randint(0, 10**width - 1)
        fraction = self.rng.randint(0, 99)
        return _quote(f"{whole}.{fraction}")

    def _float32(self, column: ColumnDefinition) -> str:
        return repr(self.rng.random() * FLOAT_SCALE)

    def _float64(self, column: ColumnDefinition) -> str:
        scale = 10 ** (column.length or 0) - 1
        return repr(self.rng.random() * scale)

    def _enumeration(self, column: ColumnDefinition) -> str:
        return _quote(self.rng.choice(column.enum_values))


__all__ = [
    "RANDOM_MAX",
    "INTEGER_RANGES",
    "BIGINT_RANDOM_DIGITS",
    "BIGINT_FIXED",
    "ValueGenerator",
]
