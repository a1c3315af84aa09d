"""
Timing utilities for Database Filler.

Wall-clock timing of the generation and insertion phases of each table,
used for the per-table diagnostics and the result report.

Usage example:
    from dbfiller.utils.profiler import profile_block

    with profile_block("users:generate") as stats:
        build_rows()

    print(f"{stats.duration_seconds:.6f} sec")
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Generator


@dataclass
class ProfileStats:
    """
    Container for timing measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)

    def format_duration(self) -> str:
        return f"{self.duration_seconds:01.6f} sec"


@contextlib.contextmanager
def profile_block(label: str) -> Generator[ProfileStats, None, None]:
    """
    Context manager measuring the wall-clock duration of a block.

    The stats are filled in even when the block raises.
    """
    stats = ProfileStats(label=label)
    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts


__all__ = ["ProfileStats", "profile_block"]
