"""
Append-only channel of human-readable run messages.

Messages are also forwarded to the logger, plain ones at DEBUG and warnings
at WARNING. Callers print the rendered summary.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

from dbfiller.utils.logging import get_logger

log = get_logger(__name__)


class Diagnostics:
    """Ordered messages collected during a fill run (timings, outcomes, warnings)."""

    def __init__(self) -> None:
        self._messages: List[str] = []

    def add(self, message: str, level: int = logging.DEBUG) -> None:
        self._messages.append(message)
        log.log(level, message)

    def warning(self, message: str) -> None:
        self.add(message, level=logging.WARNING)

    @property
    def messages(self) -> List[str]:
        return list(self._messages)

    def render(self, line_break: str = "\n") -> str:
        """
        Join all messages with `line_break`, framed by a leading and trailing break.
        """
        return line_break + line_break.join(self._messages) + line_break

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        return len(self._messages)


__all__ = ["Diagnostics"]
