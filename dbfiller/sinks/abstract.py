"""
Sink interface for generated row sets.

A sink receives the field list and the generated rows of one table and
persists them (or, for the dry-run sink, only renders them). Sinks report
their outcome as `(success, diagnostic)` instead of raising, so a failed
table never stops the rest of the run.
"""

from __future__ import annotations

import abc
from typing import Protocol, Sequence, Tuple, runtime_checkable

from dbfiller.domain.models import GeneratedRow

SinkOutcome = Tuple[bool, str]


@runtime_checkable
class Sink(Protocol):
    """
    Common interface all sinks must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    """

    name: str

    def execute(
        self,
        table_name: str,
        field_names: Sequence[str],
        rows: Sequence[GeneratedRow],
    ) -> SinkOutcome:
        """
        Write `rows` into `table_name`, exactly once.

        Returns
        -------
        SinkOutcome
            Whether the write succeeded, and a human-readable detail
            (database error/warnings on failure, may be empty on success).
        """
        ...


class AbstractSink(abc.ABC):
    """
    Optional ABC helper for class-based sinks that hold resources.

    Subclasses set `name`, implement `execute`, and may override `close`.
    Usable as a context manager.
    """

    name: str

    @abc.abstractmethod
    def execute(
        self,
        table_name: str,
        field_names: Sequence[str],
        rows: Sequence[GeneratedRow],
    ) -> SinkOutcome:  # pragma: no cover - interface only
        raise NotImplementedError

    def close(self) -> None:
        """Release held resources."""

    def __enter__(self) -> "AbstractSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["SinkOutcome", "Sink", "AbstractSink"]
