"""Driver-level value types shared by the logging wrappers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterable


class IsolationLevel(enum.IntEnum):
    """Transaction isolation level requested when beginning a transaction."""

    DEFAULT = 0
    READ_UNCOMMITTED = 1
    READ_COMMITTED = 2
    WRITE_COMMITTED = 3
    REPEATABLE_READ = 4
    SNAPSHOT = 5
    SERIALIZABLE = 6
    LINEARIZABLE = 7


@dataclass(frozen=True)
class TxOptions:
    """Options for beginning a transaction."""

    isolation: IsolationLevel = IsolationLevel.DEFAULT
    read_only: bool = False


@dataclass
class NamedValue:
    """A query argument with an optional name and its 1-based ordinal position."""

    name: str = ""
    ordinal: int = 0
    value: Any = None


class SkipError(Exception):
    """Raised when an optional fast path is not available; the caller should fall back."""

    def __init__(self, message: str = "driver: skip fast-path; continue as if unimplemented"):
        super().__init__(message)


def named_values_to_values(named: Iterable[NamedValue]) -> list[Any]:
    """Return the plain values of positional arguments.

    Raises ValueError if any argument carries a name.
    """
    values = []
    for param in named:
        if param.name:
            raise ValueError("sql: driver does not support the use of Named Parameters")
        values.append(param.value)
    return values