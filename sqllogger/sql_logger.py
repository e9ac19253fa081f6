"""Base interface for loggers of SQL operations."""

from __future__ import annotations

from typing import Any, Sequence

from sqllogger.context import Context
from sqllogger.driver import NamedValue, TxOptions


class SQLLogger:
    """Receives events for SQL operations performed through a logging connector.

    Every method is called only after the underlying operation succeeded.
    The base implementation ignores all events; subclasses override the
    ones they want to record. For operations that take no context of their
    own, ``ctx`` only carries logging metadata such as the timing.
    """

    def connect(self, ctx: Context, conn_id: int) -> None:
        """A connection was opened and given ``conn_id``."""

    def conn_begin(self, ctx: Context, conn_id: int, tx_id: int, opts: TxOptions) -> None:
        """A transaction ``tx_id`` was begun on a connection."""

    def conn_prepare(self, ctx: Context, conn_id: int, stmt_id: int, query: str) -> None:
        """A statement ``stmt_id`` was prepared on a connection."""

    def conn_prepare_context(self, ctx: Context, conn_id: int, stmt_id: int, query: str) -> None:
        """A statement ``stmt_id`` was prepared with a context on a connection."""

    def conn_query(
        self, ctx: Context, conn_id: int, rows_id: int, query: str, args: Sequence[Any]
    ) -> None:
        """A query on a connection produced rows ``rows_id``."""

    def conn_query_context(
        self, ctx: Context, conn_id: int, rows_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        """A query with a context on a connection produced rows ``rows_id``."""

    def conn_exec(self, ctx: Context, conn_id: int, query: str, args: Sequence[Any]) -> None:
        """A statement was executed directly on a connection."""

    def conn_exec_context(
        self, ctx: Context, conn_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        """A statement was executed with a context directly on a connection."""

    def conn_close(self, ctx: Context, conn_id: int) -> None:
        """A connection was closed."""

    def stmt_exec(self, ctx: Context, stmt_id: int, query: str, args: Sequence[Any]) -> None:
        """A prepared statement was executed."""

    def stmt_exec_context(
        self, ctx: Context, stmt_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        """A prepared statement was executed with a context."""

    def stmt_query(
        self, ctx: Context, stmt_id: int, rows_id: int, query: str, args: Sequence[Any]
    ) -> None:
        """A prepared statement was queried, producing rows ``rows_id``."""

    def stmt_query_context(
        self, ctx: Context, stmt_id: int, rows_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        """A prepared statement was queried with a context, producing rows ``rows_id``."""

    def stmt_close(self, ctx: Context, stmt_id: int) -> None:
        """A prepared statement was closed."""

    def rows_close(self, ctx: Context, rows_id: int) -> None:
        """A result set was closed."""

    def tx_commit(self, ctx: Context, tx_id: int) -> None:
        """A transaction was committed."""

    def tx_rollback(self, ctx: Context, tx_id: int) -> None:
        """A transaction was rolled back."""