"""A ready-made SQL logger that writes one line per operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from sqllogger.context import Context
from sqllogger.driver import NamedValue, TxOptions
from sqllogger.sql_logger import SQLLogger


class _LineLogger(Protocol):
    def info(self, msg: str, *args: Any) -> Any: ...


@dataclass
class DefaultSQLLogger(SQLLogger):
    """Writes operations to ``log``, a ``logging.Logger`` or anything with
    an ``info(msg, *args)`` method using %-style formatting.
    """

    log: _LineLogger
    enabled: bool = True
    log_connect: bool = True
    log_close: bool = False

    def _emit(self, msg: str, *args: Any) -> None:
        if self.enabled:
            self.log.info(msg, *args)

    def _emit_close(self, msg: str, *args: Any) -> None:
        if self.log_close:
            self._emit(msg, *args)

    def connect(self, ctx: Context, conn_id: int) -> None:
        if self.log_connect:
            self._emit("Connect → CONN(%d)", conn_id)

    def conn_begin(self, ctx: Context, conn_id: int, tx_id: int, opts: TxOptions) -> None:
        self._emit("CONN(%d) ► Begin -> TX(%d)", conn_id, tx_id)

    def conn_prepare(self, ctx: Context, conn_id: int, stmt_id: int, query: str) -> None:
        self._emit("CONN(%d) ► Prepare(%s) → STMT(%d)", conn_id, query, stmt_id)

    def conn_prepare_context(self, ctx: Context, conn_id: int, stmt_id: int, query: str) -> None:
        self._emit("CONN(%d) ► Prepare(%s) → STMT(%d)", conn_id, query, stmt_id)

    def conn_query(
        self, ctx: Context, conn_id: int, rows_id: int, query: str, args: Sequence[Any]
    ) -> None:
        self._emit("CONN(%d) ► Query(%s) → ROWS(%d)", conn_id, query, rows_id)

    def conn_query_context(
        self, ctx: Context, conn_id: int, rows_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        self._emit("CONN(%d) ► Query(%s) → ROWS(%d)", conn_id, query, rows_id)

    def conn_exec(self, ctx: Context, conn_id: int, query: str, args: Sequence[Any]) -> None:
        self._emit("CONN(%d) ► Exec(%s)", conn_id, query)

    def conn_exec_context(
        self, ctx: Context, conn_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        self._emit("CONN(%d) ► Exec(%s)", conn_id, query)

    def conn_close(self, ctx: Context, conn_id: int) -> None:
        self._emit_close("CONN(%d) ► Close", conn_id)

    def stmt_exec(self, ctx: Context, stmt_id: int, query: str, args: Sequence[Any]) -> None:
        self._emit("STMT(%d) ► Exec(%s)", stmt_id, query)

    def stmt_exec_context(
        self, ctx: Context, stmt_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        self._emit("STMT(%d) ► Exec(%s)", stmt_id, query)

    def stmt_query(
        self, ctx: Context, stmt_id: int, rows_id: int, query: str, args: Sequence[Any]
    ) -> None:
        self._emit("STMT(%d) ► Query(%s) → ROWS(%d)", stmt_id, query, rows_id)

    def stmt_query_context(
        self, ctx: Context, stmt_id: int, rows_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        self._emit("STMT(%d) ► Query(%s) → ROWS(%d)", stmt_id, query, rows_id)

    def stmt_close(self, ctx: Context, stmt_id: int) -> None:
        self._emit_close("STMT(%d) ► Close", stmt_id)

    def rows_close(self, ctx: Context, rows_id: int) -> None:
        self._emit_close("ROWS(%d) ► Close", rows_id)

    def tx_commit(self, ctx: Context, tx_id: int) -> None:
        self._emit("  TX(%d) ► Commit", tx_id)

    def tx_rollback(self, ctx: Context, tx_id: int) -> None:
        self._emit("  TX(%d) ► Rollback", tx_id)


def new_default_sql_logger(log: _LineLogger) -> DefaultSQLLogger:
    """Create a logger that is enabled, logs connects and skips closes."""
    return DefaultSQLLogger(log=log, enabled=True, log_connect=True, log_close=False)