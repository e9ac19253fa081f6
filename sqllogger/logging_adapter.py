"""An SQL logger that writes structured records to a standard ``logging.Logger``."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from sqllogger.context import Context
from sqllogger.driver import NamedValue, TxOptions
from sqllogger.sql_logger import SQLLogger

_PLAIN_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-._/@^+"
)


@dataclass(frozen=True)
class Opts:
    """Log levels used for each kind of SQL operation."""

    connect_level: int = logging.DEBUG
    prepare_level: int = logging.DEBUG
    query_level: int = logging.INFO
    exec_level: int = logging.INFO
    close_level: int = logging.DEBUG
    tx_level: int = logging.INFO


def default_opts() -> Opts:
    """Return levels that log queries, execs and transactions at INFO, the rest at DEBUG."""
    return Opts()


def _format_arg(arg: Any) -> str:
    if isinstance(arg, NamedValue):
        return f"{{{arg.name} {arg.ordinal} {_format_arg(arg.value)}}}"
    if arg is None:
        return "<nil>"
    if isinstance(arg, bool):
        return "true" if arg else "false"
    if isinstance(arg, (bytes, bytearray)):
        return "[" + " ".join(str(b) for b in arg) + "]"
    return str(arg)


def _format_args(args: Sequence[Any] | None) -> str:
    return "[" + " ".join(_format_arg(a) for a in (args or ())) + "]"


def _quote_if_needed(text: str) -> str:
    if text and all(ch in _PLAIN_CHARS for ch in text):
        return text
    return json.dumps(text, ensure_ascii=False)


def _render(msg: str, fields: dict[str, Any]) -> str:
    parts = [msg]
    for key in sorted(fields):
        value = fields[key]
        text = value if isinstance(value, str) else str(value)
        parts.append(f"{key}={_quote_if_needed(text)}")
    return " ".join(parts)


@dataclass
class StdlibSQLLogger(SQLLogger):
    """Logs SQL operations to ``logger`` at the levels given by ``opts``.

    The message holds the operation followed by its fields in sorted
    ``key=value`` form; the fields are also attached to the record as
    ``sql_fields``.
    """

    logger: logging.Logger
    opts: Opts = field(default_factory=default_opts)

    def _log(self, level: int, msg: str, **fields: Any) -> None:
        if "args" in fields:
            fields["args"] = _format_args(fields["args"])
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, _render(msg, fields), extra={"sql_fields": dict(fields)})

    def connect(self, ctx: Context, conn_id: int) -> None:
        self._log(self.opts.connect_level, "DB Connect", connID=conn_id)

    def conn_begin(self, ctx: Context, conn_id: int, tx_id: int, opts: TxOptions) -> None:
        self._log(self.opts.tx_level, "CONN Begin", connID=conn_id)

    def conn_prepare(self, ctx: Context, conn_id: int, stmt_id: int, query: str) -> None:
        self._log(self.opts.prepare_level, "CONN Prepare", connID=conn_id, query=query, stmtID=stmt_id)

    def conn_prepare_context(self, ctx: Context, conn_id: int, stmt_id: int, query: str) -> None:
        self._log(self.opts.prepare_level, "CONN Prepare", connID=conn_id, query=query, stmtID=stmt_id)

    def conn_query(
        self, ctx: Context, conn_id: int, rows_id: int, query: str, args: Sequence[Any]
    ) -> None:
        self._log(
            self.opts.query_level, "CONN Query",
            connID=conn_id, query=query, args=args, rowsID=rows_id,
        )

    def conn_query_context(
        self, ctx: Context, conn_id: int, rows_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        self._log(
            self.opts.query_level, "CONN Query",
            connID=conn_id, query=query, args=args, rowsID=rows_id,
        )

    def conn_exec(self, ctx: Context, conn_id: int, query: str, args: Sequence[Any]) -> None:
        self._log(self.opts.exec_level, "CONN Exec", connID=conn_id, query=query)

    def conn_exec_context(
        self, ctx: Context, conn_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        self._log(self.opts.exec_level, "CONN Exec", connID=conn_id, query=query, args=args)

    def conn_close(self, ctx: Context, conn_id: int) -> None:
        self._log(self.opts.close_level, "CONN Close", connID=conn_id)

    def stmt_exec(self, ctx: Context, stmt_id: int, query: str, args: Sequence[Any]) -> None:
        self._log(self.opts.exec_level, "STMT Exec", stmtID=stmt_id, query=query, args=args)

    def stmt_exec_context(
        self, ctx: Context, stmt_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        self._log(self.opts.exec_level, "STMT Exec", stmtID=stmt_id, query=query, args=args)

    def stmt_query(
        self, ctx: Context, stmt_id: int, rows_id: int, query: str, args: Sequence[Any]
    ) -> None:
        self._log(
            self.opts.query_level, "STMT Query",
            stmtID=stmt_id, query=query, args=args, rowsID=rows_id,
        )

    def stmt_query_context(
        self, ctx: Context, stmt_id: int, rows_id: int, query: str, args: Sequence[NamedValue]
    ) -> None:
        self._log(
            self.opts.query_level, "STMT Query",
            stmtID=stmt_id, query=query, args=args, rowsID=rows_id,
        )

    def stmt_close(self, ctx: Context, stmt_id: int) -> None:
        self._log(self.opts.close_level, "STMT Close", stmtID=stmt_id)

    def rows_close(self, ctx: Context, rows_id: int) -> None:
        self._log(self.opts.close_level, "ROWS Close", rowsID=rows_id)

    def tx_commit(self, ctx: Context, tx_id: int) -> None:
        self._log(self.opts.tx_level, "TX Commit", txID=tx_id)

    def tx_rollback(self, ctx: Context, tx_id: int) -> None:
        self._log(self.opts.tx_level, "TX Rollback", txID=tx_id)