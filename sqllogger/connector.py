"""Wrappers around driver objects that report every successful operation to an SQLLogger.

The wrapped driver objects are duck-typed. A connector has ``connect(ctx)``
and ``driver()``. A connection has ``begin()``, ``prepare(query)`` and
``close()``. A statement has ``exec(args)``, ``query(args)``, ``num_input()``
and ``close()``. Rows have ``columns()``, ``next()`` and ``close()``. A
transaction has ``commit()`` and ``rollback()``.

``next()`` on rows returns one row and raises ``StopIteration`` when the
rows are exhausted. Every other method is optional: when the wrapped object
lacks it, the wrapper falls back to a basic method, returns a neutral value,
or raises ``SkipError``.
"""

from __future__ import annotations

import itertools
import threading
from concurrent.futures import CancelledError
from datetime import datetime
from typing import Any, Iterator, Sequence

from sqllogger.context import Context, background
from sqllogger.driver import (
    IsolationLevel,
    NamedValue,
    SkipError,
    TxOptions,
    named_values_to_values,
)
from sqllogger.sql_logger import SQLLogger
from sqllogger.timing import Timing, with_timing

_ids = itertools.count(1)
_ids_lock = threading.Lock()


def next_id() -> int:
    """Return the next identifier for a connection, statement, rows or transaction."""
    with _ids_lock:
        return next(_ids)


def _timed(ctx: Context, start: datetime) -> Context:
    return with_timing(ctx, Timing(start=start, end=datetime.now()))


class _Closing:
    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class LoggingConnector:
    """Opens connections through a wrapped connector and logs them.

    Some optional features of the wrapped driver may not be exposed by the
    wrappers this connector hands out.
    """

    def __init__(self, log: SQLLogger, connector: Any):
        self.log = log
        self._connector = connector

    def connect(self, ctx: Context) -> LoggingConnection:
        """Open a connection and log it with a fresh connection id."""
        start = datetime.now()
        conn = self._connector.connect(ctx)
        ctx = _timed(ctx, start)
        conn_id = next_id()
        self.log.connect(ctx, conn_id)
        return LoggingConnection(conn_id, self.log, conn)

    def driver(self) -> LoggingDriver:
        """Return the wrapped connector's driver, wrapped for logging."""
        return LoggingDriver(self.log, self._connector.driver())


def logging_connector(log: SQLLogger, connector: Any) -> LoggingConnector:
    """Wrap ``connector`` so that ``log`` receives its SQL operations."""
    return LoggingConnector(log, connector)


class LoggingDriver:
    """A driver whose connectors log through an SQLLogger."""

    def __init__(self, log: SQLLogger, driver: Any):
        self.log = log
        self._driver = driver

    def open(self, name: str) -> Any:
        """Opening by name is unsupported; connections come from a connector."""
        raise RuntimeError("open is not supported; connect through a LoggingConnector")

    def open_connector(self, name: str) -> LoggingConnector:
        """Open a connector on the wrapped driver and wrap it for logging."""
        open_connector = getattr(self._driver, "open_connector", None)
        if open_connector is None:
            raise SkipError()
        return LoggingConnector(self.log, open_connector(name))


class LoggingConnection(_Closing):
    """A connection that logs transactions, statements, queries and closing."""

    def __init__(self, conn_id: int, log: SQLLogger, conn: Any):
        self.id = conn_id
        self.log = log
        self._conn = conn

    def _wrap_tx(self, tx: Any, ctx: Context, opts: TxOptions) -> LoggingTx:
        tx_id = next_id()
        self.log.conn_begin(ctx, self.id, tx_id, opts)
        return LoggingTx(tx_id, self.log, tx)

    def begin(self) -> LoggingTx:
        start = datetime.now()
        tx = self._conn.begin()
        return self._wrap_tx(tx, _timed(background(), start), TxOptions())

    def begin_tx(self, ctx: Context, opts: TxOptions) -> LoggingTx:
        """Begin a transaction with options.

        Without native support in the wrapped connection only default
        options are accepted; others raise ValueError.
        """
        begin_tx = getattr(self._conn, "begin_tx", None)
        if begin_tx is not None:
            start = datetime.now()
            tx = begin_tx(ctx, opts)
            return self._wrap_tx(tx, _timed(ctx, start), opts)

        if opts.isolation != IsolationLevel.DEFAULT:
            raise ValueError("sql: driver does not support non-default isolation level")
        if opts.read_only:
            raise ValueError("sql: driver does not support read-only transactions")

        start = datetime.now()
        tx = self._conn.begin()
        return self._wrap_tx(tx, _timed(ctx, start), opts)

    def query(self, query: str, args: Sequence[Any]) -> LoggingRows:
        run = getattr(self._conn, "query", None)
        if run is None:
            raise SkipError()
        start = datetime.now()
        rows = run(query, args)
        ctx = _timed(background(), start)
        rows_id = next_id()
        self.log.conn_query(ctx, self.id, rows_id, query, args)
        return LoggingRows(rows_id, self.log, rows)

    def query_context(self, ctx: Context, query: str, args: Sequence[NamedValue]) -> LoggingRows:
        run = getattr(self._conn, "query_context", None)
        if run is None:
            raise SkipError()
        rows = run(ctx, query, args)
        rows_id = next_id()
        self.log.conn_query_context(ctx, self.id, rows_id, query, args)
        return LoggingRows(rows_id, self.log, rows)

    def exec(self, query: str, args: Sequence[Any]) -> Any:
        run = getattr(self._conn, "exec", None)
        if run is None:
            raise SkipError()
        start = datetime.now()
        result = run(query, args)
        self.log.conn_exec(_timed(background(), start), self.id, query, args)
        return result

    def exec_context(self, ctx: Context, query: str, args: Sequence[NamedValue]) -> Any:
        run = getattr(self._conn, "exec_context", None)
        if run is None:
            raise SkipError()
        start = datetime.now()
        result = run(ctx, query, args)
        self.log.conn_exec_context(_timed(ctx, start), self.id, query, args)
        return result

    def prepare(self, query: str) -> LoggingStatement:
        start = datetime.now()
        stmt = self._conn.prepare(query)
        ctx = _timed(background(), start)
        stmt_id = next_id()
        self.log.conn_prepare(ctx, self.id, stmt_id, query)
        return LoggingStatement(stmt_id, self.log, stmt, query)

    def prepare_context(self, ctx: Context, query: str) -> LoggingStatement:
        """Prepare a statement; falls back to ``prepare`` and honours cancellation."""
        prepare_context = getattr(self._conn, "prepare_context", None)
        if prepare_context is not None:
            start = datetime.now()
            stmt = prepare_context(ctx, query)
            ctx = _timed(ctx, start)
            stmt_id = next_id()
            self.log.conn_prepare_context(ctx, self.id, stmt_id, query)
            return LoggingStatement(stmt_id, self.log, stmt, query)

        stmt = self.prepare(query)
        try:
            ctx.check()
        except CancelledError:
            stmt.close()
            raise
        return stmt

    def reset_session(self, ctx: Context) -> None:
        reset = getattr(self._conn, "reset_session", None)
        if reset is not None:
            reset(ctx)

    def check_named_value(self, nv: NamedValue) -> Any:
        check = getattr(self._conn, "check_named_value", None)
        if check is None:
            raise SkipError()
        return check(nv)

    def ping(self, ctx: Context) -> Any:
        ping = getattr(self._conn, "ping", None)
        if ping is None:
            raise SkipError()
        return ping(ctx)

    def is_valid(self) -> bool:
        is_valid = getattr(self._conn, "is_valid", None)
        if is_valid is None:
            return True
        return is_valid()

    def close(self) -> None:
        """Close the connection; the close is logged even if it fails."""
        start = datetime.now()
        try:
            self._conn.close()
        finally:
            self.log.conn_close(_timed(background(), start), self.id)


class LoggingStatement(_Closing):
    """A prepared statement that logs executions, queries and closing."""

    def __init__(self, stmt_id: int, log: SQLLogger, stmt: Any, query: str):
        self.id = stmt_id
        self.log = log
        self.query_text = query
        self._stmt = stmt

    def close(self) -> None:
        """Close the statement; the close is logged even if it fails."""
        start = datetime.now()
        try:
            self._stmt.close()
        finally:
            self.log.stmt_close(_timed(background(), start), self.id)

    def num_input(self) -> int:
        return self._stmt.num_input()

    def exec(self, args: Sequence[Any]) -> Any:
        start = datetime.now()
        result = self._stmt.exec(args)
        self.log.stmt_exec(_timed(background(), start), self.id, self.query_text, args)
        return result

    def exec_context(self, ctx: Context, args: Sequence[NamedValue]) -> Any:
        run = getattr(self._stmt, "exec_context", None)
        if run is not None:
            start = datetime.now()
            result = run(ctx, args)
            self.log.stmt_exec_context(_timed(ctx, start), self.id, self.query_text, args)
            return result

        values = named_values_to_values(args)
        ctx.check()
        return self.exec(values)

    def query(self, args: Sequence[Any]) -> LoggingRows:
        start = datetime.now()
        rows = self._stmt.query(args)
        ctx = _timed(background(), start)
        rows_id = next_id()
        self.log.stmt_query(ctx, self.id, rows_id, self.query_text, args)
        return LoggingRows(rows_id, self.log, rows)

    def query_context(self, ctx: Context, args: Sequence[NamedValue]) -> LoggingRows:
        run = getattr(self._stmt, "query_context", None)
        if run is not None:
            start = datetime.now()
            rows = run(ctx, args)
            ctx = _timed(ctx, start)
            rows_id = next_id()
            self.log.stmt_query_context(ctx, self.id, rows_id, self.query_text, args)
            return LoggingRows(rows_id, self.log, rows)

        values = named_values_to_values(args)
        ctx.check()
        return self.query(values)

    def check_named_value(self, nv: NamedValue) -> Any:
        check = getattr(self._stmt, "check_named_value", None)
        if check is None:
            raise SkipError()
        return check(nv)


class LoggingRows(_Closing):
    """A result set that logs its closing; iterating yields its rows."""

    def __init__(self, rows_id: int, log: SQLLogger, rows: Any):
        self.id = rows_id
        self.log = log
        self._rows = rows

    def has_next_result_set(self) -> bool:
        has_next = getattr(self._rows, "has_next_result_set", None)
        return bool(has_next()) if has_next is not None else False

    def next_result_set(self) -> None:
        """Advance to the next result set; raises StopIteration if there is none."""
        advance = getattr(self._rows, "next_result_set", None)
        if advance is None:
            raise StopIteration
        advance()

    def columns(self) -> list[str]:
        return self._rows.columns()

    def close(self) -> None:
        """Close the rows; the close is logged even if it fails."""
        start = datetime.now()
        try:
            self._rows.close()
        finally:
            self.log.rows_close(_timed(background(), start), self.id)

    def next(self) -> Any:
        """Return the next row; raises StopIteration when exhausted."""
        return self._rows.next()

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                row = self.next()
            except StopIteration:
                return
            yield row

    def column_type_database_type_name(self, index: int) -> str:
        lookup = getattr(self._rows, "column_type_database_type_name", None)
        return lookup(index) if lookup is not None else ""

    def column_type_length(self, index: int) -> int | None:
        lookup = getattr(self._rows, "column_type_length", None)
        return lookup(index) if lookup is not None else None

    def column_type_nullable(self, index: int) -> bool | None:
        lookup = getattr(self._rows, "column_type_nullable", None)
        return lookup(index) if lookup is not None else None

    def column_type_precision_scale(self, index: int) -> tuple[int, int] | None:
        lookup = getattr(self._rows, "column_type_precision_scale", None)
        return lookup(index) if lookup is not None else None

    def column_type_scan_type(self, index: int) -> type | None:
        lookup = getattr(self._rows, "column_type_scan_type", None)
        return lookup(index) if lookup is not None else None


class LoggingTx:
    """A transaction that logs a successful commit or rollback."""

    def __init__(self, tx_id: int, log: SQLLogger, tx: Any):
        self.id = tx_id
        self.log = log
        self._tx = tx

    def commit(self) -> None:
        start = datetime.now()
        self._tx.commit()
        self.log.tx_commit(_timed(background(), start), self.id)

    def rollback(self) -> None:
        start = datetime.now()
        self._tx.rollback()
        self.log.tx_rollback(_timed(background(), start), self.id)