# sqllogger

`sqllogger` wraps a database driver's connector so that every SQL operation
that succeeds is reported to a logger you choose: connects, transactions,
prepared statements, queries, execs, commits, rollbacks and closes. Each
connection, statement, transaction and result set gets a unique id from a
process-wide counter, and each logger call receives a `Context` carrying a
`Timing` with the start and end of the underlying operation.

## Installation

```
pip install sqllogger
```

There are no runtime dependencies.

## Modules

- `sqllogger.sql_logger` – `SQLLogger`, the base class a logger subclasses.
  It has one method per operation (`connect`, `conn_begin`, `conn_prepare`,
  `conn_prepare_context`, `conn_query`, `conn_query_context`, `conn_exec`,
  `conn_exec_context`, `conn_close`, `stmt_exec`, `stmt_exec_context`,
  `stmt_query`, `stmt_query_context`, `stmt_close`, `rows_close`,
  `tx_commit`, `tx_rollback`). The base methods do nothing; override the
  ones you care about. A method is only called after the wrapped operation
  finished without raising, except for the close events, which are reported
  even when the close itself fails.
- `sqllogger.default_logger` – `DefaultSQLLogger` writes one readable line per
  operation through `log.info(msg, *args)`, so a `logging.Logger` works
  directly. `new_default_sql_logger(log)` creates one that is enabled, logs
  connects and skips close events; the `enabled`, `log_connect` and
  `log_close` attributes can be changed afterwards.
- `sqllogger.logging_adapter` – `StdlibSQLLogger(logger, opts)` sends records
  to a `logging.Logger` at a level per kind of operation, set in `Opts`.
  `default_opts()` uses DEBUG for connect, prepare and close and INFO for
  query, exec and transactions. The message is the operation followed by its
  fields in sorted `key=value` form, for example
  `CONN Query args=[] connID=42 query="SELECT 1" rowsID=44`; the fields are
  also attached to the record as `sql_fields`.
- `sqllogger.connector` – `logging_connector(log, connector)` returns a
  `LoggingConnector`. The connections, statements, rows and transactions it
  hands out are `LoggingConnection`, `LoggingStatement`, `LoggingRows` and
  `LoggingTx`. `next_id()` returns the next id from the shared counter.
- `sqllogger.driver` – `TxOptions`, `IsolationLevel`, `NamedValue`,
  `SkipError` and `named_values_to_values(named)`.
- `sqllogger.context` – `Context` (`with_value`, `value`, `cancel`, `check`)
  and `background()`.
- `sqllogger.timing` – `Timing` (`start`, `end`, `duration()`),
  `with_timing(ctx, timing)` and `get_timing(ctx)`, which returns `None` when
  the context carries no timing.

## What the wrapped driver must provide

The package ships no database driver. You pass in your own connector object,
and the wrappers call it by method name:

- connector: `connect(ctx)`, `driver()`
- connection: `begin()`, `prepare(query)`, `close()`
- statement: `exec(args)`, `query(args)`, `num_input()`, `close()`
- rows: `columns()`, `next()` (raising `StopIteration` when exhausted), `close()`
- transaction: `commit()`, `rollback()`

Every other method is optional. These include `begin_tx`, `prepare_context`,
`query_context`, `exec_context`, `ping`, `reset_session`,
`check_named_value` and `is_valid` on connections, `exec_context` and
`query_context` on statements, and the result-set and column-type methods on
rows. When an optional method is missing, the wrapper does one of three things:

- It falls back to the basic method. `begin_tx` then accepts only default
  `TxOptions` and raises `ValueError` otherwise. The context variants of
  statement calls reject named arguments with `ValueError`.
- It returns a neutral value, such as `True` from `is_valid()`, `""` or
  `None` for column types, or `False` from `has_next_result_set()`.
- It raises `SkipError`.

A canceled `Context` makes the fallback paths raise
`concurrent.futures.CancelledError`. `LoggingDriver.open(name)` always raises
`RuntimeError`; use `open_connector(name)` or a `LoggingConnector`.

## Usage

```python
import logging

from sqllogger.connector import logging_connector
from sqllogger.context import background
from sqllogger.default_logger import new_default_sql_logger

logging.basicConfig(level=logging.INFO, format="SQL: %(message)s")

sql_logger = new_default_sql_logger(logging.getLogger("sql"))
sql_logger.log_close = True

connector = logging_connector(sql_logger, my_driver_connector)
ctx = background()

with connector.connect(ctx) as conn:
    with conn.prepare_context(ctx, "SELECT 42") as stmt:
        with stmt.query_context(ctx, []) as rows:
            for row in rows:
                print(row)
```

Connections, statements and rows are context managers that close on exit.
Iterating over rows yields them until the driver's `next()` raises
`StopIteration`. The logger writes lines such as:

```
SQL: Connect → CONN(1)
SQL: CONN(1) ► Prepare(SELECT 42) → STMT(2)
SQL: STMT(2) ► Query(SELECT 42) → ROWS(3)
SQL: ROWS(3) ► Close
SQL: STMT(2) ► Close
SQL: CONN(1) ► Close
```

A custom logger can read the timing of an operation from its context:

```python
import logging

from sqllogger.sql_logger import SQLLogger
from sqllogger.timing import get_timing


class SlowQueryLogger(SQLLogger):
    def stmt_query_context(self, ctx, stmt_id, rows_id, query, args):
        found = get_timing(ctx)
        if found is not None and found.duration().total_seconds() > 1:
            logging.warning("slow query on STMT(%d): %s", stmt_id, query)
```

To send structured records to the standard `logging` module instead:

```python
import logging

from sqllogger.logging_adapter import Opts, StdlibSQLLogger

sql_logger = StdlibSQLLogger(logging.getLogger("sql"), Opts(close_level=logging.INFO))
connector = logging_connector(sql_logger, my_driver_connector)
```

## Running the tests

```
pip install -e ".[test]"
pytest
```