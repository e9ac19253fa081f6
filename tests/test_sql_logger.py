from sqllogger.context import background
from sqllogger.driver import NamedValue, TxOptions
from sqllogger.sql_logger import SQLLogger


def _call_every_event(logger):
    ctx = background()
    args = [1, True]
    named = [NamedValue(ordinal=1, value=1)]
    return [
        logger.connect(ctx, conn_id=1),
        logger.conn_begin(ctx, conn_id=1, tx_id=2, opts=TxOptions()),
        logger.conn_prepare(ctx, conn_id=1, stmt_id=3, query="q"),
        logger.conn_prepare_context(ctx, conn_id=1, stmt_id=3, query="q"),
        logger.conn_query(ctx, conn_id=1, rows_id=4, query="q", args=args),
        logger.conn_query_context(ctx, conn_id=1, rows_id=4, query="q", args=named),
        logger.conn_exec(ctx, conn_id=1, query="q", args=args),
        logger.conn_exec_context(ctx, conn_id=1, query="q", args=named),
        logger.conn_close(ctx, conn_id=1),
        logger.stmt_exec(ctx, stmt_id=3, query="q", args=args),
        logger.stmt_exec_context(ctx, stmt_id=3, query="q", args=named),
        logger.stmt_query(ctx, stmt_id=3, rows_id=4, query="q", args=args),
        logger.stmt_query_context(ctx, stmt_id=3, rows_id=4, query="q", args=named),
        logger.stmt_close(ctx, stmt_id=3),
        logger.rows_close(ctx, rows_id=4),
        logger.tx_commit(ctx, tx_id=2),
        logger.tx_rollback(ctx, tx_id=2),
    ]


class _ConnectRecorder(SQLLogger):
    def __init__(self):
        self.events = []

    def connect(self, ctx, conn_id):
        self.events.append(("connect", conn_id))


class _TxRecorder(SQLLogger):
    def __init__(self):
        self.events = []

    def tx_commit(self, ctx, tx_id):
        self.events.append(("commit", tx_id))

    def tx_rollback(self, ctx, tx_id):
        self.events.append(("rollback", tx_id))


def test_base_logger_ignores_every_event():
    results = _call_every_event(SQLLogger())
    assert len(results) == 17
    assert all(result is None for result in results)


def test_subclass_receives_only_overridden_events():
    logger = _ConnectRecorder()
    _call_every_event(logger)
    assert logger.events == [("connect", 1)]


def test_subclass_overriding_several_events():
    logger = _TxRecorder()
    _call_every_event(logger)
    assert logger.events == [("commit", 2), ("rollback", 2)]


def test_context_is_passed_through():
    class Recorder(SQLLogger):
        def rows_close(self, ctx, rows_id):
            return ctx.value("request"), rows_id

    ctx = background().with_value("request", "r-1")
    assert Recorder().rows_close(ctx, 9) == ("r-1", 9)