"""
db/executor.py
--------------
Runs one parameterized statement per call on a fresh connection.

Every call opens its own connection (the engine uses NullPool, so nothing is
kept between calls), binds the parameters by name, collects the rows, commits
and closes. The outcome is handed to the caller exactly once: a failure while
closing after a failed statement is logged and dropped.
"""

import enum
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from sqlalchemy import Boolean, DateTime, Integer, String, bindparam, create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from utils.errors import QueryError
from utils.logger import get_logger

logger = get_logger(__name__)

Row = dict
Callback = Callable[[Optional[QueryError], Optional[list]], None]


class ParamType(enum.Enum):
    INT = "Int"
    TEXT = "NVarChar"
    TIMESTAMP = "DateTime"
    BOOL = "Bit"


_SQL_TYPES = {
    ParamType.INT: Integer,
    ParamType.TEXT: String,
    ParamType.TIMESTAMP: DateTime,
    ParamType.BOOL: Boolean,
}


@dataclass(frozen=True)
class Param:
    """A named, typed value bound into a statement as `:name`."""

    name: str
    type: ParamType
    value: Any

    def bind(self):
        return bindparam(self.name, self.value, type_=_SQL_TYPES[self.type]())


def build_engine(url: str, connect_timeout: int = 30) -> Engine:
    """
    Create an engine that opens a new DBAPI connection on every checkout and
    closes it on release.
    """
    backend = make_url(url).get_backend_name()
    if backend == "sqlite":
        connect_args = {"timeout": connect_timeout}
    elif backend == "postgresql":
        connect_args = {"connect_timeout": connect_timeout}
    else:
        connect_args = {}

    engine = create_engine(url, poolclass=NullPool, connect_args=connect_args, future=True)

    if backend == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_conn, _record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def _query_error(exc: SQLAlchemyError) -> QueryError:
    orig = getattr(exc, "orig", None)
    return QueryError(str(orig) if orig is not None else str(exc))


class _Once:
    """Forwards the first outcome to `callback` and drops the rest."""

    def __init__(self, callback: Callback):
        self._callback = callback
        self.called = False

    def __call__(self, error: Optional[QueryError], rows: Optional[list] = None) -> None:
        if self.called:
            if error is not None:
                logger.warning(f"Dropping extra query outcome: {error}")
            return
        self.called = True
        self._callback(error, rows)


class QueryExecutor:
    def __init__(self, engine: Engine):
        self._engine = engine

    def submit(self, statement: str, params: Sequence[Param], callback: Callback) -> None:
        """
        Execute `statement` and call `callback(error, rows)` exactly once.

        The connection is closed before the callback runs, on the success
        path as well as after connect or statement failures. A close failure
        after a successful commit is logged and the rows are still delivered.
        """
        done = _Once(callback)
        clause = text(statement).bindparams(*[p.bind() for p in params])
        rows = None
        errors = []
        conn = None
        try:
            conn = self._engine.connect()
            result = conn.execute(clause)
            fetched = [dict(row._mapping) for row in result] if result.returns_rows else []
            conn.commit()
            rows = fetched
        except SQLAlchemyError as exc:
            error = _query_error(exc)
            logger.error(f"Query failed: {error}")
            errors.append(error)
        finally:
            if conn is not None:
                try:
                    conn.close()
                except SQLAlchemyError as exc:
                    if rows is None:
                        errors.append(_query_error(exc))
                    else:
                        logger.warning(f"Closing connection failed after commit: {_query_error(exc)}")
        # Only reached once the connection is released; the latch keeps the
        # first error when both the statement and the close failed.
        for error in errors:
            done(error)
        done(None, rows)

    def run(self, statement: str, params: Sequence[Param] = ()) -> list:
        """Execute `statement` and return its rows; raises QueryError."""
        outcome = {}

        def collect(error, rows=None):
            outcome["error"] = error
            outcome["rows"] = rows

        self.submit(statement, params, collect)
        if outcome["error"] is not None:
            raise outcome["error"]
        return outcome["rows"]

    def run_one(self, statement: str, params: Sequence[Param] = ()) -> Optional[Row]:
        rows = self.run(statement, params)
        return rows[0] if rows else None
