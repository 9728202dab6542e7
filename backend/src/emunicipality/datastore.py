"""Datastore access layer.

Executes parameterized SQL statements through the request's SQLAlchemy
session and normalizes every result to ``QueryResult(rows, row_count)``.

Statements are written with ``?`` positional placeholders and bound in order:

    store.execute("SELECT * FROM users WHERE user_id = ?", [user_id])

The handle is injected per request (see get_datastore) rather than shared
process-wide, so tests can hand services a Datastore over any session.
"""

import re
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, List, Optional, Sequence

from fastapi import Depends
from sqlalchemy import bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import TextClause

from .database import get_db
from .errors import DatastoreError
from .observability.logging_config import get_logger
from .observability.metrics import datastore_statement_duration_seconds, datastore_statements_total

logger = get_logger(__name__)

_PLACEHOLDER = re.compile(r"\?")


@dataclass
class QueryResult:
    """Uniform statement result.

    For statements returning rows, row_count is len(rows); for plain
    INSERT/UPDATE/DELETE it is the driver's affected-row count.
    """
    rows: List[Dict[str, Any]] = field(default_factory=list)
    row_count: int = 0

    def first(self) -> Optional[Dict[str, Any]]:
        return self.rows[0] if self.rows else None


def bind_positional(statement: str, params: Sequence[Any]) -> TextClause:
    """Turn a ``?`` statement and its parameters into a bound text clause.

    Each placeholder becomes a named bind ``:p<n>``; value types are inferred
    so datetimes are serialized correctly on every backend.

    Raises:
        ValueError: placeholder and parameter counts differ
    """
    names: List[str] = []

    def _rename(_match: "re.Match[str]") -> str:
        name = f"p{len(names)}"
        names.append(name)
        return f":{name}"

    sql = _PLACEHOLDER.sub(_rename, statement)
    if len(names) != len(params):
        raise ValueError(
            f"Statement expects {len(names)} parameters, got {len(params)}"
        )

    clause = text(sql)
    if names:
        clause = clause.bindparams(
            *[bindparam(name, value) for name, value in zip(names, params)]
        )
    return clause


def _verb(statement: str) -> str:
    parts = statement.split(None, 1)
    return parts[0].upper() if parts else "UNKNOWN"


class Datastore:
    """Statement executor bound to one SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session
        self._depth = 0

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    def execute(self, statement: str, params: Sequence[Any] = ()) -> QueryResult:
        """Execute one statement and normalize its result.

        Outside of transaction() the statement is committed immediately when
        it writes; reads never commit.

        Raises:
            DatastoreError: on any connectivity or constraint failure
        """
        clause = bind_positional(statement, params)
        verb = _verb(statement)
        start = time.perf_counter()

        try:
            result = self.session.execute(clause)
            if result.returns_rows:
                rows = [dict(row._mapping) for row in result]
                row_count = len(rows)
            else:
                rows = []
                row_count = result.rowcount
            if verb != "SELECT" and not self.in_transaction:
                self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            datastore_statements_total.labels(verb=verb, status="error").inc()
            logger.error(
                f"Database statement failed: {verb}",
                extra={"statement": statement},
                exc_info=exc,
            )
            raise DatastoreError(detail=str(exc)) from exc

        duration = time.perf_counter() - start
        datastore_statements_total.labels(verb=verb, status="success").inc()
        datastore_statement_duration_seconds.labels(verb=verb).observe(duration)
        logger.debug(
            f"Executed statement: {verb}",
            extra={
                "statement": statement,
                "duration_ms": round(duration * 1000, 2),
                "row_count": row_count,
            },
        )
        return QueryResult(rows=rows, row_count=row_count)

    @contextmanager
    def transaction(self) -> Generator["Datastore", None, None]:
        """Run validation reads and the write as one unit of work.

        Commits on success, rolls back on any exception. Nested calls join the
        outermost transaction.

        Usage:
            with store.transaction():
                ensure_user_exists(store, user_id)
                store.execute("INSERT ...", [...])
        """
        if self.in_transaction:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield self
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Transaction commit failed", exc_info=exc)
            raise DatastoreError(detail=str(exc)) from exc
        except Exception:
            self.session.rollback()
            raise
        finally:
            self._depth = 0


def get_datastore(db: Session = Depends(get_db)) -> Datastore:
    """Dependency providing the request's Datastore."""
    return Datastore(db)
