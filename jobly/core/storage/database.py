from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from jobly.core.config import load_config
from jobly.core.errors import BadRequestError
from jobly.core.sql.predicate import Dialect, dialect_for

log = logging.getLogger("jobly.storage")

_PLACEHOLDER = re.compile(r"\$(\d+)")


def to_named_binds(sql: str, values: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    '$1', '$2' ... -> ':p1', ':p2' ... so any SQLAlchemy driver can run it.

    Every placeholder must point at an existing value.
    """
    count = len(values)

    def _sub(m: "re.Match[str]") -> str:
        n = int(m.group(1))
        if n < 1 or n > count:
            raise ValueError(f"Placeholder ${n} has no value (got {count} values)")
        return f":p{n}"

    stmt = _PLACEHOLDER.sub(_sub, sql)
    params = {f"p{i}": v for i, v in enumerate(values, start=1)}
    return stmt, params


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def make_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if _is_memory_sqlite(url):
            # one shared connection, otherwise every checkout gets an empty db
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, future=True, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

        return engine

    return create_engine(url, future=True, pool_pre_ping=True)


class Database:
    """
    Runs parameterized SQL with $n placeholders and returns rows as dicts.

    Every call is its own transaction.
    """

    def __init__(self, url: str, engine: Optional[Engine] = None):
        self.url = url
        self.engine = engine or make_engine(url)
        self.dialect: Dialect = dialect_for(self.engine.dialect.name)

    def query(self, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        stmt, params = to_named_binds(sql, values)
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(stmt), params)
                if not result.returns_rows:
                    return []
                return [dict(row._mapping) for row in result]
        except IntegrityError as e:
            # driver text names tables and values; it stays in the server log
            log.info("constraint violation: %s", e.orig)
            raise BadRequestError("Constraint violation") from e

    def query_one(self, sql: str, values: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        rows = self.query(sql, values)
        return rows[0] if rows else None

    def execute_script(self, statements: Sequence[str]) -> None:
        with self.engine.begin() as conn:
            for stmt in statements:
                conn.execute(text(stmt))

    def dispose(self) -> None:
        self.engine.dispose()


_db: Optional[Database] = None


def get_database() -> Database:
    """Process-wide database built from config on first use."""
    global _db
    if _db is None:
        cfg = load_config()
        _db = Database(cfg.database_url)
        log.info("database ready dialect=%s", _db.dialect.name)
    return _db


def set_database(db: Optional[Database]) -> None:
    global _db
    _db = db


def get_db() -> Database:
    """FastAPI dependency; tests override it."""
    return get_database()
