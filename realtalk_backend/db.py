from __future__ import annotations

import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Sequence
from urllib.parse import urlparse

from realtalk_backend.schema import get_schema_sql


def _debug(msg: str) -> None:
    print(f"[db] {msg}")


def _detect_dialect(dsn: str) -> str:
    """Return 'postgres' or 'sqlite'."""
    s = (dsn or "").strip()
    try:
        scheme = urlparse(s).scheme.lower()
    except Exception:
        scheme = ""
    if scheme in ("postgres", "postgresql"):
        return "postgres"
    return "sqlite"


# Matches a quoted literal (kept as-is) or a bare qmark placeholder.
_PLACEHOLDER_RE = re.compile(r"('(?:[^']|'')*'|\"(?:[^\"]|\"\")*\")|\?")


def _qmark_to_pct(sql: str) -> str:
    """Rewrite SQLite '?' placeholders as psycopg2 '%s', leaving quoted literals alone."""
    return _PLACEHOLDER_RE.sub(lambda m: m.group(1) or "%s", sql)


class PGConnection:
    """Makes a psycopg2 connection answer the subset of the sqlite3 API we use."""

    dialect = "postgres"

    def __init__(self, conn: Any):
        self._conn = conn

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> Any:
        cur = self._conn.cursor()
        cur.execute(_qmark_to_pct(sql), tuple(params or ()))
        return cur

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def close(self) -> None:
        self._conn.close()


def _open_postgres(dsn: str) -> PGConnection:
    try:
        import psycopg2
        import psycopg2.extras
    except Exception as e:
        raise RuntimeError(
            "Postgres selected but psycopg2 is not installed. "
            "Install psycopg2-binary and try again."
        ) from e

    # RealDictCursor makes fetchone()/fetchall() rows act like dicts.
    return PGConnection(psycopg2.connect(dsn, cursor_factory=psycopg2.extras.RealDictCursor))


def _open_sqlite(dsn: str) -> sqlite3.Connection:
    if dsn.lower().startswith("sqlite:///"):
        dsn = dsn[len("sqlite:///") :]

    Path(dsn).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(dsn, timeout=30, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA busy_timeout=5000;")
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


@contextmanager
def connect(db_dsn: str) -> Iterator[Any]:
    """Open a connection for one unit of work.

    Everything executed inside the `with` block commits together when the block
    exits normally and rolls back if it raises. The connection is closed on every
    exit path, including HTTPExceptions raised mid-handler.
    """
    dsn = (db_dsn or "").strip()
    if _detect_dialect(dsn) == "postgres":
        conn: Any = _open_postgres(dsn)
    else:
        conn = _open_sqlite(dsn)

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_dsn: str) -> None:
    """Create all tables. Safe to call on every startup."""
    dialect = _detect_dialect(db_dsn)
    _debug(f"Initializing DB ({dialect}) at {_redact_dsn(db_dsn)}")
    ddl = get_schema_sql(dialect)
    with connect(db_dsn) as conn:
        if dialect == "postgres":
            # Serialize DDL across processes starting at the same time.
            conn.execute("SELECT pg_advisory_lock(2147483647);")
            try:
                for stmt in (s.strip() for s in ddl.split(";")):
                    if stmt:
                        conn.execute(stmt)
            finally:
                conn.execute("SELECT pg_advisory_unlock(2147483647);")
        else:
            conn.executescript(ddl)


def _redact_dsn(dsn: str) -> str:
    """Hide the password of a Postgres URL before it gets logged."""
    try:
        parsed = urlparse(dsn)
        password = parsed.password
    except Exception:
        return dsn
    if not password:
        return dsn
    return dsn.replace(f":{password}@", ":***@", 1)
