"""Database access layer using psycopg2.

Provides:
- get_conn(): Get a database connection from DATABASE_URL
- txn(): Context manager for short, safe transactions
- fetchone/fetchall: Query helpers
- for_update(): SELECT ... FOR UPDATE helper

Driver errors never leave this module raw: they are converted to
StorageError after the transaction has been rolled back.
"""

import os
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

import psycopg2
from psycopg2.extensions import connection as PgConnection, cursor as PgCursor

from hotelres.domain.errors import StorageError
from hotelres.observability.logging import get_logger

logger = get_logger(__name__)


def _dsn_has_password(dsn: str) -> bool:
    if "://" in dsn:
        netloc = dsn.split("://", 1)[1].split("/", 1)[0]
        userinfo = netloc.rsplit("@", 1)[0] if "@" in netloc else ""
        return ":" in userinfo and userinfo.split(":", 1)[1] != ""
    return any(token.startswith("password=") for token in dsn.split())


def get_conn() -> PgConnection:
    """Get a new database connection from DATABASE_URL.

    If the DSN carries no password and DB_PASSWORD is set, it is passed
    separately to psycopg2.

    Returns:
        psycopg2 connection object.

    Raises:
        RuntimeError: If DATABASE_URL is not set.
        StorageError: On connection failure.
    """
    dsn = os.environ.get("DATABASE_URL")
    if not dsn:
        raise RuntimeError("DATABASE_URL environment variable not set")

    kwargs: dict[str, str] = {}
    db_password = os.environ.get("DB_PASSWORD", "")
    if db_password and not _dsn_has_password(dsn):
        kwargs["password"] = db_password

    try:
        return psycopg2.connect(dsn, **kwargs)
    except psycopg2.Error as exc:
        logger.error(
            "database connection failed",
            extra={"extra_fields": {"error_type": type(exc).__name__}},
        )
        raise StorageError() from exc


@contextmanager
def txn(conn: PgConnection | None = None) -> Iterator[PgCursor]:
    """Context manager for a short, safe transaction.

    If conn is None, creates a new connection that is closed on exit.
    Commits on successful exit, rolls back on exception. Driver errors are
    re-raised as StorageError; every other exception propagates unchanged.

    Args:
        conn: Optional existing connection. If None, creates new one.

    Yields:
        Cursor for executing queries within the transaction.

    Example:
        with txn() as cur:
            cur.execute("INSERT INTO t (x) VALUES (%s)", (1,))
    """
    owns_conn = conn is None
    if owns_conn:
        conn = get_conn()

    try:
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except psycopg2.Error as exc:
        conn.rollback()
        logger.error(
            "transaction rolled back",
            extra={"extra_fields": {"error_type": type(exc).__name__}},
        )
        raise StorageError() from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        if owns_conn:
            conn.close()


def fetchone(
    cur: PgCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> tuple[Any, ...] | None:
    """Execute query and fetch one row.

    Args:
        cur: Database cursor.
        query: SQL query with %s placeholders.
        params: Query parameters.

    Returns:
        Single row tuple or None if no results.
    """
    cur.execute(query, params)
    return cur.fetchone()


def fetchall(
    cur: PgCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> list[tuple[Any, ...]]:
    """Execute query and fetch all rows.

    Args:
        cur: Database cursor.
        query: SQL query with %s placeholders.
        params: Query parameters.

    Returns:
        List of row tuples.
    """
    cur.execute(query, params)
    return cur.fetchall()


def for_update(
    cur: PgCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> tuple[Any, ...] | None:
    """Execute SELECT ... FOR UPDATE and fetch one row.

    Appends FOR UPDATE clause to the query. Use within a transaction
    to lock the selected row until commit/rollback.

    Args:
        cur: Database cursor.
        query: SELECT query (without FOR UPDATE).
        params: Query parameters.

    Returns:
        Single row tuple or None if no results.
    """
    full_query = query.rstrip().rstrip(";") + " FOR UPDATE"
    cur.execute(full_query, params)
    return cur.fetchone()
