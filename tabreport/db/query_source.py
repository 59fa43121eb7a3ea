from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from ..models.tabular import TabularData

"""Database query results as TabularData.

parse_query_result() is driver independent; fetch_query_result() runs a query
on any DB-API cursor; db_connection() opens a PostgreSQL cursor via psycopg2.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "QuerySourceError",
    "db_connection",
    "fetch_query_result",
    "parse_query_result",
    "resolve_dsn",
]


class QuerySourceError(Exception):
    """Raised when the query cannot be executed or its result read."""


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def parse_query_result(columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> TabularData:
    """One column per result column; cells converted to text in row order.

    NULL cells become empty strings.
    """
    result: dict[str, list[str]] = {str(name): [] for name in columns}
    names = list(result)
    for row in rows:
        for index, name in enumerate(names):
            result[name].append(_cell_text(row[index]) if index < len(row) else "")
    return TabularData(result)


def fetch_query_result(cursor: Any, query: str, params: Sequence[Any] | None = None) -> TabularData:
    """Execute ``query`` and return the full result set.

    Raises:
        QuerySourceError: On any driver error or when the statement returns no rows.
    """
    try:
        cursor.execute(query, params)
        if cursor.description is None:
            raise QuerySourceError("query did not return a result set")
        columns = [d[0] for d in cursor.description]
        rows = cursor.fetchall()
    except QuerySourceError:
        raise
    except Exception as e:
        raise QuerySourceError(f"query failed: {e}") from e
    logger.debug(f"query returned columns={len(columns)} rows={len(rows)}")
    return parse_query_result(columns, rows)


def resolve_dsn(
    dsn: str | None = None,
    host: str | None = None,
    port: int | None = None,
    user: str | None = None,
    password: str | None = None,
    database: str | None = None,
) -> str:
    """Resolve connection parameters.

    Priority:
        1. DATABASE_URL / PGDSN environment variables (whole DSN)
        2. explicit ``dsn``
        3. PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE, falling back
           to the given keyword values
    """
    direct = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or dsn
    if direct:
        return direct
    host = os.getenv("PGHOST", host or "localhost")
    port_text = os.getenv("PGPORT", str(port) if port else "5432")
    user = os.getenv("PGUSER", user or "postgres")
    password = os.getenv("PGPASSWORD", password or "")
    database = os.getenv("PGDATABASE", database or "postgres")
    resolved = f"host={host} port={port_text} user={user} dbname={database}"
    if password:
        resolved += f" password={password}"
    return resolved


@contextmanager
def db_connection(dsn: str) -> Iterator[Any]:  # pragma: no cover (thin wrapper over psycopg2)
    """Yield a read-only psycopg2 cursor; the connection is always closed."""
    try:
        import psycopg2
    except ImportError as e:
        raise QuerySourceError(f"psycopg2 not available: {e}") from e

    try:
        conn = psycopg2.connect(dsn)
    except psycopg2.Error as e:
        raise QuerySourceError(f"connection failed: {e}") from e
    try:
        conn.set_session(readonly=True)
        with conn.cursor() as cur:
            yield cur
        conn.rollback()
    finally:
        conn.close()
