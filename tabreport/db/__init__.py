"""Database query-result source."""

from .query_source import QuerySourceError, db_connection, fetch_query_result, parse_query_result, resolve_dsn

__all__ = [
    "QuerySourceError",
    "db_connection",
    "fetch_query_result",
    "parse_query_result",
    "resolve_dsn",
]
