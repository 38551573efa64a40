"""
Database connection and query utilities.

Provides a simple interface for executing queries with psycopg over a
shared connection pool, returning results as dictionaries or, with a
row factory, as domain dataclasses.

Business transactions are opened with transaction(). While one is open,
every helper in this module called from the same thread (or context)
joins its connection instead of checking out a new one, so repositories
never need to know whether they run inside a transaction.

For testing, use set_connection_override() to inject a connection
that will be used instead of the pool. This enables transaction
rollback between tests.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from soundgood.config import config

# =============================================================================
# Connection Override (for testing)
# =============================================================================

_connection_override: psycopg.Connection | None = None


def set_connection_override(conn: psycopg.Connection) -> None:
    """
    Set a connection to use instead of checking out pooled ones.

    Used by test fixtures to ensure all database operations run
    within a single transaction that can be rolled back.

    Args:
        conn: The connection to use for all subsequent operations
    """
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    """Clear the connection override, restoring normal behavior."""
    global _connection_override
    _connection_override = None


# =============================================================================
# Connection Pool
# =============================================================================

_pool: ConnectionPool | None = None


def get_pool() -> ConnectionPool:
    """Return the process-wide connection pool, opening it on first use."""
    global _pool
    if _pool is None:
        _pool = ConnectionPool(
            config.database_url,
            min_size=config.pool_min_size,
            max_size=config.pool_max_size,
            timeout=config.pool_timeout,
            open=True,
        )
    return _pool


def close_pool() -> None:
    """Close the connection pool. The next query opens a new one."""
    global _pool
    if _pool is not None:
        _pool.close()
        _pool = None


# =============================================================================
# Connection Management
# =============================================================================

_transaction_connection: ContextVar[psycopg.Connection | None] = ContextVar(
    "transaction_connection", default=None
)


def in_transaction() -> bool:
    """True while a business transaction is open in the current context."""
    return _transaction_connection.get() is not None


@contextmanager
def get_connection():
    """
    Context manager for database connections.

    Inside transaction():
        - Returns the transaction's connection
        - Does NOT commit, rollback, or release it

    In normal operation:
        - Checks a connection out of the pool
        - Commits on successful exit
        - Rolls back on exception
        - Returns the connection to the pool

    With override set (testing):
        - Returns the override connection
        - Does NOT commit, rollback, or close
        - Caller (test fixture) manages the transaction

    Usage:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT ...")
    """
    bound = _transaction_connection.get()
    if bound is not None:
        yield bound
        return

    if _connection_override is not None:
        yield _connection_override
        return

    # The pool commits on clean exit and rolls back on exception.
    with get_pool().connection() as conn:
        yield conn


@contextmanager
def transaction():
    """
    Open a business transaction and bind it to the current context.

    Commits when the block exits cleanly and rolls back when it raises,
    whatever the exception type, so no path leaves the transaction (or
    the row locks it holds) open. Lock waits inside the transaction are
    bounded by config.lock_timeout_ms.

    With the testing override set, the transaction becomes a savepoint
    on the override connection.

    Usage:
        with transaction() as conn:
            row = fetch_one("SELECT ... FOR UPDATE", (...,))
            execute("UPDATE ...", (...,))
    """
    if _transaction_connection.get() is not None:
        raise RuntimeError("A business transaction is already open in this context")

    with get_connection() as conn:
        with conn.transaction():
            conn.execute(
                "SELECT set_config('lock_timeout', %s, true)",
                (f"{config.lock_timeout_ms}ms",),
            )
            token = _transaction_connection.set(conn)
            try:
                yield conn
            finally:
                _transaction_connection.reset(token)


@contextmanager
def get_cursor(row_factory=dict_row):
    """
    Context manager for a cursor with dict rows.

    Convenience wrapper when you just need a cursor.

    Usage:
        with get_cursor() as cur:
            cur.execute("SELECT * FROM student")
            rows = cur.fetchall()  # List of dicts
    """
    with get_connection() as conn:
        with conn.cursor(row_factory=row_factory) as cur:
            yield cur


# =============================================================================
# Query Helpers
# =============================================================================


def execute(query: str, params: tuple = None) -> int:
    """
    Execute a query without returning rows.

    Use for INSERT, UPDATE, DELETE when you only need the affected row count.

    Args:
        query: SQL query with %s placeholders
        params: Tuple of parameter values

    Returns:
        Number of rows affected
    """
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.rowcount


def fetch_one(query: str, params: tuple = None, row_factory=dict_row) -> Any | None:
    """
    Execute a query and return a single row.

    Args:
        query: SQL query with %s placeholders
        params: Tuple of parameter values
        row_factory: psycopg row factory; dict rows by default

    Returns:
        The row built by row_factory, or None if no row found
    """
    with get_cursor(row_factory) as cur:
        cur.execute(query, params)
        return cur.fetchone()


def fetch_all(query: str, params: tuple = None, row_factory=dict_row) -> list[Any]:
    """
    Execute a query and return all rows.

    Args:
        query: SQL query with %s placeholders
        params: Tuple of parameter values
        row_factory: psycopg row factory; dict rows by default

    Returns:
        List of rows, empty list if no rows found
    """
    with get_cursor(row_factory) as cur:
        cur.execute(query, params)
        return cur.fetchall()
