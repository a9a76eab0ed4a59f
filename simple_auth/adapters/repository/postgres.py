"""
PostgreSQL repository adapter - Implements CredentialStore protocol.

This module provides the PostgreSQL implementation of the domain's
credential store port using psycopg3 with raw SQL.

Uniqueness Design:
------------------
The `users.username` column carries a UNIQUE constraint. create() performs
a plain INSERT and lets the constraint reject a concurrent duplicate;
psycopg's UniqueViolation is translated to the domain UniqueViolationError
so the service can report it exactly like the exists() fast-fail path.

Error Translation:
------------------
- UniqueViolation                         -> UniqueViolationError
- IntegrityError, DataError, ProgrammingError -> StoreConstraintError
- OperationalError, InterfaceError,
  PoolTimeout, PoolClosed                 -> StoreUnavailableError (retryable)
- any other psycopg.Error                 -> StoreConstraintError

Messages of translated errors carry the SQLSTATE class name only, so
server-side logs never echo statement parameters.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import psycopg
from psycopg import errors
from psycopg_pool import ConnectionPool, PoolClosed, PoolTimeout

from simple_auth.config.settings import Settings
from simple_auth.domain.exceptions import (
    StoreConstraintError,
    StoreUnavailableError,
    UniqueViolationError,
)

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent.parent.parent.parent / "migrations"

EXISTS_SQL = "SELECT EXISTS(SELECT 1 FROM users WHERE username = %s)"
CREATE_SQL = "INSERT INTO users (username, password_hash) VALUES (%s, %s) RETURNING id"


class PostgresCredentialStore:
    """
    Implements CredentialStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def exists(self, username: str) -> bool:
        """
        Point lookup on the UNIQUE username index.

        Args:
            username: Username as submitted (case-sensitive)

        Returns:
            True if a record exists for this exact username
        """
        with self._translate_errors(), self._pool.connection() as conn:
            with conn.cursor() as cursor:
                cursor.execute(EXISTS_SQL, (username,))
                row = cursor.fetchone()
        return bool(row[0]) if row is not None else False

    def create(self, username: str, password_hash: str) -> str | None:
        """
        Insert a credential record.

        The INSERT commits atomically: a caller that abandons the request
        either sees the row fully written or not at all.

        Args:
            username: Username as submitted (case-sensitive)
            password_hash: bcrypt-hashed password from domain layer

        Returns:
            The new row id as a string
        """
        with self._translate_errors(), self._pool.connection() as conn:
            with conn.cursor() as cursor:
                cursor.execute(CREATE_SQL, (username, password_hash))
                row = cursor.fetchone()
            conn.commit()
        return str(row[0]) if row is not None else None

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        """Map psycopg/psycopg_pool exceptions onto the domain store errors."""
        try:
            yield
        except errors.UniqueViolation as exc:
            raise UniqueViolationError("username already exists") from exc
        except (psycopg.IntegrityError, psycopg.DataError, psycopg.ProgrammingError) as exc:
            raise StoreConstraintError(f"persistence failure: {type(exc).__name__}") from exc
        except (psycopg.OperationalError, psycopg.InterfaceError, PoolTimeout, PoolClosed) as exc:
            raise StoreUnavailableError(f"store unavailable: {type(exc).__name__}") from exc
        except psycopg.Error as exc:
            raise StoreConstraintError(f"persistence failure: {type(exc).__name__}") from exc


def create_pool(settings: Settings, open: bool = True) -> ConnectionPool:
    """
    Build the bounded connection pool from settings.

    Callers beyond `max_size` wait up to `timeout` seconds for a free
    connection, then fail with PoolTimeout.
    """
    return ConnectionPool(
        conninfo=settings.conninfo,
        min_size=settings.db_pool_min_conns,
        max_size=settings.db_pool_max_conns,
        max_lifetime=settings.db_pool_max_conn_lifetime,
        max_idle=settings.db_pool_max_conn_idle_time,
        timeout=settings.db_pool_timeout,
        open=open,
    )


def run_migrations(pool: ConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
        migrations_dir: Directory holding *.sql files
    """
    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
