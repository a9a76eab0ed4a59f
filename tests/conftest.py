"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory credential store and registration service
- PostgreSQL connection pool (tests skip when the database is unreachable)
- Table cleanup between database tests
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from simple_auth.adapters.repository import (
    InMemoryCredentialStore,
    PostgresCredentialStore,
    run_migrations,
)
from simple_auth.config.settings import get_settings
from simple_auth.domain.registration import RegistrationService

# Minimum bcrypt cost keeps unit tests fast
FAST_BCRYPT_COST = 4


@pytest.fixture
def memory_store() -> InMemoryCredentialStore:
    """Fresh in-memory credential store."""
    return InMemoryCredentialStore()


@pytest.fixture
def service(memory_store: InMemoryCredentialStore) -> RegistrationService:
    """Registration service over the in-memory store."""
    return RegistrationService(store=memory_store, bcrypt_cost=FAST_BCRYPT_COST)


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """
    Connection pool against the configured database.

    Skips the requesting test when PostgreSQL cannot be reached.
    """
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.conninfo,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=3.0)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL is not reachable")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_users(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty the users table before a database test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM users")
        conn.commit()
    yield


@pytest.fixture
def pg_store(pool: ConnectionPool, clean_users: None) -> PostgresCredentialStore:
    """PostgreSQL credential store over a clean users table."""
    return PostgresCredentialStore(pool)
