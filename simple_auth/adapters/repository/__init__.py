"""Repository adapters - Credential store implementations."""

from .memory import InMemoryCredentialStore
from .postgres import PostgresCredentialStore, create_pool, run_migrations

__all__ = [
    "InMemoryCredentialStore",
    "PostgresCredentialStore",
    "create_pool",
    "run_migrations",
]
