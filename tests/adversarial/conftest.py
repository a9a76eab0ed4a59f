"""
Shared fixtures for adversarial tests.

Provides a store wrapper that widens the race window between the
existence check and the insert.
"""

import threading

import pytest

from simple_auth.domain.ports import CredentialStore

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


class BarrierStore:
    """
    Delegating CredentialStore that holds every caller at a barrier after exists().

    All callers observe exists() == False before any of them inserts, so
    uniqueness can only be enforced by the wrapped store's create().
    """

    def __init__(self, inner: CredentialStore, parties: int) -> None:
        self._inner = inner
        self._barrier = threading.Barrier(parties, timeout=10)

    def exists(self, username: str) -> bool:
        result = self._inner.exists(username)
        self._barrier.wait()
        return result

    def create(self, username: str, password_hash: str) -> str | None:
        return self._inner.create(username, password_hash)


@pytest.fixture
def barrier_store_factory():
    """Build a BarrierStore around a given store."""
    return BarrierStore
