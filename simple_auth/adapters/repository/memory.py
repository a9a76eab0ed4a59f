"""
In-memory repository adapter - Implements CredentialStore protocol.

Dict-backed store guarded by a lock. Honours the same uniqueness contract
as the PostgreSQL adapter: create() raises UniqueViolationError for a
username that is already present, regardless of any earlier exists() call.

Not durable. Intended for tests and for running the API without a database.
"""

import itertools
import threading

from simple_auth.domain.exceptions import UniqueViolationError


class InMemoryCredentialStore:
    """
    Implements CredentialStore protocol with a thread-safe dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, str] = {}
        self._keys = itertools.count(1)

    def exists(self, username: str) -> bool:
        with self._lock:
            return username in self._records

    def create(self, username: str, password_hash: str) -> str | None:
        with self._lock:
            if username in self._records:
                raise UniqueViolationError("username already exists")
            self._records[username] = password_hash
            return str(next(self._keys))

    def get_password_hash(self, username: str) -> str | None:
        """Return the stored hash for a username, or None."""
        with self._lock:
            return self._records.get(username)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
