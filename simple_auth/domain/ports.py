"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class RegistrationStage(str, Enum):
    """
    Stages of a single register() call.

    Forward path:
        RECEIVED -> VALIDATED -> EXISTENCE_CHECKED -> HASHED -> PERSISTED -> SUCCEEDED

    Any stage after RECEIVED may exit to FAILED. Failures are tagged with
    the last stage reached, so a HASHED failure means the store insert failed.
    """

    RECEIVED = "RECEIVED"
    VALIDATED = "VALIDATED"
    EXISTENCE_CHECKED = "EXISTENCE_CHECKED"
    HASHED = "HASHED"
    PERSISTED = "PERSISTED"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a successful registration."""

    message: str
    record_key: str | None = None


class CredentialStore(Protocol):
    """Port interface for credential persistence."""

    def exists(self, username: str) -> bool:
        """
        Check whether a credential record exists for this exact username.

        Args:
            username: Username as submitted (case-sensitive)

        Returns:
            True if a record exists

        Raises:
            StoreUnavailableError: On connectivity failure
        """
        ...

    def create(self, username: str, password_hash: str) -> str | None:
        """
        Insert a new credential record.

        The store enforces username uniqueness itself; a prior exists()
        call is not sufficient under concurrency.

        Args:
            username: Username as submitted (case-sensitive)
            password_hash: bcrypt hash produced by the domain layer

        Returns:
            Store-assigned record key, or None if the store has none

        Raises:
            UniqueViolationError: Username already taken (insert-time race)
            StoreUnavailableError: On connectivity failure
            StoreConstraintError: Any other persistence failure
        """
        ...
