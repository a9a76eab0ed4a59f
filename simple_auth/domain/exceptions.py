"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.

Caller-facing errors derive from RegistrationError. HashingError and
StoreError are internal causes; the service logs them and re-raises
an opaque InternalError in their place.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    kind = "registration_error"


class ValidationError(RegistrationError):
    """Username or password is empty or malformed."""

    kind = "validation_error"


class AlreadyExistsError(RegistrationError):
    """Username is already registered."""

    kind = "already_exists"


class InternalError(RegistrationError):
    """
    Opaque internal failure surfaced to the caller.

    The message is always generic. The failure cause is kept in
    `kind`, `stage` and `__cause__` for server-side logging only.
    """

    def __init__(self, kind: str, stage: str, retryable: bool = False) -> None:
        super().__init__("internal error")
        self.kind = kind
        self.stage = stage
        self.retryable = retryable


class HashingError(Exception):
    """Password hashing failed (invalid cost, oversized input, entropy failure)."""

    kind = "hashing"


class StoreError(Exception):
    """Base class for credential store failures."""

    kind = "store"
    retryable = False


class UniqueViolationError(StoreError):
    """Insert rejected by the username uniqueness constraint."""

    kind = "unique_violation"


class StoreUnavailableError(StoreError):
    """Connectivity or pool failure talking to the store."""

    kind = "store_unavailable"
    retryable = True


class StoreConstraintError(StoreError):
    """Any other persistence failure (integrity, data, statement errors)."""

    kind = "store_constraint"
