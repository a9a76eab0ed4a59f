"""
Domain layer - Pure business logic with zero framework imports.

This package contains the registration protocol: existence check,
password hashing and credential insert. It defines its own port
interfaces for infrastructure abstraction.
"""

from .exceptions import (
    AlreadyExistsError,
    HashingError,
    InternalError,
    RegistrationError,
    StoreConstraintError,
    StoreError,
    StoreUnavailableError,
    UniqueViolationError,
    ValidationError,
)
from .ports import CredentialStore, RegistrationResult, RegistrationStage
from .registration import RegistrationService

__all__ = [
    "AlreadyExistsError",
    "CredentialStore",
    "HashingError",
    "InternalError",
    "RegistrationError",
    "RegistrationResult",
    "RegistrationService",
    "RegistrationStage",
    "StoreConstraintError",
    "StoreError",
    "StoreUnavailableError",
    "UniqueViolationError",
    "ValidationError",
]
