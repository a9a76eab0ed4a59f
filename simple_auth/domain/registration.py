"""
Registration domain service - credential registration protocol.

This module contains the core business logic for user registration:
validate input, fast-fail on an existing username, hash the password,
insert the credential record.

Registration Stages
===================

    RECEIVED -> VALIDATED -> EXISTENCE_CHECKED -> HASHED -> PERSISTED -> SUCCEEDED
                     \\              \\               \\          \\
                      +--------------+---------------+----------+--> FAILED

Uniqueness
==========

The exists() call is an optimization only. Two callers racing for the same
username can both pass it; the store's UNIQUE constraint rejects the second
insert with UniqueViolationError, which is reported exactly like the
pre-check path (AlreadyExistsError). No application-level locking is used.

Each store operation runs at most once per call. Retry policy belongs to
the transport layer.

Logging
=======

Exactly one record per terminal outcome. Records carry the username and
stage as `extra` fields. The plaintext password is never logged.
"""

import logging
from dataclasses import dataclass, field

import bcrypt

from .exceptions import (
    AlreadyExistsError,
    HashingError,
    InternalError,
    StoreError,
    UniqueViolationError,
    ValidationError,
)
from .ports import CredentialStore, RegistrationResult, RegistrationStage

DEFAULT_BCRYPT_COST = 10
BCRYPT_MAX_PASSWORD_BYTES = 72
SUCCESS_MESSAGE = "User registered successfully"


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: validation, existence check,
    password hashing and credential persistence.
    """

    store: CredentialStore
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    bcrypt_cost: int = DEFAULT_BCRYPT_COST

    def register(self, username: str, password: str) -> RegistrationResult:
        """
        Register a new credential record.

        Args:
            username: Requested username (case-sensitive, stored as given)
            password: Plaintext password (hashed, never stored or logged)

        Returns:
            RegistrationResult with a success message

        Raises:
            ValidationError: Empty username or password
            AlreadyExistsError: Username already registered
            InternalError: Hashing or store failure (details logged only)
        """
        self._validate(username, password)
        stage = RegistrationStage.VALIDATED

        try:
            exists = self.store.exists(username)
        except StoreError as exc:
            raise self._internal_failure(username, stage, exc) from exc
        if exists:
            raise self._already_exists(username, stage)
        stage = RegistrationStage.EXISTENCE_CHECKED

        try:
            password_hash = self._hash_password(password)
        except HashingError as exc:
            raise self._internal_failure(username, stage, exc) from exc
        stage = RegistrationStage.HASHED

        try:
            record_key = self.store.create(username, password_hash)
        except UniqueViolationError:
            # Lost the race between exists() and create()
            raise self._already_exists(username, stage) from None
        except StoreError as exc:
            raise self._internal_failure(username, stage, exc) from exc

        self.logger.info(
            "User registered successfully: %s",
            username,
            extra={"username": username, "stage": RegistrationStage.SUCCEEDED.value},
        )
        return RegistrationResult(message=SUCCESS_MESSAGE, record_key=record_key)

    def _validate(self, username: str, password: str) -> None:
        """
        Reject empty or whitespace-only username and empty password.

        NUL characters are rejected in both fields: PostgreSQL text cannot
        hold them and bcrypt would end the password at the first one.
        """
        reason = None
        if not isinstance(username, str) or not username.strip():
            reason = "username is required"
        elif "\x00" in username:
            reason = "username contains a NUL character"
        elif not isinstance(password, str) or not password:
            reason = "password is required"
        elif "\x00" in password:
            reason = "password contains a NUL character"

        if reason is not None:
            self.logger.info(
                "Registration rejected: %s",
                reason,
                extra={
                    "username": username,
                    "stage": RegistrationStage.RECEIVED.value,
                    "error_kind": ValidationError.kind,
                },
            )
            raise ValidationError(reason)

    def _hash_password(self, password: str) -> str:
        """
        Hash password using bcrypt with the configured cost factor.

        bcrypt only reads the first 72 bytes of input. Longer passwords are
        refused here rather than truncated, whatever the installed bcrypt
        release does with them. Invalid costs also surface as HashingError.
        """
        encoded = password.encode()
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise HashingError(f"password exceeds {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        try:
            salt = bcrypt.gensalt(rounds=self.bcrypt_cost)
            return bcrypt.hashpw(encoded, salt).decode()
        except (ValueError, TypeError, OSError) as exc:
            raise HashingError(f"unable to hash password: {type(exc).__name__}") from exc

    def _already_exists(self, username: str, stage: RegistrationStage) -> AlreadyExistsError:
        self.logger.warning(
            "User already exists: %s",
            username,
            extra={
                "username": username,
                "stage": stage.value,
                "error_kind": AlreadyExistsError.kind,
            },
        )
        return AlreadyExistsError(username)

    def _internal_failure(
        self, username: str, stage: RegistrationStage, exc: Exception
    ) -> InternalError:
        kind = getattr(exc, "kind", "internal")
        retryable = bool(getattr(exc, "retryable", False))
        self.logger.error(
            "Registration failed at %s (%s): %s",
            stage.value,
            kind,
            exc,
            extra={"username": username, "stage": stage.value, "error_kind": kind},
        )
        return InternalError(kind=kind, stage=stage.value, retryable=retryable)
