"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

import logging

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from simple_auth.config.settings import Settings, get_settings
from simple_auth.domain.ports import CredentialStore
from simple_auth.domain.registration import RegistrationService

# Logger handed to the domain service; the service never looks one up itself
_registration_logger = logging.getLogger("simple_auth.registration")


def get_pool(request: Request) -> ConnectionPool | None:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    It is None when the memory store backend is configured.
    """
    return getattr(request.app.state, "pool", None)


def get_credential_store(request: Request) -> CredentialStore:
    """Get the credential store created during lifespan startup."""
    return request.app.state.store


def get_registration_service(
    store: CredentialStore = Depends(get_credential_store),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the credential store, logger and bcrypt cost.
    """
    return RegistrationService(
        store=store,
        logger=_registration_logger,
        bcrypt_cost=settings.bcrypt_cost,
    )
