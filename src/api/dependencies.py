"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

import json
from functools import lru_cache
from typing import Any, Optional, Union

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg_pool import ConnectionPool

from src.adapters.hashing.bcrypt_hasher import BcryptPasswordHasher
from src.adapters.repository.postgres import PostgresAccountRepository
from src.adapters.tokens.jwt_service import JwtTokenService
from src.api.errors import BEARER_CHALLENGE, NOT_AUTHENTICATED
from src.config.settings import get_settings
from src.domain.authentication import AuthenticationService
from src.domain.ports import Account, AccountRepository, PasswordHasher, TokenService
from src.domain.registration import RegistrationService
from src.domain.results import Failure
from src.domain.validation import BODY_FIELD, Invalid, ValidationError


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> AccountRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresAccountRepository(pool)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Get bcrypt hasher configured with the settings cost factor (singleton)."""
    return BcryptPasswordHasher(cost=get_settings().bcrypt_cost)


@lru_cache
def get_token_service() -> TokenService:
    """
    Get JWT token service (singleton).

    The signing secret is read from settings once per process.
    """
    settings = get_settings()
    return JwtTokenService(
        secret=settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        ttl_seconds=settings.access_token_ttl_seconds,
    )


def get_registration_service(
    repository: AccountRepository = Depends(get_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> RegistrationService:
    """Wire the registration service with its store and hasher."""
    return RegistrationService(repository=repository, hasher=hasher)


def get_authentication_service(
    repository: AccountRepository = Depends(get_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthenticationService:
    """Wire the authentication service with its store, hasher and token service."""
    return AuthenticationService(repository=repository, hasher=hasher, tokens=tokens)


async def read_json_body(request: Request) -> Union[Any, Invalid]:
    """
    Decode the request body as JSON.

    Returns:
        The decoded value, or Invalid under the "body" key if the body
        is empty or not valid JSON
    """
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return Invalid(
            {BODY_FIELD: ValidationError(BODY_FIELD, ("Request body must be valid JSON",))}
        )


# Bearer scheme for OpenAPI documentation; missing headers are handled below
http_bearer = HTTPBearer(auto_error=False)


async def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
    service: AuthenticationService = Depends(get_authentication_service),
) -> Account:
    """
    Resolve the bearer token to an account.

    Missing, malformed, tampered and expired tokens all produce the same
    401 response.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHENTICATED,
            headers=BEARER_CHALLENGE,
        )

    result = await service.authenticate(credentials.credentials)
    if isinstance(result, Failure):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHENTICATED,
            headers=BEARER_CHALLENGE,
        )
    return result.value
