"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory account store
- Fast bcrypt hasher (cost 4)
- JWT token services with a fixed test secret
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.adapters.hashing.bcrypt_hasher import BcryptPasswordHasher
from src.adapters.repository.memory import InMemoryAccountRepository
from src.adapters.tokens.jwt_service import JwtTokenService

TEST_JWT_SECRET = "test-signing-secret-0123456789abcdef"


@pytest.fixture
def jwt_secret() -> str:
    """Signing secret shared by the token service fixtures."""
    return TEST_JWT_SECRET


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    """Fresh in-memory account store for each test."""
    return InMemoryAccountRepository()


@pytest.fixture(scope="session")
def hasher() -> BcryptPasswordHasher:
    """bcrypt hasher with the minimum cost factor to keep tests fast."""
    return BcryptPasswordHasher(cost=4)


@pytest.fixture
def token_service(jwt_secret: str) -> JwtTokenService:
    """Token service signing with the test secret."""
    return JwtTokenService(secret=jwt_secret, ttl_seconds=3600)


@pytest.fixture
def expired_token_service(jwt_secret: str) -> JwtTokenService:
    """Token service whose clock is two hours behind, so issued tokens are already expired."""
    return JwtTokenService(
        secret=jwt_secret,
        ttl_seconds=3600,
        clock=lambda: datetime.now(timezone.utc) - timedelta(hours=2),
    )
