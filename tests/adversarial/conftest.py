"""
Shared fixtures for adversarial tests.

Provides domain services wired to the in-memory account store, with
one pre-registered victim account.
"""

import pytest

from src.adapters.hashing.bcrypt_hasher import BcryptPasswordHasher
from src.adapters.repository.memory import InMemoryAccountRepository
from src.adapters.tokens.jwt_service import JwtTokenService
from src.domain.authentication import AuthenticationService
from src.domain.ports import Account
from src.domain.registration import RegistrationService

VICTIM_EMAIL = "victim@example.com"
VICTIM_PASSWORD = "Victim123!"


@pytest.fixture
def victim_password() -> str:
    """Plaintext password of the victim account."""
    return VICTIM_PASSWORD


@pytest.fixture
def victim(
    repository: InMemoryAccountRepository, hasher: BcryptPasswordHasher
) -> Account:
    """Existing account targeted by the attacks."""
    return repository.create("Victim User", VICTIM_EMAIL, hasher.hash(VICTIM_PASSWORD))


@pytest.fixture
def registration_service(
    repository: InMemoryAccountRepository, hasher: BcryptPasswordHasher
) -> RegistrationService:
    """Registration service over the in-memory store."""
    return RegistrationService(repository=repository, hasher=hasher)


@pytest.fixture
def authentication_service(
    repository: InMemoryAccountRepository,
    hasher: BcryptPasswordHasher,
    token_service: JwtTokenService,
) -> AuthenticationService:
    """Authentication service over the in-memory store."""
    return AuthenticationService(repository=repository, hasher=hasher, tokens=token_service)
