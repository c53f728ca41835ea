"""
Unit tests for AuthenticationService domain logic.

Tests verify:
- Successful login issues a token for the account
- Unknown email and wrong password are indistinguishable
- The unknown-email path still runs a hash comparison
- Bearer token resolution (valid, tampered, expired, unknown subject)
"""

import asyncio

import pytest

from src.adapters.hashing.bcrypt_hasher import BcryptPasswordHasher
from src.adapters.repository.memory import InMemoryAccountRepository
from src.adapters.tokens.jwt_service import JwtTokenService
from src.domain.authentication import AuthenticationService
from src.domain.ports import TokenClaims
from src.domain.results import ErrorCode, Failure, Ok

EMAIL = "test@example.com"
PASSWORD = "Password123!"


class CountingHasher(BcryptPasswordHasher):
    """bcrypt hasher that records every verify() call."""

    def __init__(self) -> None:
        super().__init__(cost=4)
        self.verified_hashes: list[str] = []

    def verify(self, password: str, password_hash: str) -> bool:
        self.verified_hashes.append(password_hash)
        return super().verify(password, password_hash)


@pytest.fixture
def registered(
    repository: InMemoryAccountRepository, hasher: BcryptPasswordHasher
) -> InMemoryAccountRepository:
    """Store holding one account with EMAIL / PASSWORD."""
    repository.create("Test User", EMAIL, hasher.hash(PASSWORD))
    return repository


@pytest.fixture
def service(
    registered: InMemoryAccountRepository,
    hasher: BcryptPasswordHasher,
    token_service: JwtTokenService,
) -> AuthenticationService:
    return AuthenticationService(repository=registered, hasher=hasher, tokens=token_service)


class TestLogin:
    """Tests for credential verification."""

    def test_login_success_returns_token(
        self, service: AuthenticationService, token_service: JwtTokenService
    ) -> None:
        """Correct credentials return a token whose claims name the account."""
        result = asyncio.run(service.login({"email": EMAIL, "password": PASSWORD}))

        assert isinstance(result, Ok)
        claims = token_service.verify(result.value)
        assert isinstance(claims, Ok)
        assert claims.value.email == EMAIL

    def test_login_email_is_case_insensitive(self, service: AuthenticationService) -> None:
        """Login normalizes the submitted email."""
        result = asyncio.run(service.login({"email": "TEST@Example.com", "password": PASSWORD}))

        assert isinstance(result, Ok)

    def test_wrong_password_rejected(self, service: AuthenticationService) -> None:
        """A wrong password returns INVALID_CREDENTIALS."""
        result = asyncio.run(service.login({"email": EMAIL, "password": "WrongPass1!"}))

        assert result == Failure(ErrorCode.INVALID_CREDENTIALS)

    def test_unknown_email_matches_wrong_password(self, service: AuthenticationService) -> None:
        """Unknown email and wrong password produce identical failures."""
        unknown = asyncio.run(service.login({"email": "nobody@example.com", "password": PASSWORD}))
        wrong = asyncio.run(service.login({"email": EMAIL, "password": "WrongPass1!"}))

        assert unknown == wrong == Failure(ErrorCode.INVALID_CREDENTIALS)

    def test_password_policy_not_applied_at_login(
        self,
        repository: InMemoryAccountRepository,
        hasher: BcryptPasswordHasher,
        token_service: JwtTokenService,
    ) -> None:
        """A stored password that predates the policy can still log in."""
        repository.create("Legacy User", "legacy@example.com", hasher.hash("short"))
        service = AuthenticationService(repository=repository, hasher=hasher, tokens=token_service)

        result = asyncio.run(service.login({"email": "legacy@example.com", "password": "short"}))

        assert isinstance(result, Ok)

    def test_invalid_input_returns_validation_errors(self, service: AuthenticationService) -> None:
        """Missing fields are reported as VALIDATION_FAILED."""
        result = asyncio.run(service.login({"email": ""}))

        assert isinstance(result, Failure)
        assert result.code is ErrorCode.VALIDATION_FAILED
        assert set(result.validation_errors) == {"email", "password"}


class TestDummyHashComparison:
    """Tests that every login attempt costs one hash comparison."""

    def test_unknown_email_verifies_against_dummy_hash(
        self, registered: InMemoryAccountRepository, token_service: JwtTokenService
    ) -> None:
        """An unknown email still runs verify() once, against the dummy hash."""
        hasher = CountingHasher()
        service = AuthenticationService(repository=registered, hasher=hasher, tokens=token_service)

        asyncio.run(service.login({"email": "nobody@example.com", "password": PASSWORD}))

        assert hasher.verified_hashes == [hasher.dummy_hash]

    def test_known_email_verifies_against_stored_hash(
        self, registered: InMemoryAccountRepository, token_service: JwtTokenService
    ) -> None:
        """A known email runs verify() once, against the stored hash."""
        hasher = CountingHasher()
        service = AuthenticationService(repository=registered, hasher=hasher, tokens=token_service)

        asyncio.run(service.login({"email": EMAIL, "password": "WrongPass1!"}))

        stored = registered.find_by_email(EMAIL)
        assert hasher.verified_hashes == [stored.password_hash]


class TestAuthenticate:
    """Tests for resolving a bearer token to an account."""

    def test_valid_token_resolves_account(self, service: AuthenticationService) -> None:
        """A token from login resolves to the same account."""
        token = asyncio.run(service.login({"email": EMAIL, "password": PASSWORD})).value

        result = asyncio.run(service.authenticate(token))

        assert isinstance(result, Ok)
        assert result.value.email == EMAIL
        assert result.value.name == "Test User"

    def test_garbage_token_is_invalid(self, service: AuthenticationService) -> None:
        """A string that is not a JWT is INVALID_TOKEN."""
        result = asyncio.run(service.authenticate("not-a-token"))

        assert result == Failure(ErrorCode.INVALID_TOKEN)

    def test_expired_token(
        self,
        registered: InMemoryAccountRepository,
        hasher: BcryptPasswordHasher,
        expired_token_service: JwtTokenService,
        token_service: JwtTokenService,
    ) -> None:
        """A token past its expiry is EXPIRED_TOKEN."""
        account = registered.find_by_email(EMAIL)
        token = expired_token_service.issue(TokenClaims(subject=account.id, email=account.email))
        service = AuthenticationService(repository=registered, hasher=hasher, tokens=token_service)

        result = asyncio.run(service.authenticate(token))

        assert result == Failure(ErrorCode.EXPIRED_TOKEN)

    def test_unknown_subject_is_invalid(
        self, service: AuthenticationService, token_service: JwtTokenService
    ) -> None:
        """A correctly signed token for a missing account is INVALID_TOKEN."""
        token = token_service.issue(TokenClaims(subject="missing-id", email="gone@example.com"))

        result = asyncio.run(service.authenticate(token))

        assert result == Failure(ErrorCode.INVALID_TOKEN)
