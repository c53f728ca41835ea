"""
Authentication domain service - Login and bearer-token resolution.

Enumeration resistance: an unknown email and a wrong password produce the
same INVALID_CREDENTIALS outcome. The unknown-email path still runs a
bcrypt comparison against a dummy hash so both paths cost the same time.
"""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from .ports import Account, AccountRepository, PasswordHasher, TokenClaims, TokenService
from .registration import normalize_email
from .results import ErrorCode, Failure, Ok, Result
from .schemas import LOGIN_SCHEMA
from .validation import Invalid, validate

logger = logging.getLogger(__name__)


@dataclass
class AuthenticationService:
    """Domain service for credential verification and session tokens."""

    repository: AccountRepository
    hasher: PasswordHasher
    tokens: TokenService

    async def login(self, payload: Mapping[str, Any]) -> Result[str]:
        """
        Verify submitted credentials and issue a session token.

        Args:
            payload: Decoded request body with email and password

        Returns:
            Ok(token) on success, otherwise Failure with VALIDATION_FAILED
            or INVALID_CREDENTIALS
        """
        validation = validate(LOGIN_SCHEMA, payload)
        if isinstance(validation, Invalid):
            return Failure(ErrorCode.VALIDATION_FAILED, validation.errors)

        data = validation.data
        return await self.authenticate_credentials(data["email"], data["password"])

    async def authenticate_credentials(self, email: str, password: str) -> Result[str]:
        """Check email/password against the store and sign a token on match."""
        account = await asyncio.to_thread(self.repository.find_by_email, normalize_email(email))

        password_valid = await asyncio.to_thread(self._password_matches, account, password)

        if account is None or not password_valid:
            return Failure(ErrorCode.INVALID_CREDENTIALS)

        token = self.tokens.issue(TokenClaims(subject=account.id, email=account.email))
        logger.info("Login succeeded: id=%s", account.id)
        return Ok(token)

    async def authenticate(self, token: str) -> Result[Account]:
        """
        Resolve a bearer token to the account it was issued for.

        Returns:
            Ok(account), or Failure with INVALID_TOKEN or EXPIRED_TOKEN.
            A valid token whose subject no longer exists is INVALID_TOKEN.
        """
        verified = self.tokens.verify(token)
        if isinstance(verified, Failure):
            logger.info("Token rejected: %s", verified.code.value)
            return verified

        account = await asyncio.to_thread(self.repository.find_by_id, verified.value.subject)
        if account is None:
            logger.info("Token rejected: unknown subject")
            return Failure(ErrorCode.INVALID_TOKEN)
        return Ok(account)

    def _password_matches(self, account: Optional[Account], password: str) -> bool:
        # Always run the hash comparison, even for unknown emails
        stored_hash = account.password_hash if account is not None else self.hasher.dummy_hash
        return self.hasher.verify(password, stored_hash)
