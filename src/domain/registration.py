"""
Registration domain service - Account creation flow.

Registration Flow
=================

1. Validate the submitted record (REGISTRATION_SCHEMA)
2. Normalize the email (strip + lowercase)
3. Reject if the store already holds the email
4. Hash the password (bcrypt, off the event loop)
5. Create the account

Uniqueness: the lookup in step 3 can race with a concurrent registration.
The store's UNIQUE constraint is the authoritative guard; a DuplicateKey
raised by create() yields the same DUPLICATE_EMAIL outcome as step 3.

Any other store failure is logged and reported as REGISTRATION_FAILED
without internal detail.
"""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import DuplicateKey
from .ports import Account, AccountRepository, PasswordHasher
from .results import ErrorCode, Failure, Ok, Result
from .schemas import REGISTRATION_SCHEMA
from .validation import Invalid, validate

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Collaborators are passed explicitly; blocking calls into them run in
    worker threads so concurrent requests are not stalled by hashing.
    """

    repository: AccountRepository
    hasher: PasswordHasher

    async def register(self, payload: Mapping[str, Any]) -> Result[Account]:
        """
        Register a new account from a submitted record.

        Args:
            payload: Decoded request body with name, email and password

        Returns:
            Ok(account) on success, otherwise Failure with VALIDATION_FAILED,
            DUPLICATE_EMAIL or REGISTRATION_FAILED
        """
        validation = validate(REGISTRATION_SCHEMA, payload)
        if isinstance(validation, Invalid):
            return Failure(ErrorCode.VALIDATION_FAILED, validation.errors)

        data = validation.data
        return await self.create_account(data["name"], data["email"], data["password"])

    async def create_account(self, name: str, email: str, password: str) -> Result[Account]:
        """
        Create an account from already-validated fields.

        Args:
            name: Display name
            email: Email address (will be normalized)
            password: Plaintext password (will be hashed, never stored)
        """
        normalized_email = normalize_email(email)

        try:
            existing = await asyncio.to_thread(self.repository.find_by_email, normalized_email)
        except Exception:
            logger.exception("Account lookup failed during registration")
            return Failure(ErrorCode.REGISTRATION_FAILED)

        if existing is not None:
            logger.info("Registration rejected: email already registered")
            return Failure(ErrorCode.DUPLICATE_EMAIL)

        password_hash = await asyncio.to_thread(self.hasher.hash, password)

        try:
            account = await asyncio.to_thread(
                self.repository.create, name, normalized_email, password_hash
            )
        except DuplicateKey:
            # Lost a race with a concurrent registration for the same email
            logger.info("Registration rejected: email claimed concurrently")
            return Failure(ErrorCode.DUPLICATE_EMAIL)
        except Exception:
            logger.exception("Account creation failed")
            return Failure(ErrorCode.REGISTRATION_FAILED)

        logger.info("Account registered: id=%s", account.id)
        return Ok(account)
