"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the account record and the interfaces (ports) that
the domain requires from infrastructure. Adapters implement these
protocols through structural subtyping.
"""

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .results import Result


@dataclass(frozen=True)
class Account:
    """
    Stored user account.

    password_hash is excluded from repr so it never reaches logs.
    """

    id: str
    name: str
    email: str
    password_hash: str = field(repr=False)


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a session token."""

    subject: str
    email: str


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def find_by_email(self, email: str) -> Optional[Account]:
        """
        Look up an account by normalized email.

        Returns:
            The account, or None if no account uses this email
        """
        ...

    def find_by_id(self, account_id: str) -> Optional[Account]:
        """
        Look up an account by identifier.

        Returns:
            The account, or None if the identifier is unknown
        """
        ...

    def create(self, name: str, email: str, password_hash: str) -> Account:
        """
        Persist a new account and assign its identifier.

        The store's uniqueness constraint on email is authoritative.

        Raises:
            DuplicateKey: If an account with this email already exists
        """
        ...


class PasswordHasher(Protocol):
    """Port interface for one-way password hashing."""

    def hash(self, password: str) -> str:
        """Derive a salted hash. Never returns the plaintext."""
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        """Compare a plaintext password with a stored hash."""
        ...

    @property
    def dummy_hash(self) -> str:
        """A valid hash matching no real password, for unknown-account checks."""
        ...


class TokenService(Protocol):
    """Port interface for signed session tokens."""

    def issue(self, claims: TokenClaims) -> str:
        """Sign the claims into a token with an expiry."""
        ...

    def verify(self, token: str) -> Result[TokenClaims]:
        """
        Check signature and expiry.

        Returns:
            Ok(claims), Failure(EXPIRED_TOKEN), or Failure(INVALID_TOKEN)
        """
        ...
