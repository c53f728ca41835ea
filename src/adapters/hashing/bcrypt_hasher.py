"""
bcrypt password hasher adapter - Implements PasswordHasher protocol.

Timing: bcrypt.checkpw() compares in constant time and its cost dominates
response time. The cost factor is configurable so it can be re-tuned as
hardware gets faster; the default of 10 takes roughly 50-100ms per hash.
"""

import logging
from functools import cached_property

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only consumes the first 72 bytes of its input
_BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher:
    """
    Implements PasswordHasher protocol via bcrypt.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, cost: int = 10) -> None:
        """
        Initialize hasher with a work factor.

        Args:
            cost: bcrypt log2 rounds (4-31)
        """
        self._cost = cost

    @property
    def cost(self) -> int:
        return self._cost

    def hash(self, password: str) -> str:
        """Hash password with a fresh salt."""
        return bcrypt.hashpw(self._encode(password), bcrypt.gensalt(rounds=self._cost)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check password against a stored bcrypt hash.

        A malformed stored hash is treated as a mismatch.
        """
        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode())
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False

    @cached_property
    def dummy_hash(self) -> str:
        """Hash used when no account exists, so verification still costs a full bcrypt run."""
        return self.hash("dummy_password_for_timing_safety")

    def _encode(self, password: str) -> bytes:
        return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
